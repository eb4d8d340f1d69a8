from typing import Any, Callable, Optional

import httpx
import pytest

from core.config import Settings
from core.openverse_client import OpenverseClient

Handler = Callable[[httpx.Request], httpx.Response]


def make_image(n: int, **overrides: Any) -> dict[str, Any]:
    image = {
        "id": f"img-{n}",
        "title": f"Image {n}",
        "url": f"https://example.org/{n}.jpg",
        "thumbnail": f"https://api.openverse.org/v1/images/img-{n}/thumb/",
        "creator": f"Creator {n}",
        "license": "by",
        "attribution": f'"Image {n}" by Creator {n} is licensed under CC BY 4.0.',
        "source": "flickr",
        "foreign_landing_url": f"https://flickr.com/photos/{n}",
    }
    image.update(overrides)
    return image


def results(*images: dict[str, Any]) -> httpx.Response:
    return httpx.Response(200, json={"result_count": len(images), "results": list(images)})


class FakeOpenverse:
    """Stands in for api.openverse.org and records every request it sees."""

    def __init__(self, handler: Optional[Handler] = None):
        self.requests: list[httpx.Request] = []
        self.handler = handler or (lambda request: results())

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def queries(self) -> list[Optional[str]]:
        return [request.url.params.get("q") for request in self.requests]

    @property
    def last_params(self) -> dict[str, str]:
        return dict(self.requests[-1].url.params)

    def client(self, settings: Optional[Settings] = None) -> OpenverseClient:
        return OpenverseClient(settings or Settings(), transport=httpx.MockTransport(self))


@pytest.fixture
def upstream() -> FakeOpenverse:
    return FakeOpenverse()


@pytest.fixture
def client(upstream: FakeOpenverse):
    with upstream.client() as openverse:
        yield openverse
