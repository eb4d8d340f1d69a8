# =============================================================================
# core/images.py  —  Single-Resource Operations
# =============================================================================
#
# One function per upstream endpoint.  Each builds its query parameters,
# calls the client, and returns the JSON body untouched.  Errors propagate
# as OpenverseError; turning them into tool payloads is the tools/ layer's
# job.
#
#   search_images       GET /images/?q=...
#   get_image_details   GET /images/{id}/
#   get_related_images  GET /images/{id}/related/?page=...&page_size=...
#   get_image_stats     GET /images/stats/
# =============================================================================

from typing import Any
from urllib.parse import quote

from core.models import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_RELATED_PAGE_SIZE,
    MAX_PAGE_SIZE,
    SearchRequest,
)
from core.openverse_client import OpenverseClient

# Filters that are forwarded only when the caller actually set them.
_OPTIONAL_FILTERS = (
    "license",
    "license_type",
    "creator",
    "source",
    "extension",
    "aspect_ratio",
    "size",
)


def build_search_params(request: SearchRequest) -> dict[str, str]:
    """Translate a SearchRequest into Openverse query parameters.

    `q`, `page`, `page_size` and `mature` are always sent.  A page or page
    size of 0 counts as unset.  Optional filters that are None or "" are
    left out entirely rather than sent empty.
    """
    params = {
        "q": request.query,
        "page": str(request.page or 1),
        "page_size": str(min(request.page_size or DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE)),
        "mature": "true" if request.mature else "false",
    }
    for name in _OPTIONAL_FILTERS:
        value = getattr(request, name)
        if value:
            params[name] = value
    return params


def _image_path(image_id: str, suffix: str = "") -> str:
    # IDs are UUIDs in practice, but never let one smuggle in a path segment.
    return f"images/{quote(image_id, safe='')}/{suffix}"


def search_images(client: OpenverseClient, request: SearchRequest) -> Any:
    return client.get_json("images/", build_search_params(request))


def get_image_details(client: OpenverseClient, image_id: str) -> Any:
    return client.get_json(_image_path(image_id))


def get_related_images(
    client: OpenverseClient,
    image_id: str,
    page: int | None = None,
    page_size: int | None = None,
) -> Any:
    params = {
        "page": str(page or 1),
        "page_size": str(page_size or DEFAULT_RELATED_PAGE_SIZE),
    }
    return client.get_json(_image_path(image_id, "related/"), params)


def get_image_stats(client: OpenverseClient) -> Any:
    """Per-provider image counts across the whole Openverse catalogue."""
    return client.get_json("images/stats/")
