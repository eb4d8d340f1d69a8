import httpx
import pytest

from core import images
from core.errors import UpstreamError
from core.models import SearchRequest


class TestBuildSearchParams:
    def test_defaults(self) -> None:
        params = images.build_search_params(SearchRequest(query="lighthouse"))

        assert params == {"q": "lighthouse", "page": "1", "page_size": "20", "mature": "false"}

    @pytest.mark.parametrize(
        "page_size, expected",
        [(None, "20"), (0, "20"), (1, "1"), (50, "50"), (500, "500"), (501, "500"), (10_000, "500")],
    )
    def test_page_size_is_capped(self, page_size, expected) -> None:
        params = images.build_search_params(SearchRequest(query="q", page_size=page_size))

        assert params["page_size"] == expected

    def test_page_zero_means_first_page(self) -> None:
        assert images.build_search_params(SearchRequest(query="q", page=0))["page"] == "1"
        assert images.build_search_params(SearchRequest(query="q", page=3))["page"] == "3"

    def test_supplied_filters_are_forwarded(self) -> None:
        request = SearchRequest(
            query="glacier",
            license="by-sa",
            license_type="commercial",
            creator="NASA",
            source="wikimedia",
            extension="png",
            aspect_ratio="wide",
            size="large",
            mature=True,
        )

        params = images.build_search_params(request)

        assert params == {
            "q": "glacier",
            "page": "1",
            "page_size": "20",
            "mature": "true",
            "license": "by-sa",
            "license_type": "commercial",
            "creator": "NASA",
            "source": "wikimedia",
            "extension": "png",
            "aspect_ratio": "wide",
            "size": "large",
        }

    def test_absent_or_empty_filters_are_omitted(self) -> None:
        params = images.build_search_params(SearchRequest(query="q", creator="", source=None))

        assert "creator" not in params
        assert "source" not in params
        assert "license" not in params


class TestEndpoints:
    def test_search_images(self, client, upstream) -> None:
        body = {"result_count": 1, "results": [{"id": "abc"}]}
        upstream.handler = lambda request: httpx.Response(200, json=body)

        data = images.search_images(client, SearchRequest(query="owl", page_size=900))

        assert data == body
        assert upstream.requests[0].url.path == "/v1/images/"
        assert upstream.last_params["page_size"] == "500"

    def test_get_image_details(self, client, upstream) -> None:
        body = {"id": "4bc43a04-ef46-4544-a0c1-63c63f56e276", "title": "Tree"}
        upstream.handler = lambda request: httpx.Response(200, json=body)

        data = images.get_image_details(client, body["id"])

        assert data == body
        assert upstream.requests[0].url.path == f"/v1/images/{body['id']}/"
        assert upstream.last_params == {}

    def test_get_related_images_defaults(self, client, upstream) -> None:
        images.get_related_images(client, "abc")

        assert upstream.requests[0].url.path == "/v1/images/abc/related/"
        assert upstream.last_params == {"page": "1", "page_size": "10"}

    def test_get_related_images_paging(self, client, upstream) -> None:
        images.get_related_images(client, "abc", page=2, page_size=25)

        assert upstream.last_params == {"page": "2", "page_size": "25"}

    def test_get_image_stats(self, client, upstream) -> None:
        body = [{"source_name": "flickr", "media_count": 500_000_000}]
        upstream.handler = lambda request: httpx.Response(200, json=body)

        assert images.get_image_stats(client) == body
        assert upstream.requests[0].url.path == "/v1/images/stats/"

    def test_errors_propagate(self, client, upstream) -> None:
        upstream.handler = lambda request: httpx.Response(429)

        with pytest.raises(UpstreamError) as exc_info:
            images.get_image_stats(client)

        assert exc_info.value.status_code == 429
