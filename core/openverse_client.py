# =============================================================================
# core/openverse_client.py  —  HTTP Client Adapter for the Openverse API
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Issues GET requests against the Openverse v1 API and hands back parsed
#   JSON, or raises one of the errors in core/errors.py.  That's all.
#
#   - No retries, no caching, no timeout override (httpx's default applies)
#   - Query values must already be strings; httpx does the URL encoding
#   - The response body is returned as-is; we never validate its shape
#
# TESTING:
#   Pass `transport=httpx.MockTransport(handler)` and no request ever leaves
#   the process.  See tests/conftest.py.
# =============================================================================

import logging
from typing import Any, Mapping, Optional

import httpx

from core.config import Settings, load_settings
from core.errors import ResponseDecodeError, TransportError, UpstreamError

logger = logging.getLogger(__name__)


class OpenverseClient:
    """Thin synchronous wrapper around an `httpx.Client` bound to Openverse."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.settings = settings or load_settings()
        # httpx wants a trailing slash on base_url so relative paths append
        # instead of replacing the last segment ("/v1").
        self._http = httpx.Client(
            base_url=self.settings.api_base.rstrip("/") + "/",
            headers={"User-Agent": self.settings.user_agent},
            transport=transport,
        )

    def get_json(self, path: str, params: Optional[Mapping[str, str]] = None) -> Any:
        """GET `path` (relative to the API base) and return the parsed body.

        Raises:
            UpstreamError: non-2xx status.
            TransportError: the request could not be completed.
            ResponseDecodeError: 2xx status but the body is not JSON.
        """
        logger.debug("GET %s params=%s", path, dict(params or {}))
        try:
            response = self._http.get(path.lstrip("/"), params=params)
        except httpx.RequestError as exc:
            raise TransportError(str(exc) or exc.__class__.__name__) from exc

        if not response.is_success:
            raise UpstreamError(response.status_code, response.reason_phrase)

        try:
            return response.json()
        except ValueError as exc:
            raise ResponseDecodeError(f"Invalid JSON from Openverse: {exc}") from exc

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "OpenverseClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
