# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server for Openverse image search
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Registers the five Openverse tools on a FastMCP server.  Each tool is a
#   thin wrapper around a core/ function: it calls core, renders the result
#   as pretty-printed JSON text, and turns failures into an
#   {"error": ...} payload so the caller always gets something parsable.
#
# THE TOOLS:
#   search_images            keyword search with licence/source/size filters
#   get_image_details        one image by Openverse ID
#   get_related_images       images similar to a given one
#   get_image_stats          per-provider counts
#   search_images_for_essay  featured + per-concept images for an essay
#
# RUNNING THIS SERVER:
#   python -m tools.mcp_server        (stdio transport)
#   openverse-mcp                     (console script, same thing)
# =============================================================================

from dataclasses import asdict
import json
import logging
import sys
from typing import Any, Literal, Optional

from dotenv import load_dotenv
from fastmcp import FastMCP

from core.config import load_settings
from core.errors import OpenverseError, UpstreamError
from core.essay import search_images_for_essay as collect_essay_images
from core import images
from core.models import SearchRequest
from core.openverse_client import OpenverseClient

load_dotenv()
settings = load_settings()

# =============================================================================
# Logging Setup
# =============================================================================
# STDERR only: stdout is the MCP transport, and a stray log line there would
# corrupt the JSON-RPC stream.
#
# Colours: CYAN for incoming calls, YELLOW for progress, GREEN for responses.
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, payload: str) -> str:
    """Log the tool response as compact JSON in GREEN, then return it."""
    compact = json.dumps(json.loads(payload), separators=(",", ":"), ensure_ascii=False)
    logging.info(f"{_GREEN}  ← {tool_name} response: {compact}{_RESET}")
    return payload


def render(data: Any) -> str:
    """Serialize a tool result the way every tool returns it: 2-space JSON."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def error_payload(message: str, **extra: Any) -> str:
    return render({"error": message, **extra})


def _describe(context: str, exc: OpenverseError) -> str:
    # Only status failures get the context ("Failed to fetch stats: 503
    # Service Unavailable"); transport faults already describe themselves.
    if isinstance(exc, UpstreamError):
        return f"{context}: {exc}"
    return str(exc)


# =============================================================================
# Server + shared HTTP client
# =============================================================================
# One client for the process: it only holds a connection pool, no
# per-request state.  Tests swap it out with monkeypatch.
mcp = FastMCP("openverse-images")
client = OpenverseClient(settings)


# =============================================================================
# TOOL 1: search_images
# =============================================================================
@mcp.tool()
def search_images(
    query: str,
    page: Optional[int] = None,
    page_size: Optional[int] = None,
    license: Optional[str] = None,
    license_type: Optional[str] = None,
    creator: Optional[str] = None,
    source: Optional[str] = None,
    extension: Optional[str] = None,
    aspect_ratio: Optional[str] = None,
    size: Optional[str] = None,
    mature: bool = False,
) -> str:
    """Search for openly-licensed images on Openverse.

    Args:
        query: Search terms (required).
        page: Page number (default: 1).
        page_size: Results per page (default: 20, max: 500).
        license: License filter (e.g., by, by-sa, cc0).
        license_type: License type (commercial or modification).
        creator: Filter by creator name.
        source: Filter by source (e.g., flickr, wikimedia).
        extension: File type (jpg, png, gif, svg).
        aspect_ratio: Image shape (tall, wide, square).
        size: Image size (small, medium, large).
        mature: Include mature content (default: false).

    Returns:
        The Openverse search response as JSON text (result_count, page_count,
        results, ...), or {"error": "..."} if the request failed.
    """
    request = SearchRequest(
        query=query, page=page, page_size=page_size, license=license,
        license_type=license_type, creator=creator, source=source,
        extension=extension, aspect_ratio=aspect_ratio, size=size, mature=mature,
    )
    _log_request("search_images", **{k: v for k, v in vars(request).items() if v})

    try:
        data = images.search_images(client, request)
    except OpenverseError as exc:
        _log_status(f"Search failed: {exc}")
        return _log_response("search_images", error_payload(_describe("API request failed", exc)))

    if isinstance(data, dict):
        _log_status(f"{len(data.get('results') or [])} results, "
                    f"result_count={data.get('result_count')}")
    return _log_response("search_images", render(data))


# =============================================================================
# TOOL 2: get_image_details
# =============================================================================
@mcp.tool()
def get_image_details(image_id: str) -> str:
    """Get detailed information about a specific image.

    Args:
        image_id: Openverse image ID (UUID format).

    Returns:
        The full Openverse record for the image as JSON text, or
        {"error": "..."} if it could not be fetched.
    """
    _log_request("get_image_details", image_id=image_id)

    try:
        data = images.get_image_details(client, image_id)
    except OpenverseError as exc:
        _log_status(f"Lookup failed: {exc}")
        return _log_response(
            "get_image_details", error_payload(_describe("Failed to fetch image details", exc))
        )
    return _log_response("get_image_details", render(data))


# =============================================================================
# TOOL 3: get_related_images
# =============================================================================
@mcp.tool()
def get_related_images(
    image_id: str,
    page: Optional[int] = None,
    page_size: Optional[int] = None,
) -> str:
    """Get images related to a specific image.

    Args:
        image_id: Openverse image ID.
        page: Page number (default: 1).
        page_size: Results per page (default: 10).
    """
    _log_request("get_related_images", image_id=image_id, page=page, page_size=page_size)

    try:
        data = images.get_related_images(client, image_id, page, page_size)
    except OpenverseError as exc:
        _log_status(f"Related lookup failed: {exc}")
        return _log_response(
            "get_related_images", error_payload(_describe("Failed to fetch related images", exc))
        )
    return _log_response("get_related_images", render(data))


# =============================================================================
# TOOL 4: get_image_stats
# =============================================================================
@mcp.tool()
def get_image_stats() -> str:
    """Get statistics about image providers and counts."""
    _log_request("get_image_stats")

    try:
        data = images.get_image_stats(client)
    except OpenverseError as exc:
        _log_status(f"Stats failed: {exc}")
        return _log_response("get_image_stats", error_payload(_describe("Failed to fetch stats", exc)))

    if isinstance(data, list):
        _log_status(f"{len(data)} providers")
    return _log_response("get_image_stats", render(data))


# =============================================================================
# TOOL 5: search_images_for_essay
# =============================================================================
# The one tool that reshapes upstream data.  Sub-search failures are
# absorbed in core/essay.py; only a fault outside them lands in the
# except-branch below, which still answers with parsable JSON.
# =============================================================================
@mcp.tool()
def search_images_for_essay(
    essay_topic: str,
    concepts: list[str],
    style: Literal["photo", "illustration", "any"] = "any",
    max_images: int = 10,
) -> str:
    """Search for images suitable for illustrating an essay.

    Runs one search for the topic itself (up to 3 "featured" images) and
    then one search per concept ("<concept> <topic>"), stopping once the
    image budget is used up.

    Args:
        essay_topic: Main topic/title of the essay.
        concepts: List of key concepts to find images for.
        style: Preferred image style: photo, illustration or any (default: any).
            "photo" restricts results to jpg/png files.
        max_images: Maximum images to return (default: 10).

    Returns:
        JSON text with topic, images_by_concept, featured_images and
        total_images.  Each image carries id, title, url, thumbnail,
        creator, license, attribution and source.
    """
    _log_request("search_images_for_essay", essay_topic=essay_topic,
                 concepts=concepts, style=style, max_images=max_images)

    try:
        result = collect_essay_images(client, essay_topic, concepts, style, max_images)
        _log_status(f"{len(result.featured_images)} featured, "
                    f"{len(result.images_by_concept)} concepts filled, "
                    f"total={result.total_images}")
        payload = render(asdict(result))
    except Exception as exc:
        logging.exception("search_images_for_essay failed")
        payload = error_payload(str(exc) or "Failed to search for essay images", topic=essay_topic)
    return _log_response("search_images_for_essay", payload)


# =============================================================================
# Server entry point
# =============================================================================
if __name__ == "__main__":
    mcp.run()
