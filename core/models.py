# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# Everything here is request-scoped: built for one tool call, serialized,
# thrown away.  Nothing persists between calls.
#
# NOTE ON UPSTREAM DATA:
#   Openverse responses are NOT modelled here.  The single-resource tools
#   pass the upstream JSON through untouched, so it stays a plain dict.
#   Only the essay tool reshapes results, into ImageSummary.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Optional

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 500
DEFAULT_RELATED_PAGE_SIZE = 10


# -----------------------------------------------------------------------------
# SearchRequest — the inputs of search_images
# -----------------------------------------------------------------------------
# Optional filters default to None, meaning "don't send this parameter".
# An empty string is treated the same way when the query is built.
# -----------------------------------------------------------------------------
@dataclass
class SearchRequest:
    """A keyword search against /images/."""

    query: str
    page: Optional[int] = None         # Upstream default: 1
    page_size: Optional[int] = None    # Upstream default: 20, capped at 500
    license: Optional[str] = None      # e.g. "by", "by-sa", "cc0"
    license_type: Optional[str] = None # "commercial" or "modification"
    creator: Optional[str] = None
    source: Optional[str] = None       # e.g. "flickr", "wikimedia"
    extension: Optional[str] = None    # "jpg", "png", "gif", "svg"
    aspect_ratio: Optional[str] = None # "tall", "wide", "square"
    size: Optional[str] = None         # "small", "medium", "large"
    mature: bool = False


# -----------------------------------------------------------------------------
# ImageSummary — one image as the essay tool reports it
# -----------------------------------------------------------------------------
# A trimmed view of an Openverse result: enough to show, credit and link
# an image, nothing more.
# -----------------------------------------------------------------------------
@dataclass
class ImageSummary:
    """An essay-ready image reference with attribution data."""

    id: Optional[str]
    title: str
    url: Optional[str]
    thumbnail: str
    creator: str
    license: str
    attribution: str
    source: str


# -----------------------------------------------------------------------------
# EssayImageSet — the essay tool's output
# -----------------------------------------------------------------------------
# Frozen: each aggregation step returns a new value (dataclasses.replace)
# rather than mutating a shared one.  Field order is the JSON key order.
#
# Invariant:
#   total_images == len(featured_images)
#                   + sum(len(v) for v in images_by_concept.values())
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class EssayImageSet:
    """Featured images for a topic plus one bucket per concept."""

    topic: str
    images_by_concept: dict[str, list[ImageSummary]] = field(default_factory=dict)
    featured_images: list[ImageSummary] = field(default_factory=list)
    total_images: int = 0


# -----------------------------------------------------------------------------
# SearchOutcome — result type of the essay search helper
# -----------------------------------------------------------------------------
# Always a "success": a failed sub-search is an outcome with no results.
# `error` is kept only so the failure can be logged.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class SearchOutcome:
    """Results of one essay sub-search, possibly empty."""

    results: list[dict[str, Any]] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None
