# =============================================================================
# core/essay.py  —  Essay Image Aggregation
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Given an essay topic and a list of concepts, gathers a handful of
#   "featured" images for the topic plus a bucket of images per concept,
#   staying within a max_images budget.
#
# THE FLOW (strictly sequential, one request at a time):
#   1. Featured search: the bare topic, page_size = min(5, max_images),
#      keep at most 3 results.
#   2. Concept searches: "<concept> <topic>" for each concept, in order,
#      page_size = max(1, max_images // len(concepts)).
#      Before each concept we check the running total; once it has reached
#      max_images the remaining concepts are never queried.
#
# BUDGET OVERSHOOT:
#   The check runs before a concept's search, not before its results are
#   added, so the final total can exceed max_images by one concept batch.
#   Callers rely on this; keep it.
#
# RESILIENCE:
#   _search() never raises for upstream problems.  A failed sub-search is a
#   SearchOutcome with no results, so one bad concept can't sink the rest.
# =============================================================================

from dataclasses import replace
import logging
from typing import Any, Literal, Mapping, Optional

from core.errors import OpenverseError
from core.models import EssayImageSet, ImageSummary, SearchOutcome
from core.openverse_client import OpenverseClient

logger = logging.getLogger(__name__)

Style = Literal["photo", "illustration", "any"]

FEATURED_PAGE_SIZE = 5
MAX_FEATURED_IMAGES = 3
DEFAULT_MAX_IMAGES = 10
PHOTO_EXTENSIONS = "jpg,png"


def summarize_image(image: Mapping[str, Any]) -> ImageSummary:
    """Reduce an Openverse result to an ImageSummary.

    Missing or empty fields fall back to "" ("Unknown" for creator); `id`
    and `url` pass through as-is.
    """
    return ImageSummary(
        id=image.get("id"),
        title=image.get("title") or "",
        url=image.get("url"),
        thumbnail=image.get("thumbnail") or "",
        creator=image.get("creator") or "Unknown",
        license=image.get("license") or "",
        attribution=image.get("attribution") or "",
        source=image.get("source") or "",
    )


def images_per_concept(max_images: int, concept_count: int) -> int:
    if not concept_count:
        return max_images
    return max(1, max_images // concept_count)


def _search(
    client: OpenverseClient,
    query: str,
    page_size: int,
    style: Style = "any",
    filters: Optional[Mapping[str, str]] = None,
) -> SearchOutcome:
    params = {"q": query, "page_size": str(page_size), "mature": "false"}
    params.update(filters or {})
    if style == "photo":
        params["extension"] = PHOTO_EXTENSIONS

    try:
        data = client.get_json("images/", params)
    except OpenverseError as exc:
        return SearchOutcome(error=str(exc))

    results = data.get("results") if isinstance(data, dict) else None
    if not isinstance(results, list):
        return SearchOutcome()
    return SearchOutcome(results=results)


def _warn_if_failed(query: str, outcome: SearchOutcome) -> None:
    if outcome.failed:
        logger.warning("Essay sub-search %r failed: %s", query, outcome.error)


def _add_featured(acc: EssayImageSet, outcome: SearchOutcome) -> EssayImageSet:
    featured = [summarize_image(img) for img in outcome.results[:MAX_FEATURED_IMAGES]]
    return replace(
        acc,
        featured_images=featured,
        total_images=acc.total_images + len(featured),
    )


def _add_concept(
    acc: EssayImageSet, concept: str, outcome: SearchOutcome, limit: int
) -> EssayImageSet:
    if not outcome.results:
        return acc
    images = [summarize_image(img) for img in outcome.results[:limit]]
    # A repeated concept replaces its earlier bucket; keep the total in step.
    replaced = len(acc.images_by_concept.get(concept, ()))
    return replace(
        acc,
        images_by_concept={**acc.images_by_concept, concept: images},
        total_images=acc.total_images - replaced + len(images),
    )


def search_images_for_essay(
    client: OpenverseClient,
    essay_topic: str,
    concepts: list[str],
    style: Style = "any",
    max_images: int = DEFAULT_MAX_IMAGES,
) -> EssayImageSet:
    """Collect featured and per-concept images for an essay.

    Upstream failures only shrink the result; anything else propagates.
    """
    acc = EssayImageSet(topic=essay_topic)

    featured = _search(client, essay_topic, min(FEATURED_PAGE_SIZE, max_images), style)
    _warn_if_failed(essay_topic, featured)
    acc = _add_featured(acc, featured)

    per_concept = images_per_concept(max_images, len(concepts))
    for concept in concepts:
        if acc.total_images >= max_images:
            logger.info(
                "Image budget reached (%d/%d); skipping remaining concepts",
                acc.total_images, max_images,
            )
            break
        query = f"{concept} {essay_topic}"
        outcome = _search(client, query, per_concept, style)
        _warn_if_failed(query, outcome)
        acc = _add_concept(acc, concept, outcome, per_concept)

    return acc
