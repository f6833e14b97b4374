"""
Recommendation engine entry point.

    recommend(request, catalog) -> RecommendationResult

Stages
------
1. filter_by_window()      — keep crops whose growing window overlaps the request.
2. score_entries()         — profit / labor / rarity sub-scores + final score.
3. search_combinations()   — greedy top-N three-group combinations.
4. format_combinations()   — cards, per-crop summaries, total profit.

The function is pure: no I/O, no state kept between calls, and the caller's
catalog is never mutated.  It never raises.  Not enough matching crops or
groups comes back as ``RecommendationResult.error``; any unexpected fault is
logged with its traceback and mapped to an error result as well.
"""

from __future__ import annotations

import logging
from typing import Sequence

from crop_recommender.models.catalog import CatalogEntry
from crop_recommender.models.request import RecommendationRequest
from crop_recommender.models.result import RecommendationResult
from crop_recommender.recommendations.combiner import COMBINATION_SIZE, search_combinations
from crop_recommender.recommendations.formatter import format_combinations
from crop_recommender.recommendations.period import filter_by_window
from crop_recommender.recommendations.scorer import score_entries

logger = logging.getLogger(__name__)

NOT_ENOUGH_CROPS_ERROR = (
    "Fewer than 3 crops can be grown in the requested period. "
    "Adjust the growing months."
)
NO_COMBINATION_ERROR = (
    "No crop combination matches the conditions. "
    "Try different conditions."
)
UNEXPECTED_ERROR = "Recommendation failed due to an internal error: {exc}"


def recommend(
    request:          RecommendationRequest,
    catalog:          Sequence[CatalogEntry],
    max_combinations: int = 3,
) -> RecommendationResult:
    """Recommend up to ``max_combinations`` three-crop mixes for ``request``.

    Args:
        request:          Growing window, place and row count.
        catalog:          Crop catalog; read-only.
        max_combinations: Upper bound on returned combinations.

    Returns:
        ``RecommendationResult``; ``error`` is set (and the lists are empty)
        when no recommendation can be made.
    """
    try:
        return _recommend(request, catalog, max_combinations)
    except Exception as exc:
        logger.exception("Crop recommendation failed for request=%s", request)
        return RecommendationResult.failure(UNEXPECTED_ERROR.format(exc=exc))


def _recommend(
    request:          RecommendationRequest,
    catalog:          Sequence[CatalogEntry],
    max_combinations: int,
) -> RecommendationResult:
    logger.info(
        "Recommending for months %d-%d place=%s rows=%d over %d catalog entries",
        request.start_month, request.end_month, request.place,
        request.row_count, len(catalog),
    )

    matched = filter_by_window(catalog, request)
    logger.info("Period filter kept %d of %d entries.", len(matched), len(catalog))
    if len(matched) < COMBINATION_SIZE:
        logger.warning(
            "Only %d crop(s) match months %d-%d; need %d.",
            len(matched), request.start_month, request.end_month, COMBINATION_SIZE,
        )
        return RecommendationResult.failure(NOT_ENOUGH_CROPS_ERROR)

    scored = score_entries(matched, request.place)
    combinations = search_combinations(scored, max_combinations=max_combinations)
    logger.info("Selected %d combination(s).", len(combinations))
    if not combinations:
        logger.warning("No combination could be formed from %d crops.", len(scored))
        return RecommendationResult.failure(NO_COMBINATION_ERROR)

    formatted = format_combinations(combinations, request.row_count)
    return RecommendationResult(
        combinations=formatted.summaries,
        cards=formatted.cards,
        total_profit=formatted.total_profit,
    )
