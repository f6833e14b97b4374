"""
Card formatting: turns selected combinations into display-ready output.

Per combination
---------------
- crops are ordered by final score, highest first;
- display name is ``"item (variety)"`` or just ``"item"``;
- expected revenue = Σ profit_used × (row_count / 3), rounded half-up and
  thousands-separated ("1,398,000"); a missing profit counts as 0;
- indicators = Σ profit / labor / rarity sub-scores, rounded to 1 decimal.

``total_profit`` is the first card's revenue as an integer (0 without cards).
"""

from __future__ import annotations

from dataclasses import dataclass, field

from crop_recommender.models.result import CardIndicators, CropSummary, RecommendationCard
from crop_recommender.recommendations.combiner import COMBINATION_SIZE, Combination
from crop_recommender.recommendations.scorer import ScoredEntry
from crop_recommender.utils.numbers import round_half_up

CARD_TITLE = "Box {n}"


@dataclass
class FormattedCombinations:
    """Formatter output, ready to be wrapped in a ``RecommendationResult``."""

    cards:        list[RecommendationCard] = field(default_factory=list)
    summaries:    list[list[CropSummary]] = field(default_factory=list)
    total_profit: int = 0


def format_combinations(
    combinations: list[Combination],
    row_count:    int,
) -> FormattedCombinations:
    """Build cards and per-crop summaries for ``combinations``, in order."""
    rows_per_crop = row_count / COMBINATION_SIZE
    result = FormattedCombinations()

    for n, combo in enumerate(combinations, start=1):
        ordered = sorted(combo.entries, key=lambda se: -se.final_score)
        revenue = expected_revenue(ordered, rows_per_crop)

        result.summaries.append([build_crop_summary(se) for se in ordered])
        result.cards.append(
            RecommendationCard(
                title=CARD_TITLE.format(n=n),
                crops=[se.entry.display_name for se in ordered],
                indicators=CardIndicators(
                    profit=round_half_up(sum(se.profit_score for se in ordered), 1),
                    labor=round_half_up(sum(se.labor_score for se in ordered), 1),
                    rarity=round_half_up(sum(se.rarity_score for se in ordered), 1),
                ),
                expected_revenue=format_revenue(revenue),
            )
        )

    if result.cards:
        result.total_profit = parse_revenue(result.cards[0].expected_revenue)
    return result


def expected_revenue(entries: list[ScoredEntry], rows_per_crop: float) -> int:
    """Σ profit_used × rows_per_crop, rounded half-up to an integer."""
    total = sum((se.profit_used or 0.0) * rows_per_crop for se in entries)
    return int(round_half_up(total))


def format_revenue(amount: int) -> str:
    return f"{amount:,}"


def parse_revenue(text: str) -> int:
    return int(text.replace(",", ""))


def build_crop_summary(se: ScoredEntry) -> CropSummary:
    entry = se.entry
    return CropSummary(
        name=entry.display_name,
        item=entry.item_name,
        variety=entry.variety_name or None,
        score=round_half_up(se.final_score, 3),
        profit_score=round_half_up(se.profit_score, 3),
        labor_score=round_half_up(se.labor_score, 3),
        rarity_score=round_half_up(se.rarity_score, 3),
        profit_used=se.profit_used,
        labor_convenience=entry.labor_convenience,
        variety_rarity=entry.variety_rarity,
    )
