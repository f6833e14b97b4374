"""
Tests for crop_recommender/recommendations/formatter.py.

What we test
------------
format_combinations():
  - Expected revenue = Σ profit × rows / 3, thousands-separated.
  - total_profit is the first card's revenue (0 without cards).
  - Crops are ordered by final score, highest first.
  - Display names include the variety only when it is non-blank.
  - Indicators are per-combination sums rounded half-up to 1 decimal.
  - Titles are sequential "Box n".
  - A missing profit counts as 0 revenue.
  - Crop summaries carry rounded scores and raw inputs.
"""

from __future__ import annotations

import pytest

from crop_recommender.models.catalog import CatalogEntry
from crop_recommender.models.result import RecommendationCard
from crop_recommender.recommendations.combiner import Combination
from crop_recommender.recommendations.formatter import (
    expected_revenue,
    format_combinations,
    format_revenue,
    parse_revenue,
)
from crop_recommender.recommendations.scorer import ScoredEntry


def _se(
    index: int,
    item: str,
    profit_used: float | None,
    final_score: float = 0.5,
    variety: str | None = None,
    profit_score: float = 0.0,
    labor_score: float = 0.0,
    rarity_score: float = 0.0,
) -> ScoredEntry:
    return ScoredEntry(
        entry=CatalogEntry(
            major_category="채소", item_name=item, variety_name=variety,
            labor_convenience=3, variety_rarity=4,
        ),
        index=index,
        sowing_start_month=3,
        harvest_end_month=6,
        profit_used=profit_used,
        profit_score=profit_score,
        labor_score=labor_score,
        rarity_score=rarity_score,
        final_score=final_score,
    )


def _combo(*entries: ScoredEntry) -> Combination:
    return Combination(
        entries=tuple(entries),
        indices=tuple(sorted(se.index for se in entries)),
        total_score=sum(se.final_score for se in entries),
    )


class TestRevenue:
    def test_profit_times_rows_per_crop(self):
        combo = _combo(_se(0, "감자", 100.0), _se(1, "상추", 200.0), _se(2, "고추", 300.0))
        out = format_combinations([combo], row_count=9)
        assert out.cards[0].expected_revenue == "1,800"
        assert out.total_profit == 1800

    def test_large_amount_separators(self):
        combo = _combo(
            _se(0, "감자", 466_000.0), _se(1, "상추", 466_000.0), _se(2, "고추", 466_000.0)
        )
        out = format_combinations([combo], row_count=3)
        assert out.cards[0].expected_revenue == "1,398,000"

    def test_missing_profit_counts_as_zero(self):
        combo = _combo(_se(0, "감자", None), _se(1, "상추", 200.0), _se(2, "고추", 300.0))
        assert format_combinations([combo], row_count=3).total_profit == 500

    def test_rounds_half_up(self):
        entries = [_se(0, "감자", 0.5), _se(1, "상추", 0.0), _se(2, "고추", 0.0)]
        assert expected_revenue(entries, rows_per_crop=1.0) == 1

    def test_format_and_parse(self):
        assert format_revenue(1234567) == "1,234,567"
        assert format_revenue(0) == "0"
        assert parse_revenue("1,234,567") == 1234567


class TestCards:
    def test_total_profit_from_first_card(self):
        first = _combo(_se(0, "감자", 100.0), _se(1, "상추", 100.0), _se(2, "고추", 100.0))
        second = _combo(_se(3, "감자", 900.0), _se(1, "상추", 100.0), _se(2, "고추", 100.0))
        out = format_combinations([first, second], row_count=3)
        assert out.total_profit == 300
        assert [c.title for c in out.cards] == ["Box 1", "Box 2"]
        assert all(isinstance(c, RecommendationCard) for c in out.cards)

    def test_no_combinations(self):
        out = format_combinations([], row_count=9)
        assert out.cards == []
        assert out.summaries == []
        assert out.total_profit == 0

    def test_crops_ordered_by_final_score(self):
        combo = _combo(
            _se(0, "감자", 1.0, final_score=0.2),
            _se(1, "상추", 1.0, final_score=0.9),
            _se(2, "고추", 1.0, final_score=0.5),
        )
        card = format_combinations([combo], row_count=3).cards[0]
        assert card.crops == ["상추", "고추", "감자"]

    def test_display_names(self):
        combo = _combo(
            _se(0, "감자", 1.0, final_score=0.9, variety="수미"),
            _se(1, "상추", 1.0, final_score=0.8, variety="   "),
            _se(2, "고추", 1.0, final_score=0.7, variety=None),
        )
        card = format_combinations([combo], row_count=3).cards[0]
        assert card.crops == ["감자 (수미)", "상추", "고추"]

    def test_indicator_sums(self):
        combo = _combo(
            _se(0, "감자", 1.0, profit_score=1.0, labor_score=1 / 3, rarity_score=0.0),
            _se(1, "상추", 1.0, profit_score=0.5, labor_score=1 / 3, rarity_score=1.0),
            _se(2, "고추", 1.0, profit_score=0.0, labor_score=1 / 3, rarity_score=0.25),
        )
        ind = format_combinations([combo], row_count=3).cards[0].indicators
        assert ind.profit == pytest.approx(1.5)
        assert ind.labor == pytest.approx(1.0)
        # 1.25 rounds half-up
        assert ind.rarity == pytest.approx(1.3)


class TestSummaries:
    def test_summary_fields(self):
        combo = _combo(
            _se(0, "감자", 1000.0, final_score=0.12345, variety="수미", profit_score=0.4444),
            _se(1, "상추", 500.0, final_score=0.1),
            _se(2, "고추", 250.0, final_score=0.05),
        )
        summary = format_combinations([combo], row_count=3).summaries[0][0]
        assert summary.name == "감자 (수미)"
        assert summary.item == "감자"
        assert summary.variety == "수미"
        assert summary.score == pytest.approx(0.123)
        assert summary.profit_score == pytest.approx(0.444)
        assert summary.profit_used == 1000.0
        assert summary.labor_convenience == 3
        assert summary.variety_rarity == 4

    def test_blank_variety_is_none(self):
        combo = _combo(
            _se(0, "감자", 1.0, variety=""), _se(1, "상추", 1.0), _se(2, "고추", 1.0)
        )
        summary = format_combinations([combo], row_count=3).summaries[0][0]
        assert summary.variety is None
