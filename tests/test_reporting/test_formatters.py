"""Tests for crop_recommender.reporting.formatters."""

from __future__ import annotations

from crop_recommender.models.catalog import CatalogEntry
from crop_recommender.models.result import RecommendationResult
from crop_recommender.recommendations.engine import recommend
from crop_recommender.reporting.formatters import (
    format_cards,
    format_catalog_summary,
    format_request_header,
)


# ── format_request_header ─────────────────────────────────────────────────────


def test_request_header(spring_request) -> None:
    text = format_request_header(spring_request)
    assert "3 -> 6" in text
    assert "open-field" in text
    assert "9" in text


# ── format_cards ──────────────────────────────────────────────────────────────


def test_cards_list_every_box(sample_catalog, spring_request) -> None:
    result = recommend(spring_request, sample_catalog)
    text = format_cards(result)
    for card in result.cards:
        assert f"[{card.title}]" in text
        assert card.expected_revenue in text
        for name in card.crops:
            assert name in text
    assert "Total profit (best box)" in text


def test_cards_show_error() -> None:
    text = format_cards(RecommendationResult.failure("not enough crops"))
    assert "[NO RECOMMENDATION]" in text
    assert "not enough crops" in text


def test_cards_empty_without_error() -> None:
    assert "(no combinations available)" in format_cards(RecommendationResult())


# ── format_catalog_summary ────────────────────────────────────────────────────


def test_catalog_summary_counts(sample_catalog) -> None:
    text = format_catalog_summary(sample_catalog)
    assert "Entries: 7" in text
    assert "Groups:  6" in text
    assert "Rows with issues: 0" in text


def test_catalog_summary_lists_issues() -> None:
    entries = [
        CatalogEntry(item_name="토마토", sowing_start_text="미정", harvest_end_text="7월",
                     profit_open_field=10),
        CatalogEntry(item_name="오이", sowing_start_text="4월", harvest_end_text="7월"),
    ]
    text = format_catalog_summary(entries)
    assert "Rows with issues: 2" in text
    assert "unreadable month" in text
    assert "no profit figure" in text


def test_catalog_summary_truncates_issue_list() -> None:
    entries = [CatalogEntry(item_name=f"crop{i}") for i in range(4)]
    text = format_catalog_summary(entries, max_issues=2)
    assert "… and 2 more" in text
