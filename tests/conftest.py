"""
Shared pytest fixtures for the crop recommender test suite.

Provides:
  - ``sample_catalog``: a small mixed catalog covering wrapped windows, a
    two-variety item, a crop outside spring, and a missing profit figure.
  - ``spring_request``: a March–June open-field request over 9 rows.
  - ``quiet_config_file``: a TOML config that logs to stdout only.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from crop_recommender.models.catalog import CatalogEntry
from crop_recommender.models.request import Place, RecommendationRequest


@pytest.fixture
def sample_catalog() -> list[CatalogEntry]:
    """Seven entries; five overlap March–June, in four distinct groups."""
    return [
        CatalogEntry(
            major_category="채소", item_name="감자", variety_name="수미",
            labor_convenience=4, variety_rarity=2,
            sowing_start_text="3월 초", harvest_end_text="6월 하순",
            profit_open_field=1_000_000, profit_facility=1_200_000,
        ),
        CatalogEntry(
            major_category="채소", item_name="감자", variety_name="두백",
            labor_convenience=3, variety_rarity=4,
            sowing_start_text="3월", harvest_end_text="6월",
            profit_open_field=900_000, profit_facility=None,
        ),
        CatalogEntry(
            major_category="채소", item_name="상추", variety_name="청치마",
            labor_convenience=5, variety_rarity=2,
            sowing_start_text="4월", harvest_end_text="5월",
            profit_open_field=500_000, profit_facility=700_000,
        ),
        CatalogEntry(
            major_category="채소", item_name="고추", variety_name="청양",
            labor_convenience=2, variety_rarity=3,
            sowing_start_text="5월", harvest_end_text="10월",
            profit_open_field=1_500_000, profit_facility=2_000_000,
        ),
        CatalogEntry(
            major_category="과일", item_name="수박", variety_name=None,
            labor_convenience=3, variety_rarity=5,
            sowing_start_text="4월", harvest_end_text="8월",
            profit_open_field=2_000_000, profit_facility=2_500_000,
        ),
        CatalogEntry(
            major_category="채소", item_name="배추", variety_name="",
            labor_convenience=4, variety_rarity=3,
            sowing_start_text="8월", harvest_end_text="11월",
            profit_open_field=800_000,
        ),
        CatalogEntry(
            major_category="채소", item_name="시금치", variety_name="",
            labor_convenience=5, variety_rarity=2,
            sowing_start_text="11월", harvest_end_text="2월",
            profit_open_field=300_000,
        ),
    ]


@pytest.fixture
def spring_request() -> RecommendationRequest:
    return RecommendationRequest(
        start_month=3, end_month=6, place=Place.OPEN_FIELD, row_count=9,
    )


@pytest.fixture
def quiet_config_file(tmp_path: Path) -> Path:
    """Config without a log file, output under ``tmp_path``."""
    path = tmp_path / "config.toml"
    path.write_text(
        "[engine]\n"
        "max_combinations = 3\n"
        "\n"
        "[data]\n"
        f'catalog_path = "{(tmp_path / "crops.json").as_posix()}"\n'
        f'output_dir = "{(tmp_path / "out").as_posix()}"\n'
        "\n"
        "[logging]\n"
        'level = "WARNING"\n'
        'log_file = ""\n',
        encoding="utf-8",
    )
    return path
