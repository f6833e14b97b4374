"""
Crop catalog model.

A ``CatalogEntry`` is one row of the externally supplied crop catalog: a
variety of an item within a major category, with its growing window, two
discrete ratings and two profit figures.

Catalog rows arrive from spreadsheets and database views keyed either in
English snake_case or in the original Korean column headers, with numbers
often stored as text.  ``CatalogEntry.from_row()`` accepts both spellings and
coerces leniently: a cell that cannot be read becomes ``None`` rather than
rejecting the row, so one bad catalog row never blocks a recommendation.
"""

from __future__ import annotations

import math
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

from crop_recommender.utils.numbers import to_number

UNDETERMINED = "미정"

# canonical field -> accepted source column names, in priority order
ROW_ALIASES: dict[str, tuple[str, ...]] = {
    "major_category":    ("major_category", "category", "대분류"),
    "item_name":         ("item_name", "item", "품목"),
    "variety_name":      ("variety_name", "variety", "품종"),
    "labor_convenience": ("labor_convenience", "labor_score", "노동편의성"),
    "variety_rarity":    ("variety_rarity", "rarity_score", "품종희소성"),
    "sowing_start_text": ("sowing_start_text", "sow_start", "파종(시작) 시기"),
    "harvest_end_text":  ("harvest_end_text", "harvest_end", "수확(종료) 시기"),
    "profit_open_field": ("profit_open_field", "profit_open", "수익성(노지)"),
    "profit_facility":   ("profit_facility", "profit_greenhouse", "수익성(시설)"),
}


class CatalogEntry(BaseModel):
    """One crop variety from the catalog.

    Attributes:
        major_category: Top-level crop category (e.g. ``"채소"``).
        item_name: Crop item within the category (e.g. ``"감자"``).
        variety_name: Variety label; ``None`` or blank when unnamed.
        labor_convenience: Discrete 2–5 rating, higher = less labor.
        variety_rarity: Discrete 2–5 rating, higher = rarer variety.
        sowing_start_text: Free text holding the sowing month, e.g. ``"3월 초"``.
        harvest_end_text: Free text holding the last harvest month.
        profit_open_field: Profit per row when grown in the open field.
        profit_facility: Profit per row when grown in a facility.
    """

    model_config = ConfigDict(frozen=True)

    major_category: str = UNDETERMINED
    item_name: str = UNDETERMINED
    variety_name: Optional[str] = None
    labor_convenience: Optional[float] = None
    variety_rarity: Optional[float] = None
    sowing_start_text: Optional[Union[int, str]] = None
    harvest_end_text: Optional[Union[int, str]] = None
    profit_open_field: Optional[float] = None
    profit_facility: Optional[float] = None

    @field_validator("major_category", "item_name", mode="before")
    @classmethod
    def default_undetermined(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return UNDETERMINED
        return v if isinstance(v, str) else str(v)

    @field_validator("variety_name", mode="before")
    @classmethod
    def coerce_variety(cls, v: Any) -> Any:
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @field_validator(
        "labor_convenience", "variety_rarity",
        "profit_open_field", "profit_facility",
        mode="before",
    )
    @classmethod
    def coerce_numeric(cls, v: Any) -> Optional[float]:
        return to_number(v)

    @field_validator("sowing_start_text", "harvest_end_text", mode="before")
    @classmethod
    def coerce_month_cell(cls, v: Any) -> Any:
        # Unreadable cells become None; extract_month() reads the rest.
        if v is None or isinstance(v, bool):
            return None
        if isinstance(v, (int, str)):
            return v
        if isinstance(v, float):
            if not math.isfinite(v):
                return None
            return int(v) if v.is_integer() else str(v)
        return None

    @property
    def group_key(self) -> tuple[str, str]:
        """Diversity key: no two entries in one combination share it."""
        return (self.major_category, self.item_name)

    @property
    def display_name(self) -> str:
        """``"item (variety)"`` when the variety is non-blank, else ``"item"``."""
        if self.variety_name and self.variety_name.strip():
            return f"{self.item_name} ({self.variety_name})"
        return self.item_name

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "CatalogEntry":
        """Build an entry from a raw catalog row keyed in any supported spelling.

        For each field the first alias holding a non-null value wins.
        """
        values: dict[str, Any] = {}
        for field, aliases in ROW_ALIASES.items():
            value = _pick(row, aliases)
            if value is None:
                continue
            values[field] = value
        return cls(**values)


def _pick(row: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = row.get(key)
        if value is not None:
            return value
    return None
