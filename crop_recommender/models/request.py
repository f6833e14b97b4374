"""
Recommendation request model.

``Place`` selects which profit figure is used for scoring.  Requests coming
from the original mobile client carry Korean labels (``노지`` / ``시설``);
those and a few English spellings are folded onto the canonical values.
Anything unrecognised becomes ``Place.OTHER``, which scores on the better of
the two profit figures.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Place(StrEnum):
    """Cultivation environment of the requested plot."""

    OPEN_FIELD = "open-field"
    FACILITY = "facility"
    OTHER = "other"


_PLACE_ALIASES: dict[str, Place] = {
    "open-field": Place.OPEN_FIELD,
    "open_field": Place.OPEN_FIELD,
    "open field": Place.OPEN_FIELD,
    "노지": Place.OPEN_FIELD,
    "facility": Place.FACILITY,
    "greenhouse": Place.FACILITY,
    "시설": Place.FACILITY,
}


def parse_place(value: Any) -> Place:
    """Map a free-form place label to a ``Place``; unknown labels are ``OTHER``."""
    if isinstance(value, Place):
        return value
    return _PLACE_ALIASES.get(str(value).strip().lower(), Place.OTHER)


class RecommendationRequest(BaseModel):
    """Growing window, place and plot size to recommend a crop mix for.

    Attributes:
        start_month: First month of the growing window (1–12).
        end_month: Last month of the window (1–12); may precede
            ``start_month`` when the window wraps past December.
        place: Cultivation environment.
        row_count: Rows available, split evenly across the three crops.
    """

    model_config = ConfigDict(frozen=True)

    start_month: int = Field(ge=1, le=12)
    end_month: int = Field(ge=1, le=12)
    place: Place = Place.OTHER
    row_count: int = Field(gt=0)

    @field_validator("place", mode="before")
    @classmethod
    def normalize_place(cls, v: Any) -> Place:
        return parse_place(v)
