"""
Recommendation output models.

``RecommendationResult`` is what the engine hands back to its caller (the CLI,
an HTTP handler, a history store).  It is always returned, never raised:
when no recommendation can be made, ``error`` carries the reason and the
lists are empty.

All models are frozen and serialize with ``model_dump()`` /
``model_dump_json()``.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class CropSummary(BaseModel):
    """Per-crop detail of one recommended combination.

    Scores are rounded to 3 decimals for display; ``profit_used`` is the raw
    profit figure selected for the requested place.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    item: str
    variety: Optional[str] = None
    score: float
    profit_score: float
    labor_score: float
    rarity_score: float
    profit_used: Optional[float] = None
    labor_convenience: Optional[float] = None
    variety_rarity: Optional[float] = None


class CardIndicators(BaseModel):
    """Summed sub-scores of a combination, each rounded to 1 decimal (0.0–3.0)."""

    model_config = ConfigDict(frozen=True)

    profit: float
    labor: float
    rarity: float


class RecommendationCard(BaseModel):
    """Display projection of one combination.

    Attributes:
        title: Sequential label, ``"Box 1"`` … ``"Box 3"``.
        crops: Crop display names, highest final score first.
        indicators: Summed profit / labor / rarity sub-scores.
        expected_revenue: Thousands-separated revenue, e.g. ``"1,398,000"``.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    crops: list[str]
    indicators: CardIndicators
    expected_revenue: str


class RecommendationResult(BaseModel):
    """Engine output for one request."""

    model_config = ConfigDict(frozen=True)

    combinations: list[list[CropSummary]] = []
    cards: list[RecommendationCard] = []
    total_profit: int = 0
    error: Optional[str] = None

    @property
    def recommended_crops(self) -> list[CropSummary]:
        """All crops across all combinations, in card order."""
        return [crop for combo in self.combinations for crop in combo]

    @classmethod
    def failure(cls, message: str) -> "RecommendationResult":
        """Empty result carrying ``message`` as its error."""
        return cls(error=message)
