"""
Crop scoring: converts each window-matched catalog entry into three
normalized sub-scores and one weighted final score.

Score formula (weighted sum, nominal range 0–1)
-----------------------------------------------
    final = (
        profit_score   * 0.50   # population-relative profitability
        + labor_score  * 0.25   # ease of cultivation
        + rarity_score * 0.25   # variety rarity
    )

Component explanations
----------------------
profit_score (0–1):
    The profit figure for the requested place (open field, facility, or the
    better of the two) is log1p-transformed, then min-max scaled over every
    entry in the filtered set.  When all readable profits are equal the
    score is exactly 0.5.  A missing profit (or one below −1, outside the
    log1p domain) is excluded from the min/max and scores 0.

labor_score, rarity_score (nominally 0–1):
    Discrete 2–5 ratings mapped linearly with (x − 2) / 3.  Ratings outside
    2–5 are deliberately NOT clamped; they yield scores outside [0, 1].
    A missing rating scores 0.

Undefined sub-scores travel as ``None`` and are resolved to 0 in exactly one
place, ``resolve_score()``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

from crop_recommender.models.catalog import CatalogEntry
from crop_recommender.models.request import Place
from crop_recommender.recommendations.period import entry_window

logger = logging.getLogger(__name__)

_RATING_MIN = 2.0
_RATING_SPAN = 3.0          # 5 - 2
_DEGENERATE_PROFIT_SCORE = 0.5


@dataclass(frozen=True)
class ScoreWeights:
    """Weights of the three sub-scores; they sum to 1.0."""

    profit: float = 0.5
    labor:  float = 0.25
    rarity: float = 0.25

    @property
    def total(self) -> float:
        return self.profit + self.labor + self.rarity


WEIGHTS = ScoreWeights()


@dataclass(frozen=True)
class ScoredEntry:
    """A catalog entry with its derived scores for one engine invocation.

    Attributes:
        entry:              The untouched catalog entry.
        index:              Position in the window-filtered list; identifies
                            the entry inside combination index triples.
        sowing_start_month: Parsed sowing month, ``None`` if unreadable.
        harvest_end_month:  Parsed harvest month, ``None`` if unreadable.
        profit_used:        Profit figure selected for the requested place.
        profit_score:       Resolved profit sub-score.
        labor_score:        Resolved labor sub-score.
        rarity_score:       Resolved rarity sub-score.
        final_score:        Weighted sum of the three sub-scores.
    """

    entry:              CatalogEntry
    index:              int
    sowing_start_month: int | None
    harvest_end_month:  int | None
    profit_used:        float | None
    profit_score:       float
    labor_score:        float
    rarity_score:       float
    final_score:        float

    @property
    def group_key(self) -> tuple[str, str]:
        return self.entry.group_key


def select_profit(entry: CatalogEntry, place: Place) -> float | None:
    """Pick the profit figure that applies to ``place``.

    Open field and facility use their own figure (possibly missing).  Any
    other place takes the larger of the two, counting a missing one as 0.
    """
    if place == Place.OPEN_FIELD:
        return entry.profit_open_field
    if place == Place.FACILITY:
        return entry.profit_facility
    return max(entry.profit_open_field or 0.0, entry.profit_facility or 0.0)


def compute_profit_scores(profits: Sequence[float | None]) -> list[float | None]:
    """log1p + min-max scale ``profits`` over the whole population.

    Returns one score per input; ``None`` marks an unreadable profit.
    """
    transformed = [_log1p_or_none(p) for p in profits]
    valid = [t for t in transformed if t is not None]
    if not valid:
        return [None] * len(transformed)

    lo, hi = min(valid), max(valid)
    if hi == lo:
        return [None if t is None else _DEGENERATE_PROFIT_SCORE for t in transformed]

    span = hi - lo
    return [None if t is None else (t - lo) / span for t in transformed]


def scale_rating(value: float | None) -> float | None:
    """Map a 2–5 rating onto 0–1 without clamping; ``None`` stays ``None``."""
    if value is None:
        return None
    return (value - _RATING_MIN) / _RATING_SPAN


def resolve_score(score: float | None) -> float:
    """Resolve an undefined sub-score to 0."""
    return 0.0 if score is None else score


def compute_final_score(
    profit_score: float,
    labor_score:  float,
    rarity_score: float,
    weights:      ScoreWeights = WEIGHTS,
) -> float:
    return (
        profit_score   * weights.profit
        + labor_score  * weights.labor
        + rarity_score * weights.rarity
    )


def score_entries(entries: Sequence[CatalogEntry], place: Place) -> list[ScoredEntry]:
    """Score every entry of the window-filtered list.

    Profit scores are relative to ``entries`` as a whole, so the same entry
    can score differently in a different filtered set.  Output order and
    ``index`` follow the input order.
    """
    profits = [select_profit(entry, place) for entry in entries]
    profit_scores = compute_profit_scores(profits)

    scored: list[ScoredEntry] = []
    for index, (entry, profit, profit_score) in enumerate(
        zip(entries, profits, profit_scores)
    ):
        sow_month, harvest_month = entry_window(entry)
        p = resolve_score(profit_score)
        labor = resolve_score(scale_rating(entry.labor_convenience))
        rarity = resolve_score(scale_rating(entry.variety_rarity))
        scored.append(
            ScoredEntry(
                entry=entry,
                index=index,
                sowing_start_month=sow_month,
                harvest_end_month=harvest_month,
                profit_used=profit,
                profit_score=p,
                labor_score=labor,
                rarity_score=rarity,
                final_score=compute_final_score(p, labor, rarity),
            )
        )

    if scored:
        logger.debug(
            "Scored %d entries for place=%s | final_score range %.3f – %.3f",
            len(scored), place,
            min(s.final_score for s in scored),
            max(s.final_score for s in scored),
        )
    return scored


# ── Helper ────────────────────────────────────────────────────────────────────

def _log1p_or_none(value: float | None) -> float | None:
    if value is None or value <= -1.0:
        return None
    return math.log1p(value)
