"""
Growing-window matching on a 12-month cycle.

Months are read from free catalog text ("3월 초", "month 11 (late)") by taking
the first 1–2 digit number.  A window whose end precedes its start wraps into
the next year and is linearised by adding 12 to the end, so 11→2 becomes
[11, 14].

Because both windows live on a cycle, the crop window is compared against
the request window at three phase shifts (−12, 0, +12 months) using
closed-interval overlap; a match at any shift counts.  An unreadable month on
either side never matches.
"""

from __future__ import annotations

import re
from typing import Any, Iterable

from crop_recommender.models.catalog import CatalogEntry
from crop_recommender.models.request import RecommendationRequest

_MONTH_PATTERN = re.compile(r"(\d{1,2})")
_PHASE_SHIFTS = (0, 12, -12)


def extract_month(value: Any) -> int | None:
    """Return the first 1–2 digit number in ``value``, or ``None``.

    Integers pass through unchanged; ``None`` and text without digits are
    unreadable.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    match = _MONTH_PATTERN.search(str(value))
    return int(match.group(1)) if match else None


def normalize_range(start: int, end: int) -> tuple[int, int]:
    """Linearise a possibly wrapping window so that ``end >= start``."""
    if end < start:
        end += 12
    return start, end


def is_within_window(
    entry_start: int | None,
    entry_end: int | None,
    req_start: int | None,
    req_end: int | None,
) -> bool:
    """True if the crop window overlaps the requested window at any phase shift."""
    if entry_start is None or entry_end is None or req_start is None or req_end is None:
        return False

    s, e = normalize_range(entry_start, entry_end)
    req_s, req_e = normalize_range(req_start, req_end)

    for shift in _PHASE_SHIFTS:
        if s + shift <= req_e and e + shift >= req_s:
            return True
    return False


def entry_window(entry: CatalogEntry) -> tuple[int | None, int | None]:
    """Parsed (sowing start, harvest end) months of a catalog entry."""
    return extract_month(entry.sowing_start_text), extract_month(entry.harvest_end_text)


def filter_by_window(
    entries: Iterable[CatalogEntry],
    request: RecommendationRequest,
) -> list[CatalogEntry]:
    """Keep the entries whose growing window overlaps the request, in catalog order."""
    return [
        entry
        for entry in entries
        if is_within_window(*entry_window(entry), request.start_month, request.end_month)
    ]
