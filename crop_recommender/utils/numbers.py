"""
Lenient numeric helpers shared by the catalog model and the formatter.

Catalog spreadsheets carry numbers as text ("1,398,000원", "3 ") and the
display layer rounds half-up, so both concerns live here instead of being
re-implemented per module.
"""

from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

_NON_NUMERIC = re.compile(r"[^\d.\-]")


def to_number(value: Any) -> float | None:
    """Coerce a catalog cell to a finite float, or ``None``.

    Numbers pass through when finite.  Strings have every character other
    than digits, ``.`` and ``-`` stripped before parsing, so thousands
    separators and unit suffixes are ignored.  Everything else is ``None``.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else None
    if isinstance(value, str):
        cleaned = _NON_NUMERIC.sub("", value)
        if not cleaned:
            return None
        try:
            number = float(cleaned)
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round ``value`` to ``ndigits`` decimals, halves away from zero.

    Python's ``round()`` uses banker's rounding (``round(2.5) == 2``); display
    figures must round 0.5 upwards instead.
    """
    quantum = Decimal(1).scaleb(-ndigits)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))
