"""
Catalog file reader for the CLI.

Supported formats
-----------------
``.json``  — a list of row objects, or an object with a ``"rows"`` list
             (the shape of a database view export).
``.csv``   — comma delimited with a header row (UTF-8, BOM tolerated).

Column names may be English snake_case (``category``, ``item``, ``variety``,
``labor_score``, ``rarity_score``, ``sow_start``, ``harvest_end``,
``profit_open``, ``profit_greenhouse``) or the original Korean headers; see
``CatalogEntry.from_row()``.  Cell values are coerced leniently, so a row with
an unreadable month or profit is still loaded; the engine simply scores or
filters it as missing.
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any

from crop_recommender.models.catalog import CatalogEntry

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = frozenset({".json", ".csv"})


def load_catalog(path: Path) -> list[CatalogEntry]:
    """Read a catalog file into :class:`CatalogEntry` objects, in file order.

    Args:
        path: Path to a ``.json`` or ``.csv`` catalog file.

    Returns:
        List of catalog entries (empty if the file holds no rows).

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: On an unsupported suffix, a malformed JSON document, or a
            CSV file without a header row.
    """
    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")

    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(
            f"Unsupported catalog format '{suffix}' for {path.name}; "
            f"expected one of {sorted(SUPPORTED_SUFFIXES)}."
        )

    rows = _read_json_rows(path) if suffix == ".json" else _read_csv_rows(path)
    if not rows:
        logger.warning("Catalog file holds no rows: %s", path)
        return []

    entries = [CatalogEntry.from_row(row) for row in rows]
    logger.info("Loaded %d catalog entries from %s", len(entries), path.name)
    return entries


# ── Private helpers ────────────────────────────────────────────────────────────

def _read_json_rows(path: Path) -> list[dict[str, Any]]:
    try:
        with open(path, encoding="utf-8-sig") as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Catalog JSON is malformed in {path.name}: {exc}") from exc

    if isinstance(data, dict):
        data = data.get("rows")
    if not isinstance(data, list):
        raise ValueError(
            f"Catalog JSON in {path.name} must be a list of rows "
            "or an object with a 'rows' list."
        )

    bad = [i for i, row in enumerate(data) if not isinstance(row, dict)]
    if bad:
        raise ValueError(
            f"Catalog JSON in {path.name} has non-object rows at positions {bad[:10]}."
        )
    return data


def _read_csv_rows(path: Path) -> list[dict[str, Any]]:
    with open(path, encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f)
        if reader.fieldnames is None:
            raise ValueError(f"CSV file is empty or has no header row: {path}")
        # empty cells mean "missing", not the empty string
        return [
            {key: (value if value != "" else None) for key, value in row.items()}
            for row in reader
        ]
