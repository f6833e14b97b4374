"""
Recommendation report writer: JSON output of one engine run.

Pure file I/O, no scoring.  The file holds the request alongside the result so
a saved recommendation can be shown again (history view) without re-running
the engine against a catalog that may have changed since.

Output file
-----------
  data/outputs/recommendations/
    recommendation_{start}-{end}_{place}_{date}.json
"""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path

from crop_recommender.models.request import RecommendationRequest
from crop_recommender.models.result import RecommendationResult

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "v1"


def write_result_json(
    result:     RecommendationResult,
    request:    RecommendationRequest,
    output_dir: Path,
    run_date:   date | None = None,
) -> Path:
    """Write a recommendation result and its request to a JSON file.

    Args:
        result:     Engine output.
        request:    The request that produced it.
        output_dir: Target directory (created if missing).
        run_date:   Date label for the filename. Defaults to today.

    Returns:
        Path to the written JSON file.
    """
    if run_date is None:
        run_date = date.today()

    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / (
        f"recommendation_{request.start_month}-{request.end_month}"
        f"_{request.place}_{run_date}.json"
    )

    payload: dict = {
        "schema_version": SCHEMA_VERSION,
        "generated_at":   run_date.isoformat(),
        "request":        request.model_dump(mode="json"),
        "result":         result.model_dump(mode="json"),
    }

    with json_path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)

    logger.info("Recommendation JSON written: %s", json_path)
    return json_path
