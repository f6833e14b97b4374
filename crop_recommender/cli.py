"""
Crop Recommender — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Validate inputs.
  4. Execute action (load catalog, run the engine, write report).
  5. Report result to stdout.

Install and run::

    pip install -e .
    crop-recommender --help
    crop-recommender validate-config
    crop-recommender validate-catalog --catalog data/catalog/crops.csv
    crop-recommender recommend --start-month 3 --end-month 6 --place 노지 --rows 9
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="crop-recommender",
    help="Crop mix recommender — suggests three crops to grow together.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from crop_recommender.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from crop_recommender.utils.logging import configure_logging
    configure_logging(config.logging)


def _load_catalog_or_exit(catalog_path: Path):
    """Load the catalog file, printing a friendly error and exiting on failure."""
    from crop_recommender.ingestion.catalog_file import load_catalog

    try:
        return load_catalog(catalog_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except (ValueError, OSError) as exc:
        typer.echo(f"[ERROR] Catalog could not be read:\n{exc}", err=True)
        raise typer.Exit(code=1)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("recommend")
def recommend(
    start_month: int = typer.Option(..., "--start-month", help="First growing month (1-12)."),
    end_month: int = typer.Option(..., "--end-month", help="Last growing month (1-12); may wrap past December."),
    place: str = typer.Option(
        "other",
        "--place",
        help="open-field (노지), facility (시설), or anything else for the better of both.",
    ),
    rows: int = typer.Option(..., "--rows", help="Planting rows, split evenly across the 3 crops."),
    catalog_file: Optional[str] = typer.Option(
        None,
        "--catalog",
        help="Catalog file (.json or .csv). Defaults to config.data.catalog_path.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
    save: bool = typer.Option(
        False,
        "--save",
        help="Write the result as JSON to the output directory.",
    ),
    output_dir: Optional[str] = typer.Option(
        None,
        "--output-dir",
        help="Override config.data.output_dir for --save.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the raw result as JSON instead of the card table.",
    ),
) -> None:
    """Recommend up to three crop combinations for a growing window.

    Exits with code 1 when the request is invalid, the catalog cannot be
    read, or no recommendation can be made.
    """
    from pydantic import ValidationError

    from crop_recommender.models.request import RecommendationRequest
    from crop_recommender.recommendations.engine import recommend as run_engine
    from crop_recommender.recommendations.reporter import write_result_json
    from crop_recommender.reporting.formatters import format_cards, format_request_header

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    try:
        request = RecommendationRequest(
            start_month=start_month,
            end_month=end_month,
            place=place,
            row_count=rows,
        )
    except ValidationError as exc:
        typer.echo(f"[ERROR] Invalid request:\n{exc}", err=True)
        raise typer.Exit(code=1)

    catalog_path = Path(catalog_file) if catalog_file else Path(config.data.catalog_path)
    catalog = _load_catalog_or_exit(catalog_path)

    result = run_engine(request, catalog, max_combinations=config.engine.max_combinations)

    if as_json:
        typer.echo(result.model_dump_json(indent=2))
    else:
        typer.echo(format_request_header(request))
        typer.echo(format_cards(result))

    if save:
        target_dir = Path(output_dir) if output_dir else Path(config.data.output_dir)
        path = write_result_json(result, request, target_dir)
        typer.echo(f"  Saved: {path}")

    if result.error:
        raise typer.Exit(code=1)


@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Catalog path:     {config.data.catalog_path}")
    typer.echo(f"  Output dir:       {config.data.output_dir}")
    typer.echo(f"  Max combinations: {config.engine.max_combinations}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("validate-catalog")
def validate_catalog(
    catalog_file: Optional[str] = typer.Option(
        None,
        "--catalog",
        help="Catalog file (.json or .csv). Defaults to config.data.catalog_path.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Load a catalog file and report rows the engine will treat as missing.

    Unreadable months or profits never fail a recommendation, so this is the
    place to spot them.
    """
    from crop_recommender.reporting.formatters import format_catalog_summary

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    catalog_path = Path(catalog_file) if catalog_file else Path(config.data.catalog_path)
    entries = _load_catalog_or_exit(catalog_path)

    typer.echo(format_catalog_summary(entries))
    typer.echo("")
    typer.echo("[OK] Catalog readable.")


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
