"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local env overrides (gitignored)
  4. Environment variables        — ``CROP_RECOMMENDER_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The engine itself is configuration-free (a pure function of request and
catalog); only the CLI and report writers read an ``AppConfig``.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Callable, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

# ── Sub-config models ─────────────────────────────────────────────────────────


class EngineConfig(BaseModel):
    """Combination search settings."""

    model_config = ConfigDict(frozen=True)

    max_combinations: int = 3

    @field_validator("max_combinations")
    @classmethod
    def validate_max_combinations(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_combinations must be >= 1, got {v}.")
        return v


class DataConfig(BaseModel):
    """Filesystem paths for the crop catalog and report output."""

    model_config = ConfigDict(frozen=True)

    catalog_path: str = "data/catalog/crops.json"
    output_dir: str = "data/outputs/recommendations"


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = "data/logs/recommender.log"
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration.

    Constructed by ``load_config()`` which merges TOML + .env + environment.
    """

    model_config = ConfigDict(frozen=True)

    engine: EngineConfig = EngineConfig()
    data: DataConfig = DataConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False

# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent

# env var -> (config section or None for top level, key, converter)
_ENV_OVERRIDES: dict[str, tuple[Optional[str], str, Callable[[str], Any]]] = {
    "CROP_RECOMMENDER_CATALOG_PATH": ("data", "catalog_path", str),
    "CROP_RECOMMENDER_LOG_LEVEL":    ("logging", "level", str),
    "CROP_RECOMMENDER_DEBUG":        (None, "debug", lambda s: s.lower() in ("1", "true", "yes")),
}


def _find_project_root() -> Path:
    """The nearest ancestor of this package holding ``pyproject.toml``."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def _read_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Build the recommender's ``AppConfig`` from every configuration layer.

    ``config/local.toml`` is looked up next to whichever base file is used, so
    a ``--config`` pointing elsewhere brings its own local overrides.

    Raises:
        FileNotFoundError: No base TOML file at ``config_path``.
        pydantic.ValidationError: e.g. ``max_combinations = 0`` or an unknown
            log level.
    """
    root = _find_project_root()
    load_dotenv(dotenv_path=root / ".env", override=False)

    base_path = Path(config_path) if config_path is not None else root / "config" / "default.toml"
    if not base_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {base_path}\n"
            "Create config/default.toml or pass --config."
        )

    raw = _read_toml(base_path)
    local_path = base_path.parent / "local.toml"
    if local_path.exists():
        raw = _deep_merge(raw, _read_toml(local_path))

    return _build_app_config(_apply_env_overrides(raw))


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, val in override.items():
        if isinstance(merged.get(key), dict) and isinstance(val, dict):
            merged[key] = _deep_merge(merged[key], val)
        else:
            merged[key] = val
    return merged


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Copy any set ``CROP_RECOMMENDER_*`` variable from ``_ENV_OVERRIDES`` into ``raw``."""
    for var, (section, key, convert) in _ENV_OVERRIDES.items():
        value = os.environ.get(var)
        if not value:
            continue
        target = raw if section is None else raw.setdefault(section, {})
        target[key] = convert(value)
    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    # [project].debug is the TOML spelling; a top-level debug (env) wins.
    project = raw.pop("project", {})
    return AppConfig(
        engine=EngineConfig(**raw.get("engine", {})),
        data=DataConfig(**raw.get("data", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
