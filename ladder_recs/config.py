"""
Configuration for ``ladder-recs``.

``load_config()`` layers, lowest precedence first:

    config/default.toml   committed defaults (or the file passed as --config)
    local.toml            per-machine overrides beside that file, gitignored
    .env                  loaded into the environment; existing vars win
    LADDER_RECS_*         environment overrides

Only logging, seeding, popularity pinning and output limits are configurable.
Scoring weights and action weights are constants in code.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Callable, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

# ── Sub-config models ─────────────────────────────────────────────────────────

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LoggingConfig(BaseModel):
    """``[logging]``: level, optional log file, JSON-lines toggle."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level '{v}'; expected one of {', '.join(_LOG_LEVELS)}.")
        return level


class SeedConfig(BaseModel):
    """Cold-start seeding of new engines."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    onboarding_weight: float = 0.8


class RecommendationsConfig(BaseModel):
    """Ranking and recommendation output settings.

    ``fixed_popularity`` pins the popularity factor for every opportunity
    (reproducible runs); ``popularity_seed`` seeds the per-engine RNG instead.
    When both are set, ``fixed_popularity`` wins.
    """

    model_config = ConfigDict(frozen=True)

    max_categories: int = 5
    popularity_seed: Optional[int] = None
    fixed_popularity: Optional[float] = None

    @field_validator("max_categories")
    @classmethod
    def validate_max_categories(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_categories must be >= 1, got {v}.")
        return v

    @field_validator("fixed_popularity")
    @classmethod
    def validate_fixed_popularity(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and not 0.0 <= v <= 1.0:
            raise ValueError(f"fixed_popularity must be in [0.0, 1.0], got {v}.")
        return v


class AppConfig(BaseModel):
    """Root of the configuration tree, one section per TOML table."""

    model_config = ConfigDict(frozen=True)

    logging: LoggingConfig = LoggingConfig()
    seed: SeedConfig = SeedConfig()
    recommendations: RecommendationsConfig = RecommendationsConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

LOCAL_OVERRIDE_NAME = "local.toml"

# env var -> (section or None for top level, key, converter)
_ENV_OVERRIDES: dict[str, tuple[Optional[str], str, Callable[[str], Any]]] = {
    "LADDER_RECS_LOG_LEVEL":        ("logging", "level", str),
    "LADDER_RECS_LOG_FILE":         ("logging", "log_file", str),
    "LADDER_RECS_FIXED_POPULARITY": ("recommendations", "fixed_popularity", float),
    "LADDER_RECS_DEBUG":            (None, "debug", lambda s: s.lower() in ("1", "true", "yes")),
}


def _project_root() -> Path:
    """Nearest ancestor of this package holding ``pyproject.toml``."""
    here = Path(__file__).resolve().parent
    for candidate in (here, *here.parents[:4]):
        if (candidate / "pyproject.toml").is_file():
            return candidate
    return here.parent


def _read_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as f:
        return tomllib.load(f)


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Build the ``AppConfig`` for this process.

    Args:
        config_path: TOML file to start from. Defaults to
            ``config/default.toml`` under the project root. A ``local.toml``
            in the same directory is merged over it when present.

    Returns:
        Validated, frozen ``AppConfig``.

    Raises:
        FileNotFoundError: ``config_path`` does not exist.
        pydantic.ValidationError: A merged value is out of range or mistyped.
    """
    root = _project_root()
    load_dotenv(dotenv_path=root / ".env", override=False)

    path = Path(config_path) if config_path is not None else root / "config" / "default.toml"
    if not path.is_file():
        raise FileNotFoundError(
            f"Config file not found: {path}\n"
            "Create config/default.toml or pass --config."
        )

    raw = _read_toml(path)
    local_path = path.with_name(LOCAL_OVERRIDE_NAME)
    if local_path.is_file():
        raw = _deep_merge(raw, _read_toml(local_path))

    return _build_app_config(_apply_env_overrides(raw))


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return ``base`` with ``override`` merged in; nested tables merge key by key."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Overlay the ``LADDER_RECS_*`` variables listed in ``_ENV_OVERRIDES``.

    Empty variables are ignored. A value that fails conversion (e.g. a
    non-numeric ``LADDER_RECS_FIXED_POPULARITY``) raises ``ValueError``.
    """
    for env_name, (section, key, convert) in _ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if not value:
            continue
        target = raw if section is None else raw.setdefault(section, {})
        target[key] = convert(value)
    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    return AppConfig(
        logging=LoggingConfig(**raw.get("logging", {})),
        seed=SeedConfig(**raw.get("seed", {})),
        recommendations=RecommendationsConfig(**raw.get("recommendations", {})),
        debug=raw.get("debug", False),
    )
