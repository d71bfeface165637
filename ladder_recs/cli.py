"""
Ladder recommendations — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Build a ``RecommendationEngine`` (seeded, or from a ``--state`` snapshot).
  4. Execute the action and report the result to stdout.

Install and run::

    pip install -e .
    ladder-recs --help
    ladder-recs validate-config
    ladder-recs snapshot --output data/state.json
    ladder-recs rank --input opportunities.json --state data/state.json
    ladder-recs categories --state data/state.json
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import typer

app = typer.Typer(
    name="ladder-recs",
    help="Ladder opportunity personalization — score, rank and inspect session state.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from ladder_recs.config import load_config

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
    from ladder_recs.utils.logging import configure_logging
    configure_logging(config.logging)


def _read_json_or_exit(path: Path, label: str) -> Any:
    if not path.exists():
        typer.echo(f"[ERROR] {label} file not found: {path}", err=True)
        raise typer.Exit(code=1)
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (json.JSONDecodeError, OSError) as exc:
        typer.echo(f"[ERROR] {label} JSON parse error: {exc}", err=True)
        raise typer.Exit(code=1)


def _build_engine(config, state_path: Optional[str], popularity: Optional[float] = None):
    """Build the engine: from a snapshot file when given, else from config."""
    from pydantic import ValidationError

    from ladder_recs.models.snapshot import EngineSnapshot
    from ladder_recs.recommendations.engine import RecommendationEngine
    from ladder_recs.recommendations.popularity import FixedPopularity

    source = None
    if popularity is not None:
        if not 0.0 <= popularity <= 1.0:
            typer.echo(f"[ERROR] --popularity must be in [0, 1], got {popularity}.", err=True)
            raise typer.Exit(code=1)
        source = FixedPopularity(popularity)

    engine = RecommendationEngine.from_config(config, popularity=source)

    if state_path:
        raw_state = _read_json_or_exit(Path(state_path), "State")
        try:
            snapshot = EngineSnapshot.model_validate(raw_state)
        except ValidationError as exc:
            typer.echo(f"[ERROR] State file failed validation:\n{exc}", err=True)
            raise typer.Exit(code=1)
        engine.restore(snapshot)

    return engine


def _describe_popularity(rec) -> str:
    if rec.fixed_popularity is not None:
        return f"fixed at {rec.fixed_popularity}"
    if rec.popularity_seed is not None:
        return f"random (seed {rec.popularity_seed})"
    return "random"


# ── Commands ──────────────────────────────────────────────────────────────────

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

    rec = config.recommendations
    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Seed new sessions:  {config.seed.enabled}")
    typer.echo(f"  Onboarding weight:  {config.seed.onboarding_weight}")
    typer.echo(f"  Max categories:     {rec.max_categories}")
    typer.echo(f"  Popularity:         {_describe_popularity(rec)}")
    typer.echo(f"  Log level:          {config.logging.level}")
    typer.echo(f"  Debug mode:         {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("rank")
def rank(
    input_file: str = typer.Option(
        ...,
        "--input",
        "-i",
        help="JSON file containing an array of opportunity objects.",
    ),
    state_path: Optional[str] = typer.Option(
        None,
        "--state",
        help="Session snapshot JSON (from 'ladder-recs snapshot'). Default: seeded state.",
    ),
    output_file: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the ranking report here instead of printing it.",
    ),
    popularity: Optional[float] = typer.Option(
        None,
        "--popularity",
        help="Pin the popularity factor (0-1) for a reproducible ranking.",
    ),
    category: str = typer.Option("all", "--category", help="Only this category."),
    location: str = typer.Option("all", "--location", help="Only this location."),
    field: str = typer.Option("all", "--field", help="Only this field."),
    query: str = typer.Option("", "--query", "-q", help="Free-text search filter."),
    max_age_days: Optional[int] = typer.Option(
        None,
        "--max-age-days",
        help="Only opportunities posted within this many days.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Rank opportunities for a session, best match first.

    Filters are applied before ranking. Each result carries its score and the
    five-factor breakdown.
    """
    from ladder_recs.recommendations.filters import filter_opportunities
    from ladder_recs.recommendations.reporter import ranking_to_records, write_ranking_json

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    raw = _read_json_or_exit(Path(input_file), "Opportunities")
    if not isinstance(raw, list):
        typer.echo("[ERROR] Opportunities file must contain a JSON array.", err=True)
        raise typer.Exit(code=1)

    engine = _build_engine(config, state_path, popularity)

    candidates = filter_opportunities(
        raw,
        category=category,
        location=location,
        field=field,
        query=query,
        max_age_days=max_age_days,
    )
    ranked = engine.get_personalized_opportunities(candidates)

    if output_file:
        path = write_ranking_json(ranked, Path(output_file))
        typer.echo(f"  Ranked {len(ranked)} of {len(raw)} opportunities.")
        typer.echo(f"[OK] Ranking written to {path}")
        return

    typer.echo(json.dumps(ranking_to_records(ranked), indent=2, default=str))


@app.command("categories")
def categories(
    state_path: Optional[str] = typer.Option(
        None,
        "--state",
        help="Session snapshot JSON. Default: seeded state.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Print the session's recommended categories, strongest first."""
    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    engine = _build_engine(config, state_path)
    recommended = engine.get_recommended_categories()

    if not recommended:
        typer.echo("No tracked behavior yet; nothing to recommend.")
        return
    for rank_no, category in enumerate(recommended, start=1):
        typer.echo(f"  {rank_no}. {category}")


@app.command("snapshot")
def snapshot(
    output_file: str = typer.Option(
        ...,
        "--output",
        "-o",
        help="Where to write the session snapshot JSON.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Write a fresh session's state (seeded per config) as a snapshot file.

    Edit it and pass it back with --state to rank for a specific session.
    """
    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    engine = _build_engine(config, None)
    state = engine.snapshot()

    path = Path(output_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(state.model_dump_json(indent=2), encoding="utf-8")

    typer.echo(f"  Preferences: {len(state.preferences)}")
    typer.echo(f"  Behaviors:   {len(state.behaviors)}")
    typer.echo(f"[OK] Snapshot written to {path}")


if __name__ == "__main__":
    app()
