"""
Strategic Resilience Planner — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Validate inputs.
  4. Execute action (score an assessment, read/write the local store, export).
  5. Report result to stdout.

Install and run::

    pip install -e .
    resilience-planner --help
    resilience-planner init-db
    resilience-planner evaluate assessment.json --save --name "Q3 review"
    resilience-planner list
    resilience-planner show <id>
    resilience-planner export <id> --out q3.json
    resilience-planner export --all
    resilience-planner delete --all
"""

from __future__ import annotations

import json
import random
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="resilience-planner",
    help="Strategic Resilience Planner — score organizational dependencies and plan mitigations.",
    add_completion=False,
)

_CONFIG_OPTION_HELP = "Path to TOML config file (default: config/default.toml)."
_DB_OPTION_HELP = "Override DB path from config."
ALL_ASSESSMENTS_FILE = "assessments_export.json"


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from pydantic import ValidationError

    from resilience_planner.config import load_config

    try:
        return load_config(Path(config_path) if config_path else None)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except ValidationError as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config, verbose: bool = False) -> None:
    """Set up logging from config (``--verbose`` forces DEBUG)."""
    from resilience_planner.utils.logging import configure_logging
    configure_logging(config.logging, level_override="DEBUG" if verbose else None)


@contextmanager
def _open_repository(config, db_path: Optional[str]):
    """Yield an ``AssessmentRepository`` on a schema-initialised connection."""
    from resilience_planner.db.connection import get_connection
    from resilience_planner.db.repositories.assessment_repo import AssessmentRepository
    from resilience_planner.db.schema import apply_schema

    with get_connection(
        db_path or config.database.db_path,
        wal_mode=config.database.wal_mode,
        busy_timeout_ms=config.database.busy_timeout_ms,
    ) as conn:
        apply_schema(conn)
        yield AssessmentRepository(conn)


def _resolve_output(config, path: Path) -> Path:
    """Place relative output paths under ``[reporting] output_dir``."""
    if path.is_absolute():
        return path
    return Path(config.reporting.output_dir) / path


def _read_assessment_or_exit(file: Path):
    """Parse an assessment JSON file, exiting with code 1 if unreadable."""
    from resilience_planner.reporting.export import import_assessment_json

    if not file.exists():
        typer.echo(f"[ERROR] File not found: {file}", err=True)
        raise typer.Exit(code=1)

    assessment = import_assessment_json(file.read_text(encoding="utf-8"))
    if assessment is None:
        typer.echo(f"[ERROR] {file} is not a valid assessment file.", err=True)
        raise typer.Exit(code=1)
    return assessment


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("init-db")
def init_db(
    db_path: Optional[str] = typer.Option(None, "--db-path", help=_DB_OPTION_HELP),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
) -> None:
    """Initialize the SQLite assessment store.

    Safe to run multiple times — all DDL uses IF NOT EXISTS.
    """
    from resilience_planner.db.connection import get_connection
    from resilience_planner.db.schema import ALL_TABLE_NAMES, apply_schema

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    target_path = db_path or config.database.db_path
    typer.echo(f"Initializing database at: {target_path}")

    with get_connection(
        target_path,
        wal_mode=config.database.wal_mode,
        busy_timeout_ms=config.database.busy_timeout_ms,
    ) as conn:
        apply_schema(conn)

    typer.echo(f"  Tables: {len(ALL_TABLE_NAMES)} created/verified.")
    typer.echo("[OK] Database ready.")


@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
    show_full: bool = typer.Option(False, "--full", help="Print full config as JSON."),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Database path:       {config.database.db_path}")
    typer.echo(f"  Top risk limit:      {config.scoring.top_risk_limit}")
    typer.echo(f"  High risk threshold: {config.scoring.high_risk_threshold}")
    typer.echo(f"  Output dir:          {config.reporting.output_dir}")
    typer.echo(f"  Log level:           {config.logging.level}")
    typer.echo(f"  Debug mode:          {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config is valid.")


@app.command("evaluate")
def evaluate(
    file: Path = typer.Argument(..., help="Assessment JSON file (camelCase, as exported)."),
    save: bool = typer.Option(False, "--save", help="Save the scored assessment to the local store."),
    name: Optional[str] = typer.Option(None, "--name", help="Name to save the assessment under."),
    seed: Optional[int] = typer.Option(
        None, "--seed", help="Seed for recommendation wording (reproducible output).",
    ),
    json_out: Optional[Path] = typer.Option(None, "--json-out", help="Write full results as JSON (relative to output_dir)."),
    csv_out: Optional[Path] = typer.Option(None, "--csv-out", help="Write recommendations as CSV (relative to output_dir)."),
    db_path: Optional[str] = typer.Option(None, "--db-path", help=_DB_OPTION_HELP),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable DEBUG logging."),
) -> None:
    """Score an assessment file and print the results view."""
    from resilience_planner.evaluation import evaluate_assessment
    from resilience_planner.reporting.export import (
        RECOMMENDATION_FIELDS,
        export_to_csv,
        export_to_json,
        flatten_recommendations_for_export,
        results_to_dict,
    )
    from resilience_planner.reporting.formatters import format_results

    config = _load_config_or_exit(config_path)
    _configure_logging(config, verbose)

    assessment = _read_assessment_or_exit(file)
    if name:
        assessment = assessment.model_copy(update={"name": name})

    results = evaluate_assessment(
        assessment,
        rng=random.Random(seed) if seed is not None else None,
        top_risk_limit=config.scoring.top_risk_limit,
        high_risk_threshold=config.scoring.high_risk_threshold,
    )
    typer.echo(format_results(results))
    typer.echo("")

    if json_out is not None:
        json_out = _resolve_output(config, json_out)
        export_to_json(results_to_dict(results), json_out)
        typer.echo(f"  Results written to {json_out}")

    if csv_out is not None:
        csv_out = _resolve_output(config, csv_out)
        export_to_csv(
            flatten_recommendations_for_export(results.recommendations),
            csv_out,
            fieldnames=RECOMMENDATION_FIELDS,
        )
        typer.echo(f"  Recommendations written to {csv_out}")

    if save:
        with _open_repository(config, db_path) as repo:
            assessment_id = repo.save(results.assessment)
        typer.echo(f"[OK] Saved as {assessment_id}.")
    else:
        typer.echo("[OK] Evaluation complete.")


@app.command("list")
def list_assessments(
    db_path: Optional[str] = typer.Option(None, "--db-path", help=_DB_OPTION_HELP),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
) -> None:
    """List saved assessments, newest first."""
    from resilience_planner.reporting.formatters import format_saved_list

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    with _open_repository(config, db_path) as repo:
        summaries = repo.list()

    typer.echo(format_saved_list(summaries))


@app.command("show")
def show(
    assessment_id: str = typer.Argument(..., help="Saved assessment id."),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for recommendation wording."),
    db_path: Optional[str] = typer.Option(None, "--db-path", help=_DB_OPTION_HELP),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
) -> None:
    """Re-score a saved assessment and print the results view."""
    from resilience_planner.evaluation import evaluate_assessment
    from resilience_planner.reporting.formatters import format_results

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    with _open_repository(config, db_path) as repo:
        assessment = repo.get(assessment_id)

    if assessment is None:
        typer.echo(f"[ERROR] Assessment not found: {assessment_id}", err=True)
        raise typer.Exit(code=1)

    results = evaluate_assessment(
        assessment,
        rng=random.Random(seed) if seed is not None else None,
        top_risk_limit=config.scoring.top_risk_limit,
        high_risk_threshold=config.scoring.high_risk_threshold,
    )
    typer.echo(format_results(results))


@app.command("delete")
def delete(
    assessment_id: Optional[str] = typer.Argument(None, help="Saved assessment id."),
    delete_all: bool = typer.Option(False, "--all", help="Delete every saved assessment."),
    db_path: Optional[str] = typer.Option(None, "--db-path", help=_DB_OPTION_HELP),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
) -> None:
    """Delete one saved assessment, or all of them with ``--all``."""
    if not delete_all and assessment_id is None:
        typer.echo("[ERROR] Give an assessment id or --all.", err=True)
        raise typer.Exit(code=1)

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    with _open_repository(config, db_path) as repo:
        if delete_all:
            removed = repo.clear_all()
        else:
            deleted = repo.delete(assessment_id)

    if delete_all:
        typer.echo(f"[OK] Deleted {removed} saved assessment(s).")
        return

    if not deleted:
        typer.echo(f"[ERROR] Assessment not found: {assessment_id}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"[OK] Deleted {assessment_id}.")


@app.command("export")
def export(
    assessment_id: Optional[str] = typer.Argument(None, help="Saved assessment id."),
    export_all: bool = typer.Option(
        False, "--all", help="Export every readable saved record as one JSON list.",
    ),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        help=(
            "Destination JSON file; relative paths go under [reporting] output_dir. "
            "A single assessment prints to stdout when omitted."
        ),
    ),
    db_path: Optional[str] = typer.Option(None, "--db-path", help=_DB_OPTION_HELP),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
) -> None:
    """Export a saved assessment as camelCase JSON (or every record with ``--all``)."""
    from resilience_planner.reporting.export import export_assessment_json, export_to_json

    if not export_all and assessment_id is None:
        typer.echo("[ERROR] Give an assessment id or --all.", err=True)
        raise typer.Exit(code=1)

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    if export_all:
        with _open_repository(config, db_path) as repo:
            records = repo.list_records()
        target = _resolve_output(config, out or Path(ALL_ASSESSMENTS_FILE))
        export_to_json([r.to_wire() for r in records], target)
        typer.echo(f"[OK] Exported {len(records)} assessment(s) to {target}.")
        return

    with _open_repository(config, db_path) as repo:
        assessment = repo.get(assessment_id)

    if assessment is None:
        typer.echo(f"[ERROR] Assessment not found: {assessment_id}", err=True)
        raise typer.Exit(code=1)

    text = export_assessment_json(assessment)
    if out is None:
        typer.echo(text)
        return

    target = _resolve_output(config, out)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(text, encoding="utf-8")
    typer.echo(f"[OK] Exported {assessment_id} to {target}.")


@app.command("import")
def import_assessment(
    file: Path = typer.Argument(..., help="Assessment JSON file to import."),
    name: Optional[str] = typer.Option(None, "--name", help="Override the assessment name."),
    db_path: Optional[str] = typer.Option(None, "--db-path", help=_DB_OPTION_HELP),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
) -> None:
    """Import an assessment JSON file into the local store (unscored)."""
    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    assessment = _read_assessment_or_exit(file)
    if name:
        assessment = assessment.model_copy(update={"name": name})

    with _open_repository(config, db_path) as repo:
        assessment_id = repo.save(assessment)

    typer.echo(f"[OK] Imported {file} as {assessment_id}.")


if __name__ == "__main__":
    app()
