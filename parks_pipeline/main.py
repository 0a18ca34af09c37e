#!/usr/bin/env python3
"""
Parks directory data pipeline entry point.

Runs candidate park records through the data quality engine: source
priority, completeness scoring, validation, dedup and merge decisions.

Usage:
    python -m parks_pipeline.main priority "NPS API"
    python -m parks_pipeline.main score parks.json --source "manual entry"
    python -m parks_pipeline.main ingest parks.json --source "NPS API" --store data/parks.json
    python -m parks_pipeline.main report data/parks.json
    python -m parks_pipeline.main cleanup data/parks.json --keyword office --state CA
"""

import json
from pathlib import Path

import click
from loguru import logger
from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table

from parks_pipeline.config import settings
from parks_pipeline.engine import QualityEngine
from parks_pipeline.ingest import BatchIngester
from parks_pipeline.models import ParkRecord
from parks_pipeline.reporting import COVERAGE_FIELDS, CleanupCriteria, analyze_quality, filter_for_cleanup
from parks_pipeline.store import ParkStore
from parks_pipeline.utils.logging import setup_logging

console = Console()


def load_records(path: Path) -> list[ParkRecord]:
    """Load a JSON file holding one park object or an array of them."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"{path} is not valid JSON: {e}")

    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise click.ClickException(f"{path} must contain a park object or an array of parks")

    return [ParkRecord.from_dict(item) for item in data if isinstance(item, dict)]


def load_store(path: Path) -> ParkStore:
    try:
        return ParkStore.load(path)
    except (json.JSONDecodeError, ValueError) as e:
        raise click.ClickException(f"Cannot load store {path}: {e}")


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def cli(debug):
    """Parks Directory Data Quality Pipeline"""
    if debug:
        setup_logging(level="DEBUG")


@cli.command()
@click.argument("label")
def priority(label: str):
    """Show the priority tier a source LABEL resolves to."""
    engine = QualityEngine()
    rule = engine.resolver.match(label)
    tier = engine.resolve_priority(label)
    matched = rule.name if rule else "default"
    console.print(f"[bold]{label}[/bold] -> [cyan]{tier}[/cyan] (rule: {matched})")


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--source", "source_label", default="", help="Source label used to resolve priority")
def score(path: Path, source_label: str):
    """Score the parks in PATH and show the per-criterion breakdown."""
    engine = QualityEngine()
    records = load_records(path)

    criteria = list(engine.scorer.criteria(ParkRecord()))
    table = Table(title=f"Quality scores (source priority {engine.resolve_priority(source_label)})")
    table.add_column("Park")
    table.add_column("State")
    for criterion in criteria:
        table.add_column(criterion, justify="right")
    table.add_column("Score", justify="right", style="bold")

    for record in records:
        _, quality = engine.stamp(record, source_label)
        table.add_row(
            str(record.name or "-"),
            str(record.state or "-"),
            *[str(quality.breakdown.get(criterion, "")) for criterion in criteria],
            str(quality.score),
        )

    console.print(table)


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def validate(path: Path):
    """Validate the parks in PATH."""
    engine = QualityEngine()
    records = load_records(path)

    table = Table(title="Validation")
    table.add_column("Park")
    table.add_column("State")
    table.add_column("Status")
    table.add_column("Errors")
    table.add_column("Warnings")

    invalid = 0
    for record in records:
        result = engine.validate(record)
        if not result.is_valid:
            invalid += 1
        table.add_row(
            str(record.name or "-"),
            str(record.state or "-"),
            "[green]Valid[/green]" if result.is_valid else "[red]Invalid[/red]",
            "; ".join(result.errors),
            "; ".join(result.warnings),
        )

    console.print(table)
    console.print(f"{len(records) - invalid} valid, {invalid} invalid")


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--source", "source_label", required=True, help="Source label used to resolve priority")
@click.option(
    "--store",
    "store_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="JSON store of current parks (default: <data_dir>/parks.json)",
)
@click.option("--workers", type=int, default=1, help="Upsert with this many threads")
@click.option(
    "--batch-size",
    type=int,
    default=None,
    help="Save the store every N records (default: PARKS_BATCH_SIZE)",
)
@click.option("--dry-run", is_flag=True, help="Evaluate without saving the store")
def ingest(
    path: Path,
    source_label: str,
    store_path: Path | None,
    workers: int,
    batch_size: int | None,
    dry_run: bool,
):
    """
    Ingest the parks in PATH from SOURCE into the store.

    Stored parks from high-trust sources are never overwritten by
    lower-trust data.
    """
    store_path = store_path or settings.pipeline.data_dir / "parks.json"
    records = load_records(path)
    store = load_store(store_path)

    console.print("\n[bold blue]Parks Pipeline - Ingestion[/bold blue]")
    console.print(f"Source: {source_label}")
    console.print(f"Records: {len(records)}")
    console.print(f"Store: {store_path} ({len(store)} parks)\n")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        console=console,
    ) as progress:
        task = progress.add_task(f"Ingesting {path.name}...", total=len(records))

        def on_progress(current, total, status):
            progress.update(task, completed=current, total=total)

        ingester = BatchIngester(
            QualityEngine(),
            store,
            progress_callback=on_progress,
            checkpoint=None if dry_run else (lambda s: s.dump(store_path)),
            checkpoint_every=batch_size or settings.pipeline.batch_size,
        )
        result = ingester.run(records, source_label, max_workers=workers)

    table = Table(title="Ingestion Summary")
    for column in ("Received", "Duplicates", "Added", "Updated", "Skipped", "Protected", "Invalid", "Duration"):
        table.add_column(column, justify="right")

    duration = f"{result.duration_seconds:.2f}s" if result.duration_seconds is not None else "-"
    table.add_row(
        str(result.records_received),
        str(result.duplicates_dropped),
        f"[green]{result.added}[/green]",
        f"[green]{result.updated}[/green]",
        str(result.skipped),
        f"[yellow]{result.protected}[/yellow]",
        f"[red]{result.invalid}[/red]",
        duration,
    )
    console.print(table)

    for error in result.errors[:20]:
        console.print(f"[red]  {error}[/red]")
    if len(result.errors) > 20:
        console.print(f"[red]  ... and {len(result.errors) - 20} more[/red]")

    if dry_run:
        console.print("[yellow]Dry run - store not saved[/yellow]")
        return

    logger.info(f"Store {store_path} now holds {len(store)} parks")


@cli.command()
@click.argument("store_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--limit", type=int, default=20, help="Maximum issue rows to show")
def report(store_path: Path, limit: int):
    """Show a data quality report for the parks in STORE_PATH."""
    store = load_store(store_path)
    analysis = analyze_quality(store, low_quality_threshold=settings.pipeline.low_quality_threshold)

    console.print("\n[bold blue]Parks Pipeline - Data Quality Report[/bold blue]\n")
    console.print(f"Total parks: {analysis.total}")
    console.print(f"Average quality score: {analysis.average_score}")

    coverage = Table(title="Field Coverage")
    coverage.add_column("Field")
    coverage.add_column("Parks", justify="right")
    coverage.add_column("%", justify="right")
    percentages = analysis.percentages
    for name, count in analysis.coverage.items():
        coverage.add_row(name, str(count), f"{percentages[name]}%")
    console.print(coverage)

    distribution = Table(title="Quality Distribution")
    distribution.add_column("Bucket")
    distribution.add_column("Parks", justify="right")
    for bucket, count in analysis.distribution.items():
        distribution.add_row(bucket, str(count))
    console.print(distribution)

    if analysis.likely_non_parks:
        non_parks = Table(title="Likely Non-Parks")
        non_parks.add_column("Name")
        non_parks.add_column("State")
        non_parks.add_column("Reason")
        non_parks.add_column("Confidence")
        for entry in analysis.likely_non_parks[:limit]:
            non_parks.add_row(str(entry["name"]), str(entry["state"]), entry["reason"], entry["confidence"])
        console.print(non_parks)

    if analysis.issues:
        issues = Table(title=f"Issues ({len(analysis.issues)} parks)")
        issues.add_column("Name")
        issues.add_column("State")
        issues.add_column("Score", justify="right")
        issues.add_column("Issues")
        for entry in sorted(analysis.issues, key=lambda i: i.score)[:limit]:
            issues.add_row(str(entry.name), str(entry.state), str(entry.score), "; ".join(entry.issues))
        console.print(issues)


@cli.command()
@click.argument("store_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--keyword", "keywords", multiple=True, help="Name contains this keyword (repeatable, any matches)")
@click.option("--state", default=None, help="State name or code")
@click.option("--agency", default=None, help="Exact agency name")
@click.option("--min-acres", type=float, default=None)
@click.option("--max-acres", type=float, default=None)
@click.option("--max-score", type=int, default=None, help="Only parks scoring at most this")
@click.option(
    "--missing",
    multiple=True,
    type=click.Choice(COVERAGE_FIELDS),
    help="Field that must be missing (repeatable, all must be missing)",
)
@click.option("--limit", type=int, default=50, help="Maximum rows to show")
def cleanup(
    store_path: Path,
    keywords: tuple[str, ...],
    state: str | None,
    agency: str | None,
    min_acres: float | None,
    max_acres: float | None,
    max_score: int | None,
    missing: tuple[str, ...],
    limit: int,
):
    """List parks in STORE_PATH matching cleanup filters."""
    store = load_store(store_path)
    criteria = CleanupCriteria(
        name_keywords=list(keywords),
        state=state,
        agency=agency,
        min_acres=min_acres,
        max_acres=max_acres,
        max_quality_score=max_score,
        missing_fields=list(missing),
    )
    candidates = filter_for_cleanup(store, criteria)

    table = Table(title="Cleanup Candidates")
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("State")
    table.add_column("Agency")
    for record in candidates[:limit]:
        table.add_row(str(record.id), str(record.name), str(record.state or "-"), str(record.agency or "-"))
    console.print(table)
    console.print(f"{len(candidates)} matching parks")


if __name__ == "__main__":
    cli()
