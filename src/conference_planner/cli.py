"""CLI entry point for the conference planner."""

import json
import logging
import random
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .exceptions import PlannerError
from .exporters import get_exporter
from .planning import (
    SnapshotLoader,
    build_report,
    compute_statistics,
    copy_day_to_day,
    sort_days,
    suggest as suggest_allocations,
    validate_day,
)

app = typer.Typer(
    name="conference-planner",
    help="Validate conference plannings and allocate sessions to slots",
    add_completion=False,
)
console = Console()


class OutputFormat(str, Enum):
    """Output format options."""

    json = "json"
    csv = "csv"
    excel = "excel"


SnapshotDir = Annotated[
    Path,
    typer.Argument(help="Snapshot directory containing conference.json"),
]
Verbose = Annotated[
    bool,
    typer.Option("-v", "--verbose", help="Show detailed output"),
]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load_snapshot(snapshot_dir: Path) -> SnapshotLoader:
    """Load a snapshot or exit with an error message."""
    try:
        with console.status("[bold green]Loading snapshot..."):
            return SnapshotLoader(snapshot_dir)
    except PlannerError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(1)


@app.command()
def check(snapshot_dir: SnapshotDir, verbose: Verbose = False) -> None:
    """Validate every slot of the conference planning."""
    _configure_logging(verbose)
    loader = _load_snapshot(snapshot_dir)
    conference = loader.conference

    console.print(f"\n[bold]Planning check for:[/bold] {conference.name or conference.id}")

    issues = Table(title="Slot errors")
    issues.add_column("Day", style="cyan")
    issues.add_column("Slot", style="blue")
    issues.add_column("Room", style="magenta")
    issues.add_column("Time", style="green")
    issues.add_column("Errors", style="red")

    total_slots = 0
    total_errors = 0
    for day in sort_days(conference.days):
        total_slots += len(day.slots)
        errors_by_slot = validate_day(
            day, loader.slot_types, conference.session_types, conference.rooms
        )
        for slot in day.slots:
            errors = errors_by_slot.get(slot.id)
            if not errors:
                continue
            total_errors += 1
            issues.add_row(
                day.date or day.id,
                slot.id,
                slot.room_id,
                slot.time_range,
                ", ".join(e.value for e in errors),
            )

    console.print(f"  Days: {len(conference.days)}")
    console.print(f"  Slots: {total_slots}")

    if total_errors:
        console.print(issues)
        console.print(f"[bold red]✗ {total_errors} slot(s) have errors[/bold red]")
        raise typer.Exit(1)

    console.print("[bold green]✓ Planning is valid[/bold green]")


@app.command()
def suggest(
    snapshot_dir: SnapshotDir,
    seed: Annotated[
        Optional[int],
        typer.Option("--seed", help="Seed for the tie-break, for reproducible suggestions"),
    ] = None,
    apply: Annotated[
        bool,
        typer.Option("--apply", help="Apply the suggestions and save the snapshot"),
    ] = False,
    output: Annotated[
        Optional[Path],
        typer.Option("-o", "--output", help="Write the suggestions to a JSON file"),
    ] = None,
    verbose: Verbose = False,
) -> None:
    """Suggest allocations for the sessions without slot."""
    _configure_logging(verbose)
    loader = _load_snapshot(snapshot_dir)
    store = loader.create_store()
    rng = random.Random(seed).random if seed is not None else None

    with console.status("[bold green]Computing suggestions..."):
        suggestions = suggest_allocations(
            loader.conference,
            store.sessions,
            store.allocations,
            loader.speakers,
            loader.slot_types,
            rng=rng,
        )

    console.print(f"\n[bold]Suggestions:[/bold] {len(suggestions)}")

    if suggestions:
        table = Table(title="Suggested allocations")
        table.add_column("Day", style="cyan")
        table.add_column("Time", style="green")
        table.add_column("Room", style="magenta")
        table.add_column("Session", style="blue", max_width=50)

        for suggestion in suggestions:
            day = loader.conference.get_day(suggestion.day_id)
            slot = day.get_slot(suggestion.slot_id) if day else None
            session = store.get_session(suggestion.session_id)
            table.add_row(
                (day.date or day.id) if day else suggestion.day_id,
                slot.time_range if slot else suggestion.slot_id,
                suggestion.room_id,
                session.title if session else suggestion.session_id,
            )
        console.print(table)

    if output:
        output_path = output if output.suffix == ".json" else output.with_suffix(".json")
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump([s.to_dict() for s in suggestions], f, ensure_ascii=False, indent=2)
        console.print(f"\n[bold green]✓[/bold green] Suggestions exported to: {output_path}")

    if apply:
        report = store.apply_suggestions(suggestions)
        loader.save_store(store)
        console.print(
            f"\n[bold green]✓[/bold green] Applied {report.total_applied} suggestion(s)"
        )
        if report.skipped:
            console.print(f"[bold yellow]Skipped ({report.total_skipped}):[/bold yellow]")
            for skipped in report.skipped:
                console.print(
                    f"  [yellow]• {skipped.suggestion.session_id}: {skipped.reason}[/yellow]"
                )


@app.command()
def stats(snapshot_dir: SnapshotDir, verbose: Verbose = False) -> None:
    """Show planning statistics."""
    _configure_logging(verbose)
    loader = _load_snapshot(snapshot_dir)
    conference = loader.conference
    statistics = compute_statistics(
        conference, loader.sessions, loader.allocations, loader.slot_types
    )

    console.print(f"\n[bold]Statistics for:[/bold] {conference.name or conference.id}")

    overview_table = Table(title="Overview", show_header=False)
    overview_table.add_column("Metric", style="cyan")
    overview_table.add_column("Value", style="green")

    overview_table.add_row("Submitted Sessions", str(statistics.submitted.total))
    overview_table.add_row("Confirmed Sessions", str(statistics.confirmed.total))
    overview_table.add_row("Allocated Sessions", str(statistics.allocated.total))
    overview_table.add_row("Speakers", str(statistics.total_speakers))
    overview_table.add_row("Sessions with 2 Speakers", str(statistics.sessions_with_2_speakers))
    overview_table.add_row("Sessions with 3 Speakers", str(statistics.sessions_with_3_speakers))
    overview_table.add_row(
        "Session Slots",
        f"{statistics.allocated_session_slots}/{statistics.total_session_slots} "
        f"({statistics.slot_ratio:.0%})",
    )

    console.print(overview_table)

    type_table = Table(title="Sessions by Type")
    type_table.add_column("Type", style="cyan")
    type_table.add_column("Submitted", style="green")
    type_table.add_column("Confirmed", style="yellow")
    type_table.add_column("Allocated", style="magenta")

    for session_type_id, count in statistics.submitted.by_session_type.items():
        session_type = conference.get_session_type(session_type_id)
        type_table.add_row(
            session_type.name if session_type else session_type_id,
            str(count),
            str(statistics.confirmed.by_session_type.get(session_type_id, 0)),
            str(statistics.allocated.by_session_type.get(session_type_id, 0)),
        )

    console.print(type_table)


@app.command()
def export(
    snapshot_dir: SnapshotDir,
    output: Annotated[
        Path,
        typer.Option("-o", "--output", help="Output file or directory path"),
    ],
    format: Annotated[
        OutputFormat,
        typer.Option("-f", "--format", help="Output format"),
    ] = OutputFormat.json,
    verbose: Verbose = False,
) -> None:
    """Export the allocated planning."""
    _configure_logging(verbose)
    loader = _load_snapshot(snapshot_dir)
    report = build_report(
        loader.conference,
        loader.sessions,
        loader.allocations,
        loader.slot_types,
        loader.speakers,
    )

    exporter = get_exporter(format.value)

    if format == OutputFormat.csv:
        # CSV exports to directory
        output_path = output if output.is_dir() else output.parent / output.stem
    else:
        # JSON and Excel export to file
        if not output.suffix:
            output = output.with_suffix(".xlsx" if format == OutputFormat.excel else ".json")
        output_path = output

    with console.status(f"[bold green]Exporting to {format.value}..."):
        exporter.export(report, output_path)

    console.print(f"\n[bold]Planning entries:[/bold] {report.total_entries}")
    console.print(f"[bold green]✓[/bold green] Exported to: {output_path}")


@app.command("copy-day")
def copy_day(
    snapshot_dir: SnapshotDir,
    source: Annotated[str, typer.Argument(help="Id of the day to copy")],
    target: Annotated[str, typer.Argument(help="Id of the day receiving the slots")],
    save: Annotated[
        bool,
        typer.Option("--save", help="Write the updated conference.json"),
    ] = False,
    verbose: Verbose = False,
) -> None:
    """Copy the slots of one day into another day."""
    _configure_logging(verbose)
    loader = _load_snapshot(snapshot_dir)
    conference = loader.conference

    source_day = conference.get_day(source)
    target_day = conference.get_day(target)
    for day_id, day in ((source, source_day), (target, target_day)):
        if day is None:
            console.print(f"[bold red]Error:[/bold red] Unknown day: {day_id}")
            raise typer.Exit(1)

    accepted = copy_day_to_day(
        source_day, target_day, loader.slot_types, conference.session_types, conference.rooms
    )
    console.print(
        f"\n[bold]Copied[/bold] {len(accepted)}/{len(source_day.slots)} slot(s) "
        f"from {source} to {target}"
    )

    if save:
        target_day.slots.extend(accepted)
        loader.save_conference()
        console.print(f"[bold green]✓[/bold green] Saved: {loader.conference_config.path}")


@app.command("reset-day")
def reset_day(
    snapshot_dir: SnapshotDir,
    day_id: Annotated[str, typer.Argument(help="Id of the day to reset")],
    save: Annotated[
        bool,
        typer.Option("--save", help="Write the updated allocations and sessions"),
    ] = False,
    verbose: Verbose = False,
) -> None:
    """Remove every allocation of a day."""
    _configure_logging(verbose)
    loader = _load_snapshot(snapshot_dir)

    if loader.conference.get_day(day_id) is None:
        console.print(f"[bold red]Error:[/bold red] Unknown day: {day_id}")
        raise typer.Exit(1)

    store = loader.create_store()
    before = len(store.allocations)
    try:
        updated = store.reset_day(day_id)
    except PlannerError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(1)

    console.print(f"\n[bold]Removed[/bold] {before - len(store.allocations)} allocation(s)")
    console.print(f"  Sessions back to unallocated status: {len(updated)}")

    if save:
        loader.save_store(store)
        console.print(f"[bold green]✓[/bold green] Saved: {loader.snapshot_dir}")


if __name__ == "__main__":
    app()
