"""CLI commands printing dashboards and group reports."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

import labdesk.lib.cli as click
from labdesk.auth import SessionService
from labdesk.core import di
from labdesk.core.provider import TimestampProvider
from labdesk.locale import Catalog
from labdesk.model import Locale, Role
from labdesk.report import all_student_progress, Band, completion_band, dashboard as build_dashboard, grade_band, \
    group_reports, overall_stats
from labdesk.storage import DataStore
from labdesk.storage import group as group_storage

console = Console()

BandStyle = {
    Band.Excellent: "green",
    Band.Good: "blue",
    Band.Fair: "yellow",
    Band.Poor: "red",
}


@click.group("report")
def report():
    """Show dashboards and reports for the signed-in actor."""
    ...


@report.command("dashboard")
@click.option("--locale", "-l", "locale", type=click.EnumType(Locale), default=None)
@di.inject
def dashboard(
    locale: Locale | None,
    service: SessionService = di.Provide["auth.session"],
    store: DataStore = di.Provide["storage.store"],
    catalog: Catalog = di.Provide["locale.catalog"],
    utcnow: TimestampProvider = di.Provide["utcnow"],
) -> None:
    """Stat cards and upcoming deadlines of the signed-in actor."""
    actor = service.require()
    board = build_dashboard(actor, store.snapshot(), utcnow(), catalog, locale)

    console.print(f"[bold]{board.greeting}[/bold] ({board.role_label})")
    cards = Table(show_header=False, box=None)
    for card in board.cards:
        cards.add_row(card.label, f"[cyan]{card.value}[/cyan]")
    console.print(cards)

    if board.upcoming:
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Assignment")
        table.add_column("Deadline")
        table.add_column("Days left", justify="right")
        for row in board.upcoming:
            days = f"[red]{row.days_left}[/red]" if row.soon else str(row.days_left)
            table.add_row(row.assignment.title, row.assignment.deadline.strftime("%Y-%m-%d %H:%M"), days)
        console.print(table)

    for event in board.recent:
        console.print(f"  {event.at:%Y-%m-%d} {event.text}")


@report.command("groups")
@click.option("--group", "-g", default=None, help="Only this group")
@di.inject
def groups(
    group: str | None,
    service: SessionService = di.Provide["auth.session"],
    store: DataStore = di.Provide["storage.store"],
    utcnow: TimestampProvider = di.Provide["utcnow"],
) -> None:
    """Per-group averages and completion, for teachers and administrators."""
    service.require((Role.Teacher, Role.Admin))
    tables = store.snapshot()
    all_groups = list(group_storage.from_tables(tables))
    assignments = list(tables.assignments.values())
    students = all_student_progress(tables.actors.values(), assignments, list(tables.submissions.values()))
    rows = group_reports(all_groups, students, tables.actors, assignments, utcnow())
    if group is not None:
        rows = [r for r in rows if r.group.name == group]
    overall = overall_stats(all_groups, students, group=group)

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Group")
    table.add_column("Teacher")
    table.add_column("Students", justify="right")
    table.add_column("Avg grade", justify="right")
    table.add_column("Completion", justify="right")
    table.add_column("Open assignments", justify="right")
    for r in rows:
        gs = BandStyle[grade_band(r.average_grade)]
        cs = BandStyle[completion_band(r.completion_rate)]
        table.add_row(
            r.group.name,
            r.teacher_name or "-",
            str(r.student_count),
            f"[{gs}]{r.average_grade}%[/{gs}]",
            f"[{cs}]{r.completion_rate}%[/{cs}]",
            str(r.active_assignments),
        )
    console.print(table)
    console.print(
        f"{overall.total_students} students in {overall.total_groups} groups, "
        f"average grade {overall.average_grade}%, completion {overall.average_completion}%"
    )
