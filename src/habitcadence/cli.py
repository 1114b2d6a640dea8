"""Command line entry point for HabitCadence."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Hashable, Optional

import click

from .config import BaseConfig
from .domain.calendar import build_month_view
from .domain.entries import CompletionEntry
from .domain.frequency import FREQUENCY_OPTIONS, Frequency, count_expected, should_track_on_date
from .domain.streaks import calculate_streak_info
from .logging_config import get_logger, setup_logging
from .services.habits import resolve_today
from .services.import_csv import load_entries_csv

DATE = click.DateTime(formats=["%Y-%m-%d"])

logger = get_logger("cli")


def _as_date(value) -> Optional[date]:
    return value.date() if value is not None else None


def _rule(frequency: str) -> Frequency:
    if not Frequency.is_known(frequency):
        click.echo(f"Unknown frequency {frequency!r}, treating it as daily.", err=True)
    return Frequency.parse(frequency)


def _today(value) -> date:
    if value is not None:
        return value.date()
    config: BaseConfig = click.get_current_context().find_object(BaseConfig)
    return resolve_today(config.tzinfo)


def _select_habit(entries: list[CompletionEntry], habit_id: Optional[str]) -> Hashable:
    """Pick the habit the rows belong to when ``--habit-id`` is omitted."""

    if habit_id is not None:
        return habit_id
    found = {entry.habit_id for entry in entries}
    if len(found) > 1:
        names = ", ".join(sorted(str(value) for value in found if value is not None))
        raise click.UsageError(f"ENTRIES_CSV holds several habits ({names}); choose one with --habit-id.")
    return next(iter(found), None)


def _load(entries_csv: Path, habit_id: Optional[str]) -> tuple[Hashable, list[CompletionEntry]]:
    entries = load_entries_csv(entries_csv, habit_id=habit_id)
    selected = _select_habit(entries, habit_id)
    logger.info("Entries selected", extra={"habit_id": selected, "count": len(entries)})
    return selected, entries


@click.group()
@click.version_option(package_name="habitcadence")
@click.pass_context
def main(ctx: click.Context) -> None:
    """Habit frequency, streak and calendar calculations."""

    try:
        config = BaseConfig()
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    setup_logging(config)
    ctx.obj = config


@main.command("frequencies")
def frequencies() -> None:
    """List the supported frequency rules."""

    for rule, option in FREQUENCY_OPTIONS.items():
        click.echo(f"{rule.value:<20} {option.label} ({option.description})")


@main.command("check")
@click.argument("start", type=DATE)
@click.argument("frequency")
@click.argument("day", type=DATE)
def check(start, frequency: str, day) -> None:
    """Tell whether DAY is expected for a habit starting on START."""

    expected = should_track_on_date(_as_date(start), _rule(frequency), _as_date(day))
    click.echo("expected" if expected else "not expected")


@main.command("count")
@click.argument("start", type=DATE)
@click.argument("frequency")
@click.argument("from_day", metavar="FROM", type=DATE)
@click.argument("to_day", metavar="TO", type=DATE)
def count(start, frequency: str, from_day, to_day) -> None:
    """Count expected days between FROM and TO inclusive."""

    click.echo(count_expected(_as_date(start), _rule(frequency), _as_date(from_day), _as_date(to_day)))


@main.command("streak")
@click.argument("start", type=DATE)
@click.argument("frequency")
@click.argument("entries_csv", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--today", type=DATE, default=None, help="Reference day (defaults to today).")
@click.option("--habit-id", default=None, help="Select rows by the CSV habit_id column.")
def streak(start, frequency: str, entries_csv: Path, today, habit_id: Optional[str]) -> None:
    """Print streak information for entries in ENTRIES_CSV."""

    selected, entries = _load(entries_csv, habit_id)
    info = calculate_streak_info(selected, entries, _as_date(start), _rule(frequency), _today(today))
    last = info.last_completion_date.isoformat() if info.last_completion_date else "-"
    click.echo(f"current streak:      {info.current_streak}")
    click.echo(f"longest streak:      {info.longest_streak}")
    click.echo(f"last completion:     {last}")
    click.echo(f"expected this week:  {info.expected_this_week}")
    click.echo(f"completed this week: {info.completed_this_week}")
    click.echo(f"completion rate:     {info.completion_rate}%")


@main.command("calendar")
@click.argument("start", type=DATE)
@click.argument("frequency")
@click.argument("entries_csv", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("year", type=click.IntRange(1, 9999))
@click.argument("month", type=click.IntRange(1, 12))
@click.option("--today", type=DATE, default=None, help="Reference day (defaults to today).")
@click.option("--habit-id", default=None, help="Select rows by the CSV habit_id column.")
def calendar(start, frequency: str, entries_csv: Path, year: int, month: int, today, habit_id: Optional[str]) -> None:
    """Print one line per day of YEAR-MONTH with its status."""

    selected, entries = _load(entries_csv, habit_id)
    days = build_month_view(
        selected, entries, year, month, _as_date(start), _rule(frequency), _today(today)
    )
    for day in days:
        marker = "*" if day.is_expected_day else " "
        line = f"{day.date.isoformat()} {marker} {day.status.value}"
        if day.reason:
            line += f" ({day.reason})"
        click.echo(line)


if __name__ == "__main__":  # pragma: no cover
    main()
