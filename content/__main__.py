"""CLI entry-point: python -m content [scan|upcoming|sync]."""

from __future__ import annotations

import asyncio
from datetime import date
from pathlib import Path

import typer

from content.config import Settings, configure_logging
from content.errors import ContentError
from content.models import Event, format_date, parse_date
from content.scanner import scan_directory
from content.store import EventStore
from content.sync import ContentSync

app = typer.Typer(help="Meal-plan events – content CLI")


def _echo_events(events: list[Event]) -> None:
    for event in events:
        typer.echo(f"{format_date(event.time)}  {event.name}  {event.id}")


def _load(path: Path) -> EventStore:
    try:
        return EventStore(scan_directory(path))
    except ContentError as exc:
        typer.echo(f"Scan failed: {exc}", err=True)
        raise typer.Exit(1)


@app.command()
def scan(
    path: Path = typer.Argument(..., help="Folder holding event documents."),
) -> None:
    """Scan a folder and list every event, oldest first."""
    store = _load(path)
    _echo_events(store.get_events())
    typer.echo(f"{len(store)} event(s).")


@app.command()
def upcoming(
    path: Path = typer.Argument(..., help="Folder holding event documents."),
    today: str | None = typer.Option(
        None, "--today", help="Reference date (YYYY-MM-DD). Defaults to today."
    ),
) -> None:
    """List events dated today or later."""
    try:
        reference = parse_date(today) if today else date.today()
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--today")
    store = _load(path)
    events = store.get_upcoming_events(reference)
    if not events:
        typer.echo("No upcoming events.")
        return
    _echo_events(events)


@app.command()
def sync() -> None:
    """Run one synchronization against the configured repository."""
    try:
        settings = Settings.from_env()
    except ContentError as exc:
        typer.echo(f"Configuration error: {exc}", err=True)
        raise typer.Exit(2)
    configure_logging(settings.log_level)

    if not settings.remote_enabled:
        typer.echo("BITE_ARTICLE_REPO_URL is not set.", err=True)
        raise typer.Exit(2)

    store = EventStore()
    try:
        snapshot = asyncio.run(ContentSync(store, settings).sync_once())
    except ContentError as exc:
        typer.echo(f"Sync failed: {exc}", err=True)
        raise typer.Exit(1)
    typer.echo(f"Synced {len(snapshot.events)} event(s) from {settings.repo_url}.")


if __name__ == "__main__":
    app()
