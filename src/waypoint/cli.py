"""Waypoint CLI - trip and meeting correlation."""

import json
import logging
import sys
from pathlib import Path

import click

from .adapters.json_store import JsonDataStore
from .config import load_config
from .core.locations import normalize
from .workflows import (
    NotFoundError,
    create_trip_from_meetings,
    find_local_contacts,
    find_travel_clusters,
    link_meetings,
    plan_trip_tasks,
    score_meeting,
    suggest_meetings_for_trip,
    unlink_meeting,
)


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


@click.group()
@click.option("--data", "data_file", type=click.Path(path_type=Path), help="Data file (overrides config)")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.version_option(package_name="waypoint")
@click.pass_context
def main(ctx, data_file: Path | None, debug: bool):
    """Waypoint - match meetings to trips."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )
    config = load_config()
    if data_file:
        config.data_file = str(data_file)
    ctx.obj = {"config": config}


def _store(ctx) -> JsonDataStore:
    """Open the data store lazily so `normalize` works without a data file."""
    if "store" not in ctx.obj:
        try:
            ctx.obj["store"] = JsonDataStore(ctx.obj["config"].data_path, ctx.obj["config"].timezone)
        except ValueError as e:
            _fail(f"Could not read data file: {e}")
    return ctx.obj["store"]


def _trip_summary(trip) -> str:
    lines = [f"{trip.id}: {trip.title} ({trip.start_date} to {trip.end_date}, {trip.purpose.value})"]
    for dest in trip.destinations:
        lines.append(f"  - {dest.city}, {dest.country}: {dest.arrival_date} to {dest.departure_date}")
    lines.append(f"  meetings: {', '.join(trip.related_meetings) or 'none'}")
    return "\n".join(lines)


@main.command("normalize")
@click.argument("text")
def normalize_cmd(text: str):
    """Show the canonical city/country for a location string."""
    location = normalize(text)
    click.echo(f"city: {location.city}")
    click.echo(f"country: {location.country}")


@main.command()
@click.argument("meeting_id")
@click.argument("trip_id")
@click.pass_context
def score(ctx, meeting_id: str, trip_id: str):
    """Score one meeting against one trip."""
    store = _store(ctx)
    try:
        result = score_meeting(store.meetings, store.trips, meeting_id, trip_id, ctx.obj["config"])
    except NotFoundError as e:
        _fail(str(e))
    click.echo(f"{result.meeting_id} -> {result.trip_id}: {result.score} ({result.label})")


@main.command()
@click.argument("trip_id")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def suggest(ctx, trip_id: str, as_json: bool):
    """Rank unlinked meetings around a trip."""
    store = _store(ctx)
    try:
        ranked = suggest_meetings_for_trip(store.meetings, store.trips, trip_id, ctx.obj["config"])
    except NotFoundError as e:
        _fail(str(e))

    if as_json:
        click.echo(
            json.dumps(
                [
                    {
                        "meeting_id": s.meeting.id,
                        "title": s.meeting.title,
                        "start": s.meeting.start.isoformat(),
                        "score": s.score,
                        "label": s.label,
                    }
                    for s in ranked
                ],
                indent=2,
            )
        )
        return

    if not ranked:
        click.echo("No meetings near this trip.")
        return
    for s in ranked:
        click.echo(f"[{s.label:7}] {s.score:3}  {s.meeting.start:%Y-%m-%d %H:%M}  {s.meeting.title}")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def clusters(ctx, as_json: bool):
    """Group upcoming out-of-town meetings by location."""
    store = _store(ctx)
    found = find_travel_clusters(store.meetings, config=ctx.obj["config"])

    if as_json:
        click.echo(
            json.dumps(
                [
                    {
                        "city": c.location.city,
                        "country": c.location.country,
                        "start": c.date_range.start.isoformat(),
                        "end": c.date_range.end.isoformat(),
                        "meetings": [m.id for m in c.meetings],
                    }
                    for c in found
                ],
                indent=2,
            )
        )
        return

    if not found:
        click.echo("No travel clusters.")
        return
    for c in found:
        click.echo(f"### {c.location} ({c.date_range.day_span()} day(s))")
        for m in c.meetings:
            click.echo(f"  {m.start:%Y-%m-%d %H:%M}  {m.title}")


@main.command("create-trip")
@click.argument("meeting_ids", nargs=-1, required=True)
@click.pass_context
def create_trip(ctx, meeting_ids: tuple[str, ...]):
    """Create a trip from meetings."""
    store = _store(ctx)
    try:
        trip = create_trip_from_meetings(store.meetings, store.trips, list(meeting_ids))
    except NotFoundError as e:
        _fail(str(e))
    store.save_trips()
    click.echo(_trip_summary(trip))


@main.command()
@click.argument("trip_id")
@click.argument("meeting_ids", nargs=-1, required=True)
@click.pass_context
def link(ctx, trip_id: str, meeting_ids: tuple[str, ...]):
    """Link meetings to a trip."""
    store = _store(ctx)
    try:
        trip = link_meetings(store.meetings, store.trips, trip_id, list(meeting_ids))
    except NotFoundError as e:
        _fail(str(e))
    store.save_trips()
    click.echo(_trip_summary(trip))


@main.command()
@click.argument("trip_id")
@click.argument("meeting_id")
@click.pass_context
def unlink(ctx, trip_id: str, meeting_id: str):
    """Unlink a meeting from a trip."""
    store = _store(ctx)
    try:
        trip = unlink_meeting(store.trips, trip_id, meeting_id)
    except NotFoundError as e:
        _fail(str(e))
    store.save_trips()
    click.echo(_trip_summary(trip))


@main.command()
@click.argument("trip_id")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def tasks(ctx, trip_id: str, as_json: bool):
    """Suggested tasks for a trip."""
    store = _store(ctx)
    try:
        planned = plan_trip_tasks(store.meetings, store.trips, trip_id)
    except NotFoundError as e:
        _fail(str(e))

    if as_json:
        click.echo(
            json.dumps(
                [
                    {
                        "title": t.title,
                        "category": t.category,
                        "due_date": t.due_date.isoformat(),
                        "priority": t.priority,
                        "checklist": t.checklist,
                    }
                    for t in planned
                ],
                indent=2,
            )
        )
        return

    for t in planned:
        click.echo(f"{t.due_date}  [{t.category}] {t.title}")


@main.command()
@click.argument("trip_id")
@click.pass_context
def contacts(ctx, trip_id: str):
    """Contacts based in a trip's destination cities."""
    store = _store(ctx)
    try:
        found = find_local_contacts(store.contacts, store.trips, trip_id)
    except NotFoundError as e:
        _fail(str(e))

    if not found:
        click.echo("No local contacts.")
        return
    for c in found:
        company = f" ({c.company})" if c.company else ""
        click.echo(f"• {c.name}{company}")


if __name__ == "__main__":
    main()
