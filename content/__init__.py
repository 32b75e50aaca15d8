"""Meal-plan event content: front-matter parsing, scanning, sync and the event store."""

from content.models import Event, EventOverview, Image, Recipe, Snapshot, UpcomingEvents
from content.store import EventStore

__all__ = [
    "Event",
    "EventOverview",
    "EventStore",
    "Image",
    "Recipe",
    "Snapshot",
    "UpcomingEvents",
]
