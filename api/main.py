"""Meal-plan events API."""

from __future__ import annotations

from contextlib import asynccontextmanager
from uuid import UUID

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from content.config import Settings, configure_logging
from content.models import Event, UpcomingEvents
from content.store import EventStore
from content.sync import bootstrap


def get_store(request: Request) -> EventStore:
    return request.app.state.store


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app; the store and sync task live for the app's lifespan."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        config = settings or Settings.from_env()
        configure_logging(config.log_level)
        store = EventStore()
        app.state.settings = config
        app.state.store = store
        app.state.sync = await bootstrap(store, config)
        try:
            yield
        finally:
            if app.state.sync is not None:
                await app.state.sync.stop()

    app = FastAPI(title="Meal-plan events", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health(request: Request):
        snapshot = get_store(request).snapshot()
        return {
            "status": "ok",
            "generation": snapshot.generation,
            "events": len(snapshot.events),
            "published_at": snapshot.published_at,
        }

    @app.get("/api/events", response_model=UpcomingEvents)
    async def list_upcoming_events(request: Request):
        """Upcoming events, soonest first."""
        return get_store(request).get_upcoming_overview()

    @app.get("/api/events/{event_id}", response_model=Event)
    async def get_event(event_id: UUID, request: Request):
        """Get a single event by ID, past or upcoming."""
        event = get_store(request).get_event(event_id)
        if event is None:
            raise HTTPException(status_code=404, detail="Event not found")
        return event

    return app


app = create_app()
