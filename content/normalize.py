"""Turn raw front-matter records into the canonical records the store serves."""

from __future__ import annotations

import uuid

from content.models import Event, Image, RawEvent, RawImage


def normalize_image(raw: RawImage) -> Image:
    return Image(id=uuid.uuid4(), url=raw.url, alt=raw.alt, metadata=raw.metadata)


def normalize_event(raw: RawEvent) -> Event:
    """Assign fresh identities and copy everything else.

    Nothing is validated here: empty names and past dates pass through.
    """
    return Event(
        id=uuid.uuid4(),
        cover_image=normalize_image(raw.cover_image) if raw.cover_image else None,
        name=raw.name,
        description=raw.description,
        time=raw.time,
        recipe_id=raw.recipe_id,
        images=[],
        metadata=raw.metadata,
        body=raw.body,
    )
