"""Pydantic models for meal-plan events and the documents they are read from."""

from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_serializer, field_validator

#: Front-matter dates are plain calendar days, no time of day and no timezone.
DATE_FORMAT = "%Y-%m-%d"

Metadata = dict[str, str]


def parse_date(value: object) -> date:
    """Decode a ``YYYY-MM-DD`` value.

    YAML loaders resolve bare dates to :class:`datetime.date` on their own, so
    those are accepted as-is. Anything carrying a time of day is rejected.
    """
    if isinstance(value, datetime):
        raise ValueError(f"expected a date without time of day, got {value!r}")
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    raise ValueError(f"expected a {DATE_FORMAT} date string, got {value!r}")


def format_date(value: date) -> str:
    """Encode a date as ``YYYY-MM-DD`` (zero-padded, four-digit year)."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def _scalar_text(value: object) -> object:
    """Give back as text the scalars YAML resolved to numbers, booleans or dates."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, date):
        return value.isoformat()
    return value


def _metadata_text(value: object) -> object:
    if isinstance(value, dict):
        return {_scalar_text(k): _scalar_text(v) for k, v in value.items()}
    return value


# ------------------------------------------------------------------
# Raw records, decoded straight from a document header
# ------------------------------------------------------------------


class RawImage(BaseModel):
    url: str
    alt: str
    metadata: Metadata | None = None

    coerce_text = field_validator("url", "alt", mode="before")(_scalar_text)
    coerce_metadata = field_validator("metadata", mode="before")(_metadata_text)


class RawEvent(BaseModel):
    """Event as written in a document's front matter."""

    cover_image: RawImage | None = Field(
        default=None,
        validation_alias=AliasChoices("cover_image", "coverImage"),
    )
    name: str
    description: str | None = None
    time: date
    recipe_id: UUID | None = None
    metadata: Metadata | None = None
    #: Text after the closing delimiter. Filled by the parser, never by the header.
    body: str = Field(default="", exclude=True)

    coerce_text = field_validator("name", "description", mode="before")(_scalar_text)
    coerce_metadata = field_validator("metadata", mode="before")(_metadata_text)

    @field_validator("time", mode="before")
    @classmethod
    def _parse_time(cls, value: object) -> date:
        return parse_date(value)


# ------------------------------------------------------------------
# Canonical records served by the store
# ------------------------------------------------------------------


class Image(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    url: str
    alt: str
    metadata: Metadata | None = None


class Recipe(BaseModel):
    """A recipe an ``Event`` can point at through ``recipe_id``."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    metadata: Metadata | None = None


class EventOverview(BaseModel):
    """List-view projection of an :class:`Event`."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    cover_image: Image | None = None
    name: str
    description: str | None = None
    time: date

    @field_serializer("time")
    def _dump_time(self, value: date) -> str:
        return format_date(value)


class Event(BaseModel):
    """A planned meal on a given day.

    ``id`` is generated on every parse, so it is not stable across rescans.
    ``recipe_id`` is a plain reference; the recipe may not exist.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    cover_image: Image | None = None
    name: str
    description: str | None = None
    time: date
    recipe_id: UUID | None = None
    images: list[Image] = Field(default_factory=list)
    metadata: Metadata | None = None
    body: str = ""

    @field_serializer("time")
    def _dump_time(self, value: date) -> str:
        return format_date(value)

    def overview(self) -> EventOverview:
        return EventOverview(
            id=self.id,
            cover_image=self.cover_image.model_copy(deep=True) if self.cover_image else None,
            name=self.name,
            description=self.description,
            time=self.time,
        )


class UpcomingEvents(BaseModel):
    events: list[EventOverview] = Field(default_factory=list)


class Snapshot(BaseModel):
    """The complete record set of one successful scan."""

    model_config = ConfigDict(frozen=True)

    generation: int = 0
    events: tuple[Event, ...] = ()
    published_at: datetime | None = None
