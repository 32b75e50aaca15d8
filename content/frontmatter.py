"""Split Markdown documents into a YAML front-matter header and a body."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError

from content.errors import FrontMatterError
from content.models import DATE_FORMAT, RawEvent, format_date, parse_date

DELIMITER = "---"

__all__ = [
    "DATE_FORMAT",
    "DELIMITER",
    "decode_header",
    "format_date",
    "parse_date",
    "parse_document",
    "split_front_matter",
]


def _split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only, keeping line endings."""
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def _strip_eol(line: str) -> str:
    return line.removesuffix("\n").removesuffix("\r")


def split_front_matter(text: str) -> tuple[str, str] | None:
    """Return ``(header, body)`` or ``None`` when *text* has no front matter.

    The first line must be exactly ``---``; the header runs up to the next
    line that is exactly ``---``. Everything after that line is the body,
    untouched. A document that opens the block but never closes it has no
    front matter either.
    """
    text = text.removeprefix("\ufeff")
    lines = _split_lines(text)
    if not lines or _strip_eol(lines[0]) != DELIMITER:
        return None

    offset = len(lines[0])
    for line in lines[1:]:
        if _strip_eol(line) == DELIMITER:
            header = text[len(lines[0]):offset]
            body = text[offset + len(line):]
            return header, body
        offset += len(line)
    return None


def decode_header(header: str, source: str | Path | None = None) -> RawEvent:
    """Decode a front-matter header into a :class:`RawEvent`."""
    where = f" in {source}" if source else ""
    try:
        data = yaml.safe_load(header)
    except (yaml.YAMLError, ValueError) as exc:  # ValueError: impossible dates like 2024-13-01
        raise FrontMatterError(f"Malformed front matter{where}: {exc}") from exc

    if not isinstance(data, dict):
        raise FrontMatterError(
            f"Front matter{where} must be a mapping, got {type(data).__name__}"
        )

    try:
        return RawEvent.model_validate(data)
    except ValidationError as exc:
        raise FrontMatterError(f"Invalid front matter{where}: {exc}") from exc


def parse_document(text: str, source: str | Path | None = None) -> RawEvent | None:
    """Parse a whole document; ``None`` means it carries no front matter."""
    parts = split_front_matter(text)
    if parts is None:
        return None
    header, body = parts
    raw = decode_header(header, source)
    raw.body = body
    return raw
