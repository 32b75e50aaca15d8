"""Scan a content directory into events."""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

from content.errors import ScanError
from content.frontmatter import parse_document
from content.models import Event
from content.normalize import normalize_event

log = logging.getLogger(__name__)


def _read_text(path: Path) -> str:
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise ScanError(f"Cannot read {path}: {exc}") from exc
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ScanError(f"{path} is not valid UTF-8: {exc}") from exc


def scan_directory(path: str | Path) -> list[Event]:
    """Parse every regular file directly inside *path*.

    The scan is all-or-nothing: one unreadable or malformed document raises
    and no events are returned. Files without front matter and entries that
    are not regular files are skipped. Events come back in directory
    enumeration order, unsorted.
    """
    path = Path(path)
    events: list[Event] = []

    try:
        with os.scandir(path) as it:
            entries = [entry for entry in it if entry.is_file()]
    except OSError as exc:
        raise ScanError(f"Cannot list {path}: {exc}") from exc

    for entry in entries:
        file_path = Path(entry.path)
        raw = parse_document(_read_text(file_path), source=file_path)
        if raw is None:
            log.debug("No front matter in %s, skipping", file_path)
            continue
        events.append(normalize_event(raw))

    log.debug("Scanned %s: %d event(s)", path, len(events))
    return events


async def scan_directory_async(path: str | Path) -> list[Event]:
    """Run :func:`scan_directory` in a worker thread."""
    return await asyncio.to_thread(scan_directory, path)
