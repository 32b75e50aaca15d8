import textwrap
from pathlib import Path

import pytest

PIZZA = """\
---
name: Pizza
time: 2024-01-10
---
yum"""

TACOS = """\
---
name: Tacos
time: 2024-01-05
coverImage:
  url: "http://x/y.png"
  alt: tacos
---
"""

PLAIN = "just some notes, no front matter\n"

MALFORMED = """\
---
name: Soup
time: not-a-date
---
"""


def write_doc(folder: Path, name: str, text: str) -> Path:
    path = folder / name
    path.write_text(textwrap.dedent(text), encoding="utf-8")
    return path


def event_doc(name: str, day, **extra: str) -> str:
    lines = ["---", f"name: {name}", f"time: {day.isoformat()}"]
    lines += [f"{key}: {value}" for key, value in extra.items()]
    lines += ["---", f"{name} body", ""]
    return "\n".join(lines)


@pytest.fixture
def scenario_dir(tmp_path):
    """a.md (Pizza), b.md (Tacos, with cover) and c.txt without front matter."""
    folder = tmp_path / "events"
    folder.mkdir()
    write_doc(folder, "a.md", PIZZA)
    write_doc(folder, "b.md", TACOS)
    write_doc(folder, "c.txt", PLAIN)
    return folder
