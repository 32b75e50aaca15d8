"""Settings loaded from the environment."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping

from pydantic import BaseModel, Field, ValidationError, field_validator

from content.errors import ConfigError


def _env(environ: Mapping[str, str], key: str) -> str | None:
    """Return the variable, treating an empty string as unset."""
    value = environ.get(key, "").strip()
    return value or None


class Settings(BaseModel):
    """Where event documents come from and how often they are refreshed."""

    repo_url: str | None = Field(
        default=None, description="Remote content repository; unset disables sync."
    )
    repo_path: str | None = Field(
        default=None, description="Folder inside the repository holding event documents."
    )
    local_path: Path = Field(
        default=Path("articles/events"),
        description="Event folder scanned once at start-up when sync is disabled.",
    )
    checkout_dir: Path = Field(
        default=Path(".cache/articles"),
        description="Persistent working copy of the remote repository.",
    )
    sync_interval: float = Field(default=30.0, gt=0, description="Seconds between syncs.")
    git_timeout: float = Field(default=120.0, gt=0, description="Seconds per git command.")
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.upper()
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"unknown log level {value!r}")
        return value

    @property
    def remote_enabled(self) -> bool:
        return self.repo_url is not None

    @property
    def events_dir(self) -> Path:
        """Event folder inside the working copy."""
        if self.repo_path:
            return self.checkout_dir / self.repo_path.strip("/")
        return self.checkout_dir

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        environ = os.environ if environ is None else environ
        values: dict[str, object] = {
            "repo_url": _env(environ, "BITE_ARTICLE_REPO_URL"),
            "repo_path": _env(environ, "BITE_ARTICLE_REPO_PATH"),
        }
        optional = {
            "local_path": "BITE_ARTICLE_LOCAL_PATH",
            "checkout_dir": "BITE_CHECKOUT_DIR",
            "sync_interval": "BITE_SYNC_INTERVAL",
            "git_timeout": "BITE_GIT_TIMEOUT",
            "log_level": "LOG_LEVEL",
        }
        for field, key in optional.items():
            value = _env(environ, key)
            if value is not None:
                values[field] = value

        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            raise ConfigError(f"Invalid settings: {exc}") from exc


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
