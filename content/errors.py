"""Exceptions raised by the content pipeline."""


class ContentError(Exception):
    """Base exception for content loading and synchronization."""


class ConfigError(ContentError):
    """Raised when configuration is missing or invalid."""


class FrontMatterError(ContentError):
    """Raised when a document's front-matter header cannot be decoded."""


class ScanError(ContentError):
    """Raised when a content directory cannot be scanned."""


class SyncError(ContentError):
    """Raised when the remote content repository cannot be fetched."""


class GitCommandError(SyncError):
    """Raised when a git command runs but exits with a non-zero status."""
