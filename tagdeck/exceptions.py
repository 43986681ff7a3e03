"""Exception hierarchy for tagdeck."""

from pathlib import Path


class TagdeckError(Exception):
    """Base exception for all tagdeck errors.

    All exceptions in this package inherit from this class,
    allowing callers to catch all tagdeck errors with
    a single except clause.
    """

    pass


# Configuration Errors
class ConfigError(TagdeckError):
    """Configuration-related errors."""

    pass


class ConfigParseError(ConfigError):
    """Configuration file has invalid syntax."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid config at {path}: {detail}")


class ConfigValidationError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: object, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid config value for '{key}': {reason}")


# Library Errors
class LibraryError(TagdeckError):
    """Library store errors."""

    pass


class LibraryImportError(LibraryError):
    """A library export file could not be loaded."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot import {path}: {reason}")


# Entity Not Found Errors
class NotFoundError(TagdeckError):
    """Requested entity not found."""

    pass


class TrackNotFoundError(NotFoundError):
    """Track doesn't exist."""

    def __init__(self, track_id: int) -> None:
        self.track_id = track_id
        super().__init__(f"Track not found: {track_id}")


# Validation Errors
class ValidationError(TagdeckError):
    """Invalid input value."""

    def __init__(self, field: str, value: object, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")


class TagValidationError(ValidationError):
    """Tag value cannot be stored in the comment overlay."""

    def __init__(self, tag: str, reason: str) -> None:
        self.tag = tag
        super().__init__("tag", tag, reason)
