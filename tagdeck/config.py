"""Configuration management for tagdeck."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from tagdeck.exceptions import (
    ConfigParseError,
    ConfigValidationError,
)

DEFAULT_COLUMNS = "id,artist,title,album,bpm,tags"


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".config" / "tagdeck" / "config.toml"


def get_default_library_db_path() -> Path:
    """Get the default library database path."""
    return Path.home() / ".local" / "share" / "tagdeck" / "library.db"


@dataclass
class Config:
    """Application configuration.

    Attributes:
        library_db: Path to the library SQLite database.
        colored_output: Whether to use colored terminal output.
        columns: Default comma-separated column list for search results.
        capitalize_tags: Upper-case the first letter of tags added from the CLI.
        config_path: Path where config was loaded from (None if defaults).
    """

    library_db: Path = field(default_factory=get_default_library_db_path)
    colored_output: bool = True
    columns: str = DEFAULT_COLUMNS
    capitalize_tags: bool = True
    config_path: Path | None = None

    def validate(self) -> list[str]:
        """Validate configuration values.

        Returns:
            List of warning messages for non-fatal issues.
        """
        warnings: list[str] = []

        self.library_db = self.library_db.expanduser().resolve()

        if not self.library_db.exists():
            warnings.append(
                f"Library database not found: {self.library_db}. "
                f"Import a library with: tagdeck import FILE"
            )

        if not [c for c in self.columns.split(",") if c.strip()]:
            warnings.append("display.columns is empty, using defaults")
            self.columns = DEFAULT_COLUMNS

        return warnings


def load_config(
    config_path: Path | None = None, library_db: Path | None = None
) -> tuple[Config, list[str]]:
    """Load configuration from file or use defaults.

    Args:
        config_path: Explicit config file path. If None, uses default location.
        library_db: Database path that takes precedence over the file's
            ``[paths] library_db``.

    Returns:
        Tuple of (Config object, list of warning messages).

    Raises:
        ConfigParseError: If config file exists but has invalid syntax.
        ConfigValidationError: If config values are invalid.
    """
    warnings: list[str] = []

    if config_path is None:
        config_path = get_default_config_path()

    config_path = config_path.expanduser().resolve()

    if not config_path.exists():
        config = Config()
        if library_db is not None:
            config.library_db = library_db
        warnings.append(
            f"No config file found at {config_path}. Using defaults. "
            f"Create config with: tagdeck init-config"
        )
        config_warnings = config.validate()
        return config, warnings + config_warnings

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(config_path, str(e)) from e

    config = _parse_config_dict(data, config_path)
    if library_db is not None:
        config.library_db = library_db
    config_warnings = config.validate()

    return config, warnings + config_warnings


def _parse_config_dict(data: dict[str, Any], config_path: Path) -> Config:
    """Parse configuration dictionary into Config object."""
    config = Config(config_path=config_path)

    # Parse [paths] section
    paths = data.get("paths", {})
    if "library_db" in paths:
        value = paths["library_db"]
        if not isinstance(value, str):
            raise ConfigValidationError("paths.library_db", value, "must be a string path")
        config.library_db = Path(value)

    # Parse [display] section
    display = data.get("display", {})
    if "colored_output" in display:
        value = display["colored_output"]
        if not isinstance(value, bool):
            raise ConfigValidationError("display.colored_output", value, "must be a boolean")
        config.colored_output = value

    if "columns" in display:
        value = display["columns"]
        if not isinstance(value, str):
            raise ConfigValidationError("display.columns", value, "must be a string")
        config.columns = value

    # Parse [tags] section
    tags = data.get("tags", {})
    if "capitalize" in tags:
        value = tags["capitalize"]
        if not isinstance(value, bool):
            raise ConfigValidationError("tags.capitalize", value, "must be a boolean")
        config.capitalize_tags = value

    return config


def save_config(config: Config, config_path: Path | None = None) -> None:
    """Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Path to save to. If None, uses config.config_path or default.
    """
    if config_path is None:
        config_path = config.config_path or get_default_config_path()

    config_path = config_path.expanduser().resolve()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data: dict[str, Any] = {
        "paths": {
            "library_db": str(config.library_db),
        },
        "display": {
            "colored_output": config.colored_output,
            "columns": config.columns,
        },
        "tags": {
            "capitalize": config.capitalize_tags,
        },
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
