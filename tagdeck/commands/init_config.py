"""Write the commented example config shipped with tagdeck."""

from __future__ import annotations

from importlib import resources
from pathlib import Path

import click

from tagdeck.config import get_default_config_path, load_config
from tagdeck.utils.output import error, info, success


def _load_example_config() -> str:
    return resources.files("tagdeck").joinpath("config.example.toml").read_text(encoding="utf-8")


def _target_path(output: Path | None) -> Path:
    """Resolve where to write: --output, then the group's --config, then the default."""
    if output is None:
        output = click.get_current_context().find_root().params.get("config_path")
    return (output or get_default_config_path()).expanduser().resolve()


@click.command("init-config")
@click.option("--force", "-f", is_flag=True, help="Replace an existing config file")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Where to write (default: the --config path, else ~/.config/tagdeck/config.toml)",
)
def cli(force: bool, output: Path | None) -> None:
    """Create a config file with [paths], [display] and [tags] defaults.

    \b
    Examples:
      tagdeck init-config
      tagdeck --config ./tagdeck.toml init-config --force
    """
    path = _target_path(output)
    if path.exists() and not force:
        error(f"Config file already exists: {path}", hint="Use --force to overwrite")
        raise SystemExit(1)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(_load_example_config(), encoding="utf-8")
    except OSError as e:
        error(f"Cannot write {path}: {e}")
        raise SystemExit(1)

    config, _warnings = load_config(path)
    success(f"Created config file: {path}")
    info(f"Library database: {config.library_db}")
    info("Load your library next with: tagdeck import <export.json>")
