"""tagdeck command-line entry point.

The group loads the config once and stores it as the context object, where
subcommands pick it up with ``pass_config``. Subcommands are collected from
``tagdeck.commands``.
"""

from __future__ import annotations

import os
from pathlib import Path

import click

from tagdeck import __version__
from tagdeck.commands import discover_commands
from tagdeck.config import load_config
from tagdeck.exceptions import ConfigError
from tagdeck.utils import output


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file (default: ~/.config/tagdeck/config.toml)",
)
@click.option(
    "--db",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Library database, overriding [paths] library_db",
)
@click.option("--no-color", is_flag=True, help="Disable colored output (NO_COLOR works too)")
@click.option("--verbose", "-v", is_flag=True, help="Show progress details")
@click.option("--debug", is_flag=True, help="Log parser and store activity to stderr")
@click.option("--quiet", "-q", is_flag=True, help="Print only results and errors")
@click.option(
    "--pager/--no-pager",
    default=None,
    help="Page result tables (default: only when they do not fit the terminal)",
)
@click.version_option(version=__version__, prog_name="tagdeck")
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: Path | None,
    db: Path | None,
    no_color: bool,
    verbose: bool,
    debug: bool,
    quiet: bool,
    pager: bool | None,
) -> None:
    """Search and tag a music library.

    Tags are stored inside each track's comment field as
    "comment && Tag1; Tag2" so other tagging software keeps them.

    \b
    Examples:
      tagdeck import library.json
      tagdeck search 'techno bpm:125-130 -tag:minimal'
      tagdeck tags add "Late Night" 12 14
    """
    try:
        config, warnings = load_config(config_path, library_db=db)
    except ConfigError as e:
        output.error(str(e), hint="Fix the file or rewrite it with: tagdeck init-config --force")
        ctx.exit(1)

    output.configure(
        quiet=quiet,
        verbose=verbose,
        debug=debug,
        color=config.colored_output and not no_color and "NO_COLOR" not in os.environ,
        pager=pager,
    )
    for message in warnings:
        output.warning(message)

    ctx.obj = config


for _command in discover_commands():
    cli.add_command(_command)
