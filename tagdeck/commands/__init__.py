"""Subcommands of the tagdeck CLI.

Every public module in this package that defines a module-level ``cli``
Click command is registered on the main group.
"""

from __future__ import annotations

import importlib
import pkgutil
from typing import TYPE_CHECKING

import click

from tagdeck.config import Config

if TYPE_CHECKING:
    from collections.abc import Iterator

# Hands the Config loaded by the CLI group to a command.
pass_config = click.make_pass_decorator(Config)


def discover_commands() -> Iterator[click.Command]:
    """Yield the ``cli`` command of each module, in module name order."""
    names = sorted(m.name for m in pkgutil.iter_modules(__path__))
    for name in names:
        if name.startswith("_"):
            continue

        module = importlib.import_module(f"{__name__}.{name}")
        cmd = getattr(module, "cli", None)
        if isinstance(cmd, click.Command):
            yield cmd
