"""Terminal output for tagdeck commands.

Results and progress go to ``console`` (stdout), warnings and errors to
``error_console`` (stderr). The CLI group calls :func:`configure` once, after
the config is loaded; every helper below reads the resulting settings.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "path": "blue underline",
        "track.artist": "bold",
        "track.title": "italic",
        "track.tag": "magenta",
    }
)

console = Console(theme=THEME)
error_console = Console(theme=THEME, stderr=True)


@dataclass
class OutputSettings:
    """Flags set from the global CLI options.

    Attributes:
        quiet: Drop informational messages and warnings; keep results and errors.
        verbose: Print progress details.
        debug: Print debug messages and route ``logging`` to stderr.
        pager: Page tables always (True), never (False) or when too tall (None).
    """

    quiet: bool = False
    verbose: bool = False
    debug: bool = False
    pager: bool | None = None


settings = OutputSettings()


def configure(
    *,
    quiet: bool = False,
    verbose: bool = False,
    debug: bool = False,
    color: bool = True,
    pager: bool | None = None,
) -> None:
    """Apply the global output options."""
    settings.quiet = quiet
    settings.verbose = verbose or debug
    settings.debug = debug
    settings.pager = pager
    console.no_color = not color
    error_console.no_color = not color

    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(name)s: %(message)s",
            handlers=[RichHandler(console=error_console, show_time=False)],
            force=True,
        )


def info(message: str) -> None:
    if not settings.quiet:
        console.print(f"[info]{message}[/info]")


def success(message: str) -> None:
    if not settings.quiet:
        console.print(f"[success]{message}[/success]")


def verbose(message: str) -> None:
    if settings.verbose and not settings.quiet:
        console.print(f"[info]{message}[/info]")


def debug(message: str) -> None:
    if settings.debug:
        error_console.print(f"[warning]\\[debug][/warning] {message}")


def warning(message: str) -> None:
    """Print a warning to stderr unless quiet."""
    if not settings.quiet:
        error_console.print(f"[warning]Warning:[/warning] {message}")


def error(message: str, hint: str | None = None) -> None:
    """Print an error to stderr, optionally followed by a hint.

    Errors are printed even in quiet mode.
    """
    error_console.print(f"[error]Error:[/error] {message}")
    if hint:
        error_console.print(f"  [info]Hint:[/info] {hint}")


def print_table(table: Table) -> None:
    """Print a results table, through the system pager if it would not fit."""
    use_pager = settings.pager
    if use_pager is None:
        use_pager = console.is_terminal and table.row_count + 4 > console.height

    if use_pager:
        with console.pager(styles=not console.no_color):
            console.print(table)
    else:
        console.print(table)


def print_track(artist: str | None, title: str | None, *, prefix: str = "") -> None:
    """Print ``artist - title``, with an optional prefix such as the track id."""
    artist_str = escape(artist or "Unknown Artist")
    title_str = escape(title or "Unknown Title")
    line = f"[track.artist]{artist_str}[/track.artist] - [track.title]{title_str}[/track.title]"
    console.print(f"{prefix} {line}" if prefix else line)


def print_tags(tags: list[str]) -> None:
    """Print a tag list on one line."""
    if not tags:
        console.print("[dim](no tags)[/dim]")
        return
    console.print("; ".join(f"[track.tag]{escape(tag)}[/track.tag]" for tag in tags))
