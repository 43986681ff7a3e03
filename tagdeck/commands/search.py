"""Search the library with the tagdeck query language."""

from __future__ import annotations

import json

import click
from rich.markup import escape
from rich.table import Table

from tagdeck.commands import pass_config
from tagdeck.config import Config
from tagdeck.exceptions import TagdeckError
from tagdeck.library import LibraryStore, LibraryTrack, get_library_session
from tagdeck.search.parser import parse_query
from tagdeck.search.query import execute_search
from tagdeck.tags.codec import decode
from tagdeck.utils.output import debug, error, info, print_table

EXIT_SUCCESS = 0
EXIT_NO_RESULTS = 0
EXIT_USAGE_ERROR = 1
EXIT_LIBRARY_ERROR = 2

# All available columns and their table configuration
# "clip": True means the column is subject to --clip truncation
COLUMN_DEFS: dict[str, dict] = {
    "id": {"header": "ID", "style": "dim", "justify": "right"},
    "artist": {"header": "Artist", "style": "track.artist", "justify": "left", "clip": True},
    "title": {"header": "Title", "style": "track.title", "justify": "left", "clip": True},
    "album": {"header": "Album", "style": None, "justify": "left", "clip": True},
    "genre": {"header": "Genre", "style": None, "justify": "left"},
    "key": {"header": "Key", "style": None, "justify": "left"},
    "bpm": {"header": "BPM", "style": None, "justify": "right"},
    "year": {"header": "Year", "style": None, "justify": "right"},
    "label": {"header": "Label", "style": None, "justify": "left", "clip": True},
    "comment": {"header": "Comment", "style": None, "justify": "left", "clip": True},
    "tags": {"header": "Tags", "style": "track.tag", "justify": "left"},
    "file": {"header": "File", "style": "path", "justify": "left"},
}


def _format_bpm(bpm: float | None) -> str:
    """Format BPM as an integer."""
    if bpm is None:
        return ""
    return str(round(bpm))


def _clip_text(value: str, max_width: int | None) -> str:
    """Truncate text to max_width, appending ellipsis if clipped."""
    if max_width is None or len(value) <= max_width:
        return value
    if max_width <= 1:
        return value[:max_width]
    return value[: max_width - 1] + "…"


def _get_cell_value(track: LibraryTrack, col: str, clip_width: int | None = None) -> str:
    """Get the formatted cell value for a column."""
    clip = clip_width if COLUMN_DEFS[col].get("clip") else None

    if col == "id":
        return str(track.id)
    elif col == "artist":
        return _clip_text(track.artist or "", clip)
    elif col == "title":
        return _clip_text(track.title or "", clip)
    elif col == "album":
        return _clip_text(track.album or "", clip)
    elif col == "genre":
        return track.genre or ""
    elif col == "key":
        return track.musical_key or ""
    elif col == "bpm":
        return _format_bpm(track.bpm)
    elif col == "year":
        return str(track.year) if track.year is not None else ""
    elif col == "label":
        return _clip_text(track.grouping or "", clip)
    elif col == "comment":
        return _clip_text(decode(track.comment).comment, clip)
    elif col == "tags":
        return "; ".join(decode(track.comment).tags)
    elif col == "file":
        return track.file_path or ""
    return ""


def parse_columns(columns: str) -> list[str]:
    """Split and validate a comma-separated column list.

    Raises:
        click.BadParameter: If a column name is unknown.
    """
    col_list = [c.strip() for c in columns.split(",") if c.strip()]
    for c in col_list:
        if c not in COLUMN_DEFS:
            raise click.BadParameter(
                f"Unknown column: {c}. Available: {', '.join(COLUMN_DEFS.keys())}",
                param_hint="--columns",
            )
    return col_list


@click.command("search")
@click.argument("query", nargs=-1)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "ids", "json"]),
    default="table",
    help="Output format (default: table)",
)
@click.option(
    "--limit",
    "-l",
    type=int,
    default=None,
    help="Limit number of results",
)
@click.option(
    "--columns",
    "-C",
    default=None,
    help=f"Comma-separated list of columns to display. Available: {', '.join(COLUMN_DEFS)}",
)
@click.option(
    "--clip",
    "-W",
    type=int,
    default=30,
    show_default=True,
    help="Max width for artist/title/album/comment columns (0 = no clip)",
)
@pass_config
def cli(
    config: Config,
    query: tuple[str, ...],
    output_format: str,
    limit: int | None,
    columns: str | None,
    clip: int,
) -> None:
    """Search tracks by metadata and tags.

    QUERY is joined with spaces. An empty query lists every track.

    \b
    Syntax examples:
      tagdeck search techno
      tagdeck search '"deep house"'
      tagdeck search artist:Prince 'title:"Purple Rain"'
      tagdeck search 'techno -minimal'
      tagdeck search -- techno -minimal
      tagdeck search bpm:120-130 year:>=2010
      tagdeck search tag:ambient tag:downtempo
      tagdeck search label:warp

    \b
    Output formats:
      --format table   Rich table (default)
      --format ids     One track id per line (for piping to `tagdeck tags`)
      --format json    JSON array of track objects
    """
    try:
        col_list = parse_columns(columns or config.columns)
    except click.BadParameter as e:
        error(e.format_message())
        raise SystemExit(EXIT_USAGE_ERROR)

    clip_width: int | None = clip if clip > 0 else None
    query_string = " ".join(query)

    parsed = parse_query(query_string)
    debug(f"Parsed query: {parsed}")

    try:
        with get_library_session(config.library_db) as session:
            tracks = execute_search(LibraryStore(session).all_tracks(), parsed)

            if limit is not None:
                tracks = tracks[:limit]

            if not tracks:
                info(f"No results for: {escape(query_string)}")
                raise SystemExit(EXIT_NO_RESULTS)

            if output_format == "table":
                _print_table(tracks, query_string, col_list, clip_width)
            elif output_format == "ids":
                _print_ids(tracks)
            elif output_format == "json":
                _print_json(tracks)
    except TagdeckError as e:
        error(f"Library error: {e}")
        raise SystemExit(EXIT_LIBRARY_ERROR)

    raise SystemExit(EXIT_SUCCESS)


def _print_table(
    tracks: list[LibraryTrack],
    query_string: str,
    col_list: list[str],
    clip_width: int | None = None,
) -> None:
    """Print results as a Rich table."""
    info(f"Search: {escape(query_string) or '(all)'} ({len(tracks)} results)")

    table = Table(header_style="bold")

    for col in col_list:
        cdef = COLUMN_DEFS[col]
        kwargs: dict = {"justify": cdef["justify"]}
        if cdef["style"]:
            kwargs["style"] = cdef["style"]
        table.add_column(cdef["header"], no_wrap=True, **kwargs)

    for t in tracks:
        table.add_row(*(escape(_get_cell_value(t, col, clip_width)) for col in col_list))

    print_table(table)


def _print_ids(tracks: list[LibraryTrack]) -> None:
    """Print one track id per line."""
    for t in tracks:
        click.echo(str(t.id))


def track_to_dict(t: LibraryTrack) -> dict:
    """Serialize a track, including its decoded comment overlay."""
    overlay = decode(t.comment)
    return {
        "id": t.id,
        "persistent_id": t.persistent_id,
        "file_path": t.file_path,
        "artist": t.artist,
        "title": t.title,
        "album": t.album,
        "genre": t.genre,
        "musical_key": t.musical_key,
        "bpm": t.bpm,
        "year": t.year,
        "grouping": t.grouping,
        "comment": t.comment,
        "user_comment": overlay.comment,
        "tags": overlay.tags,
    }


def _print_json(tracks: list[LibraryTrack]) -> None:
    """Print results as JSON array."""
    click.echo(json.dumps([track_to_dict(t) for t in tracks], indent=2))
