"""Load a library export into the local library database."""

from __future__ import annotations

from pathlib import Path

import click

from tagdeck.commands import pass_config
from tagdeck.config import Config
from tagdeck.exceptions import LibraryImportError, TagdeckError
from tagdeck.library import LibraryStore, get_library_session, load_tracks
from tagdeck.utils.output import error, success, verbose

EXIT_IMPORT_ERROR = 1
EXIT_LIBRARY_ERROR = 2


@click.command("import")
@click.argument(
    "export_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@pass_config
def cli(config: Config, export_file: Path) -> None:
    """Replace the library with the tracks in EXPORT_FILE.

    EXPORT_FILE is a JSON array of track objects. Recognized keys are
    id (required), persistent_id, file_path, artist, title, album, genre,
    musical_key, comment, grouping, bpm and year; other keys are ignored.

    \b
    Example entry:
      {"id": 12, "artist": "Prince", "title": "Purple Rain", "bpm": 113,
       "comment": "Closer && Classic; Ballad"}
    """
    try:
        tracks = load_tracks(export_file)
    except LibraryImportError as e:
        error(str(e))
        raise SystemExit(EXIT_IMPORT_ERROR)

    verbose(f"Read {len(tracks)} tracks from {export_file}")

    try:
        with get_library_session(config.library_db) as session:
            count = LibraryStore(session).replace_all(tracks)
    except TagdeckError as e:
        error(f"Library error: {e}")
        raise SystemExit(EXIT_LIBRARY_ERROR)

    success(f"Imported {count} tracks into {config.library_db}")
