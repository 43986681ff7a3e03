"""Inspect and edit the tags stored in track comments."""

from __future__ import annotations

import click
from rich.markup import escape

from tagdeck.commands import pass_config
from tagdeck.config import Config
from tagdeck.exceptions import (
    NotFoundError,
    TagdeckError,
    ValidationError,
)
from tagdeck.library import LibraryStore, get_library_session
from tagdeck.tags import TagService, decode
from tagdeck.utils.output import (
    console,
    error,
    info,
    print_tags,
    print_track,
    success,
)

EXIT_VALIDATION_ERROR = 1
EXIT_LIBRARY_ERROR = 2


def _fail(e: TagdeckError) -> None:
    """Report a tag command failure and exit with the matching code."""
    if isinstance(e, (ValidationError, NotFoundError)):
        error(str(e))
        raise SystemExit(EXIT_VALIDATION_ERROR)
    error(f"Library error: {e}")
    raise SystemExit(EXIT_LIBRARY_ERROR)


@click.group("tags")
def cli() -> None:
    """Inspect and edit track tags.

    Tags live in the comment field as "comment && Tag1; Tag2". Track ids
    come from `tagdeck search --format ids`.
    """


@cli.command("list")
@pass_config
def list_cmd(config: Config) -> None:
    """List every tag used in the library."""
    try:
        with get_library_session(config.library_db) as session:
            tags = TagService(LibraryStore(session)).global_tags()
    except TagdeckError as e:
        _fail(e)
        return

    if not tags:
        info("No tags in library")
        return
    for tag in tags:
        click.echo(tag)


@cli.command("show")
@click.argument("track_ids", nargs=-1, type=int, required=True)
@pass_config
def show_cmd(config: Config, track_ids: tuple[int, ...]) -> None:
    """Show the comment and tags of tracks.

    With several TRACK_IDS the tags common to all of them are listed last.
    """
    try:
        with get_library_session(config.library_db) as session:
            store = LibraryStore(session)
            for track in store.get_tracks(track_ids):
                overlay = decode(track.comment)
                print_track(track.artist, track.title, prefix=f"{track.id}:")
                if overlay.comment:
                    console.print(f"  [dim]Comment:[/dim] {escape(overlay.comment)}")
                print_tags(overlay.tags)
            if len(track_ids) > 1:
                info("Common tags:")
                print_tags(TagService(store).common_tags(track_ids))
    except TagdeckError as e:
        _fail(e)


@cli.command("add")
@click.argument("tag")
@click.argument("track_ids", nargs=-1, type=int, required=True)
@pass_config
def add_cmd(config: Config, tag: str, track_ids: tuple[int, ...]) -> None:
    """Add TAG to every track in TRACK_IDS."""
    try:
        with get_library_session(config.library_db) as session:
            service = TagService(LibraryStore(session), capitalize=config.capitalize_tags)
            changed = service.add_tag_to_records(track_ids, tag)
    except TagdeckError as e:
        _fail(e)
        return
    success(f"Tagged {changed} of {len(track_ids)} tracks")


@cli.command("remove")
@click.argument("tag")
@click.argument("track_ids", nargs=-1, type=int, required=True)
@pass_config
def remove_cmd(config: Config, tag: str, track_ids: tuple[int, ...]) -> None:
    """Remove TAG (any letter case) from every track in TRACK_IDS."""
    try:
        with get_library_session(config.library_db) as session:
            changed = TagService(LibraryStore(session)).remove_tag_from_records(track_ids, tag)
    except TagdeckError as e:
        _fail(e)
        return
    success(f"Untagged {changed} of {len(track_ids)} tracks")


@cli.command("toggle")
@click.argument("tag")
@click.argument("track_ids", nargs=-1, type=int, required=True)
@click.option(
    "--primary",
    "-p",
    type=int,
    default=None,
    help="Track whose tags decide add or remove (default: first id)",
)
@pass_config
def toggle_cmd(config: Config, tag: str, track_ids: tuple[int, ...], primary: int | None) -> None:
    """Add TAG to all TRACK_IDS, or remove it if the primary track has it."""
    try:
        with get_library_session(config.library_db) as session:
            service = TagService(LibraryStore(session), capitalize=config.capitalize_tags)
            added = service.toggle_tag(track_ids, tag, primary_id=primary)
    except TagdeckError as e:
        _fail(e)
        return
    success(f"{'Added' if added else 'Removed'} '{tag}' on {len(track_ids)} tracks")


@cli.command("set")
@click.argument("track_id", type=int)
@click.option("--comment", "-m", default=None, help="User comment (default: keep current)")
@click.option("--tag", "-t", "tags", multiple=True, help="Tag to store (repeatable)")
@pass_config
def set_cmd(config: Config, track_id: int, comment: str | None, tags: tuple[str, ...]) -> None:
    """Replace the comment and tag set of one track.

    Without --tag the track's tags are cleared.
    """
    try:
        with get_library_session(config.library_db) as session:
            store = LibraryStore(session)
            if comment is None:
                (track,) = store.get_tracks([track_id])
                comment = decode(track.comment).comment
            changed = TagService(store).set_tags(track_id, comment, tags)
    except TagdeckError as e:
        _fail(e)
        return

    if changed:
        success(f"Updated track {track_id}")
    else:
        info(f"Track {track_id} unchanged")

