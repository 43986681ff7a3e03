"""SQLAlchemy-backed track store."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Sequence
from dataclasses import fields
from pathlib import Path
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from tagdeck.exceptions import LibraryImportError, TrackNotFoundError
from tagdeck.library.models import LibraryTrack, Track

log = logging.getLogger(__name__)

_TRACK_FIELDS = frozenset(f.name for f in fields(Track))


class LibraryStore:
    """Track store over a library database session.

    Implements the ``TrackStore`` protocol used by the tag service.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def all_tracks(self) -> list[LibraryTrack]:
        """All tracks ordered by id."""
        return list(self.session.scalars(select(LibraryTrack).order_by(LibraryTrack.id)))

    def get_tracks(self, track_ids: Sequence[int]) -> list[LibraryTrack]:
        """Tracks for *track_ids* in the given order.

        Raises:
            TrackNotFoundError: If any id is unknown.
        """
        rows = self.session.scalars(select(LibraryTrack).where(LibraryTrack.id.in_(track_ids)))
        by_id = {row.id: row for row in rows}
        for track_id in track_ids:
            if track_id not in by_id:
                raise TrackNotFoundError(track_id)
        return [by_id[track_id] for track_id in track_ids]

    def update_comment(self, track_id: int, comment: str) -> None:
        track = self.session.get(LibraryTrack, track_id)
        if track is None:
            raise TrackNotFoundError(track_id)
        track.comment = comment
        self.session.flush()

    def replace_all(self, tracks: Iterable[Track]) -> int:
        """Replace the store contents with *tracks*.

        Returns:
            Number of tracks stored.
        """
        self.session.execute(delete(LibraryTrack))
        self.session.expunge_all()
        count = 0
        for track in tracks:
            self.session.add(LibraryTrack.from_record(track))
            count += 1
        self.session.flush()
        log.info("Stored %d tracks", count)
        return count


def _track_from_dict(data: dict[str, Any]) -> Track:
    """Build a Track from one export entry, ignoring unknown keys."""
    values = {k: v for k, v in data.items() if k in _TRACK_FIELDS}
    if "id" not in values:
        raise ValueError("missing 'id'")
    values["id"] = int(values["id"])
    if values.get("bpm") is not None:
        values["bpm"] = float(values["bpm"])
    if values.get("year") is not None:
        values["year"] = int(values["year"])
    return Track(**values)


def load_tracks(path: Path) -> list[Track]:
    """Read a JSON library export (an array of track objects).

    Raises:
        LibraryImportError: If the file is unreadable or malformed.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise LibraryImportError(path, str(e)) from e
    except json.JSONDecodeError as e:
        raise LibraryImportError(path, f"invalid JSON: {e}") from e

    if not isinstance(data, list):
        raise LibraryImportError(path, "expected a JSON array of tracks")

    tracks: list[Track] = []
    seen_ids: set[int] = set()
    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise LibraryImportError(path, f"entry {index} is not an object")
        try:
            track = _track_from_dict(entry)
        except (TypeError, ValueError) as e:
            raise LibraryImportError(path, f"entry {index}: {e}") from e
        if track.id in seen_ids:
            raise LibraryImportError(path, f"entry {index}: duplicate id {track.id}")
        seen_ids.add(track.id)
        tracks.append(track)
    return tracks
