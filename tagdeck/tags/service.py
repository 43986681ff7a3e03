"""Tag mutation commands against a track store.

Tag edits arrive as explicit calls (add this tag to these tracks) rather than
broadcast events. Each call rewrites the affected comment fields through the
codec and records the change so it can be undone.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from tagdeck.tags import codec

logger = logging.getLogger(__name__)


class TrackStore(Protocol):
    """Backend that owns track records.

    Records expose at least ``id`` and ``comment``.
    """

    def get_tracks(self, track_ids: Sequence[int]) -> list[Any]:
        """Return records for *track_ids* in the given order.

        Raises:
            TrackNotFoundError: If any id is unknown.
        """
        ...

    def all_tracks(self) -> list[Any]: ...

    def update_comment(self, track_id: int, comment: str) -> None: ...


@dataclass(frozen=True)
class CommentChange:
    """Old and new raw comment for one track."""

    track_id: int
    old_comment: str
    new_comment: str


class TagService:
    """Apply tag edits to tracks in a store, with undo/redo.

    The undo and redo stacks live on the instance. Every ``tagdeck tags``
    invocation builds a new service, so undo is only available to code that
    keeps one ``TagService`` across edits.

    Args:
        store: Track backend.
        capitalize: Upper-case the first letter of added tags.
    """

    def __init__(self, store: TrackStore, *, capitalize: bool = True) -> None:
        self.store = store
        self.capitalize = capitalize
        self._undo_stack: list[list[CommentChange]] = []
        self._redo_stack: list[list[CommentChange]] = []

    def _prepare_tag(self, tag: str) -> str:
        codec.validate_tag(tag)
        return codec.normalize_tag(tag) if self.capitalize else tag.strip()

    def _apply(self, track_ids: Sequence[int], rewrite: Callable[[str | None], str]) -> int:
        """Rewrite the comment of each track, recording one undo entry."""
        tracks = self.store.get_tracks(track_ids)
        changes: list[CommentChange] = []
        for track in tracks:
            old = track.comment or ""
            new = rewrite(track.comment)
            if new == old:
                continue
            self.store.update_comment(track.id, new)
            changes.append(CommentChange(track.id, old, new))

        if changes:
            self._undo_stack.append(changes)
            self._redo_stack.clear()
        return len(changes)

    def add_tag_to_records(self, track_ids: Sequence[int], tag: str) -> int:
        """Add *tag* to every track that does not already have it.

        Returns:
            Number of tracks changed.

        Raises:
            TagValidationError: If the tag contains the reserved separator.
            TrackNotFoundError: If any id is unknown.
        """
        value = self._prepare_tag(tag)
        if not value:
            return 0
        changed = self._apply(track_ids, lambda raw: codec.add_tag(raw, value))
        logger.info("Added tag %r to %d of %d tracks", value, changed, len(track_ids))
        return changed

    def remove_tag_from_records(self, track_ids: Sequence[int], tag: str) -> int:
        """Remove every case variant of *tag* from the given tracks."""
        value = tag.strip()
        if not value:
            return 0
        changed = self._apply(track_ids, lambda raw: codec.remove_tag(raw, value))
        logger.info("Removed tag %r from %d of %d tracks", value, changed, len(track_ids))
        return changed

    def toggle_tag(self, track_ids: Sequence[int], tag: str, primary_id: int | None = None) -> bool:
        """Add or remove *tag* on all tracks depending on the primary track.

        If the primary track (default: the first id) already carries the tag
        it is removed everywhere, otherwise it is added everywhere.

        Returns:
            True if the tag was added, False if it was removed.
        """
        if not track_ids:
            return False
        primary = primary_id if primary_id is not None else track_ids[0]
        (track,) = self.store.get_tracks([primary])
        if codec.decode(track.comment).has_tag(tag):
            self.remove_tag_from_records(track_ids, tag)
            return False
        self.add_tag_to_records(track_ids, tag)
        return True

    def set_tags(self, track_id: int, comment: str, tags: Sequence[str]) -> bool:
        """Replace one track's comment and tag set.

        Returns:
            True if the stored comment changed.
        """
        raw = codec.encode(comment, tags)
        return self._apply([track_id], lambda _old: raw) > 0

    def global_tags(self) -> list[str]:
        """All distinct tags in the store, sorted case-insensitively."""
        return codec.collect_tags(t.comment for t in self.store.all_tracks())

    def common_tags(self, track_ids: Sequence[int]) -> list[str]:
        """Tags shared by every given track."""
        if not track_ids:
            return []
        return codec.common_tags(t.comment for t in self.store.get_tracks(track_ids))

    @property
    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    @staticmethod
    def _label(verb: str, changes: list[CommentChange]) -> str:
        if len(changes) == 1:
            return f"{verb} Tag Change"
        return f"{verb} Tag Change ({len(changes)} tracks)"

    def undo(self) -> str | None:
        """Restore the comments changed by the most recent edit.

        Returns:
            A description of what was undone, or None if nothing to undo.
        """
        if not self._undo_stack:
            return None
        changes = self._undo_stack.pop()
        for change in changes:
            self.store.update_comment(change.track_id, change.old_comment)
        self._redo_stack.append(changes)
        return self._label("Undo", changes)

    def redo(self) -> str | None:
        """Re-apply the most recently undone edit."""
        if not self._redo_stack:
            return None
        changes = self._redo_stack.pop()
        for change in changes:
            self.store.update_comment(change.track_id, change.new_comment)
        self._undo_stack.append(changes)
        return self._label("Redo", changes)
