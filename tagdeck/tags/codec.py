"""Comment/tag overlay codec.

External taggers only know a single free-text comment field, so the tag set
is stored inside it::

    User comment && Ambient; Downtempo; Late Night

Everything before the first ``" && "`` is the user comment; the rest is a
``;``-separated tag block. Without tags the field is just the comment.

A comment that itself contains ``" && "`` is split at its first occurrence.
That is a property of the stored format and is kept as-is for compatibility
with data already written by other tools.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from tagdeck.exceptions import TagValidationError

logger = logging.getLogger(__name__)

SEPARATOR = " && "
TAG_DELIMITER = ";"
TAG_JOINER = "; "


@dataclass
class TagOverlay:
    """Decoded form of a comment field."""

    comment: str = ""
    tags: list[str] = field(default_factory=list)

    def has_tag(self, tag: str) -> bool:
        """Case-insensitive membership test."""
        folded = tag.strip().casefold()
        return any(t.casefold() == folded for t in self.tags)

    def encode(self) -> str:
        return encode(self.comment, self.tags)


def decode(raw: str | None) -> TagOverlay:
    """Split a raw comment field into user comment and tags.

    Args:
        raw: Stored comment text, may be None or empty.

    Returns:
        TagOverlay with tags trimmed, blanks dropped and order preserved.
    """
    if not raw:
        return TagOverlay()

    comment, sep, tag_block = raw.partition(SEPARATOR)
    if not sep:
        return TagOverlay(comment=raw)

    if SEPARATOR in tag_block:
        logger.debug("Ambiguous comment field, splitting at first %r: %r", SEPARATOR, raw)

    tags = [t.strip() for t in tag_block.split(TAG_DELIMITER)]
    return TagOverlay(comment=comment, tags=[t for t in tags if t])


def validate_tag(tag: str) -> None:
    """Reject tag values that would corrupt the stored overlay.

    Raises:
        TagValidationError: If the tag contains the reserved separator.
    """
    if SEPARATOR in tag:
        raise TagValidationError(tag, f"tags cannot contain '{SEPARATOR}'")


def encode(comment: str, tags: Iterable[str]) -> str:
    """Build the raw comment field from a comment and tag list.

    The comment is written unchanged. Tags are trimmed and blanks dropped;
    with no tags left the result is exactly *comment*.

    Raises:
        TagValidationError: If any tag contains the reserved separator.
    """
    tag_list = list(tags)
    for tag in tag_list:
        validate_tag(tag)

    cleaned = [t.strip() for t in tag_list]
    cleaned = [t for t in cleaned if t]
    if not cleaned:
        return comment
    return comment + SEPARATOR + TAG_JOINER.join(cleaned)


def normalize_tag(tag: str) -> str:
    """Trim a tag and upper-case its first character."""
    tag = tag.strip()
    return tag[:1].upper() + tag[1:]


def add_tag(raw: str | None, tag: str) -> str:
    """Return *raw* with *tag* appended unless already present (case-insensitive)."""
    validate_tag(tag)
    overlay = decode(raw)
    tag = tag.strip()
    if not tag or overlay.has_tag(tag):
        return raw or ""
    overlay.tags.append(tag)
    return overlay.encode()


def remove_tag(raw: str | None, tag: str) -> str:
    """Return *raw* without any case variant of *tag*."""
    overlay = decode(raw)
    folded = tag.strip().casefold()
    remaining = [t for t in overlay.tags if t.casefold() != folded]
    if len(remaining) == len(overlay.tags):
        return raw or ""
    return encode(overlay.comment, remaining)


def collect_tags(raws: Iterable[str | None]) -> list[str]:
    """Distinct tags across many comment fields, sorted case-insensitively.

    Tags differing only in case are merged; the first spelling seen wins.
    """
    seen: dict[str, str] = {}
    for raw in raws:
        for tag in decode(raw).tags:
            seen.setdefault(tag.casefold(), tag)
    return sorted(seen.values(), key=str.casefold)


def common_tags(raws: Iterable[str | None]) -> list[str]:
    """Tags present on every given comment field, in the first field's order."""
    common: list[str] | None = None
    for raw in raws:
        overlay = decode(raw)
        if common is None:
            common = list(overlay.tags)
        else:
            common = [t for t in common if overlay.has_tag(t)]
        if not common:
            return []
    return common or []
