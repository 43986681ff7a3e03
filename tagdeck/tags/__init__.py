"""Tag overlay codec and tag mutation service."""

from tagdeck.tags.codec import (
    SEPARATOR,
    TagOverlay,
    add_tag,
    collect_tags,
    common_tags,
    decode,
    encode,
    normalize_tag,
    remove_tag,
    validate_tag,
)
from tagdeck.tags.service import TagService, TrackStore

__all__ = [
    "SEPARATOR",
    "TagOverlay",
    "TagService",
    "TrackStore",
    "add_tag",
    "collect_tags",
    "common_tags",
    "decode",
    "encode",
    "normalize_tag",
    "remove_tag",
    "validate_tag",
]
