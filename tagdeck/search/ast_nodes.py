"""Data classes for parsed search queries."""

from __future__ import annotations

from dataclasses import dataclass

# Field name -> record attribute. Adding a searchable field is a change here only.
STRING_FIELDS: dict[str, str | None] = {
    "artist": "artist",
    "title": "title",
    "album": "album",
    "genre": "genre",
    "label": "grouping",
    "key": "musical_key",
    # Resolved through the tag codec, not a plain attribute.
    "tag": None,
}

NUMERIC_FIELDS: dict[str, str] = {
    "bpm": "bpm",
    "year": "year",
}

# Field used for unscoped tokens and unknown field prefixes.
ANY_FIELD = "any"

# Attributes concatenated for ``any`` searches, in order.
ANY_FIELD_ATTRS: tuple[str, ...] = ("artist", "title", "album", "comment", "grouping", "bpm")

# Comparison prefixes, longest first so ">" never swallows ">=".
COMPARISON_OPERATORS: tuple[str, ...] = (">=", ">", "<=", "<")

RANGE_OPERATOR = "range"


@dataclass(frozen=True)
class StringFilter:
    """A case-insensitive substring filter like ``artist:Prince`` or ``-minimal``.

    ``exact`` records that the value came from a quoted phrase. It does not
    make the comparison stricter: every string filter is a substring test.
    """

    field: str
    value: str
    negate: bool = False
    exact: bool = False


@dataclass(frozen=True)
class NumericFilter:
    """A numeric filter like ``bpm:>=128`` or ``year:1990-1999``.

    Operators:
        - ``=``: equal
        - ``>``, ``<``, ``>=``, ``<=``: comparison
        - ``range``: inclusive range, value=N, max_value=M as written
    """

    field: str
    operator: str
    value: float
    max_value: float | None = None


@dataclass(frozen=True)
class SearchQuery:
    """Top-level search query: every filter is AND-ed."""

    string_filters: tuple[StringFilter, ...] = ()
    numeric_filters: tuple[NumericFilter, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.string_filters and not self.numeric_filters
