"""Evaluate a SearchQuery against in-memory track records."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, TypeVar

from tagdeck.search.ast_nodes import (
    ANY_FIELD,
    ANY_FIELD_ATTRS,
    NUMERIC_FIELDS,
    RANGE_OPERATOR,
    STRING_FIELDS,
    NumericFilter,
    SearchQuery,
    StringFilter,
)
from tagdeck.tags.codec import decode

T = TypeVar("T")


def _numeric_value(record: Any, field: str) -> float | None:
    """Read a numeric attribute, coercing numeric strings (years are often text)."""
    value = getattr(record, NUMERIC_FIELDS[field], None)
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip())
    except ValueError:
        return None


def _format_bpm(bpm: Any) -> str:
    """Format BPM for text search: ``128`` rather than ``128.0``."""
    if isinstance(bpm, float) and bpm.is_integer():
        return str(int(bpm))
    return str(bpm)


def _any_text(record: Any) -> str:
    """Concatenate every searchable text attribute of a record."""
    parts: list[str] = []
    for attr in ANY_FIELD_ATTRS:
        value = getattr(record, attr, None)
        if not value:
            continue
        parts.append(_format_bpm(value) if attr == "bpm" else str(value))
    return " ".join(parts)


def numeric_filter_matches(ff: NumericFilter, record: Any) -> bool:
    """Check one numeric filter. A record without the field never matches."""
    value = _numeric_value(record, ff.field)
    if value is None:
        return False

    op = ff.operator
    if op == RANGE_OPERATOR:
        high = ff.max_value if ff.max_value is not None else ff.value
        low, high = min(ff.value, high), max(ff.value, high)
        return low <= value <= high
    if op == ">":
        return value > ff.value
    if op == ">=":
        return value >= ff.value
    if op == "<":
        return value < ff.value
    if op == "<=":
        return value <= ff.value
    return value == ff.value


def string_filter_matches(sf: StringFilter, record: Any) -> bool:
    """Check one string filter, including its negation."""
    needle = sf.value.casefold()

    if sf.field == ANY_FIELD:
        matched = needle in _any_text(record).casefold()
    elif sf.field == "tag":
        tags = decode(getattr(record, "comment", None)).tags
        matched = any(needle in tag.casefold() for tag in tags)
    else:
        attr = STRING_FIELDS.get(sf.field)
        value = getattr(record, attr, None) if attr else None
        matched = bool(value) and needle in str(value).casefold()

    return not matched if sf.negate else matched


def matches(query: SearchQuery, record: Any) -> bool:
    """Return True if *record* passes every filter in *query*."""
    for ff in query.numeric_filters:
        if not numeric_filter_matches(ff, record):
            return False
    for sf in query.string_filters:
        if not string_filter_matches(sf, record):
            return False
    return True


def execute_search(records: Iterable[T], query: SearchQuery) -> list[T]:
    """Filter records through a parsed SearchQuery.

    Args:
        records: Track records in display order.
        query: Parsed SearchQuery.

    Returns:
        Matching records in their original relative order.
    """
    if query.is_empty:
        return list(records)
    return [record for record in records if matches(query, record)]
