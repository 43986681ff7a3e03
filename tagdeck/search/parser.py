"""Compile search input into a typed filter set.

Syntax:

    techno                 text anywhere in the track
    "deep house"           quoted phrase
    -minimal               exclude tracks containing the text
    artist:Prince          field-scoped text (artist, title, album, genre,
                           label, key, tag)
    bpm:128  bpm:>=128     numeric match or comparison (bpm, year)
    bpm:120-130            inclusive numeric range

Malformed input never raises: unknown field prefixes search the whole token
as text, unterminated quotes are read literally and numeric tokens that do
not parse are dropped.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from tagdeck.search.ast_nodes import (
    ANY_FIELD,
    COMPARISON_OPERATORS,
    NUMERIC_FIELDS,
    RANGE_OPERATOR,
    STRING_FIELDS,
    NumericFilter,
    SearchQuery,
    StringFilter,
)
from tagdeck.search.tokenizer import tokenize

logger = logging.getLogger(__name__)

# Leading decimal literal; trailing text is ignored.
_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True)
class ClassifiedToken:
    """One token split into its negation flag, field and raw value."""

    negate: bool
    field: str
    value: str


def parse_number(text: str) -> float | None:
    """Read the leading number of *text*, or None if it does not start with one."""
    match = _NUMBER_RE.match(text.lstrip())
    if match is None:
        return None
    return float(match.group(0))


def classify_token(token: str) -> ClassifiedToken | None:
    """Split a token into negation, field name and value.

    Returns None for a token that carries nothing to search for (a bare ``-``).
    The value is returned unstripped; quote handling is left to the string
    builder so numeric values see the raw text.
    """
    negate = False
    if token.startswith("-"):
        negate = True
        token = token[1:]

    if not token:
        return None

    prefix, sep, remainder = token.partition(":")
    if sep:
        field_name = prefix.lower()
        if field_name in NUMERIC_FIELDS or field_name in STRING_FIELDS:
            return ClassifiedToken(negate=negate, field=field_name, value=remainder)

    # No colon or unknown prefix: the whole token is free text.
    return ClassifiedToken(negate=negate, field=ANY_FIELD, value=token)


def strip_quotes(value: str) -> tuple[str, bool]:
    """Strip surrounding quotes from a value.

    Returns:
        Tuple of (value, exact). ``exact`` is True only for a properly closed
        quoted phrase; an unterminated leading quote is dropped and the rest
        is read literally.
    """
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1], True
    if value.startswith('"'):
        return value[1:], False
    return value, False


def build_numeric_filter(field: str, value: str) -> NumericFilter | None:
    """Interpret a numeric field value as a range, comparison or exact match.

    Args:
        field: Numeric field name (``bpm`` or ``year``).
        value: Text after the field prefix.

    Returns:
        A NumericFilter, or None when no number could be read.
    """
    if "-" in value:
        low_text, _, high_text = value.partition("-")
        low = parse_number(low_text)
        high = parse_number(high_text)
        if low is not None and high is not None:
            return NumericFilter(field=field, operator=RANGE_OPERATOR, value=low, max_value=high)

    for op in COMPARISON_OPERATORS:
        if value.startswith(op):
            number = parse_number(value[len(op) :])
            if number is None:
                return None
            return NumericFilter(field=field, operator=op, value=number)

    number = parse_number(value)
    if number is None:
        return None
    return NumericFilter(field=field, operator="=", value=number)


def build_string_filter(field: str, value: str, negate: bool) -> StringFilter:
    """Package a string filter, stripping quotes from the value."""
    value, exact = strip_quotes(value)
    return StringFilter(field=field, value=value, negate=negate, exact=exact)


def parse_query(query_string: str) -> SearchQuery:
    """Parse a search query string into a SearchQuery.

    Args:
        query_string: The search query to parse.

    Returns:
        A SearchQuery. Empty input yields a query that matches everything.
    """
    string_filters: list[StringFilter] = []
    numeric_filters: list[NumericFilter] = []

    for token in tokenize(query_string):
        classified = classify_token(token)
        if classified is None:
            continue

        if classified.field in NUMERIC_FIELDS:
            numeric = build_numeric_filter(classified.field, classified.value)
            if numeric is None:
                logger.debug("Dropping unparseable numeric token %r", token)
                continue
            if classified.negate:
                logger.debug("Negation has no effect on numeric token %r", token)
            numeric_filters.append(numeric)
        else:
            string_filters.append(
                build_string_filter(classified.field, classified.value, classified.negate)
            )

    return SearchQuery(
        string_filters=tuple(string_filters),
        numeric_filters=tuple(numeric_filters),
    )
