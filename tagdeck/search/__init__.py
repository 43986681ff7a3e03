"""Search query parsing and in-memory evaluation."""

from tagdeck.search.ast_nodes import (
    NumericFilter,
    SearchQuery,
    StringFilter,
)
from tagdeck.search.parser import parse_query
from tagdeck.search.query import execute_search, matches
from tagdeck.search.tokenizer import tokenize

__all__ = [
    "NumericFilter",
    "SearchQuery",
    "StringFilter",
    "execute_search",
    "matches",
    "parse_query",
    "tokenize",
]
