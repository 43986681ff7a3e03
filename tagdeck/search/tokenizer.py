"""Split raw search input into quote-aware tokens."""

from __future__ import annotations

import logging
from importlib import resources

from lark import Lark, UnexpectedInput

logger = logging.getLogger(__name__)


def _load_grammar() -> str:
    """Load the Lark grammar from the package resources."""
    return resources.files("tagdeck.search").joinpath("grammar.lark").read_text()


_GRAMMAR_TEXT = _load_grammar()

_parser = Lark(
    _GRAMMAR_TEXT,
    parser="lalr",
)


def tokenize(query_string: str) -> list[str]:
    """Split a query string into tokens.

    Whitespace separates tokens except inside double quotes. Quote
    characters are kept in the token; the classifier strips them.

    Args:
        query_string: Raw user input.

    Returns:
        Tokens in input order. Empty input yields an empty list.
    """
    if not query_string or query_string.isspace():
        return []

    try:
        tree = _parser.parse(query_string)
    except UnexpectedInput as e:
        # Every character is either whitespace or token text, so the grammar
        # accepts all input; this only guards against a broken grammar file.
        logger.warning("Could not tokenize query %r: %s", query_string, e)
        return []

    return [str(token) for token in tree.children]
