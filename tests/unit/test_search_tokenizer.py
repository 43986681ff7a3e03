"""Unit tests for the search tokenizer."""

from __future__ import annotations

import pytest

from tagdeck.search.tokenizer import tokenize


class TestTokenize:
    def test_empty_input(self) -> None:
        assert tokenize("") == []

    def test_whitespace_only(self) -> None:
        assert tokenize("   \t ") == []

    def test_single_word(self) -> None:
        assert tokenize("techno") == ["techno"]

    def test_splits_on_whitespace_runs(self) -> None:
        assert tokenize("  techno   -minimal\tbpm:128 ") == ["techno", "-minimal", "bpm:128"]

    def test_field_tokens_with_quoted_phrase(self) -> None:
        tokens = tokenize('artist:Prince title:"Purple Rain"')
        assert tokens == ["artist:Prince", 'title:"Purple Rain"']

    def test_quoted_phrase_keeps_quotes(self) -> None:
        assert tokenize('"deep house" music') == ['"deep house"', "music"]

    def test_quote_in_middle_of_token(self) -> None:
        assert tokenize('a"b c"d e') == ['a"b c"d', "e"]

    def test_unterminated_quote_runs_to_end(self) -> None:
        assert tokenize('techno "late night') == ["techno", '"late night']

    def test_negated_quoted_phrase(self) -> None:
        assert tokenize('-"dark psy"') == ['-"dark psy"']

    def test_empty_quotes(self) -> None:
        assert tokenize('tag:""') == ['tag:""']

    @pytest.mark.parametrize(
        "query",
        ['"', '""""', 'a"', '" "', "::", "-", 'x:"y', "ünïcödé 日本"],
    )
    def test_never_fails(self, query: str) -> None:
        tokens = tokenize(query)
        assert isinstance(tokens, list)
        # No characters other than whitespace are lost
        assert "".join(tokens) == "".join(query.split()) or '"' in query
