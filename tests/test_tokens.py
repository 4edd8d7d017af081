"""Tests for TokenStream: cursor handling, lookahead and sharing."""

from __future__ import annotations

import copy

import pytest

from tokenrules import NonstringTokenError, TokenError, TokenStream, TokenStreamError


class TestConstruction:
    def test_text_is_split_on_whitespace(self) -> None:
        assert TokenStream("a  b\tc").remaining() == ["a", "b", "c"]

    def test_custom_splitter(self) -> None:
        stream = TokenStream("a,b,,c", split=lambda text: text.split(","))
        assert stream.remaining() == ["a", "b", "", "c"]

    def test_list_and_tuple_sources(self) -> None:
        assert TokenStream(["x", "y"]).remaining() == ["x", "y"]
        assert TokenStream(("x", "y")).remaining() == ["x", "y"]

    def test_other_iterables_are_materialised(self) -> None:
        assert TokenStream(iter(["p", "q"])).remaining() == ["p", "q"]

    def test_non_iterable_source_is_rejected(self) -> None:
        with pytest.raises(TokenStreamError):
            TokenStream(42)

    def test_non_string_token_is_rejected(self) -> None:
        with pytest.raises(NonstringTokenError) as exc:
            TokenStream(["a", 1])
        # classifiable both as a stream problem and as a token problem
        assert isinstance(exc.value, TokenStreamError)
        assert isinstance(exc.value, TokenError)


class TestConsuming:
    def test_next_token_returns_raw_tokens(self) -> None:
        stream = TokenStream(["a", "", "b"])
        assert stream.next_token() == "a"
        assert stream.next_token() == ""
        assert stream.next_token() == "b"
        assert stream.next_token() is None

    def test_next_steps_over_empty_tokens(self) -> None:
        stream = TokenStream(["", "", "a", "", "b"])
        assert stream.next() == "a"
        assert stream.next() == "b"
        assert stream.next() is None

    def test_skip_is_safe_past_the_end(self) -> None:
        stream = TokenStream(["a"])
        assert stream.skip(5) is stream
        assert stream.is_empty()
        assert stream.peek() is None
        assert stream.next() is None

    def test_reset(self) -> None:
        stream = TokenStream(["a", "b"]).skip(2)
        assert stream.reset().next() == "a"

    def test_remaining_is_a_copy(self) -> None:
        stream = TokenStream(["a", "b", "c"]).skip()
        rest = stream.remaining()
        rest.append("z")
        assert stream.remaining() == ["b", "c"]


class TestLookahead:
    def test_peek_does_not_move_the_cursor(self) -> None:
        stream = TokenStream(["a", "b"])
        assert stream.peek() == "a"
        assert stream.peek(1) == "b"
        assert stream.position == 0

    def test_peek_skips_a_leading_empty_token(self) -> None:
        stream = TokenStream(["", "a"])
        assert stream.peek() == "a"
        assert stream.peek_token() == ""

    def test_peek_counts_empties_only_inside_its_window(self) -> None:
        """Two leading empties with n=0 only account for the first one."""
        stream = TokenStream(["", "", "a"])
        assert stream.peek() == ""
        assert stream.next() == "a"

    def test_peek_token_rejects_negative_offsets(self) -> None:
        with pytest.raises(ValueError):
            TokenStream(["a"]).peek_token(-1)

    def test_empty_token_is_not_absence(self) -> None:
        stream = TokenStream([""])
        assert stream.peek_token() == ""
        assert stream.skip().peek_token() is None


class TestDuplication:
    def test_duplicate_has_an_independent_cursor(self) -> None:
        original = TokenStream(["a", "b", "c"])
        dup = original.duplicate()
        dup.next()
        dup.next()
        assert original.position == 0
        assert original.peek() == "a"
        assert dup.peek() == "c"

    def test_duplicate_shares_backing_tokens(self) -> None:
        original = TokenStream(["a", "b"])
        dup = original.duplicate()
        assert dup._tokens is original._tokens
        assert list(dup) == list(original)

    def test_copy_module_duplicates(self) -> None:
        original = TokenStream(["a", "b"]).skip()
        dup = copy.copy(original)
        assert dup.position == 1
        assert dup._tokens is original._tokens

    def test_iteration_covers_the_whole_buffer(self) -> None:
        stream = TokenStream(["a", "b", "c"]).skip(2)
        assert list(stream) == ["a", "b", "c"]
        assert len(stream) == 3
