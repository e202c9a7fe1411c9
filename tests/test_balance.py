"""Tests for bracket classification and matching."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
from bf_repl.balance import (
    BlockState,
    UnbalancedBrackets,
    classify,
    find_matching_close,
    has_block,
)


class TestClassify:
    """Test classify()."""

    @pytest.mark.parametrize("text", [
        "",
        "+-<>.,",
        "[]",
        "+[-]",
        "[[]]",
        "[>[>+<-]<-]>",
        "[][][]",
        "a[b]c",
    ])
    def test_closed(self, text):
        """Balanced text is CLOSED."""
        assert classify(text) is BlockState.CLOSED

    @pytest.mark.parametrize("text", [
        "[",
        "+[",
        "[[]",
        "[>[>+<-]<-",
        "[][",
    ])
    def test_open(self, text):
        """Text ending mid-nest is OPEN."""
        assert classify(text) is BlockState.OPEN

    @pytest.mark.parametrize("text", [
        "]",
        "+]",
        "[]]",
        "][",
        "]" + "[" * 10,
    ])
    def test_invalid(self, text):
        """A premature closing bracket is INVALID whatever follows."""
        assert classify(text) is BlockState.INVALID

    def test_proper_prefixes_are_open(self):
        """Every proper prefix cut inside a block is OPEN."""
        text = "+[>[>+<-]<-]>"
        for cut in range(2, len(text) - 1):
            prefix = text[:cut]
            expected = BlockState.CLOSED if prefix.count("[") == prefix.count("]") else BlockState.OPEN
            assert classify(prefix) is expected


class TestFindMatchingClose:
    """Test find_matching_close()."""

    def test_simple_block(self):
        assert find_matching_close("[]") == 1

    def test_with_prefix(self):
        assert find_matching_close("++[-]>") == 4

    def test_matches_first_block_only(self):
        """The match is for the first opening bracket."""
        assert find_matching_close("[-][+]") == 2

    def test_nested(self):
        text = "+[>[>+<-]<-]>"
        assert find_matching_close(text) == 11

    def test_span_is_minimal_balanced(self):
        """The matched span is balanced and no shorter prefix of it is."""
        text = "x[[a][b[c]]]y[z]"
        start = text.index("[")
        end = find_matching_close(text)
        span = text[start:end + 1]

        assert span.count("[") == span.count("]")
        for cut in range(1, len(span)):
            part = span[:cut]
            assert part.count("[") != part.count("]")

    def test_not_found(self):
        assert find_matching_close("[[]") is None

    def test_no_brackets(self):
        assert find_matching_close("+++") is None


class TestHelpers:
    """Test has_block and UnbalancedBrackets."""

    def test_has_block(self):
        assert has_block("+[-]") is True
        assert has_block("+-") is False

    def test_unbalanced_brackets_carries_state(self):
        error = UnbalancedBrackets(BlockState.OPEN)
        assert error.state is BlockState.OPEN
        assert str(error) == "unbalanced brackets"
        assert isinstance(error, ValueError)
