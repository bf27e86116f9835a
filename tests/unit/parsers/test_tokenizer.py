#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/parsers/test_tokenizer.py
"""Unit tests for the restricted mistune tokenizer."""

import pytest

from legacymd.delimiters import encode_entity_marker, encode_table_marker
from legacymd.parsers._tokenizer import MARKER_TOKEN, get_tokenizer


def _tokens(text):
    tokens, _state = get_tokenizer(20).parse(text)
    return tokens


def _inline(text):
    (paragraph,) = [token for token in _tokens(text) if token["type"] != "blank_line"]
    return paragraph["children"]


@pytest.mark.unit
class TestTokenizer:
    """Tests for the tokenizer configuration."""

    def test_tokenizer_cached(self):
        """Test that one instance is shared per nesting limit."""
        assert get_tokenizer(20) is get_tokenizer(20)
        assert get_tokenizer(20) is not get_tokenizer(5)

    def test_headings_disabled(self):
        """Test that heading syntax stays a paragraph."""
        assert [token["type"] for token in _tokens("# title")] == ["paragraph"]

    def test_indented_code_disabled(self):
        """Test that indented text is not a code block."""
        assert "block_code" not in [token["type"] for token in _tokens("    code")]

    def test_enabled_blocks(self):
        """Test that lists, fences, quotes and breaks are recognized."""
        types = [token["type"] for token in _tokens("- a\n\n```\nx\n```\n\n> q\n\n---\n")]
        assert [t for t in types if t != "blank_line"] == ["list", "block_code", "block_quote", "thematic_break"]

    def test_entity_marker_token(self):
        """Test that an entity marker becomes one token."""
        children = _inline("hi " + encode_entity_marker("USER_FOLLOW", "42"))
        marker = children[-1]
        assert marker["type"] == MARKER_TOKEN
        assert marker["attrs"] == {"marker_type": "USER_FOLLOW", "body": "42"}

    def test_marker_body_not_tokenized(self):
        """Test that Markdown inside a marker is left alone."""
        children = _inline(encode_entity_marker("URL", "https://x.com/a_b_c*d*"))
        assert [token["type"] for token in children] == [MARKER_TOKEN]
        assert children[0]["attrs"]["body"] == "https://x.com/a_b_c*d*"

    def test_table_marker_token(self):
        """Test that a table marker becomes one token."""
        children = _inline("a" + encode_table_marker([["x", "y"]]) + "b")
        assert [token["type"] for token in children] == ["text", MARKER_TOKEN, "text"]
        assert children[1]["attrs"]["marker_type"] == "TABLE"

    def test_inline_html_disabled(self):
        """Test that raw HTML is text."""
        assert [token["type"] for token in _inline("<i>x</i>")] == ["text"]
