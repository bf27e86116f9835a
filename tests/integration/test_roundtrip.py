#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/integration/test_roundtrip.py
"""Integration tests rendering documents and parsing the result back.

Documents produced by the renderer must parse back to the same entities and
structure when the same users can be resolved.
"""

import pytest

from legacymd.ast import (
    CashTag,
    CodeBlock,
    DateTime,
    Document,
    Emphasis,
    HashTag,
    Link,
    List,
    ListItem,
    Mention,
    Strong,
    Text,
)
from legacymd.parsers.legacy import LegacyMarkdownParser
from legacymd.renderers.legacy import LegacyMarkdownRenderer


def _round_trip(document, resolver=None, entities=None):
    result = LegacyMarkdownRenderer().render_to_result(document)
    payload = result.entities if entities is None else entities(result)
    return result, LegacyMarkdownParser(resolver=resolver).parse(result.text, payload)


@pytest.mark.integration
class TestRoundTrip:
    """Tests for render then parse."""

    def test_sample_document(self, sample_document, resolver):
        """Test text, emphasis, mention, hashtag, link and list together."""
        result, parsed = _round_trip(sample_document, resolver)
        assert result.text == (
            "Hello @Jane Doe, see *this* #release at [ the notes ](https://example.com/notes)\n- first\n- second\n"
        )
        assert parsed.children == sample_document.children
        assert not parsed.degraded

    def test_mentions_only_payload(self, resolver):
        """Test round trip with only the userMentions group as entities."""
        document = Document(
            children=[
                Text(content="Ping "),
                Mention(user_id=7, pretty_name="Ann", screen_name="ann"),
                Text(content=" about "),
                Emphasis(content=[Text(content="the plan")]),
                List(
                    ordered=False,
                    items=[
                        ListItem(children=[Text(content="one")]),
                        ListItem(
                            children=[
                                Mention(
                                    user_id=42, pretty_name="Jane Doe", screen_name="jane", email="jane@example.com"
                                )
                            ]
                        ),
                    ],
                ),
            ]
        )
        _result, parsed = _round_trip(document, resolver, lambda r: {"userMentions": r.entities["userMentions"]})
        assert parsed.children == document.children

    def test_render_parse_render_is_stable(self, sample_document, resolver):
        """Test that re-rendering the parsed document gives the same output."""
        result, parsed = _round_trip(sample_document, resolver)
        again = LegacyMarkdownRenderer().render_to_result(parsed)
        assert again.text == result.text
        assert again.entities == result.entities

    def test_escaped_text(self):
        """Test that escaped characters come back literally."""
        document = Document(children=[Text(content="*hello* snake_case a-b + `c`")])
        result, parsed = _round_trip(document)
        assert result.text == "\\*hello\\* snake\\_case a\\-b \\+ \\`c\\`"
        assert parsed.children == document.children

    def test_formatting(self):
        """Test emphasis and strong nesting."""
        document = Document(
            children=[Strong(content=[Text(content="bold")]), Text(content=" and "), Emphasis(content=[Text(content="it")])]
        )
        _result, parsed = _round_trip(document)
        assert parsed.children == document.children

    def test_ordered_list(self):
        """Test ordered list start and delimiter."""
        document = Document(
            children=[
                List(
                    ordered=True,
                    start=5,
                    delimiter=")",
                    items=[ListItem(children=[Text(content=t)]) for t in ("a", "b", "c")],
                )
            ]
        )
        result, parsed = _round_trip(document)
        assert result.text == "5) a\n6) b\n7) c\n"
        assert parsed.children == document.children

    def test_nested_list(self):
        """Test a nested ordered list inside a bullet list."""
        inner = List(ordered=True, items=[ListItem(children=[Text(content="b")])])
        document = Document(
            children=[
                List(
                    ordered=False,
                    items=[ListItem(children=[Text(content="a"), inner]), ListItem(children=[Text(content="c")])],
                )
            ]
        )
        result, parsed = _round_trip(document)
        assert result.text == "- a\n  1. b\n- c\n"
        assert parsed.children == document.children

    def test_text_after_list(self):
        """Test that text following a list stays outside the last item."""
        document = Document(
            children=[List(ordered=False, items=[ListItem(children=[Text(content="a")])]), Text(content="b")]
        )
        result, parsed = _round_trip(document)
        assert result.text == "- a\n\nb"
        assert parsed.children == document.children

    def test_text_after_nested_list_with_mentions(self, resolver):
        """Test a nested list of mentions followed by more text."""
        ann = Mention(user_id=7, pretty_name="Ann", screen_name="ann")
        jane = Mention(user_id=42, pretty_name="Jane Doe", screen_name="jane", email="jane@example.com")
        document = Document(
            children=[
                Text(content="hi"),
                List(
                    ordered=False,
                    items=[
                        ListItem(children=[ann]),
                        ListItem(children=[jane, List(ordered=False, items=[ListItem(children=[ann])])]),
                    ],
                ),
                Text(content="tail"),
            ]
        )
        result, parsed = _round_trip(document, resolver)
        assert result.text.endswith("\n\ntail")
        assert parsed.children == document.children

    def test_bullet_list_nested_in_ordered_item(self):
        """Test a bullet list nested under an ordered item."""
        inner = List(ordered=False, items=[ListItem(children=[Text(content="b")])])
        document = Document(
            children=[
                List(
                    ordered=True,
                    items=[ListItem(children=[Text(content="a"), inner]), ListItem(children=[Text(content="c")])],
                )
            ]
        )
        result, parsed = _round_trip(document)
        assert result.text == "1. a\n   - b\n2. c\n"
        assert parsed.children == document.children

    def test_ordered_list_after_text(self):
        """Test a list numbered from 5 following text."""
        document = Document(
            children=[
                Text(content="hi"),
                List(ordered=True, start=5, delimiter=")", items=[ListItem(children=[Text(content="a")])]),
            ]
        )
        result, parsed = _round_trip(document)
        assert result.text == "hi\n\n5) a\n"
        assert parsed.children == document.children

    def test_loose_list(self):
        """Test that a loose list keeps its spacing."""
        document = Document(
            children=[List(ordered=False, tight=False, items=[ListItem(children=[Text(content=t)]) for t in "ab"])]
        )
        _result, parsed = _round_trip(document)
        assert parsed.children == document.children

    def test_text_after_code_block(self):
        """Test that text after a code block needs no extra line break."""
        document = Document(children=[CodeBlock(content="x"), Text(content="b")])
        result, parsed = _round_trip(document)
        assert result.text == "```\nx\n```\nb"
        assert parsed.children == document.children

    def test_code_block(self):
        """Test a fenced code block keeps its content verbatim."""
        document = Document(children=[CodeBlock(content="def f(x_y):\n    return *x_y", language="python")])
        _result, parsed = _round_trip(document)
        assert parsed.children == document.children

    def test_keywords_with_data(self):
        """Test hashtag and cashtag payloads survive."""
        document = Document(
            children=[
                HashTag(text="launch"),
                Text(content=" "),
                CashTag(text="AAPL", data={"exchange": "NASDAQ"}),
            ]
        )
        _result, parsed = _round_trip(document)
        assert parsed.children == document.children

    def test_date_time(self):
        """Test a date/time entity."""
        document = Document(
            children=[Text(content="Due "), DateTime(entity_id="d1", value="2024-05-01", format="date")]
        )
        _result, parsed = _round_trip(document)
        assert parsed.children == document.children

    def test_link_title(self):
        """Test that a link title comes back as its label."""
        document = Document(children=[Link(url="https://example.com", content=[Text(content="Example site")])])
        result, parsed = _round_trip(document)
        assert result.urls[0].to_dict()["text"] == "Example site"
        assert parsed.children == document.children

    def test_unresolved_mentions_degrade(self, sample_document):
        """Test that without a resolver mentions fall back to their names."""
        _result, parsed = _round_trip(sample_document)
        assert parsed.children[0] == Text(content="Hello Jane Doe, see ")
        assert [d.kind for d in parsed.degradations] == ["mention"]

    def test_json_payload(self, sample_document, resolver):
        """Test round trip through serialized entity JSON."""
        result = LegacyMarkdownRenderer().render_to_result(sample_document)
        parsed = LegacyMarkdownParser(resolver=resolver).parse(result.text, result.entities_json())
        assert parsed.children == sample_document.children
