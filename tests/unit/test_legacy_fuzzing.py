#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_legacy_fuzzing.py
"""Property-based tests for the legacy Markdown codec.

This module uses Hypothesis to generate documents and messages and checks the
properties the codec must hold for every input.

Test Coverage:
- Property: rendered text never contains delimiter characters
- Property: every entity record spans exactly its text
- Property: arbitrary text parses without crashing
- Property: valid entity payloads never fail the parse
- Property: escaped plain text survives a round trip
"""

import string

import pytest
from hypothesis import HealthCheck, assume, given, settings
from hypothesis import strategies as st

from legacymd.ast import DateTime, Document, Emphasis, HashTag, Link, List, ListItem, Mention, Paragraph, Text
from legacymd.delimiters import SENTINELS, contains_sentinel
from legacymd.entities import EntityType
from legacymd.exceptions import ParsingError
from legacymd.parsers.legacy import LegacyMarkdownParser
from legacymd.renderers.legacy import LegacyMarkdownRenderer

_any_text = st.text(alphabet=st.characters(blacklist_categories=("Cs",)), max_size=40)
_sentinel_text = st.text(alphabet=st.sampled_from(sorted(SENTINELS) + list("ab *_\n")), max_size=20)
_word = st.text(alphabet=string.ascii_letters + string.digits, min_size=1, max_size=12)

_inline_nodes = st.one_of(
    st.builds(Text, content=st.one_of(_any_text, _sentinel_text)),
    st.builds(HashTag, text=_word),
    st.builds(
        Mention,
        user_id=st.integers(min_value=1, max_value=10**9),
        pretty_name=st.one_of(st.none(), _any_text, _sentinel_text),
        screen_name=st.one_of(st.none(), _word),
    ),
    st.builds(DateTime, entity_id=_word, value=st.one_of(_word, _sentinel_text)),
    st.builds(
        Link,
        url=st.sampled_from(["https://example.com", "https://example.com/a_b", "http://x.org/?q=1"]),
        content=st.lists(st.builds(Text, content=_any_text), max_size=2),
    ),
)

_documents = st.builds(
    Document,
    children=st.lists(
        st.one_of(
            _inline_nodes,
            st.builds(Paragraph, content=st.lists(_inline_nodes, max_size=4)),
            st.builds(Emphasis, content=st.lists(_inline_nodes, max_size=3)),
            st.builds(
                List,
                ordered=st.booleans(),
                items=st.lists(st.builds(ListItem, children=st.lists(_inline_nodes, max_size=3)), max_size=3),
            ),
        ),
        max_size=6,
    ),
)


@pytest.mark.unit
@pytest.mark.fuzzing
class TestRendererProperties:
    """Property-based tests for the renderer."""

    @given(_documents)
    @settings(suppress_health_check=[HealthCheck.too_slow])
    def test_no_delimiters_in_output(self, document):
        """Property: delimiter characters never reach rendered text."""
        result = LegacyMarkdownRenderer().render_to_result(document)
        assert not contains_sentinel(result.text)

    @given(_documents)
    @settings(suppress_health_check=[HealthCheck.too_slow])
    def test_records_span_their_text(self, document):
        """Property: every record's offsets select exactly its text."""
        result = LegacyMarkdownRenderer().render_to_result(document)
        for record in result.records:
            assert 0 <= record.index_start <= record.index_end <= len(result.text)
            span = result.text[record.index_start : record.index_end]
            if record.entity_type is EntityType.URL:
                assert span == f"[ {record.text} ]({record.entity_id})"
            else:
                assert span == record.text

    @given(_documents)
    @settings(suppress_health_check=[HealthCheck.too_slow])
    def test_records_in_render_order(self, document):
        """Property: records never go backwards in the text."""
        records = LegacyMarkdownRenderer().render_to_result(document).records
        starts = [record.index_start for record in records]
        assert starts == sorted(starts)


@pytest.mark.unit
@pytest.mark.fuzzing
class TestParserProperties:
    """Property-based tests for the parser."""

    @given(st.text(max_size=200))
    def test_arbitrary_text_handled_gracefully(self, text):
        """Property: any message without delimiter characters parses."""
        assume(not contains_sentinel(text))
        try:
            document = LegacyMarkdownParser().parse(text)
        except ParsingError:
            return
        except Exception as e:
            pytest.fail(f"Unexpected exception for input {text!r}: {e}")
        assert isinstance(document, Document)

    @given(
        st.text(alphabet=string.ascii_letters + " *_-\n[]()", max_size=40),
        st.lists(
            st.tuples(
                st.integers(min_value=0, max_value=60),
                st.integers(min_value=1, max_value=20),
                st.sampled_from(["KEYWORD", "URL", "USER_FOLLOW", "DATE_TIME", "OTHER"]),
                st.one_of(_word, st.sampled_from(["#tag", "$TICK", "42", "https://example.com"])),
            ),
            max_size=5,
        ),
    )
    def test_valid_entities_never_fail(self, text, specs):
        """Property: structurally valid payloads only ever degrade."""
        entities = [
            {"id": entity_id, "type": entity_type, "indexStart": start, "indexEnd": start + length}
            for start, length, entity_type, entity_id in specs
        ]
        try:
            document = LegacyMarkdownParser().parse(text, entities)
        except ParsingError:
            return
        assert isinstance(document, Document)

    @given(st.text(alphabet=string.ascii_letters + " _*-+`.,!?#$%", min_size=1, max_size=40))
    def test_escaped_text_round_trip(self, text):
        """Property: escaped plain text parses back to the same text."""
        text = " ".join(text.split())
        assume(text)
        assume(len(set(text)) > 1)

        rendered = LegacyMarkdownRenderer().render_to_string(Document(children=[Text(content=text)]))
        assert LegacyMarkdownParser().parse(rendered).children == [Text(content=text)]
