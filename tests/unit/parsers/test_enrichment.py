#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/parsers/test_enrichment.py
"""Unit tests for entity and media payload handling."""

import logging

import pytest

from legacymd.delimiters import ENTITY_DELIMITER, encode_entity_marker, encode_table_marker
from legacymd.exceptions import InvalidEntityError, InvalidMediaError, ValidationError
from legacymd.parsers.enrichment import (
    enrich_text,
    find_descriptors,
    index_entities,
    load_payload,
    scalar_text,
    validate_entities,
    validate_media,
)


def _entity(entity_id, entity_type, start, end):
    return {"id": entity_id, "type": entity_type, "indexStart": start, "indexEnd": end}


@pytest.mark.unit
class TestLoadPayload:
    """Tests for load_payload."""

    def test_decoded_value_passes_through(self):
        """Test that decoded payloads are returned unchanged."""
        payload = [{"a": 1}]
        assert load_payload(payload, "entities") is payload

    def test_none(self):
        """Test None payload."""
        assert load_payload(None, "entities") is None

    def test_json_text(self):
        """Test JSON text is decoded."""
        assert load_payload('{"urls": []}', "entities") == {"urls": []}

    def test_json_bytes(self):
        """Test JSON bytes are decoded."""
        assert load_payload(b"[1, 2]", "media") == [1, 2]

    def test_blank_text(self):
        """Test that blank text means no payload."""
        assert load_payload("   ", "entities") is None

    def test_invalid_json(self):
        """Test that invalid JSON raises a validation error."""
        with pytest.raises(ValidationError) as exc_info:
            load_payload("{", "media")
        assert exc_info.value.parameter_name == "media"
        assert exc_info.value.original_error is not None


@pytest.mark.unit
class TestFindDescriptors:
    """Tests for find_descriptors."""

    def test_flat_list(self):
        """Test a flat list of descriptors."""
        data = [_entity("a", "KEYWORD", 0, 1), _entity("b", "KEYWORD", 2, 3)]
        assert [d["id"] for d in find_descriptors(data, "indexStart")] == ["a", "b"]

    def test_grouped_payload(self):
        """Test grouped payloads in document order."""
        data = {
            "hashtags": [_entity("#a", "KEYWORD", 0, 2)],
            "userMentions": [_entity(7, "USER_FOLLOW", 3, 7)],
        }
        assert [d["id"] for d in find_descriptors(data, "indexStart")] == ["#a", 7]

    def test_nested_descriptor_in_descriptor(self):
        """Test that descriptors nested inside descriptors are found."""
        data = [{"index": 0, "text": [["x"]], "extra": {"index": 3}}]
        assert [d["index"] for d in find_descriptors(data, "index")] == [0, 3]

    def test_scalars_ignored(self):
        """Test that scalars yield nothing."""
        assert find_descriptors("text", "index") == []
        assert find_descriptors(None, "index") == []

    def test_returns_copies(self):
        """Test that returned descriptors are copies."""
        original = _entity("a", "KEYWORD", 0, 1)
        found = find_descriptors([original], "indexStart")[0]
        found["id"] = "changed"
        assert original["id"] == "a"


@pytest.mark.unit
class TestScalarText:
    """Tests for scalar_text."""

    @pytest.mark.parametrize(
        "value,expected",
        [(None, "null"), (True, "true"), (False, "false"), (42, "42"), ("x", "x"), (1.5, "1.5")],
    )
    def test_values(self, value, expected):
        """Test JSON text forms."""
        assert scalar_text(value) == expected


@pytest.mark.unit
class TestValidation:
    """Tests for descriptor validation."""

    def test_valid_entities(self):
        """Test that valid descriptors pass."""
        validate_entities([_entity("a", "KEYWORD", 0, 1)])

    def test_first_violation_reported(self):
        """Test that validation stops at the first bad descriptor."""
        with pytest.raises(InvalidEntityError) as exc_info:
            validate_entities([_entity("good", "KEYWORD", 0, 1), _entity("bad", "KEYWORD", 5, 2), {}])
        assert exc_info.value.entity_id == "bad"
        assert (exc_info.value.index_start, exc_info.value.index_end) == (5, 2)

    def test_boolean_offsets_rejected(self):
        """Test that booleans are not accepted as offsets."""
        with pytest.raises(InvalidEntityError):
            validate_entities([_entity("a", "KEYWORD", False, True)])

    def test_valid_media(self):
        """Test that valid media passes, with or without text."""
        validate_media([{"index": 0, "text": [["a", "b"], []]}, {"index": 3}])

    @pytest.mark.parametrize("table", [[], "text", [["a"], "b"], {"rows": []}])
    def test_invalid_table(self, table):
        """Test non two-dimensional table payloads."""
        with pytest.raises(InvalidMediaError) as exc_info:
            validate_media([{"index": 2, "text": table}])
        assert exc_info.value.index == 2

    def test_invalid_index(self):
        """Test a non-integer media index."""
        with pytest.raises(InvalidMediaError):
            validate_media([{"index": "0", "text": [["a"]]}])


@pytest.mark.unit
class TestIndexEntities:
    """Tests for index_entities."""

    def test_keys_normalized(self):
        """Test that type is upper-cased and id converted to text."""
        index = index_entities([_entity(42, "user_follow", 0, 3)])
        assert ("USER_FOLLOW", "42") in index

    def test_last_descriptor_wins(self):
        """Test that a duplicate key keeps the last descriptor."""
        first = _entity("#a", "KEYWORD", 0, 2)
        second = {**_entity("#a", "KEYWORD", 5, 7), "data": 1}
        assert index_entities([first, second])[("KEYWORD", "#a")]["data"] == 1


@pytest.mark.unit
class TestEnrichText:
    """Tests for enrich_text."""

    def test_no_descriptors(self):
        """Test that text without descriptors is unchanged."""
        assert enrich_text("hello", [], []) == "hello"

    def test_entity_span_replaced(self):
        """Test that an entity span becomes its marker."""
        marker = encode_entity_marker("KEYWORD", "#b")
        assert enrich_text("a #b c", [_entity("#b", "KEYWORD", 2, 4)], []) == f"a {marker} c"

    def test_table_inserted_before_character(self):
        """Test that a table marker keeps the original character."""
        marker = encode_table_marker([["x"]])
        assert enrich_text("ab", [], [{"index": 1, "text": [["x"]]}]) == f"a{marker}b"

    def test_entity_and_table(self):
        """Test entities and tables together."""
        entity = encode_entity_marker("KEYWORD", "#a")
        table = encode_table_marker([["x"]])
        result = enrich_text("#a b", [_entity("#a", "KEYWORD", 0, 2)], [{"index": 3, "text": [["x"]]}])
        assert result == f"{entity} {table}b"

    def test_padding(self, caplog):
        """Test that an offset past the end pads with spaces and warns."""
        with caplog.at_level(logging.WARNING, logger="legacymd.parsers.enrichment"):
            result = enrich_text("ab", [], [{"index": 4, "text": [["x"]]}])
        assert result == "ab  " + encode_table_marker([["x"]]) + " "
        assert "padding" in caplog.text

    def test_forward_progress_on_overlap(self):
        """Test that overlapping spans never move the scan backwards."""
        entities = [_entity("#abc", "KEYWORD", 0, 4), _entity("#b", "KEYWORD", 2, 3)]
        result = enrich_text("#abcd", entities, [])
        assert result == encode_entity_marker("KEYWORD", "#abc") + "d"
        assert result.count(ENTITY_DELIMITER) == 2

    def test_media_without_text_ignored(self):
        """Test that media without table text adds nothing."""
        assert enrich_text("ab", [], [{"index": 0}]) == "ab"
