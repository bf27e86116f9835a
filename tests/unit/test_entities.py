#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_entities.py
"""Unit tests for entity records and render results."""

import json

import pytest

from legacymd.entities import EntityRecord, EntityType, RenderResult


def _url_record() -> EntityRecord:
    return EntityRecord(
        entity_type=EntityType.URL,
        entity_id="https://example.com",
        text="site",
        index_start=0,
        index_end=31,
        attributes={"expandedUrl": "https://example.com"},
    )


def _mention_record() -> EntityRecord:
    return EntityRecord(
        entity_type=EntityType.USER_FOLLOW,
        entity_id=42,
        text="@Jane Doe",
        index_start=32,
        index_end=41,
        attributes={"screenName": "jane", "prettyName": "Jane Doe", "userType": "lc"},
    )


@pytest.mark.unit
class TestEntityRecordKeyOrder:
    """Tests for the wire key order of each record type."""

    def test_url_keys(self):
        """Test URL key order."""
        assert list(_url_record().to_dict()) == ["id", "type", "indexEnd", "indexStart", "text", "expandedUrl"]

    def test_user_follow_keys(self):
        """Test USER_FOLLOW key order and values."""
        record = _mention_record().to_dict()
        assert list(record) == [
            "id",
            "screenName",
            "prettyName",
            "text",
            "indexStart",
            "indexEnd",
            "userType",
            "type",
        ]
        assert record["id"] == 42
        assert record["userType"] == "lc"
        assert record["type"] == "USER_FOLLOW"

    def test_keyword_keys_without_data(self):
        """Test KEYWORD key order without a data payload."""
        record = EntityRecord(EntityType.KEYWORD, "#tag", "#tag", 0, 4).to_dict()
        assert list(record) == ["id", "text", "indexStart", "indexEnd", "type"]

    def test_keyword_keys_with_data(self):
        """Test that data is appended last when present."""
        record = EntityRecord(EntityType.KEYWORD, "#tag", "#tag", 0, 4, {"data": {"k": 1}}).to_dict()
        assert list(record) == ["id", "text", "indexStart", "indexEnd", "type", "data"]
        assert record["data"] == {"k": 1}

    def test_date_time_keys(self):
        """Test DATE_TIME key order with and without format."""
        plain = EntityRecord(EntityType.DATE_TIME, "d1", "today", 0, 5, {"value": "today"}).to_dict()
        assert list(plain) == ["id", "text", "indexStart", "indexEnd", "type", "value"]

        formatted = EntityRecord(
            EntityType.DATE_TIME, "d1", "today", 0, 5, {"value": "today", "format": "date"}
        ).to_dict()
        assert list(formatted) == ["id", "text", "indexStart", "indexEnd", "type", "value", "format"]

    def test_group_names(self):
        """Test the group key of each type."""
        assert EntityType.URL.group == "urls"
        assert EntityType.USER_FOLLOW.group == "userMentions"
        assert EntityType.KEYWORD.group == "hashtags"
        assert EntityType.DATE_TIME.group == "datetimes"


@pytest.mark.unit
class TestRenderResult:
    """Tests for RenderResult grouping and serialization."""

    def test_empty_result(self):
        """Test that no groups are emitted without records."""
        result = RenderResult(text="plain")
        assert result.entities == {}
        assert result.to_dict() == {"text": "plain", "entities": {}}

    def test_groups_in_first_use_order(self):
        """Test that groups appear in the order they were first used."""
        result = RenderResult(text="x", records=[_mention_record(), _url_record()])
        assert list(result.entities) == ["userMentions", "urls"]

    def test_typed_accessors(self):
        """Test per-type record lists."""
        result = RenderResult(text="x", records=[_url_record(), _mention_record()])
        assert [r.entity_id for r in result.urls] == ["https://example.com"]
        assert [r.entity_id for r in result.user_mentions] == [42]
        assert result.hashtags == []
        assert result.datetimes == []

    def test_entities_json_compact(self):
        """Test compact JSON serialization."""
        result = RenderResult(text="x", records=[_mention_record()])
        text = result.entities_json()
        assert " " not in text.replace("Jane Doe", "")
        assert json.loads(text) == result.entities

    def test_entities_json_indent(self):
        """Test indented JSON serialization."""
        result = RenderResult(text="x", records=[_url_record()])
        assert "\n" in result.entities_json(indent=2)
