#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/legacymd/entities.py
"""Entity records produced by the legacy Markdown renderer.

An entity record describes a span of the rendered text (a mention, keyword,
link or date/time) together with type-specific metadata. Records are grouped
per type into ``urls``, ``userMentions``, ``hashtags`` and ``datetimes`` in
render order.

The JSON shape of each record is wire-compatible with existing consumers and
keeps a fixed key order per type:

============  ===============================================================
Type          Keys
============  ===============================================================
URL           id, type, indexEnd, indexStart, text, expandedUrl
KEYWORD       id, text, indexStart, indexEnd, type, [data]
USER_FOLLOW   id, screenName, prettyName, text, indexStart, indexEnd,
              userType, type
DATE_TIME     id, text, indexStart, indexEnd, type, value, [format]
============  ===============================================================

"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from legacymd.constants import (
    DATA,
    DATETIMES,
    DEFAULT_USER_TYPE,
    EXPANDED_URL,
    FORMAT,
    HASHTAGS,
    ID,
    INDEX_END,
    INDEX_START,
    PRETTY_NAME,
    SCREEN_NAME,
    TEXT,
    TYPE,
    URLS,
    USER_MENTIONS,
    USER_TYPE,
    VALUE,
)


class EntityType(str, Enum):
    """Entity types produced by the renderer."""

    URL = "URL"
    USER_FOLLOW = "USER_FOLLOW"
    KEYWORD = "KEYWORD"
    DATE_TIME = "DATE_TIME"

    @property
    def group(self) -> str:
        """Key of the entity group this type is collected into."""
        return _GROUPS[self]


_GROUPS = {
    EntityType.URL: URLS,
    EntityType.USER_FOLLOW: USER_MENTIONS,
    EntityType.KEYWORD: HASHTAGS,
    EntityType.DATE_TIME: DATETIMES,
}


@dataclass(frozen=True)
class EntityRecord:
    """A single entity span in rendered text.

    Parameters
    ----------
    entity_type : EntityType
        Kind of entity
    entity_id : str or int
        Entity identifier (user id for mentions, URL for links, ...)
    text : str
        Display text of the entity
    index_start : int
        Offset of the first character of the span
    index_end : int
        Offset one past the last character of the span
    attributes : dict, default = empty dict
        Type-specific fields keyed by their JSON name (``expandedUrl``,
        ``screenName``, ``prettyName``, ``userType``, ``value``, ``format``,
        ``data``)

    """

    entity_type: EntityType
    entity_id: Any
    text: str
    index_start: int
    index_end: int
    attributes: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Return the wire representation of this record.

        Returns
        -------
        dict
            Record fields in the fixed key order of its type

        """
        attrs = self.attributes
        if self.entity_type is EntityType.URL:
            return {
                ID: self.entity_id,
                TYPE: self.entity_type.value,
                INDEX_END: self.index_end,
                INDEX_START: self.index_start,
                TEXT: self.text,
                EXPANDED_URL: attrs.get(EXPANDED_URL, self.entity_id),
            }

        if self.entity_type is EntityType.USER_FOLLOW:
            return {
                ID: self.entity_id,
                SCREEN_NAME: attrs.get(SCREEN_NAME),
                PRETTY_NAME: attrs.get(PRETTY_NAME),
                TEXT: self.text,
                INDEX_START: self.index_start,
                INDEX_END: self.index_end,
                USER_TYPE: attrs.get(USER_TYPE, DEFAULT_USER_TYPE),
                TYPE: self.entity_type.value,
            }

        if self.entity_type is EntityType.KEYWORD:
            record = {
                ID: self.entity_id,
                TEXT: self.text,
                INDEX_START: self.index_start,
                INDEX_END: self.index_end,
                TYPE: self.entity_type.value,
            }
            if attrs.get(DATA) is not None:
                record[DATA] = attrs[DATA]
            return record

        record = {
            ID: self.entity_id,
            TEXT: self.text,
            INDEX_START: self.index_start,
            INDEX_END: self.index_end,
            TYPE: self.entity_type.value,
            VALUE: attrs.get(VALUE, self.text),
        }
        if attrs.get(FORMAT) is not None:
            record[FORMAT] = attrs[FORMAT]
        return record


@dataclass
class RenderResult:
    """Flat text and entity records produced by one render call.

    Parameters
    ----------
    text : str
        Rendered legacy Markdown
    records : list of EntityRecord, default = empty list
        Every entity record in render order

    Examples
    --------
        >>> result.text
        'Hello @Jane\\n\\n'
        >>> result.entities
        {'userMentions': [{'id': 42, 'screenName': 'jane', ...}]}

    """

    text: str
    records: list[EntityRecord] = field(default_factory=list)

    def _records_of(self, entity_type: EntityType) -> list[EntityRecord]:
        return [record for record in self.records if record.entity_type is entity_type]

    @property
    def urls(self) -> list[EntityRecord]:
        """URL records in render order."""
        return self._records_of(EntityType.URL)

    @property
    def user_mentions(self) -> list[EntityRecord]:
        """USER_FOLLOW records in render order."""
        return self._records_of(EntityType.USER_FOLLOW)

    @property
    def hashtags(self) -> list[EntityRecord]:
        """KEYWORD records in render order."""
        return self._records_of(EntityType.KEYWORD)

    @property
    def datetimes(self) -> list[EntityRecord]:
        """DATE_TIME records in render order."""
        return self._records_of(EntityType.DATE_TIME)

    @property
    def entities(self) -> dict[str, list[dict[str, Any]]]:
        """Grouped wire representation of the records.

        Group keys appear only when the group is non-empty, in the order the
        first record of each group was rendered.
        """
        grouped: dict[str, list[dict[str, Any]]] = {}
        for record in self.records:
            grouped.setdefault(record.entity_type.group, []).append(record.to_dict())
        return grouped

    def to_dict(self) -> dict[str, Any]:
        """Return ``{"text": ..., "entities": {...}}``."""
        return {TEXT: self.text, "entities": self.entities}

    def entities_json(self, indent: Optional[int] = None) -> str:
        """Serialize the grouped entities to a JSON string.

        Parameters
        ----------
        indent : int or None, default = None
            Indentation passed to ``json.dumps``; compact output when None

        Returns
        -------
        str
            JSON text of :attr:`entities`

        """
        separators = (",", ":") if indent is None else None
        return json.dumps(self.entities, indent=indent, separators=separators, ensure_ascii=False)
