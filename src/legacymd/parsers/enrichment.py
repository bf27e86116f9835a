#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/legacymd/parsers/enrichment.py
"""Entity and media payload handling for the legacy Markdown parser.

Entity and media descriptors arrive next to the message text. They are located
anywhere in the payload (flat lists and grouped objects are both accepted),
validated, and then spliced into the text as inline markers so that they
survive tokenization.

"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterator, Mapping

from legacymd.constants import ID, INDEX, INDEX_END, INDEX_START, REQUIRED_ENTITY_FIELDS, TEXT, TYPE
from legacymd.delimiters import encode_entity_marker, encode_table_marker, entity_marker_key
from legacymd.exceptions import InvalidEntityError, InvalidMediaError, ValidationError

logger = logging.getLogger(__name__)


def load_payload(data: Any, parameter_name: str) -> Any:
    """Decode a JSON payload given as text; other values pass through.

    Parameters
    ----------
    data : any
        Decoded JSON value, JSON text, or None
    parameter_name : str
        Name reported in the validation error

    Returns
    -------
    any
        The decoded payload, or None

    Raises
    ------
    ValidationError
        If ``data`` is text that is not valid JSON

    """
    if isinstance(data, (bytes, bytearray)):
        data = data.decode("utf-8")
    if not isinstance(data, str):
        return data
    if not data.strip():
        return None
    try:
        return json.loads(data)
    except json.JSONDecodeError as e:
        raise ValidationError(
            f"Invalid {parameter_name} JSON: {e.msg}",
            parameter_name=parameter_name,
            parameter_value=data[:100],
            original_error=e,
        ) from e


def find_descriptors(data: Any, key: str) -> list[dict[str, Any]]:
    """Collect every object in ``data`` that carries ``key``, in document order."""
    return list(_iter_descriptors(data, key))


def _iter_descriptors(data: Any, key: str) -> Iterator[dict[str, Any]]:
    if isinstance(data, Mapping):
        if key in data:
            yield dict(data)
        for name, value in data.items():
            if name != key:
                yield from _iter_descriptors(value, key)
    elif isinstance(data, (list, tuple)):
        for item in data:
            yield from _iter_descriptors(item, key)


def scalar_text(value: Any) -> str:
    """Return the JSON text form of a scalar descriptor field."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _is_offset(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_entities(descriptors: list[dict[str, Any]]) -> None:
    """Validate entity descriptors, failing on the first violation.

    Parameters
    ----------
    descriptors : list of dict
        Entity descriptors as located by :func:`find_descriptors`

    Raises
    ------
    InvalidEntityError
        If a required field is missing, an offset is not a non-negative
        integer, or ``indexEnd <= indexStart``

    """
    for descriptor in descriptors:
        for key in REQUIRED_ENTITY_FIELDS:
            if key not in descriptor:
                raise InvalidEntityError(
                    f'Required field "{key}" missing from the entity payload',
                    entity_id=descriptor.get(ID),
                    index_start=descriptor.get(INDEX_START),
                    index_end=descriptor.get(INDEX_END),
                )

        entity_id = descriptor[ID]
        start = descriptor[INDEX_START]
        end = descriptor[INDEX_END]
        if not _is_offset(start) or not _is_offset(end) or start < 0 or end <= start:
            raise InvalidEntityError(
                f"Invalid entity payload: {entity_id} (start index: {start}, end index: {end})",
                entity_id=entity_id,
                index_start=start,
                index_end=end,
            )


def validate_media(descriptors: list[dict[str, Any]]) -> None:
    """Validate media descriptors, failing on the first violation.

    A descriptor's ``text``, when present, must be a non-empty list of rows,
    each row itself a list of cells.

    Raises
    ------
    InvalidMediaError
        If an index is not a non-negative integer or a table payload is not
        two-dimensional

    """
    for descriptor in descriptors:
        index = descriptor[INDEX]
        if not _is_offset(index) or index < 0:
            raise InvalidMediaError(f"Invalid table payload index: {index}", index=index)

        if TEXT not in descriptor:
            continue

        table = descriptor[TEXT]
        if not isinstance(table, list) or not table or not all(isinstance(row, list) for row in table):
            raise InvalidMediaError(f"Invalid table payload: {table} (index: {index})", index=index)


def index_entities(descriptors: list[dict[str, Any]]) -> dict[tuple[str, str], dict[str, Any]]:
    """Map the marker key of every entity descriptor to the descriptor; last one wins."""
    return {
        entity_marker_key(scalar_text(descriptor[TYPE]), scalar_text(descriptor[ID])): descriptor
        for descriptor in descriptors
    }


def enrich_text(text: str, entities: list[dict[str, Any]], media: list[dict[str, Any]]) -> str:
    """Splice entity and table markers into ``text`` at their offsets.

    Each entity span is replaced by its marker. A table marker is inserted in
    front of the character at its offset. Descriptors sharing a start offset
    collapse to the last one. When an offset lies at or beyond the end of the
    text, the text is right-padded with spaces first.

    Parameters
    ----------
    text : str
        Normalized message text
    entities : list of dict
        Validated entity descriptors
    media : list of dict
        Validated media descriptors

    Returns
    -------
    str
        Text with markers spliced in

    """
    starts: dict[int, dict[str, Any]] = {}
    for descriptor in entities:
        starts[descriptor[INDEX_START]] = descriptor

    tables: dict[int, list[list[Any]]] = {}
    for descriptor in media:
        table = descriptor.get(TEXT)
        if table is None:
            logger.debug(f"Dropping media payload without table text at index {descriptor[INDEX]}")
            continue
        tables[descriptor[INDEX]] = table

    if not starts and not tables:
        return text

    last_index = max(max(starts, default=0), max(tables, default=0))
    if len(text) <= last_index:
        logger.warning(
            f"Entity offset {last_index} is outside the message ({len(text)} characters); "
            f"padding message with spaces"
        )
        text = text.ljust(last_index + 1)

    output: list[str] = []
    i = 0
    while i < len(text):
        char = text[i]
        if i in starts:
            descriptor = starts[i]
            output.append(encode_entity_marker(scalar_text(descriptor[TYPE]), scalar_text(descriptor[ID])))
            i = max(descriptor[INDEX_END] - 1, i)
        elif i in tables:
            output.append(encode_table_marker(tables[i]))
            output.append(char)
        else:
            output.append(char)
        i += 1

    return "".join(output)
