#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/legacymd/delimiters.py
"""Reserved-character grammar used to smuggle entities through the tokenizer.

Before legacy Markdown is tokenized, every entity span and every table payload
is replaced by an inline marker built from four reserved characters. The
markers survive block and inline tokenization untouched and are decoded back
into ``EntityMarker`` and ``TableMarker`` values by the parser.

Grammar
-------
Entity marker::

    ENTITY <TYPE> FIELD <id> ENTITY

Table marker::

    ENTITY TABLE FIELD (<cell> RECORD)* GROUP ... ENTITY

The four characters are taken from the Unicode noncharacter block
(U+FDD0 to U+FDD3). Unicode reserves these code points for internal use, they
are not whitespace or punctuation to the tokenizer, and they never occur in
interchanged text. Raw parser input containing any of them is rejected.

"""

from __future__ import annotations

import re
from typing import Iterable, Sequence, Union

from legacymd.ast.nodes import EntityMarker, TableMarker

ENTITY_DELIMITER = "\ufdd0"
FIELD_DELIMITER = "\ufdd1"
RECORD_DELIMITER = "\ufdd2"
GROUP_DELIMITER = "\ufdd3"

SENTINELS = frozenset({ENTITY_DELIMITER, FIELD_DELIMITER, RECORD_DELIMITER, GROUP_DELIMITER})

TABLE = "TABLE"

# Inline pattern for a complete marker; group names are unique across the tokenizer rules
MARKER_PATTERN = (
    ENTITY_DELIMITER
    + r"(?P<legacy_marker_type>[^"
    + ENTITY_DELIMITER
    + FIELD_DELIMITER
    + r"\n]*)"
    + FIELD_DELIMITER
    + r"(?P<legacy_marker_body>[^"
    + ENTITY_DELIMITER
    + r"\n]*)"
    + ENTITY_DELIMITER
)

_SENTINEL_RE = re.compile("[" + "".join(sorted(SENTINELS)) + "]")


def contains_sentinel(text: str) -> bool:
    """Return True if ``text`` contains any reserved delimiter character."""
    return _SENTINEL_RE.search(text) is not None


def strip_sentinels(text: str) -> str:
    """Remove every reserved delimiter character from ``text``."""
    return _SENTINEL_RE.sub("", text)


def encode_entity_marker(entity_type: str, entity_id: str) -> str:
    """Encode an entity reference as an inline marker.

    Line breaks in either part are folded to spaces so the marker stays on one
    line.

    Parameters
    ----------
    entity_type : str
        Entity type; upper-cased on the way in
    entity_id : str
        Identifier of the entity descriptor

    Returns
    -------
    str
        The marker string

    Examples
    --------
        >>> encode_entity_marker("user_follow", "42") == "\\ufdd0USER_FOLLOW\\ufdd142\\ufdd0"
        True

    """
    entity_type, entity_id = entity_marker_key(entity_type, entity_id)
    return ENTITY_DELIMITER + entity_type + FIELD_DELIMITER + entity_id + ENTITY_DELIMITER


def entity_marker_key(entity_type: str, entity_id: str) -> tuple[str, str]:
    """Return the (type, id) pair exactly as it appears inside an entity marker."""
    return _fold_lines(_clean(entity_type)).upper(), _fold_lines(_clean(entity_id))


def encode_table_marker(rows: Iterable[Sequence[object]]) -> str:
    """Encode a table payload as an inline marker.

    Each cell is terminated by RECORD and each row by GROUP. Line breaks inside
    a cell are folded to spaces so the marker stays on one line.

    Parameters
    ----------
    rows : iterable of sequence
        Cell values row by row; non-string values are converted with ``str``

    Returns
    -------
    str
        The marker string

    """
    parts = [ENTITY_DELIMITER, TABLE, FIELD_DELIMITER]
    for row in rows:
        for cell in row:
            parts.append(_fold_lines(_clean(_cell_text(cell))))
            parts.append(RECORD_DELIMITER)
        parts.append(GROUP_DELIMITER)
    parts.append(ENTITY_DELIMITER)
    return "".join(parts)


def decode_marker(marker_type: str, body: str) -> Union[EntityMarker, TableMarker]:
    """Decode the two halves of a marker matched by MARKER_PATTERN.

    Parameters
    ----------
    marker_type : str
        Text between the opening ENTITY and FIELD characters
    body : str
        Text between FIELD and the closing ENTITY character

    Returns
    -------
    EntityMarker or TableMarker
        The decoded marker

    """
    if marker_type != TABLE:
        return EntityMarker(entity_type=marker_type, entity_id=body)

    rows: list[tuple[str, ...]] = []
    for group in body.split(GROUP_DELIMITER)[:-1]:
        cells = group.split(RECORD_DELIMITER)[:-1]
        rows.append(tuple(cells))
    return TableMarker(rows=tuple(rows))


def _cell_text(cell: object) -> str:
    if cell is None:
        return ""
    if isinstance(cell, bool):
        return "true" if cell else "false"
    return str(cell)


def _fold_lines(text: str) -> str:
    return text.replace("\r\n", " ").replace("\r", " ").replace("\n", " ")


def _clean(text: str) -> str:
    return strip_sentinels(text)
