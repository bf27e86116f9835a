#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/legacymd/parsers/_tokenizer.py
"""Restricted mistune tokenizer for legacy Markdown.

Only thematic breaks, fenced code, block quotes and lists are recognized at
block level. Inline, escapes, code spans, emphasis, links and line breaks are
recognized together with the entity/table marker rule. Everything else
(headings, indented code, raw HTML, autolinks, reference definitions) is
literal text.

"""

from __future__ import annotations

from functools import lru_cache
from re import Match
from typing import Any

import mistune
from mistune.block_parser import BlockParser
from mistune.inline_parser import InlineParser

from legacymd.constants import ENABLED_BLOCK_RULES, ENABLED_INLINE_RULES
from legacymd.delimiters import MARKER_PATTERN

MARKER_TOKEN = "legacy_marker"


def parse_legacy_marker(inline: InlineParser, m: Match[str], state: Any) -> int:
    """Emit a marker token for an entity or table marker."""
    state.append_token(
        {
            "type": MARKER_TOKEN,
            "attrs": {
                "marker_type": m.group("legacy_marker_type"),
                "body": m.group("legacy_marker_body"),
            },
        }
    )
    return m.end()


@lru_cache(maxsize=8)
def get_tokenizer(max_nested_level: int) -> mistune.Markdown:
    """Return the shared tokenizer for a nesting limit.

    The instance is built once per limit and only read afterwards.

    Parameters
    ----------
    max_nested_level : int
        Maximum block nesting depth

    Returns
    -------
    mistune.Markdown
        Tokenizer producing an AST token list (no renderer)

    """
    block = BlockParser(
        block_quote_rules=list(ENABLED_BLOCK_RULES),
        list_rules=list(ENABLED_BLOCK_RULES),
        max_nested_level=max_nested_level,
    )
    block.rules = list(ENABLED_BLOCK_RULES)

    inline = InlineParser()
    inline.rules = list(ENABLED_INLINE_RULES)
    inline.register(MARKER_TOKEN, MARKER_PATTERN, parse_legacy_marker, before="escape")

    return mistune.Markdown(renderer=None, block=block, inline=inline)
