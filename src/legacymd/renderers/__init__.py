#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/legacymd/renderers/__init__.py
"""AST renderers producing legacy Markdown.

- LegacyMarkdownRenderer: Render to legacy Markdown text plus entity records

Examples
--------
Render a document:

    >>> from legacymd.ast import Document, HashTag, Text
    >>> from legacymd.renderers import LegacyMarkdownRenderer
    >>> doc = Document(children=[Text(content="Ship "), HashTag(text="release")])
    >>> result = LegacyMarkdownRenderer().render_to_result(doc)
    >>> result.entities_json()
    '{"hashtags":[{"id":"#release","text":"#release","indexStart":5,"indexEnd":13,"type":"KEYWORD"}]}'

"""

from legacymd.renderers.base import BaseRenderer
from legacymd.renderers.legacy import LegacyMarkdownRenderer

__all__ = ["BaseRenderer", "LegacyMarkdownRenderer"]
