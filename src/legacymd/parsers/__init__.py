#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/legacymd/parsers/__init__.py
"""Parsers converting legacy Markdown messages to the AST.

- LegacyMarkdownParser: Parse legacy Markdown plus entity and media JSON

Examples
--------
    >>> from legacymd.parsers import LegacyMarkdownParser
    >>> doc = LegacyMarkdownParser().parse("*hello*")

"""

from legacymd.parsers.base import BaseParser
from legacymd.parsers.legacy import LegacyMarkdownParser

__all__ = ["BaseParser", "LegacyMarkdownParser"]
