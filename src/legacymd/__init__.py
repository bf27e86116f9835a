"""legacymd - Conversion between message document trees and legacy Markdown.

Legacy chat clients exchange messages as flat Markdown text with a side channel
of JSON entity records (mentions, hashtags, cashtags, links, date/times) whose
offsets point into that text. legacymd converts in both directions:

- ``render`` turns a document tree into legacy Markdown plus entity records
- ``parse`` turns legacy Markdown plus entity and table JSON back into a tree

Structural problems with the input JSON raise ``ValidationError``. Content
that cannot be represented, such as a mention the resolver does not know or a
link with a rejected destination, degrades to plain text and is listed in
``Document.degradations``.

Requirements
------------
- Python 3.10+
- mistune 3 (tokenizer for the decode direction)

Examples
--------
Render a message:

    >>> from legacymd import render
    >>> from legacymd.ast import Document, Mention, Text
    >>> result = render(Document(children=[Text(content="Hi "), Mention(user_id=7, pretty_name="Ann")]))
    >>> result.text
    'Hi @Ann'

Parse it back with a resolver:

    >>> from legacymd import parse
    >>> from legacymd.resolver import StaticUserResolver, UserInfo
    >>> doc = parse(result.text, result.entities, resolver=StaticUserResolver([UserInfo(7, pretty_name="Ann")]))

See Also
--------
legacymd.ast : AST node definitions and utilities

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "legacymd requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from legacymd.api import parse, render
from legacymd.entities import EntityRecord, EntityType, RenderResult
from legacymd.exceptions import (
    InvalidEntityError,
    InvalidMediaError,
    InvalidOptionsError,
    LegacyMdError,
    ParsingError,
    ValidationError,
)
from legacymd.options import LegacyParserOptions, LegacyRendererOptions
from legacymd.parsers import LegacyMarkdownParser
from legacymd.renderers import LegacyMarkdownRenderer
from legacymd.resolver import StaticUserResolver, UserInfo, UserResolver

__all__ = [
    "__version__",
    "render",
    "parse",
    "EntityRecord",
    "EntityType",
    "RenderResult",
    "LegacyMarkdownParser",
    "LegacyMarkdownRenderer",
    "LegacyParserOptions",
    "LegacyRendererOptions",
    "StaticUserResolver",
    "UserInfo",
    "UserResolver",
    "LegacyMdError",
    "ValidationError",
    "InvalidEntityError",
    "InvalidMediaError",
    "InvalidOptionsError",
    "ParsingError",
]
