#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/legacymd/ast/__init__.py
"""Abstract Syntax Tree (AST) module for message documents.

The module consists of several components:

- nodes: AST node classes representing message structure and entities
- visitors: Visitor base class used by the renderer
- utils: Text extraction helpers

Examples
--------
Basic usage:

    >>> from legacymd.ast import Document, Paragraph, Text, Mention
    >>> from legacymd.renderers.legacy import LegacyMarkdownRenderer
    >>>
    >>> doc = Document(children=[
    ...     Paragraph(content=[Text(content="Hello "), Mention(user_id=42, pretty_name="Jane")])
    ... ])
    >>> result = LegacyMarkdownRenderer().render_to_result(doc)
    >>> result.text
    'Hello @Jane\n\n'

"""

from __future__ import annotations

from legacymd.ast.nodes import (
    Button,
    CashTag,
    Code,
    CodeBlock,
    DateTime,
    Degradation,
    Document,
    Emoji,
    Emphasis,
    EntityMarker,
    Form,
    FormElement,
    HashTag,
    Keyword,
    LineBreak,
    Link,
    List,
    ListItem,
    Mention,
    Node,
    Option,
    Paragraph,
    PersonSelector,
    Preformatted,
    Select,
    Strong,
    Table,
    TableCell,
    TableMarker,
    TableRow,
    Text,
    TextArea,
    TextField,
    ThematicBreak,
    get_node_children,
)
from legacymd.ast.utils import extract_text
from legacymd.ast.visitors import NodeVisitor

__all__ = [
    "Button",
    "CashTag",
    "Code",
    "CodeBlock",
    "DateTime",
    "Degradation",
    "Document",
    "Emoji",
    "Emphasis",
    "EntityMarker",
    "Form",
    "FormElement",
    "HashTag",
    "Keyword",
    "LineBreak",
    "Link",
    "List",
    "ListItem",
    "Mention",
    "Node",
    "NodeVisitor",
    "Option",
    "Paragraph",
    "PersonSelector",
    "Preformatted",
    "Select",
    "Strong",
    "Table",
    "TableCell",
    "TableMarker",
    "TableRow",
    "Text",
    "TextArea",
    "TextField",
    "ThematicBreak",
    "extract_text",
    "get_node_children",
]
