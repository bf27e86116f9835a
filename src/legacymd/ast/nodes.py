#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/legacymd/ast/nodes.py
"""AST node classes for message document representation.

This module defines the closed node hierarchy shared by the legacy Markdown
renderer (which consumes it) and the legacy Markdown parser (which produces it).
Each node represents a structural, inline or entity element of a message.

Node Hierarchy
--------------
All nodes inherit from the base Node class and support the visitor pattern.

Block-level nodes represent structural message elements:
    - Document, Paragraph, CodeBlock, Preformatted, ThematicBreak
    - List, ListItem, Table, TableRow, TableCell

Inline nodes represent text formatting:
    - Text, Emphasis, Strong, Code, Link, LineBreak, Emoji

Entity nodes carry the structured metadata exported as entity records:
    - HashTag, CashTag (both Keyword), Mention, DateTime

Form nodes represent interactive controls:
    - Form, Button, Select, Option, TextField, TextArea, PersonSelector, FormElement

Intermediate markers are decoded from the delimiter grammar during parsing and
never appear in a finished document:
    - EntityMarker, TableMarker

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from legacymd.constants import (
    CASHTAG_PREFIX,
    DEFAULT_BULLET_MARKER,
    DEFAULT_CODE_FENCE_CHAR,
    DEFAULT_CODE_FENCE_LENGTH,
    DEFAULT_ORDERED_DELIMITER,
    EMOJI_DELIMITER,
    FORMAT_PRESENTATIONML,
    HASHTAG_PREFIX,
    MENTION_PREFIX,
    MESSAGEML_VERSION,
    DegradationKind,
)


class Node(ABC):
    """Base class for all AST nodes.

    All document nodes inherit from this base class and support the visitor
    pattern for traversal and rendering.

    Parameters
    ----------
    metadata : dict, default = empty dict
        Arbitrary metadata associated with this node

    """

    metadata: dict[str, Any]

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass


@dataclass(frozen=True)
class Degradation:
    """Record of content the parser degraded to plain text.

    Parameters
    ----------
    kind : {'mention', 'link', 'keyword', 'entity'}
        Category of the degraded element
    value : str
        The raw value that could not be represented (user id, destination, ...)
    reason : str
        Human-readable explanation

    """

    kind: DegradationKind
    value: str
    reason: str


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass
class Document(Node):
    """Root document node containing all other nodes.

    Parameters
    ----------
    children : list of Node, default = empty list
        Top-level nodes in the message
    metadata : dict, default = empty dict
        Document-level metadata
    format : str, default = 'presentationml'
        Rendering mode of the message
    version : str, default = '2.0'
        Message markup version
    degradations : list of Degradation, default = empty list
        Content the parser replaced with plain text. Not part of equality.

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    format: str = FORMAT_PRESENTATIONML
    version: str = MESSAGEML_VERSION
    degradations: list[Degradation] = field(default_factory=list, compare=False)

    @property
    def degraded(self) -> bool:
        """Whether any content was degraded to plain text while parsing."""
        return bool(self.degradations)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this document.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_document method

        Returns
        -------
        Any
            Result from visitor.visit_document(self)

        """
        return visitor.visit_document(self)


@dataclass
class Paragraph(Node):
    """Paragraph node containing inline content.

    Parameters
    ----------
    content : list of Node, default = empty list
        Inline nodes representing paragraph content
    metadata : dict, default = empty dict
        Paragraph metadata

    """

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this paragraph."""
        return visitor.visit_paragraph(self)


@dataclass
class CodeBlock(Node):
    """Fenced code block node with optional language specification.

    Parameters
    ----------
    content : str
        Code content (not parsed as markdown)
    language : str or None, default = None
        Info string written after the opening fence
    fence_char : str, default = '`'
        Character used for fencing
    fence_length : int, default = 3
        Number of fence characters
    metadata : dict, default = empty dict
        Code block metadata

    """

    content: str
    language: Optional[str] = None
    fence_char: str = DEFAULT_CODE_FENCE_CHAR
    fence_length: int = DEFAULT_CODE_FENCE_LENGTH
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this code block."""
        return visitor.visit_code_block(self)


@dataclass
class Preformatted(Node):
    """Preformatted region whose text keeps its line breaks.

    Parameters
    ----------
    content : list of Node, default = empty list
        Inline nodes rendered without newline stripping
    metadata : dict, default = empty dict
        Region metadata

    """

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this preformatted region."""
        return visitor.visit_preformatted(self)


@dataclass
class ThematicBreak(Node):
    """Thematic break node (horizontal rule)."""

    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this thematic break."""
        return visitor.visit_thematic_break(self)


@dataclass
class List(Node):
    """List node (ordered or unordered).

    Parameters
    ----------
    ordered : bool
        True for ordered lists, False for unordered
    items : list of ListItem, default = empty list
        List items
    start : int, default = 1
        Starting number for ordered lists
    delimiter : {'.', ')'}, default = '.'
        Character written after the number of an ordered item
    bullet : {'-', '*', '+'}, default = '-'
        Marker written before an unordered item
    tight : bool, default = True
        Whether list is tight (no blank lines between items)
    metadata : dict, default = empty dict
        List metadata

    """

    ordered: bool
    items: list[ListItem] = field(default_factory=list)
    start: int = 1
    delimiter: str = DEFAULT_ORDERED_DELIMITER
    bullet: str = DEFAULT_BULLET_MARKER
    tight: bool = True
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_list method

        Returns
        -------
        Any
            Result from visitor.visit_list(self)

        """
        return visitor.visit_list(self)


@dataclass
class ListItem(Node):
    """List item node containing block or inline content.

    Parameters
    ----------
    children : list of Node, default = empty list
        Nodes in the list item, including nested lists
    metadata : dict, default = empty dict
        List item metadata

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list item."""
        return visitor.visit_list_item(self)


@dataclass
class Table(Node):
    """Table node with optional header.

    Parameters
    ----------
    rows : list of TableRow, default = empty list
        Table rows (excluding header)
    header : TableRow or None, default = None
        Optional header row, rendered as the first row
    metadata : dict, default = empty dict
        Table metadata

    """

    rows: list[TableRow] = field(default_factory=list)
    header: Optional[TableRow] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table."""
        return visitor.visit_table(self)


@dataclass
class TableRow(Node):
    """Table row node containing cells.

    Parameters
    ----------
    cells : list of TableCell, default = empty list
        Cells in this row
    metadata : dict, default = empty dict
        Row metadata

    """

    cells: list[TableCell] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table row."""
        return visitor.visit_table_row(self)


@dataclass
class TableCell(Node):
    """Table cell node.

    Parameters
    ----------
    content : list of Node, default = empty list
        Inline content of the cell
    metadata : dict, default = empty dict
        Cell metadata

    """

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table cell."""
        return visitor.visit_table_cell(self)


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass
class Text(Node):
    """Plain text node.

    Parameters
    ----------
    content : str
        Text content
    metadata : dict, default = empty dict
        Text metadata

    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this text.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_text method

        Returns
        -------
        Any
            Result from visitor.visit_text(self)

        """
        return visitor.visit_text(self)


@dataclass
class Emphasis(Node):
    """Emphasis (italic) node."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this emphasis."""
        return visitor.visit_emphasis(self)


@dataclass
class Strong(Node):
    """Strong emphasis (bold) node."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this strong emphasis."""
        return visitor.visit_strong(self)


@dataclass
class Code(Node):
    """Inline code node.

    Parameters
    ----------
    content : str
        Code content, written verbatim
    metadata : dict, default = empty dict
        Code metadata

    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this inline code."""
        return visitor.visit_code(self)


@dataclass
class Link(Node):
    """Link node.

    Parameters
    ----------
    url : str
        Link destination URL
    content : list of Node, default = empty list
        Inline nodes representing link text
    title : str or None, default = None
        Explicit display title; takes precedence over the content text
    metadata : dict, default = empty dict
        Link metadata

    """

    url: str
    content: list[Node] = field(default_factory=list)
    title: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this link.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_link method

        Returns
        -------
        Any
            Result from visitor.visit_link(self)

        """
        return visitor.visit_link(self)


@dataclass
class LineBreak(Node):
    """Hard line break node."""

    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this line break."""
        return visitor.visit_line_break(self)


@dataclass
class Emoji(Node):
    """Emoji node written as its shortcode.

    Parameters
    ----------
    shortcode : str
        Emoji name without delimiters, e.g. ``"smile"``
    metadata : dict, default = empty dict
        Emoji metadata

    """

    shortcode: str
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def display_text(self) -> str:
        """Return the delimited shortcode, e.g. ``:smile:``."""
        return f"{EMOJI_DELIMITER}{self.shortcode}{EMOJI_DELIMITER}"

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this emoji."""
        return visitor.visit_emoji(self)


# ============================================================================
# Entity Nodes
# ============================================================================


@dataclass
class Keyword(Node):
    """Base class for keyword entities (hashtags and cashtags).

    Parameters
    ----------
    text : str
        Keyword text without its prefix character
    data : any, optional
        Opaque payload exported with the keyword entity
    index : int or None, default = None
        Ordinal assigned by the parser in document order. Not part of equality.
    metadata : dict, default = empty dict
        Keyword metadata

    """

    prefix = ""

    text: str
    data: Any = None
    index: Optional[int] = field(default=None, compare=False)
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def display_text(self) -> str:
        """Text as written in a message, prefix included."""
        return f"{self.prefix}{self.text}"


@dataclass
class HashTag(Keyword):
    """Hashtag entity node (``#tag``)."""

    prefix = HASHTAG_PREFIX

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this hashtag."""
        return visitor.visit_hashtag(self)


@dataclass
class CashTag(Keyword):
    """Cashtag entity node (``$TICKER``)."""

    prefix = CASHTAG_PREFIX

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this cashtag."""
        return visitor.visit_cashtag(self)


@dataclass
class Mention(Node):
    """User mention entity node.

    Parameters
    ----------
    user_id : int
        Numeric identifier of the mentioned user
    pretty_name : str or None, default = None
        Display name of the user
    screen_name : str or None, default = None
        Handle of the user
    email : str or None, default = None
        Email address of the user
    index : int or None, default = None
        Ordinal assigned by the parser in document order. Not part of equality.
    metadata : dict, default = empty dict
        Mention metadata

    Examples
    --------
        >>> Mention(user_id=42, pretty_name="Jane Doe").display_text
        '@Jane Doe'

    """

    user_id: int
    pretty_name: Optional[str] = None
    screen_name: Optional[str] = None
    email: Optional[str] = None
    index: Optional[int] = field(default=None, compare=False)
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def display_text(self) -> str:
        """Text written for the mention: ``@`` followed by the best available name."""
        name = self.pretty_name or self.screen_name or self.email or str(self.user_id)
        return f"{MENTION_PREFIX}{name}"

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this mention."""
        return visitor.visit_mention(self)


@dataclass
class DateTime(Node):
    """Date/time entity node.

    Parameters
    ----------
    entity_id : str
        Identifier exported as the entity ``id``
    value : str
        Literal date/time text written into the message
    format : str or None, default = None
        Optional format hint exported with the entity
    metadata : dict, default = empty dict
        Date/time metadata

    """

    entity_id: str
    value: str
    format: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this date/time."""
        return visitor.visit_date_time(self)


# ============================================================================
# Form Nodes
# ============================================================================


@dataclass
class Form(Node):
    """Interactive form container."""

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this form."""
        return visitor.visit_form(self)


@dataclass
class Button(Node):
    """Form button with inline label content."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this button."""
        return visitor.visit_button(self)


@dataclass
class Option(Node):
    """Single choice of a Select."""

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this option."""
        return visitor.visit_option(self)


@dataclass
class Select(Node):
    """Dropdown control.

    Parameters
    ----------
    options : list of Option, default = empty list
        Choices offered by the dropdown
    placeholder : str or None, default = None
        Placeholder text
    label : str or None, default = None
        Label shown next to the control
    tooltip : str or None, default = None
        Tooltip text
    metadata : dict, default = empty dict
        Select metadata

    """

    options: list[Option] = field(default_factory=list)
    placeholder: Optional[str] = None
    label: Optional[str] = None
    tooltip: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this select."""
        return visitor.visit_select(self)


@dataclass
class TextField(Node):
    """Single-line text input control.

    Parameters
    ----------
    placeholder : str or None, default = None
        Placeholder text
    initial_value : str or None, default = None
        Value pre-filled in the control
    label : str or None, default = None
        Label shown next to the control
    tooltip : str or None, default = None
        Tooltip text
    metadata : dict, default = empty dict
        Control metadata

    """

    placeholder: Optional[str] = None
    initial_value: Optional[str] = None
    label: Optional[str] = None
    tooltip: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this text field."""
        return visitor.visit_text_field(self)


@dataclass
class TextArea(Node):
    """Multi-line text input control. Same fields as TextField."""

    placeholder: Optional[str] = None
    initial_value: Optional[str] = None
    label: Optional[str] = None
    tooltip: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this text area."""
        return visitor.visit_text_area(self)


@dataclass
class PersonSelector(Node):
    """User picker control."""

    placeholder: Optional[str] = None
    label: Optional[str] = None
    tooltip: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this person selector."""
        return visitor.visit_person_selector(self)


@dataclass
class FormElement(Node):
    """Generic form control without a dedicated node (checkbox, radio, ...).

    Parameters
    ----------
    kind : str
        Human-readable control name written after the opening parenthesis
    text : str, default = ''
        Label text of the control
    metadata : dict, default = empty dict
        Control metadata

    """

    kind: str
    text: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this form element."""
        return visitor.visit_form_element(self)


# ============================================================================
# Intermediate Markers
# ============================================================================


@dataclass(frozen=True)
class EntityMarker:
    """Entity reference decoded from the delimiter grammar.

    Parameters
    ----------
    entity_type : str
        Upper-cased entity type (``USER_FOLLOW``, ``KEYWORD``, ``URL``, ...)
    entity_id : str
        Identifier of the entity descriptor

    """

    entity_type: str
    entity_id: str


@dataclass(frozen=True)
class TableMarker:
    """Table payload decoded from the delimiter grammar.

    Parameters
    ----------
    rows : tuple of tuple of str
        Cell text, row by row

    """

    rows: tuple[tuple[str, ...], ...]


def get_node_children(node: Node) -> list[Node]:
    """Get all child nodes from a node.

    Parameters
    ----------
    node : Node
        The node to get children from

    Returns
    -------
    list of Node
        List of child nodes (empty list if node has no children)

    Examples
    --------
    >>> item = ListItem(children=[Text("Hello "), Strong(content=[Text("world")])])
    >>> len(get_node_children(item))
    2

    """
    if isinstance(node, (Document, ListItem, Form)):
        return list(node.children)

    if isinstance(node, (Paragraph, Preformatted, Emphasis, Strong, Link, TableCell, Button, Option)):
        return list(node.content)

    if isinstance(node, List):
        return list(node.items)

    if isinstance(node, Table):
        children: list[Node] = []
        if node.header:
            children.append(node.header)
        children.extend(node.rows)
        return children

    if isinstance(node, TableRow):
        return list(node.cells)

    if isinstance(node, Select):
        return list(node.options)

    # Leaf nodes (no children)
    return []
