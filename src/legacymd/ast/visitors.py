#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/legacymd/ast/visitors.py
"""Visitor pattern implementation for AST traversal.

This module provides the visitor base class for traversing and processing AST
nodes. Every node kind has a matching abstract ``visit_*`` method, so a
concrete visitor that forgets a node kind cannot be instantiated.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from legacymd.ast.nodes import (
    Button,
    CashTag,
    Code,
    CodeBlock,
    DateTime,
    Document,
    Emoji,
    Emphasis,
    Form,
    FormElement,
    HashTag,
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
    TableRow,
    Text,
    TextArea,
    TextField,
    ThematicBreak,
)


class NodeVisitor(ABC):
    """Abstract base class for AST node visitors.

    Subclasses implement one visit_* method per node type. All visit methods
    accept a node and return Any (typically None for side-effect visitors such
    as renderers).

    """

    # Block-level nodes

    @abstractmethod
    def visit_document(self, node: Document) -> Any:
        """Visit a Document node.

        Parameters
        ----------
        node : Document
            The document node to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass

    @abstractmethod
    def visit_paragraph(self, node: Paragraph) -> Any:
        """Visit a Paragraph node."""
        pass

    @abstractmethod
    def visit_code_block(self, node: CodeBlock) -> Any:
        """Visit a CodeBlock node."""
        pass

    @abstractmethod
    def visit_preformatted(self, node: Preformatted) -> Any:
        """Visit a Preformatted node."""
        pass

    @abstractmethod
    def visit_thematic_break(self, node: ThematicBreak) -> Any:
        """Visit a ThematicBreak node."""
        pass

    @abstractmethod
    def visit_list(self, node: List) -> Any:
        """Visit a List node."""
        pass

    @abstractmethod
    def visit_list_item(self, node: ListItem) -> Any:
        """Visit a ListItem node."""
        pass

    @abstractmethod
    def visit_table(self, node: Table) -> Any:
        """Visit a Table node."""
        pass

    @abstractmethod
    def visit_table_row(self, node: TableRow) -> Any:
        """Visit a TableRow node."""
        pass

    @abstractmethod
    def visit_table_cell(self, node: TableCell) -> Any:
        """Visit a TableCell node."""
        pass

    # Inline nodes

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a Text node.

        Parameters
        ----------
        node : Text
            The text node to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass

    @abstractmethod
    def visit_emphasis(self, node: Emphasis) -> Any:
        """Visit an Emphasis node."""
        pass

    @abstractmethod
    def visit_strong(self, node: Strong) -> Any:
        """Visit a Strong node."""
        pass

    @abstractmethod
    def visit_code(self, node: Code) -> Any:
        """Visit a Code node."""
        pass

    @abstractmethod
    def visit_link(self, node: Link) -> Any:
        """Visit a Link node."""
        pass

    @abstractmethod
    def visit_line_break(self, node: LineBreak) -> Any:
        """Visit a LineBreak node."""
        pass

    @abstractmethod
    def visit_emoji(self, node: Emoji) -> Any:
        """Visit an Emoji node."""
        pass

    # Entity nodes

    @abstractmethod
    def visit_hashtag(self, node: HashTag) -> Any:
        """Visit a HashTag node."""
        pass

    @abstractmethod
    def visit_cashtag(self, node: CashTag) -> Any:
        """Visit a CashTag node."""
        pass

    @abstractmethod
    def visit_mention(self, node: Mention) -> Any:
        """Visit a Mention node."""
        pass

    @abstractmethod
    def visit_date_time(self, node: DateTime) -> Any:
        """Visit a DateTime node."""
        pass

    # Form nodes

    @abstractmethod
    def visit_form(self, node: Form) -> Any:
        """Visit a Form node."""
        pass

    @abstractmethod
    def visit_button(self, node: Button) -> Any:
        """Visit a Button node."""
        pass

    @abstractmethod
    def visit_select(self, node: Select) -> Any:
        """Visit a Select node."""
        pass

    @abstractmethod
    def visit_option(self, node: Option) -> Any:
        """Visit an Option node."""
        pass

    @abstractmethod
    def visit_text_field(self, node: TextField) -> Any:
        """Visit a TextField node."""
        pass

    @abstractmethod
    def visit_text_area(self, node: TextArea) -> Any:
        """Visit a TextArea node."""
        pass

    @abstractmethod
    def visit_person_selector(self, node: PersonSelector) -> Any:
        """Visit a PersonSelector node."""
        pass

    @abstractmethod
    def visit_form_element(self, node: FormElement) -> Any:
        """Visit a FormElement node."""
        pass

    def generic_visit(self, node: Node) -> Any:
        """Fallback visitor for unhandled node types.

        Parameters
        ----------
        node : Node
            The node to visit

        Returns
        -------
        Any
            Result of processing (default: None)

        """
        return None
