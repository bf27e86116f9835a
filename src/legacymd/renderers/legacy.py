#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/legacymd/renderers/legacy.py
"""Legacy Markdown rendering from AST.

This module provides the LegacyMarkdownRenderer class which converts a message
document tree into flat legacy Markdown plus entity records whose offsets
point into that text.

The renderer walks the tree in document order with the visitor pattern. Every
write goes through a single tracked buffer, so the offset of an entity is the
length of the text emitted before it. List nesting is tracked with an explicit
frame stack that is pushed and popped around each list.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Optional

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
    TableRow,
    Text,
    TextArea,
    TextField,
    ThematicBreak,
)
from legacymd.ast.utils import extract_text
from legacymd.ast.visitors import NodeVisitor
from legacymd.constants import (
    BUTTON_LABEL,
    DATA,
    EMOJI_DELIMITER,
    EMPHASIS_DELIMITER,
    EXPANDED_URL,
    FORM_CLOSING_DELIMITER,
    FORM_ELEMENT_CLOSE,
    FORM_ELEMENT_OPEN,
    FORM_OPENING_DELIMITER,
    FORMAT,
    LINK_TEMPLATE,
    OPTION_CLOSE,
    OPTION_OPEN,
    PERSON_SELECTOR_LABEL,
    PRETTY_NAME,
    SCREEN_NAME,
    SELECT_CLOSE,
    SELECT_LABEL,
    STRONG_DELIMITER,
    TABLE_CELL_DELIMITER,
    TABLE_CLOSING_DELIMITER,
    TABLE_OPENING_DELIMITER,
    TABLE_ROW_DELIMITER,
    TEXT_AREA_LABEL,
    TEXT_FIELD_LABEL,
    THEMATIC_BREAK,
    USER_TYPE,
    VALUE,
)
from legacymd.delimiters import strip_sentinels
from legacymd.entities import EntityRecord, EntityType, RenderResult
from legacymd.options.legacy import LegacyRendererOptions
from legacymd.renderers.base import BaseRenderer
from legacymd.utils.escape import escape_inline_code, escape_legacy_markdown, strip_newlines

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _ListFrame:
    """Marker state of the innermost list being rendered."""

    ordered: bool
    marker: str
    indent: str = ""
    counter: int = 0
    item_width: int = 0


class LegacyMarkdownRenderer(NodeVisitor, BaseRenderer):
    """Render AST nodes to legacy Markdown text and entity records.

    Parameters
    ----------
    options : LegacyRendererOptions or None, default = None
        Rendering options

    Examples
    --------
    Basic usage:

        >>> from legacymd.ast import Document, Link, Paragraph, Text
        >>> from legacymd.renderers.legacy import LegacyMarkdownRenderer
        >>> doc = Document(children=[
        ...     Paragraph(content=[Text(content="See "), Link(url="https://example.com")])
        ... ])
        >>> result = LegacyMarkdownRenderer().render_to_result(doc)
        >>> result.text
        'See [ https://example.com ](https://example.com)\\n\\n'
        >>> result.urls[0].index_start
        4

    """

    def __init__(self, options: LegacyRendererOptions | None = None):
        """Initialize the legacy Markdown renderer with options."""
        BaseRenderer._validate_options_type(options, LegacyRendererOptions, "legacy")
        options = options or LegacyRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: LegacyRendererOptions = options
        self._reset()

    def _reset(self) -> None:
        self._output: list[str] = []
        self._length: int = 0
        self._records: list[EntityRecord] = []
        self._list_frames: list[_ListFrame] = []
        self._parents: list[Node] = []
        self._preformatted_depth: int = 0

    def render_to_result(self, document: Document) -> RenderResult:
        """Render a document to text and entity records.

        Parameters
        ----------
        document : Document
            The document node to render

        Returns
        -------
        RenderResult
            Rendered text and entity records in render order

        """
        self._reset()
        try:
            document.accept(self)
            result = RenderResult(text="".join(self._output), records=list(self._records))
        finally:
            self._reset()

        logger.debug(f"Rendered {len(result.text)} characters with {len(result.records)} entities")
        return result

    def render_to_string(self, document: Document) -> str:
        """Render a document AST to legacy Markdown text.

        Parameters
        ----------
        document : Document
            The document node to render

        Returns
        -------
        str
            Legacy Markdown text

        """
        return self.render_to_result(document).text

    # ------------------------------------------------------------------
    # Output tracking
    # ------------------------------------------------------------------

    def _write(self, text: str) -> None:
        text = strip_sentinels(text)
        if text:
            self._output.append(text)
            self._length += len(text)

    def _write_stripped(self, text: str) -> None:
        self._write(" ".join(text.split()))

    def _last_char(self) -> str:
        for chunk in reversed(self._output):
            if chunk:
                return chunk[-1]
        return ""

    def _line(self) -> None:
        """Write a newline unless the buffer is empty or already ends with one."""
        last = self._last_char()
        if last and last != "\n":
            self._write("\n")

    def _double_line(self) -> None:
        last = self._last_char()
        if last and last != "\n":
            self._write("\n\n")

    def _tail(self, count: int) -> str:
        chunks: list[str] = []
        size = 0
        for chunk in reversed(self._output):
            chunks.append(chunk)
            size += len(chunk)
            if size >= count:
                break
        return "".join(reversed(chunks))[-count:]

    def _blank_line(self) -> None:
        """End the current line and write one empty line, unless the buffer is empty."""
        tail = self._tail(2)
        if not tail:
            return
        if not tail.endswith("\n"):
            self._write("\n\n")
        elif tail != "\n\n":
            self._write("\n")

    def _write_entity(
        self,
        entity_type: EntityType,
        entity_id: Any,
        text: str,
        attributes: Optional[dict[str, Any]] = None,
        record_text: Optional[str] = None,
    ) -> None:
        text = strip_sentinels(text)
        start = self._length
        self._write(text)
        self._records.append(
            EntityRecord(
                entity_type=entity_type,
                entity_id=entity_id,
                text=text if record_text is None else record_text,
                index_start=start,
                index_end=self._length,
                attributes=attributes or {},
            )
        )

    def _visit_children(self, parent: Node, children: list[Any]) -> None:
        self._parents.append(parent)
        try:
            previous = None
            for child in children:
                # Content after a list outside an item would continue its last item
                if isinstance(previous, List) and not isinstance(parent, ListItem):
                    self._blank_line()
                child.accept(self)
                previous = child
        finally:
            self._parents.pop()

    def _parent(self) -> Optional[Node]:
        return self._parents[-1] if self._parents else None

    def _escape(self, text: str) -> str:
        if self.options.escape_special:
            return escape_legacy_markdown(text)
        return text

    # ------------------------------------------------------------------
    # Block-level nodes
    # ------------------------------------------------------------------

    def visit_document(self, node: Document) -> None:
        """Render a Document node."""
        self._visit_children(node, node.children)

    def visit_paragraph(self, node: Paragraph) -> None:
        """Render a Paragraph node.

        Paragraphs are separated by one blank line. A paragraph directly inside
        a list item renders its content only.
        """
        if isinstance(self._parent(), ListItem):
            self._visit_children(node, node.content)
            return

        self._double_line()
        if node.content:
            self._visit_children(node, node.content)
            self._double_line()

    def visit_code_block(self, node: CodeBlock) -> None:
        """Render a fenced CodeBlock node with its content verbatim."""
        fence = node.fence_char * node.fence_length
        self._line()
        self._write_stripped(fence)
        if node.language is not None:
            self._write(node.language)
        self._line()
        self._write(node.content)
        self._line()
        self._write_stripped(fence)
        self._line()

    def visit_preformatted(self, node: Preformatted) -> None:
        """Render a Preformatted node, keeping line breaks in its text."""
        self._preformatted_depth += 1
        try:
            self._visit_children(node, node.content)
        finally:
            self._preformatted_depth -= 1
        self._line()

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        """Render a ThematicBreak node."""
        self._line()
        self._write(THEMATIC_BREAK)
        self._line()

    def visit_list(self, node: List) -> None:
        """Render a List node.

        A list directly inside a list item is indented past the marker of that
        item; the previous list state is restored when the list ends. Items of
        a loose list are separated by an empty line.

        Parameters
        ----------
        node : List
            List to render

        """
        outer = self._list_frames[-1] if self._list_frames else None
        indent = outer.indent if outer else ""
        if outer and isinstance(self._parent(), ListItem):
            indent += self._nested_indent(outer.item_width)

        # Only an ordered list starting at 1 can interrupt a paragraph
        if node.ordered and node.start != 1:
            self._blank_line()
        else:
            self._line()

        if node.ordered:
            frame = _ListFrame(ordered=True, marker=node.delimiter, indent=indent, counter=node.start)
        else:
            frame = _ListFrame(ordered=False, marker=node.bullet, indent=indent)

        self._list_frames.append(frame)
        self._parents.append(node)
        try:
            for i, item in enumerate(node.items):
                if i and not node.tight:
                    self._blank_line()
                item.accept(self)
            self._line()
        finally:
            self._parents.pop()
            self._list_frames.pop()

        self._line()

    def _nested_indent(self, marker_width: int) -> str:
        indent = self.options.list_indent
        if len(indent.expandtabs(4)) >= marker_width:
            return indent
        return " " * marker_width

    def visit_list_item(self, node: ListItem) -> None:
        """Render a ListItem node with the marker of the innermost list."""
        if not self._list_frames:
            logger.debug("List item outside of a list rendered without marker")
            self._visit_children(node, node.children)
            self._line()
            return

        frame = self._list_frames[-1]
        marker = f"{frame.counter}{frame.marker} " if frame.ordered else f"{frame.marker} "
        self._write(frame.indent + marker)
        self._list_frames[-1] = replace(frame, item_width=len(marker))

        self._visit_children(node, node.children)
        self._line()

        if frame.ordered:
            self._list_frames[-1] = replace(frame, counter=frame.counter + 1)

    def visit_table(self, node: Table) -> None:
        """Render a Table node; the header, when present, is the first row."""
        rows = ([node.header] if node.header else []) + list(node.rows)
        self._write(TABLE_OPENING_DELIMITER)
        self._parents.append(node)
        try:
            for i, row in enumerate(rows):
                row.accept(self)
                if i < len(rows) - 1:
                    self._write(TABLE_ROW_DELIMITER)
        finally:
            self._parents.pop()
        self._write(TABLE_CLOSING_DELIMITER)

    def visit_table_row(self, node: TableRow) -> None:
        """Render a TableRow node; cells are separated, never terminated."""
        self._parents.append(node)
        try:
            for i, cell in enumerate(node.cells):
                cell.accept(self)
                if i < len(node.cells) - 1:
                    self._write(TABLE_CELL_DELIMITER)
        finally:
            self._parents.pop()

    def visit_table_cell(self, node: TableCell) -> None:
        """Render a TableCell node."""
        self._visit_children(node, node.content)

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> None:
        """Render a Text node.

        Newlines become spaces outside preformatted regions, then reserved
        characters are escaped.
        """
        content = node.content
        if self.options.strip_newlines and self._preformatted_depth == 0:
            content = strip_newlines(content)
        self._write(self._escape(content))

    def visit_emphasis(self, node: Emphasis) -> None:
        """Render an Emphasis node."""
        self._write(EMPHASIS_DELIMITER)
        self._visit_children(node, node.content)
        self._write(EMPHASIS_DELIMITER)

    def visit_strong(self, node: Strong) -> None:
        """Render a Strong node."""
        self._write(STRONG_DELIMITER)
        self._visit_children(node, node.content)
        self._write(STRONG_DELIMITER)

    def visit_code(self, node: Code) -> None:
        """Render an inline Code node."""
        code, delimiter = escape_inline_code(node.content)
        self._write(f"{delimiter}{code}{delimiter}")

    def visit_link(self, node: Link) -> None:
        """Render a Link node and record a URL entity over the whole markup.

        The title is the explicit title, else the plain text of the content,
        else the destination.
        """
        title = node.title if node.title and node.title.strip() else extract_text(node.content).strip()
        if not title:
            title = node.url
        title = strip_newlines(strip_sentinels(title))
        markdown = LINK_TEMPLATE.format(title=title, url=node.url)
        self._write_entity(
            EntityType.URL,
            node.url,
            markdown,
            attributes={EXPANDED_URL: node.url},
            record_text=title,
        )

    def visit_line_break(self, node: LineBreak) -> None:
        """Render a LineBreak node."""
        self._line()

    def visit_emoji(self, node: Emoji) -> None:
        """Render an Emoji node as its delimited shortcode."""
        self._write(EMOJI_DELIMITER)
        self._write(node.shortcode)
        self._write(EMOJI_DELIMITER)

    # ------------------------------------------------------------------
    # Entity nodes
    # ------------------------------------------------------------------

    def _visit_keyword(self, node: Keyword) -> None:
        text = node.display_text
        attributes = {DATA: node.data} if node.data is not None else None
        self._write_entity(EntityType.KEYWORD, text, text, attributes=attributes)

    def visit_hashtag(self, node: HashTag) -> None:
        """Render a HashTag node and record a KEYWORD entity."""
        self._visit_keyword(node)

    def visit_cashtag(self, node: CashTag) -> None:
        """Render a CashTag node and record a KEYWORD entity."""
        self._visit_keyword(node)

    def visit_mention(self, node: Mention) -> None:
        """Render a Mention node and record a USER_FOLLOW entity."""
        self._write_entity(
            EntityType.USER_FOLLOW,
            node.user_id,
            node.display_text,
            attributes={
                SCREEN_NAME: node.screen_name,
                PRETTY_NAME: node.pretty_name,
                USER_TYPE: self.options.user_type,
            },
        )

    def visit_date_time(self, node: DateTime) -> None:
        """Render a DateTime node and record a DATE_TIME entity."""
        self._write_entity(
            EntityType.DATE_TIME,
            node.entity_id,
            node.value,
            attributes={VALUE: node.value, FORMAT: node.format},
        )

    # ------------------------------------------------------------------
    # Form nodes
    # ------------------------------------------------------------------

    @staticmethod
    def _control_summary(
        placeholder: Optional[str],
        label: Optional[str],
        tooltip: Optional[str],
        initial_value: Optional[str] = None,
    ) -> str:
        segments = [f"[{value}]" for value in (placeholder, label, tooltip) if value is not None]
        summary = ":" + "".join(segments) if segments else ""
        if initial_value is not None:
            summary += ("" if summary else ":") + initial_value
        return summary

    def _write_control(self, label: str, summary: str) -> None:
        self._write(FORM_ELEMENT_OPEN + label)
        self._write(self._escape(summary))
        self._write(FORM_ELEMENT_CLOSE)

    def visit_form(self, node: Form) -> None:
        """Render a Form node between blank banner lines."""
        self._write(FORM_OPENING_DELIMITER)
        self._visit_children(node, node.children)
        self._write(FORM_CLOSING_DELIMITER)

    def visit_button(self, node: Button) -> None:
        """Render a Button node."""
        self._write(FORM_ELEMENT_OPEN + BUTTON_LABEL)
        self._visit_children(node, node.content)
        self._write(FORM_ELEMENT_CLOSE)

    def visit_select(self, node: Select) -> None:
        """Render a Select node followed by its options."""
        self._write(FORM_ELEMENT_OPEN + SELECT_LABEL)
        self._write(self._escape(self._control_summary(node.placeholder, node.label, node.tooltip)))
        self._write(SELECT_CLOSE)
        self._visit_children(node, node.options)

    def visit_option(self, node: Option) -> None:
        """Render an Option node as a dash item."""
        self._write(OPTION_OPEN)
        self._visit_children(node, node.content)
        self._write(OPTION_CLOSE)

    def visit_text_field(self, node: TextField) -> None:
        """Render a TextField node."""
        summary = self._control_summary(node.placeholder, node.label, node.tooltip, node.initial_value)
        self._write_control(TEXT_FIELD_LABEL, summary)

    def visit_text_area(self, node: TextArea) -> None:
        """Render a TextArea node."""
        summary = self._control_summary(node.placeholder, node.label, node.tooltip, node.initial_value)
        self._write_control(TEXT_AREA_LABEL, summary)

    def visit_person_selector(self, node: PersonSelector) -> None:
        """Render a PersonSelector node."""
        self._write_control(PERSON_SELECTOR_LABEL, self._control_summary(node.placeholder, node.label, node.tooltip))

    def visit_form_element(self, node: FormElement) -> None:
        """Render a generic FormElement node as ``(<kind><text>)``."""
        self._write_control(node.kind, node.text)
