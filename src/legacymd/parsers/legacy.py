#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/legacymd/parsers/legacy.py
"""Legacy Markdown to AST parser.

This module converts a legacy Markdown message and its side-channel entity and
media JSON into a document tree. Entities and tables are spliced into the text
as inline markers, the enriched text is tokenized with a restricted mistune
instance, and the token stream is walked into AST nodes.

Structural problems with the entity or media payloads raise a
``ValidationError`` before tokenization. Content that cannot be represented
(unresolvable mentions, rejected link destinations, unknown entity types)
degrades to plain text and is recorded in ``Document.degradations``.

"""

from __future__ import annotations

import logging
import re
from typing import Any, Optional, Union

from legacymd.ast.nodes import (
    CashTag,
    Code,
    CodeBlock,
    DateTime,
    Degradation,
    Document,
    Emphasis,
    EntityMarker,
    HashTag,
    LineBreak,
    Link,
    List,
    ListItem,
    Mention,
    Node,
    Strong,
    Table,
    TableCell,
    TableMarker,
    TableRow,
    Text,
    ThematicBreak,
)
from legacymd.constants import (
    CASHTAG_PREFIX,
    CODE_BLOCK_FENCE,
    DATA,
    DEFAULT_BULLET_MARKER,
    DEFAULT_ORDERED_DELIMITER,
    EMAIL,
    EXPANDED_URL,
    FORMAT,
    HASHTAG_PREFIX,
    INDEX,
    INDEX_START,
    NON_BREAKING_SPACE,
    PRETTY_NAME,
    SCREEN_NAME,
    TEXT,
    USER_MENTION_TYPES,
    VALUE,
    DegradationKind,
)
from legacymd.delimiters import MARKER_PATTERN, contains_sentinel, decode_marker, strip_sentinels
from legacymd.entities import EntityType
from legacymd.exceptions import ParsingError, ValidationError
from legacymd.options.legacy import LegacyParserOptions
from legacymd.parsers._tokenizer import MARKER_TOKEN, get_tokenizer
from legacymd.parsers.base import BaseParser
from legacymd.parsers.enrichment import (
    enrich_text,
    find_descriptors,
    index_entities,
    load_payload,
    scalar_text,
    validate_entities,
    validate_media,
)
from legacymd.resolver import UserInfo, UserResolver
from legacymd.utils.security import validate_link_destination

logger = logging.getLogger(__name__)

_MARKER_RE = re.compile(MARKER_PATTERN)
_DIGITS_RE = re.compile(r"^[0-9]+$")

_BLOCK_TOKENS = frozenset({"paragraph", "block_text", "block_quote", "block_code", "list", "thematic_break"})
_LINE_ENDING_BLOCKS = (List, CodeBlock, ThematicBreak)


class LegacyMarkdownParser(BaseParser):
    """Convert legacy Markdown and entity JSON to an AST.

    Parameters
    ----------
    resolver : UserResolver or None, default = None
        Lookup capability used to turn mention ids into users. Without a
        resolver every mention degrades to its literal name.
    options : LegacyParserOptions or None, default = None
        Parsing options

    Examples
    --------
    Parse a message with a hashtag:

        >>> parser = LegacyMarkdownParser()
        >>> doc = parser.parse(
        ...     "Ship it #release",
        ...     entities=[{"id": "#release", "type": "KEYWORD", "indexStart": 8, "indexEnd": 16}],
        ... )
        >>> doc.children[0].content
        'Ship it '
        >>> doc.children[1].display_text
        '#release'

    """

    def __init__(self, resolver: Optional[UserResolver] = None, options: LegacyParserOptions | None = None):
        """Initialize the legacy Markdown parser with a resolver and options."""
        BaseParser._validate_options_type(options, LegacyParserOptions, "legacy")
        options = options or LegacyParserOptions()
        super().__init__(options)
        self.options: LegacyParserOptions = options
        self.resolver = resolver
        self._reset()

    def _reset(self) -> None:
        self._index: int = 0
        self._parents: list[Node] = []
        self._descriptors: dict[tuple[str, str], dict[str, Any]] = {}
        self._degradations: list[Degradation] = []

    def parse(self, text: str, entities: Any = None, media: Any = None) -> Document:
        """Parse a legacy Markdown message into an AST.

        Parameters
        ----------
        text : str
            Legacy Markdown message
        entities : list, dict, str or None, default = None
            Entity descriptors, either decoded or as JSON text. Every object
            carrying ``indexStart`` is treated as a descriptor, so flat lists
            and grouped ``{"userMentions": [...]}`` payloads are both accepted.
        media : list, dict, str or None, default = None
            Table payloads, either decoded or as JSON text. Every object
            carrying ``index`` is treated as a descriptor.

        Returns
        -------
        Document
            Parsed document; ``degradations`` lists content that fell back to
            plain text

        Raises
        ------
        ValidationError
            If the text contains reserved delimiter characters or a payload
            is malformed
        ParsingError
            If the tokenizer fails on the enriched text

        """
        if not isinstance(text, str):
            raise ValidationError(
                f"Message text must be a string, got {type(text).__name__}",
                parameter_name="text",
                parameter_value=type(text).__name__,
            )
        if contains_sentinel(text):
            raise ValidationError(
                "Message text contains reserved delimiter characters (U+FDD0 to U+FDD3)",
                parameter_name="text",
            )

        if self.options.normalize_nbsp:
            text = text.replace(NON_BREAKING_SPACE, " ")

        entity_descriptors = find_descriptors(load_payload(entities, "entities"), INDEX_START)
        media_descriptors = find_descriptors(load_payload(media, "media"), INDEX)
        validate_entities(entity_descriptors)
        validate_media(media_descriptors)

        self._reset()
        try:
            self._descriptors = index_entities(entity_descriptors)
            enriched = enrich_text(text, entity_descriptors, media_descriptors)
            tokens = self._tokenize(enriched)

            document = Document()
            self._parents.append(document)
            document.children = self._process_tokens(tokens)
            document.degradations = list(self._degradations)
        finally:
            self._reset()

        logger.debug(
            f"Parsed message with {len(entity_descriptors)} entities into {len(document.children)} nodes "
            f"({len(document.degradations)} degraded)"
        )
        return document

    def _tokenize(self, enriched: str) -> list[dict[str, Any]]:
        markdown = get_tokenizer(self.options.max_nested_level)
        try:
            tokens, _state = markdown.parse(enriched)
        except (RecursionError, ValueError, IndexError, KeyError, TypeError) as e:
            raise ParsingError(
                f"Failed to tokenize legacy Markdown: {e}", parsing_stage="tokenize", original_error=e
            ) from e
        return tokens if isinstance(tokens, list) else []

    # ------------------------------------------------------------------
    # Tree building helpers
    # ------------------------------------------------------------------

    def _parent(self) -> Node:
        return self._parents[-1]

    def _within(self, node: Node, tokens: list[dict[str, Any]], block: bool = False) -> list[Node]:
        """Process ``tokens`` with ``node`` as the insertion parent."""
        self._parents.append(node)
        try:
            if block:
                return self._process_tokens(tokens)
            return self._process_inline_tokens(tokens)
        finally:
            self._parents.pop()

    @staticmethod
    def _extend(nodes: list[Node], produced: Union[Node, list[Node], None]) -> None:
        """Append produced nodes, merging adjacent text."""
        if produced is None:
            return
        for node in produced if isinstance(produced, list) else [produced]:
            if isinstance(node, Text):
                if not node.content:
                    continue
                if nodes and isinstance(nodes[-1], Text):
                    nodes[-1] = Text(content=nodes[-1].content + node.content)
                    continue
            nodes.append(node)

    def _degrade(self, kind: DegradationKind, value: str, reason: str) -> Text:
        logger.debug(f"Degrading {kind} {value!r} to text: {reason}")
        self._degradations.append(Degradation(kind=kind, value=value, reason=reason))
        return Text(content=value)

    def _next_index(self) -> int:
        self._index += 1
        return self._index

    def _restore_markers(self, raw: str) -> str:
        """Replace markers inside literal text with the text they stand for."""

        def replace(match: re.Match[str]) -> str:
            marker = decode_marker(match.group("legacy_marker_type"), match.group("legacy_marker_body"))
            if isinstance(marker, TableMarker):
                return ""
            descriptor = self._descriptors.get((marker.entity_type, marker.entity_id), {})
            text = descriptor.get(TEXT)
            return text if isinstance(text, str) else marker.entity_id

        return strip_sentinels(_MARKER_RE.sub(replace, raw))

    # ------------------------------------------------------------------
    # Block tokens
    # ------------------------------------------------------------------

    def _process_tokens(self, tokens: list[dict[str, Any]], first: bool = True) -> list[Node]:
        """Process block tokens into nodes for the current parent.

        Parameters
        ----------
        tokens : list of dict
            Block token dictionaries
        first : bool, default = True
            Whether the tokens open their container

        Returns
        -------
        list of Node
            AST nodes to insert into the current parent

        """
        nodes: list[Node] = []

        for token in tokens:
            token_type = token.get("type", "")
            if token_type == "blank_line":
                continue

            if token_type in ("paragraph", "block_text"):
                self._extend(nodes, self._process_paragraph(token, first, nodes[-1] if nodes else None))
            elif token_type == "block_quote":
                # Quote markup is not part of the message model; its blocks are kept
                self._extend(nodes, self._process_tokens(token.get("children", []), first))
            elif token_type in _BLOCK_TOKENS:
                self._extend(nodes, self._process_token(token))
            else:
                self._extend(nodes, self._process_inline_token(token))
            first = False

        return nodes

    def _process_token(self, token: dict[str, Any]) -> Union[Node, list[Node], None]:
        """Process a single block token other than a paragraph or quote."""
        token_type = token.get("type", "")

        if token_type == "block_code":
            return self._process_code_block(token)
        elif token_type == "list":
            return self._process_list(token)
        elif token_type == "thematic_break":
            return ThematicBreak()

        return None

    def _process_paragraph(self, token: dict[str, Any], first: bool, previous: Optional[Node] = None) -> list[Node]:
        """Process a paragraph token.

        The paragraph's inline content goes straight into the current parent.
        A line break is inserted in front of it unless the parent is a list
        item, the paragraph opens the document, or it follows a block that
        already ends its own line (list, code block, thematic break).
        """
        parent = self._parent()
        nodes: list[Node] = []
        if (
            not isinstance(parent, ListItem)
            and not (isinstance(parent, Document) and first)
            and not isinstance(previous, _LINE_ENDING_BLOCKS)
        ):
            nodes.append(LineBreak())

        self._extend(nodes, self._process_inline_tokens(token.get("children", [])))
        return nodes

    def _process_code_block(self, token: dict[str, Any]) -> Node:
        """Process a code block token.

        Only blocks fenced with exactly three backticks become code blocks;
        any other fence is kept as literal text around the content.
        """
        marker = token.get("marker", "")
        content = self._restore_markers(token.get("raw", "")).strip()

        if token.get("style") == "fenced" and marker == CODE_BLOCK_FENCE:
            attrs = token.get("attrs", {})
            info = attrs.get("info") if isinstance(attrs, dict) else None
            return CodeBlock(content=content, language=info or None)

        return Text(content=f"{marker}{content}{marker}")

    def _process_list(self, token: dict[str, Any]) -> List:
        """Process a list token.

        Parameters
        ----------
        token : dict
            List token with 'children', 'bullet' and 'attrs' (ordered, start)

        Returns
        -------
        List
            List AST node

        """
        attrs = token.get("attrs", {})
        if not isinstance(attrs, dict):
            attrs = {}

        ordered = bool(attrs.get("ordered", False))
        marker = token.get("bullet", "")
        node = List(
            ordered=ordered,
            start=attrs.get("start", 1),
            delimiter=marker if ordered and marker else DEFAULT_ORDERED_DELIMITER,
            bullet=marker if not ordered and marker else DEFAULT_BULLET_MARKER,
            tight=token.get("tight", True),
        )

        self._parents.append(node)
        try:
            for child in token.get("children", []):
                if isinstance(child, dict) and child.get("type") == "list_item":
                    item = ListItem()
                    item.children = self._within(item, child.get("children", []), block=True)
                    node.items.append(item)
        finally:
            self._parents.pop()

        return node

    # ------------------------------------------------------------------
    # Inline tokens
    # ------------------------------------------------------------------

    def _process_inline_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process inline tokens.

        Parameters
        ----------
        tokens : list of dict
            Inline token dictionaries

        Returns
        -------
        list of Node
            Inline AST nodes

        """
        nodes: list[Node] = []

        for token in tokens:
            self._extend(nodes, self._process_inline_token(token))

        return nodes

    def _process_inline_token(self, token: dict[str, Any]) -> Union[Node, list[Node], None]:
        """Process a single inline token."""
        token_type = token.get("type", "")

        handler_map: dict[str, Any] = {
            "text": self._handle_text_token,
            "strong": self._handle_strong_token,
            "emphasis": self._handle_emphasis_token,
            "codespan": self._handle_codespan_token,
            "link": self._handle_link_token,
            "image": self._handle_image_token,
            "linebreak": self._handle_linebreak_token,
            "softbreak": self._handle_linebreak_token,
            MARKER_TOKEN: self._handle_marker_token,
        }

        handler = handler_map.get(token_type)
        if handler:
            return handler(token)

        if "raw" in token:
            return Text(content=self._restore_markers(token["raw"]))
        if "children" in token:
            return self._process_inline_tokens(token["children"])
        return None

    def _handle_text_token(self, token: dict[str, Any]) -> Text:
        """Handle text token."""
        return Text(content=self._restore_markers(token.get("raw", "")))

    def _handle_strong_token(self, token: dict[str, Any]) -> Strong:
        """Handle strong token."""
        node = Strong()
        node.content = self._within(node, token.get("children", []))
        return node

    def _handle_emphasis_token(self, token: dict[str, Any]) -> Emphasis:
        """Handle emphasis token."""
        node = Emphasis()
        node.content = self._within(node, token.get("children", []))
        return node

    def _handle_codespan_token(self, token: dict[str, Any]) -> Code:
        """Handle codespan token."""
        return Code(content=self._restore_markers(token.get("raw", "")).strip())

    def _handle_linebreak_token(self, token: dict[str, Any]) -> LineBreak:
        """Handle linebreak and softbreak tokens."""
        return LineBreak()

    def _handle_image_token(self, token: dict[str, Any]) -> list[Node]:
        """Handle image token; only the alt text is kept."""
        return self._process_inline_tokens(token.get("children", []))

    def _handle_link_token(self, token: dict[str, Any]) -> Node:
        """Handle link token.

        A destination rejected by link validation degrades to a text node
        holding the destination.
        """
        attrs = token.get("attrs", {})
        if not isinstance(attrs, dict):
            attrs = {}
        url = self._restore_markers(attrs.get("url", "") or "")
        title = attrs.get("title", None)

        try:
            validate_link_destination(url, self.options.allowed_link_schemes)
        except ValueError as e:
            return self._degrade("link", url, str(e))

        node = Link(url=url, title=title)
        node.content = _trim_label(self._within(node, token.get("children", [])))
        return node

    # ------------------------------------------------------------------
    # Entity and table markers
    # ------------------------------------------------------------------

    def _handle_marker_token(self, token: dict[str, Any]) -> Node:
        """Handle an entity or table marker token."""
        attrs = token.get("attrs", {})
        marker = decode_marker(attrs.get("marker_type", ""), attrs.get("body", ""))
        if isinstance(marker, TableMarker):
            return self._build_table(marker)

        descriptor = self._descriptors.get((marker.entity_type, marker.entity_id), {})
        entity_type = marker.entity_type

        if entity_type == EntityType.KEYWORD.value:
            return self._build_keyword(marker, descriptor)
        if entity_type in USER_MENTION_TYPES:
            return self._build_mention(marker, descriptor)
        if entity_type == EntityType.URL.value:
            return self._build_url(marker, descriptor)
        if entity_type == EntityType.DATE_TIME.value:
            return self._build_date_time(marker, descriptor)

        return self._degrade("entity", marker.entity_id, f"Unsupported entity type {entity_type}")

    def _build_keyword(self, marker: EntityMarker, descriptor: dict[str, Any]) -> Node:
        keyword = marker.entity_id
        prefix, text = keyword[:1], keyword[1:]
        data = descriptor.get(DATA)

        if prefix == HASHTAG_PREFIX:
            return HashTag(text=text, data=data, index=self._next_index())
        if prefix == CASHTAG_PREFIX:
            return CashTag(text=text, data=data, index=self._next_index())

        return self._degrade("keyword", keyword, f"Unsupported keyword prefix {prefix!r}")

    def _build_mention(self, marker: EntityMarker, descriptor: dict[str, Any]) -> Node:
        """Resolve a mention marker, falling back to the descriptor's literal name."""
        index = self._next_index()
        raw_id = marker.entity_id

        user = None
        reason = "User could not be resolved"
        if not _DIGITS_RE.match(raw_id):
            reason = f"Mention id {raw_id!r} is not numeric"
        elif not self.options.resolve_mentions:
            reason = "Mention resolution is disabled"
        elif self.resolver is None:
            reason = "No user resolver configured"
        else:
            user = self._resolve_user(int(raw_id))

        if user is None:
            fallback = next(
                (
                    scalar_text(descriptor[key])
                    for key in (PRETTY_NAME, SCREEN_NAME, EMAIL)
                    if descriptor.get(key) is not None
                ),
                raw_id,
            )
            return self._degrade("mention", fallback, reason)

        return Mention(
            user_id=user.user_id,
            pretty_name=user.pretty_name,
            screen_name=user.screen_name,
            email=user.email,
            index=index,
        )

    def _resolve_user(self, user_id: int) -> Optional[UserInfo]:
        assert self.resolver is not None
        try:
            return self.resolver.resolve(user_id)
        except LookupError as e:
            logger.debug(f"Resolver failed for user {user_id}: {e}")
            return None

    def _build_url(self, marker: EntityMarker, descriptor: dict[str, Any]) -> Node:
        url = descriptor.get(EXPANDED_URL) or marker.entity_id
        url = strip_sentinels(scalar_text(url))
        try:
            validate_link_destination(url, self.options.allowed_link_schemes)
        except ValueError as e:
            return self._degrade("link", url, str(e))

        text = descriptor.get(TEXT)
        label = text if isinstance(text, str) and text.strip() else url
        return Link(url=url, content=[Text(content=label)])

    def _build_date_time(self, marker: EntityMarker, descriptor: dict[str, Any]) -> DateTime:
        value = descriptor.get(VALUE, descriptor.get(TEXT, marker.entity_id))
        entity_format = descriptor.get(FORMAT)
        return DateTime(
            entity_id=marker.entity_id,
            value=scalar_text(value),
            format=scalar_text(entity_format) if entity_format is not None else None,
        )

    @staticmethod
    def _build_table(marker: TableMarker) -> Table:
        rows = []
        for row in marker.rows:
            cells = [TableCell(content=[Text(content=cell)] if cell else []) for cell in row]
            rows.append(TableRow(cells=cells))
        return Table(rows=rows)


def _trim_label(nodes: list[Node]) -> list[Node]:
    """Strip the padding spaces around a link label."""
    if nodes and isinstance(nodes[0], Text):
        nodes[0] = Text(content=nodes[0].content.lstrip(" "))
    if nodes and isinstance(nodes[-1], Text):
        nodes[-1] = Text(content=nodes[-1].content.rstrip(" "))
    return [node for node in nodes if not (isinstance(node, Text) and not node.content)]
