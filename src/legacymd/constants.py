#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the legacymd library.

This module centralizes the hardcoded values used by the legacy Markdown codec.
Constants are organized by category:

1. Type Definitions - Literal types and type aliases
2. Document Root - Format and version markers for parsed documents
3. Entity Wire Format - JSON field names and group keys
4. Markdown Output - Literal delimiters emitted by the renderer
5. Form Controls - Delimiters and labels for interactive controls
6. Security Constants - Link destination validation
7. Parser Defaults - Tokenizer configuration and input normalization
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

OrderedListDelimiter = Literal[".", ")"]
BulletMarker = Literal["-", "*", "+"]
CodeFenceChar = Literal["`", "~"]
DegradationKind = Literal["mention", "link", "keyword", "entity"]

# =============================================================================
# Document Root
# =============================================================================

FORMAT_PRESENTATIONML = "presentationml"
MESSAGEML_VERSION = "2.0"

# =============================================================================
# Entity Wire Format
# =============================================================================

# Entity JSON field names
ID = "id"
TYPE = "type"
TEXT = "text"
INDEX = "index"
INDEX_START = "indexStart"
INDEX_END = "indexEnd"
EXPANDED_URL = "expandedUrl"
SCREEN_NAME = "screenName"
PRETTY_NAME = "prettyName"
EMAIL = "email"
USER_TYPE = "userType"
VALUE = "value"
FORMAT = "format"
DATA = "data"

# Group keys in the rendered entity JSON
URLS = "urls"
USER_MENTIONS = "userMentions"
HASHTAGS = "hashtags"
DATETIMES = "datetimes"

REQUIRED_ENTITY_FIELDS = (INDEX_START, INDEX_END, ID, TYPE)

DEFAULT_USER_TYPE = "lc"

# Entity types recognized on the decode side in addition to the four produced types
USER_MENTION_TYPES = frozenset({"USER_FOLLOW", "USER_MENTION"})

# =============================================================================
# Markdown Output
# =============================================================================

DEFAULT_LIST_INDENT = "  "
DEFAULT_BULLET_MARKER: BulletMarker = "-"
DEFAULT_ORDERED_DELIMITER: OrderedListDelimiter = "."
DEFAULT_ESCAPE_SPECIAL = True
DEFAULT_STRIP_NEWLINES = True

# Characters escaped with a backslash in text nodes
MARKDOWN_RESERVED_CHARS = "_*-+`"

EMPHASIS_DELIMITER = "*"
STRONG_DELIMITER = "**"
THEMATIC_BREAK = "---"
EMOJI_DELIMITER = ":"

DEFAULT_CODE_FENCE_CHAR: CodeFenceChar = "`"
DEFAULT_CODE_FENCE_LENGTH = 3

LINK_TEMPLATE = "[ {title} ]({url})"

TABLE_OPENING_DELIMITER = "\n"
TABLE_CLOSING_DELIMITER = "\n"
TABLE_ROW_DELIMITER = "\n"
TABLE_CELL_DELIMITER = " | "

HASHTAG_PREFIX = "#"
CASHTAG_PREFIX = "$"
MENTION_PREFIX = "@"

# =============================================================================
# Form Controls
# =============================================================================

FORM_DELIMITER = "   "
FORM_OPENING_DELIMITER = "\n" + FORM_DELIMITER + "\n"
FORM_CLOSING_DELIMITER = "\n" + FORM_DELIMITER + "\n"

FORM_ELEMENT_OPEN = "("
FORM_ELEMENT_CLOSE = ")"
SELECT_CLOSE = "):\n"
OPTION_OPEN = "- "
OPTION_CLOSE = "\n"

BUTTON_LABEL = "Button:"
SELECT_LABEL = "Dropdown"
TEXT_FIELD_LABEL = "Text Field"
TEXT_AREA_LABEL = "Text Area"
PERSON_SELECTOR_LABEL = "Person Selector"

# =============================================================================
# Security Constants
# =============================================================================

DANGEROUS_SCHEMES = {
    "javascript:",
    "vbscript:",
    "data:text/html",
    "data:text/javascript",
    "data:application/javascript",
    "data:application/x-javascript",
}
DEFAULT_ALLOWED_LINK_SCHEMES = ("http", "https", "ftp", "mailto")

# =============================================================================
# Parser Defaults
# =============================================================================

NON_BREAKING_SPACE = "\u00a0"
DEFAULT_NORMALIZE_NBSP = True
DEFAULT_RESOLVE_MENTIONS = True
DEFAULT_MAX_NESTED_LEVEL = 20

# Block rules left enabled in the tokenizer; every other block construct is literal text
ENABLED_BLOCK_RULES = ("fenced_code", "thematic_break", "block_quote", "list", "blank_line")

# Inline rules left enabled in the tokenizer (autolinks and raw HTML stay disabled)
ENABLED_INLINE_RULES = ("escape", "codespan", "emphasis", "link", "linebreak", "softbreak")

CODE_BLOCK_FENCE = "```"
