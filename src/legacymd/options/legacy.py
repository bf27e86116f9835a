#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for legacy Markdown parsing and rendering."""
# src/legacymd/options/legacy.py


from __future__ import annotations

from dataclasses import dataclass, field

from legacymd.constants import (
    DEFAULT_ALLOWED_LINK_SCHEMES,
    DEFAULT_LIST_INDENT,
    DEFAULT_MAX_NESTED_LEVEL,
    DEFAULT_RESOLVE_MENTIONS,
    DEFAULT_STRIP_NEWLINES,
    DEFAULT_USER_TYPE,
)
from legacymd.options.base import BaseParserOptions, BaseRendererOptions


@dataclass(frozen=True)
class LegacyRendererOptions(BaseRendererOptions):
    """Options for rendering a document tree to legacy Markdown and entities.

    Parameters
    ----------
    escape_special : bool, default True
        Whether to escape underscores, asterisks, hyphens, plus signs and
        backticks in text nodes. A text node made of a single repeated reserved character (``***``, ``---``) is never escaped.
    list_indent : str, default "  "
        Indentation written once per nesting level before a list item marker.
    strip_newlines : bool, default True
        Replace newlines in text nodes with spaces outside preformatted regions.
    user_type : str, default "lc"
        Value of the ``userType`` field of USER_FOLLOW entities.

    Examples
    --------
    Wider list indentation:
        >>> options = LegacyRendererOptions(list_indent="    ")

    """

    list_indent: str = field(
        default=DEFAULT_LIST_INDENT,
        metadata={"help": "Indentation written per list nesting level", "importance": "advanced"},
    )
    strip_newlines: bool = field(
        default=DEFAULT_STRIP_NEWLINES,
        metadata={
            "help": "Replace newlines in text with spaces outside preformatted regions",
            "importance": "advanced",
        },
    )
    user_type: str = field(
        default=DEFAULT_USER_TYPE,
        metadata={"help": "userType written on USER_FOLLOW entities", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate options.

        Raises
        ------
        ValueError
            If list_indent contains non-blank characters or user_type is empty.

        """
        super().__post_init__()

        if self.list_indent.strip(" \t"):
            raise ValueError(f"list_indent must contain only spaces or tabs, got {self.list_indent!r}")

        if not self.user_type:
            raise ValueError("user_type must be a non-empty string")


@dataclass(frozen=True)
class LegacyParserOptions(BaseParserOptions):
    """Options for parsing legacy Markdown and entities into a document tree.

    Parameters
    ----------
    normalize_nbsp : bool, default True
        Replace non-breaking spaces with ordinary spaces before parsing.
    allowed_link_schemes : tuple of str, default ("http", "https", "ftp", "mailto")
        URL schemes accepted for link destinations. Links with any other
        scheme degrade to plain text.
    max_nested_level : int, default 20
        Maximum nesting depth of block quotes and lists handed to the tokenizer.
    resolve_mentions : bool, default True
        Look mentions up through the injected resolver. When False every
        mention degrades to its literal name.

    """

    allowed_link_schemes: tuple[str, ...] = field(
        default=DEFAULT_ALLOWED_LINK_SCHEMES,
        metadata={"help": "URL schemes accepted for link destinations", "importance": "security"},
    )
    max_nested_level: int = field(
        default=DEFAULT_MAX_NESTED_LEVEL,
        metadata={"help": "Maximum block nesting depth", "type": int, "importance": "advanced"},
    )
    resolve_mentions: bool = field(
        default=DEFAULT_RESOLVE_MENTIONS,
        metadata={"help": "Resolve mentioned users through the injected resolver", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate and normalize options.

        Raises
        ------
        ValueError
            If no link scheme is allowed or max_nested_level is not positive.

        """
        super().__post_init__()

        schemes = tuple(scheme.lower().rstrip(":") for scheme in self.allowed_link_schemes)
        if not schemes:
            raise ValueError("allowed_link_schemes must not be empty")
        object.__setattr__(self, "allowed_link_schemes", schemes)

        if self.max_nested_level < 1:
            raise ValueError(f"max_nested_level must be positive, got {self.max_nested_level}")
