"""Base classes for parser and renderer options.

This module defines the foundation classes for the options used by the legacy
Markdown renderer and parser.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from legacymd.constants import DEFAULT_ESCAPE_SPECIAL, DEFAULT_NORMALIZE_NBSP


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, which is useful for immutable configuration objects.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Base class for renderer options.

    Parameters
    ----------
    escape_special : bool, default True
        Whether to backslash-escape Markdown-significant characters in text.

    Notes
    -----
    Subclasses should define format-specific rendering options as frozen dataclass fields.

    """

    escape_special: bool = field(
        default=DEFAULT_ESCAPE_SPECIAL,
        metadata={
            "help": "Escape Markdown-significant characters (_ * - + `) in text nodes",
            "importance": "core",
        },
    )

    def __post_init__(self) -> None:
        """Validate base renderer options.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        pass


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Base class for parser options.

    Parameters
    ----------
    normalize_nbsp : bool, default True
        Replace non-breaking spaces in the raw text with ordinary spaces

    """

    normalize_nbsp: bool = field(
        default=DEFAULT_NORMALIZE_NBSP,
        metadata={"help": "Replace U+00A0 with an ordinary space before parsing", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate base parser options."""
        pass
