#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the legacy Markdown renderer and parser.

Options are frozen dataclasses. Use ``create_updated`` (or
``create_updated_options``) to derive a modified copy.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from legacymd.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from legacymd.options.legacy import LegacyParserOptions, LegacyRendererOptions


def create_updated_options(options: Any, **kwargs: Any) -> Any:
    """Create a new options instance with updated values.

    Parameters
    ----------
    options : Any
        The original options instance (must be a dataclass)
    **kwargs : Any
        Field names and their new values

    Returns
    -------
    Any
        New options instance with the given fields replaced

    """
    return replace(options, **kwargs)


__all__ = [
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "LegacyParserOptions",
    "LegacyRendererOptions",
    "create_updated_options",
]
