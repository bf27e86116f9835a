#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/legacymd/parsers/base.py
"""Base classes for message parsers.

This module defines the abstract base class that parsers inherit from. A
parser turns message text plus its side-channel metadata into a Document AST.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from legacymd.ast import Document
from legacymd.exceptions import InvalidOptionsError
from legacymd.options.base import BaseParserOptions


class BaseParser(ABC):
    """Abstract base class for message parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Format-specific parsing options

    Examples
    --------
    Creating a custom parser:

        >>> from legacymd.ast import Document, Text
        >>> from legacymd.parsers.base import BaseParser
        >>>
        >>> class PlainTextParser(BaseParser):
        ...     def parse(self, text, entities=None, media=None):
        ...         return Document(children=[Text(content=text)])

    """

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser with optional configuration.

        Parameters
        ----------
        options : BaseParserOptions or None, default = None
            Format-specific parsing options. If None, default options will be used.

        """
        self.options: BaseParserOptions | None = options

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Parameters
        ----------
        options : BaseParserOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        parser_name : str
            Name of the parser (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, text: str, entities: Any = None, media: Any = None) -> Document:
        """Parse message text and its metadata into an AST.

        Parameters
        ----------
        text : str
            Message text
        entities : any, optional
            Entity descriptors pointing into ``text``
        media : any, optional
            Auxiliary payloads (tables) anchored at offsets of ``text``

        Returns
        -------
        Document
            AST Document node representing the message

        Raises
        ------
        ValidationError
            If the text or its metadata is rejected
        ParsingError
            If tokenization fails

        """
        raise NotImplementedError
