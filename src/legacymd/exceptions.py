#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the legacymd library.

This module defines specialized exception classes for the error conditions
that can occur while converting between document trees and legacy Markdown.

Exception Hierarchy
-------------------
- LegacyMdError (base exception)

  - ValidationError (rejected input or options)
    - InvalidEntityError (malformed entity descriptor)
    - InvalidMediaError (malformed table/media descriptor)
    - InvalidOptionsError (wrong options class)

  - ParsingError (tokenizer failures)

Content-level problems such as an unresolvable mention or a disallowed link
destination are not exceptions: the parser degrades the affected node to plain
text and records a ``Degradation`` on the returned document.

"""

from typing import Any


class LegacyMdError(Exception):
    """Base exception class for all legacymd-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(LegacyMdError):
    """Exception raised when input or options are rejected.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidEntityError(ValidationError):
    """Exception raised for a malformed entity descriptor.

    Parameters
    ----------
    message : str
        Description of the problem
    entity_id : any, optional
        The ``id`` of the offending entity, if it has one
    index_start : any, optional
        The entity's ``indexStart`` value
    index_end : any, optional
        The entity's ``indexEnd`` value

    """

    def __init__(
        self,
        message: str,
        entity_id: Any = None,
        index_start: Any = None,
        index_end: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the entity error."""
        super().__init__(message, parameter_name="entities", parameter_value=entity_id, original_error=original_error)
        self.entity_id = entity_id
        self.index_start = index_start
        self.index_end = index_end


class InvalidMediaError(ValidationError):
    """Exception raised for a malformed table payload in the media descriptor."""

    def __init__(self, message: str, index: Any = None, original_error: Exception | None = None):
        """Initialize the media error."""
        super().__init__(message, parameter_name="media", parameter_value=index, original_error=original_error)
        self.index = index


class InvalidOptionsError(ValidationError):
    """Exception raised when an incorrect options class is provided.

    Parameters
    ----------
    converter_name : str
        Name of the parser or renderer that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        converter_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{converter_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.converter_name = converter_name
        self.expected_type = expected_type
        self.received_type = received_type


class ParsingError(LegacyMdError):
    """Exception raised when the tokenizer fails on enriched input.

    Parameters
    ----------
    message : str
        Description of the parsing error
    parsing_stage : str, optional
        Stage at which parsing failed (e.g. "tokenize")
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error with stage information."""
        super().__init__(message, original_error=original_error)
        self.parsing_stage = parsing_stage
