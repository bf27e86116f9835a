#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/legacymd/utils/escape.py
"""Text escaping utilities for legacy Markdown output.

This module provides the escape functions the legacy renderer applies to text
nodes and form control summaries.

"""

from __future__ import annotations

import re

from legacymd.constants import MARKDOWN_RESERVED_CHARS

# A line consisting only of one repeated reserved character is left alone
_NO_ESCAPE_PATTERN = re.compile(r"^\s*([_*\-+`])\1*\s*$")

_RESERVED_RE = re.compile("([" + re.escape(MARKDOWN_RESERVED_CHARS) + "])")

_NEWLINE_RE = re.compile(r"\r\n|\r|\n")


def escape_legacy_markdown(text: str) -> str:
    r"""Escape Markdown-significant characters in text content.

    Each of ``_ * - +`` and the backtick is preceded by a backslash, unless the
    whole text is a single reserved character repeated (optionally surrounded
    by whitespace), which is returned unchanged so user-typed separators such
    as ``***`` or ``---`` survive.

    Parameters
    ----------
    text : str
        Text to escape

    Returns
    -------
    str
        Escaped text

    Examples
    --------
        >>> escape_legacy_markdown("*hello*")
        '\\*hello\\*'
        >>> escape_legacy_markdown("***")
        '***'
        >>> escape_legacy_markdown("snake_case")
        'snake\\_case'

    """
    if not text:
        return text

    if _NO_ESCAPE_PATTERN.match(text):
        return text

    return _RESERVED_RE.sub(r"\\\1", text)


def strip_newlines(text: str) -> str:
    """Replace every line break in ``text`` with a single space.

    Examples
    --------
        >>> strip_newlines("one\\r\\ntwo\\nthree")
        'one two three'

    """
    return _NEWLINE_RE.sub(" ", text)


def escape_inline_code(code: str, delimiter: str = "`") -> tuple[str, str]:
    """Escape inline code and determine appropriate delimiter.

    Handles cases where code contains the delimiter character by
    using a longer delimiter sequence.

    Parameters
    ----------
    code : str
        Code content to escape
    delimiter : str, default = '`'
        Preferred delimiter character

    Returns
    -------
    tuple[str, str]
        (escaped_code, delimiter_to_use)

    Examples
    --------
        >>> escape_inline_code("simple code", "`")
        ('simple code', '`')
        >>> escape_inline_code("code with ` backtick", "`")
        ('code with ` backtick', '``')

    """
    if not code:
        return code, delimiter

    longest_run = max((len(run) for run in re.findall(re.escape(delimiter) + "+", code)), default=0)
    if longest_run == 0:
        return code, delimiter

    final_delimiter = delimiter * (longest_run + 1)

    # Padding keeps a leading/trailing backtick from merging with the fence
    if code.startswith(delimiter) or code.endswith(delimiter):
        code = " " + code + " "

    return code, final_delimiter
