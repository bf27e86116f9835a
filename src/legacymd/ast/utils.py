#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/legacymd/ast/utils.py
"""Utility functions for working with AST nodes.

Functions
---------
extract_text : Extract plain text from a node or list of nodes

Examples
--------
Extract the display text of a link:

    >>> from legacymd.ast import Link, Text, Emphasis
    >>> from legacymd.ast.utils import extract_text
    >>>
    >>> link = Link(url="https://example.com", content=[
    ...     Text(content="Hello "),
    ...     Emphasis(content=[Text(content="world")])
    ... ])
    >>> extract_text(link)
    'Hello world'

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

from legacymd.ast.nodes import Code, DateTime, Emoji, Keyword, Mention, Text, get_node_children

if TYPE_CHECKING:
    from legacymd.ast.nodes import Node


def extract_text(node_or_nodes: Union[Node, list[Node]], joiner: str = "") -> str:
    """Extract plain text from a node or list of nodes.

    Text, inline code and the display text of entity nodes are concatenated in
    document order; formatting is dropped.

    Parameters
    ----------
    node_or_nodes : Node or list of Node
        A single node or list of nodes to extract text from
    joiner : str, default = ""
        String used to join the text of sibling nodes

    Returns
    -------
    str
        Concatenated text content

    """
    if isinstance(node_or_nodes, list):
        return joiner.join(extract_text(node, joiner) for node in node_or_nodes)

    node = node_or_nodes
    if isinstance(node, (Text, Code)):
        return node.content
    if isinstance(node, (Keyword, Mention, Emoji)):
        return node.display_text
    if isinstance(node, DateTime):
        return node.value

    return joiner.join(extract_text(child, joiner) for child in get_node_children(node))
