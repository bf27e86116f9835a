"""The major exported API functions for legacy Markdown conversion."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/legacymd/api.py
import logging
from dataclasses import fields
from typing import Any, Optional, TypeVar

from legacymd.ast.nodes import Document
from legacymd.entities import RenderResult
from legacymd.options.base import BaseParserOptions, BaseRendererOptions
from legacymd.options.legacy import LegacyParserOptions, LegacyRendererOptions
from legacymd.parsers.legacy import LegacyMarkdownParser
from legacymd.renderers.legacy import LegacyMarkdownRenderer
from legacymd.resolver import UserResolver

logger = logging.getLogger(__name__)

OptionsT = TypeVar("OptionsT", BaseParserOptions, BaseRendererOptions)


def _merge_options(
    options: Optional[OptionsT],
    options_class: type[OptionsT],
    options_type_name: str,
    **kwargs: Any,
) -> Optional[OptionsT]:
    """Combine an options object with keyword overrides.

    Parameters
    ----------
    options : OptionsT or None
        Base options, or None for defaults
    options_class : type[OptionsT]
        The options class to instantiate when no base options are given
    options_type_name : str
        Name of the options type for logging (e.g., "parser" or "renderer")
    **kwargs
        Option field overrides; unknown names are skipped

    Returns
    -------
    OptionsT or None
        Options instance, or None when neither options nor overrides were given

    """
    if not kwargs:
        return options

    option_names = {field.name for field in fields(options_class)}
    valid_kwargs = {k: v for k, v in kwargs.items() if k in option_names}
    missing = [k for k in kwargs if k not in valid_kwargs]
    if missing:
        logger.debug(f"Skipping unknown {options_type_name} options: {missing}")

    if options is not None:
        return options.create_updated(**valid_kwargs)
    return options_class(**valid_kwargs)


def render(document: Document, options: Optional[LegacyRendererOptions] = None, **kwargs: Any) -> RenderResult:
    """Render a document tree to legacy Markdown and entity records.

    Parameters
    ----------
    document : Document
        Document tree to render
    options : LegacyRendererOptions, optional
        Rendering options
    kwargs : Any
        Additional renderer options that override ``options``

    Returns
    -------
    RenderResult
        Rendered text and its entity records. ``result.entities`` holds the
        grouped JSON-ready records (``urls``, ``userMentions``, ``hashtags``,
        ``datetimes``).

    Examples
    --------
    Render a message with a mention:
        >>> from legacymd.ast import Document, Mention, Text
        >>> doc = Document(children=[Text(content="Hi "), Mention(user_id=7, pretty_name="Ann")])
        >>> result = render(doc)
        >>> result.text
        'Hi @Ann'
        >>> result.user_mentions[0].index_start
        3

    """
    final_options = _merge_options(options, LegacyRendererOptions, "renderer", **kwargs)
    return LegacyMarkdownRenderer(final_options).render_to_result(document)


def parse(
    text: str,
    entities: Any = None,
    media: Any = None,
    resolver: Optional[UserResolver] = None,
    options: Optional[LegacyParserOptions] = None,
    **kwargs: Any,
) -> Document:
    """Parse legacy Markdown and its entity/media JSON into a document tree.

    Parameters
    ----------
    text : str
        Legacy Markdown message
    entities : list, dict, str or None, optional
        Entity descriptors, decoded or as JSON text
    media : list, dict, str or None, optional
        Table payloads, decoded or as JSON text
    resolver : UserResolver, optional
        Lookup capability for mentioned users. Without one, mentions degrade
        to their literal names.
    options : LegacyParserOptions, optional
        Parsing options
    kwargs : Any
        Additional parser options that override ``options``

    Returns
    -------
    Document
        Parsed document tree

    Raises
    ------
    ValidationError
        If the text or a payload is rejected
    ParsingError
        If tokenization fails

    Examples
    --------
    Round trip a rendered message:
        >>> from legacymd.resolver import StaticUserResolver, UserInfo
        >>> resolver = StaticUserResolver([UserInfo(7, "ann", "Ann")])
        >>> result = render(doc)
        >>> parsed = parse(result.text, result.entities, resolver=resolver)

    """
    final_options = _merge_options(options, LegacyParserOptions, "parser", **kwargs)
    return LegacyMarkdownParser(resolver=resolver, options=final_options).parse(text, entities, media)
