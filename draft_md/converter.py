"""Main conversion logic for Draft.js raw content to Markdown."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any

from draft_md.config import (
    ConversionConfig,
    CustomEntityTransform,
    EditorContent,
    HashConfig,
)
from draft_md.renderer import MarkdownRenderer

LOGGER = logging.getLogger(__name__)


def draft_to_markdown(
    editor_content: EditorContent | Mapping[str, Any] | None,
    hash_config: HashConfig | Mapping[str, Any] | None = None,
    custom_entity_transform: CustomEntityTransform | None = None,
    config: ConversionConfig | Mapping[str, Any] | None = None,
) -> str:
    """Convert Draft.js raw content to a markdown string.

    Blocks are rendered in order and concatenated. The conversion is
    all-or-nothing: an error from an entity transform (or an unknown
    entity reference) propagates and no partial output is returned.

    Args:
        editor_content: Raw content ``{'blocks': [...], 'entityMap': {...}}``
        hash_config: Partial hashtag settings merged over ``{'#', ' '}``
        custom_entity_transform: ``(entity, text) -> str | None`` override,
            tried before the built-in entity rendering
        config: ConversionConfig, or a mapping with camelCase option names
            (customStyleTransform, emptyLineBeforeBlock,
            printBreakLineLiteral, blockTypesMapping, rawCssInlineStyles)

    Returns:
        Markdown text; empty string for empty or missing content

    Raises:
        UnknownEntityError: If an entity range references a missing entity

    Examples:
        >>> content = {
        ...     'blocks': [
        ...         {
        ...             'text': 'Hello',
        ...             'type': 'header-one',
        ...             'inlineStyleRanges': [{'offset': 0, 'length': 5, 'style': 'BOLD'}],
        ...         }
        ...     ],
        ...     'entityMap': {},
        ... }
        >>> draft_to_markdown(content)
        '# **Hello**\\n'
    """
    if not editor_content:
        return ''
    blocks = editor_content.get('blocks') or []
    if not blocks:
        return ''

    renderer = MarkdownRenderer(
        entity_map=editor_content.get('entityMap') or {},
        config=ConversionConfig.from_mapping(config),
        hash_config=HashConfig.from_mapping(hash_config),
        custom_entity_transform=custom_entity_transform,
    )
    LOGGER.debug('Converting %d blocks', len(blocks))
    return ''.join(renderer.render_block(block) for block in blocks)
