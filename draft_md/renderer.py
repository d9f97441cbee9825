"""Markdown renderer for Draft.js blocks.

Rendering of one block goes through three levels:

1. sections (entity / hashtag / plain text, see draft_md.sections)
2. boolean style runs inside a section (BOLD, ITALIC, ...), wrapped with
   markdown token pairs
3. string style runs inside a boolean run (COLOR, FONTSIZE, ...), wrapped in
   a single ``<span style="...">``

Keeping string styles inside boolean runs guarantees that markdown tokens
and HTML spans never interleave.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from functools import reduce
import logging
import re
from typing import Any

from draft_md.config import (
    BOOLEAN_INLINE_STYLE_NAMES,
    DEFAULT_CONFIG,
    DEFAULT_HASH_CONFIG,
    LIST_INDENT_WIDTH,
    STRING_INLINE_STYLE_NAMES,
    Block,
    ConversionConfig,
    CustomEntityTransform,
    Entity,
    EntityMap,
    HashConfig,
    StyleToken,
)
from draft_md.errors import UnknownEntityError
from draft_md.sections import Section, SectionType, get_sections
from draft_md.styles import (
    InlineStyles,
    StyleSection,
    get_style_array_for_block,
    get_style_sections,
)
from draft_md.utils import is_empty_string, is_list, utf16_units

LOGGER = logging.getLogger(__name__)

# Characters that must not reach markdown output verbatim
_ESCAPES: Mapping[str, str] = {
    '\n': '  \n',  # markdown hard line break
    '&': '&amp;',
    '<': '&lt;',
    '>': '&gt;',
}

# String style -> (CSS declaration template, marker attribute)
_STYLE_PROPERTIES: Mapping[str, tuple[str, str]] = {
    'COLOR': ('color: {};', 'data-color'),
    'BGCOLOR': ('background-color: {};', 'data-bgcolor'),
    'FONTSIZE': ('font-size: {}px;', 'data-fontsize'),
    'FONTFAMILY': ('font-family: {};', 'data-fontfamily'),
    'RAWCSS': ('{}', 'data-rawcss'),
}

_EMPTY_DECLARATIONS_RE = re.compile(r';*')

NBSP = '&nbsp;'


# ============================================================================
# Markup composition
# ============================================================================


def get_section_text(text: Sequence[str]) -> str:
    """Join characters of a run, escaping newlines and HTML specials.

    Args:
        text: Characters of a style run

    Returns:
        Escaped text

    Examples:
        >>> get_section_text(list('a<b>&\\nc'))
        'a&lt;b&gt;&amp;  \\nc'
    """
    if not text:
        return ''
    return ''.join(_ESCAPES.get(char, char) for char in text)


def add_inline_style_markdown(style: str, content: str, style_transform: Mapping[str, StyleToken]) -> str:
    """Wrap content with the markdown tokens of one boolean style.

    A missing or None entry leaves content unchanged. A string token is used
    on both sides, a pair gives distinct left and right tokens.
    """
    token = style_transform.get(style)
    if token is None:
        return content
    if isinstance(token, str):
        left = right = token
    else:
        left, right = token
    return f'{left}{content}{right}'


def get_style_tag_section_markdown(
    styles: Sequence[str],
    text: str,
    style_transform: Mapping[str, StyleToken],
) -> str:
    """Apply every style of a boolean run, first style innermost."""
    return reduce(
        lambda content, style: add_inline_style_markdown(style, content, style_transform),
        styles,
        text,
    )


def add_style_property_markdown(style_section: StyleSection) -> str:
    """Render a string style run, wrapping it in a styled span if needed.

    All active string styles end up in one ``style`` attribute, plus a
    ``data-<style>="true"`` marker attribute for each of them.

    Args:
        style_section: Run produced for the string style family

    Returns:
        Escaped run text, wrapped in ``<span>`` when any declaration applies

    Examples:
        >>> section = StyleSection({'COLOR': 'red'}, ['a'], 0, 1)
        >>> add_style_property_markdown(section)
        '<span style="color: red;" data-color="true">a</span>'
    """
    content = get_section_text(style_section.text)
    if not style_section.styles:
        return content

    declarations = ''
    markers = ''
    for name in STRING_INLINE_STYLE_NAMES:
        value = style_section.styles.get(name)
        if value is None:
            continue
        template, marker = _STYLE_PROPERTIES[name]
        declarations += template.format(value)
        markers += f' {marker}="true"'

    if _EMPTY_DECLARATIONS_RE.fullmatch(declarations):
        return content
    return f'<span style="{declarations}"{markers}>{content}</span>'


def get_entity_markdown(
    entity: Entity,
    text: str,
    custom_entity_transform: CustomEntityTransform | None = None,
) -> str:
    """Render an entity around its (already rendered) text.

    The custom transform is tried first; any non-None result wins, whatever
    the entity type.

    Args:
        entity: Entity from the entity map
        text: Rendered text covered by the entity ('' for atomic blocks)
        custom_entity_transform: Optional override

    Returns:
        Markdown for the entity; unknown entity types return text unchanged
    """
    if custom_entity_transform is not None:
        markdown = custom_entity_transform(entity, text)
        if markdown is not None:
            return markdown

    entity_type = entity.get('type')
    data: Mapping[str, Any] = entity.get('data') or {}
    if entity_type in ('LINK', 'MENTION'):
        return f'[{text}]({data.get("url", "")})'
    if entity_type == 'IMAGE':
        return f'![{data.get("alt") or ""}]({data.get("src", "")})'
    if entity_type == 'EMBEDDED_LINK':
        return (
            f'<iframe width="{data.get("width", "")}" height="{data.get("height", "")}" '
            f'src="{data.get("src", "")}" frameBorder="0" allowFullScreen />'
        )
    return text


# ============================================================================
# Block assembly helpers
# ============================================================================


def is_atomic_block(block: Block) -> bool:
    """Block that only stands for an entity: has entity ranges, no text."""
    return bool(block.get('entityRanges')) and is_empty_string(block.get('text'))


def _count_leading_spaces(text: Sequence[str]) -> int:
    count = 0
    for char in text:
        if char != ' ':
            break
        count += 1
    return count


def trim_leading_spaces(text: str, limit: int | None = None) -> str:
    """Replace leading spaces with &nbsp; so markdown keeps them.

    At most limit spaces are replaced when limit is given.
    """
    count = _count_leading_spaces(text)
    if limit is not None:
        count = min(count, limit)
    return NBSP * count + text[count:]


def trim_trailing_spaces(text: str, limit: int | None = None) -> str:
    """Replace trailing spaces with &nbsp; so markdown keeps them.

    At most limit spaces are replaced when limit is given.
    """
    count = _count_leading_spaces(text[::-1])
    if limit is not None:
        count = min(count, limit)
    return text[: len(text) - count] + NBSP * count


def get_depth_padding(depth: int) -> str:
    """Indentation for a nested list item."""
    return ' ' * (max(depth, 0) * LIST_INDENT_WIDTH)


def get_block_separator(config: ConversionConfig) -> str:
    """String appended after every block."""
    if config.empty_line_before_block:
        return '\\n\n\n' if config.print_break_line_literal else '\n\n'
    return '\\n' if config.print_break_line_literal else '\n'


# ============================================================================
# Renderer
# ============================================================================


class MarkdownRenderer:
    """Renders Draft.js blocks to markdown for a single conversion call.

    Tables derived from the configuration (style tokens, block prefixes) are
    merged once here and reused for every block.

    Attributes:
        entity_map: Entity id -> entity
        config: Conversion options
        hash_config: Hashtag detection settings
        custom_entity_transform: Optional entity rendering override
        style_transform: Merged boolean style token table
        block_types_mapping: Merged block prefix table
    """

    def __init__(
        self,
        entity_map: EntityMap | None = None,
        config: ConversionConfig | None = None,
        hash_config: HashConfig | None = None,
        custom_entity_transform: CustomEntityTransform | None = None,
    ) -> None:
        self.entity_map: Mapping[Any, Entity] = entity_map or {}
        self.config = config or DEFAULT_CONFIG
        self.hash_config = hash_config or DEFAULT_HASH_CONFIG
        self.custom_entity_transform = custom_entity_transform
        self.style_transform = self.config.style_transform
        self.block_types_mapping = self.config.merged_block_types_mapping
        self.block_separator = get_block_separator(self.config)

    def get_entity(self, key: int | str) -> Entity:
        """Look up an entity by numeric or string id.

        Raises:
            UnknownEntityError: If the id is not in the entity map
        """
        # Raw JSON maps use string ids, ranges use numbers
        candidates: list[int | str] = [key, str(key)]
        if isinstance(key, str) and key.isdigit():
            candidates.append(int(key))
        for candidate in candidates:
            if candidate in self.entity_map:
                return self.entity_map[candidate]
        raise UnknownEntityError(key)

    def render_entity(self, key: int | str, text: str) -> str:
        return get_entity_markdown(self.get_entity(key), text, self.custom_entity_transform)

    def _render_boolean_run(
        self,
        units: Sequence[str],
        inline_styles: InlineStyles,
        style_section: StyleSection,
    ) -> str:
        string_runs = get_style_sections(
            units,
            inline_styles,
            STRING_INLINE_STYLE_NAMES,
            style_section.start,
            style_section.end,
        )
        content = ''.join(add_style_property_markdown(run) for run in string_runs)
        return get_style_tag_section_markdown(list(style_section.styles), content, self.style_transform)

    def render_section(
        self,
        units: Sequence[str],
        inline_styles: InlineStyles,
        section: Section,
    ) -> str:
        """Render one section: styled runs, then entity or hashtag wrapping.

        Args:
            units: Block text as UTF-16 slots
            inline_styles: Per-character styles of the block
            section: Section to render

        Returns:
            Markdown for the section
        """
        boolean_runs = get_style_sections(
            units,
            inline_styles,
            BOOLEAN_INLINE_STYLE_NAMES,
            section.start,
            section.end,
        )
        text = ''.join(self._render_boolean_run(units, inline_styles, run) for run in boolean_runs)

        if section.type is SectionType.ENTITY and section.entity_key is not None:
            return self.render_entity(section.entity_key, text)
        if section.type is SectionType.HASHTAG:
            return f'[{text}]({text})'
        return text

    def render_block_content(self, block: Block) -> str:
        """Render block text without prefix, separator or indentation."""
        if is_atomic_block(block):
            # Atomic blocks render their first entity with empty text
            return self.render_entity(block['entityRanges'][0]['key'], '')

        units = utf16_units(block.get('text') or '')
        inline_styles = get_style_array_for_block(block, self.config)
        sections = get_sections(block, self.hash_config)

        # Only spaces of the text itself, not ones added by escaping
        leading = _count_leading_spaces(units)
        trailing = _count_leading_spaces(units[::-1])

        rendered: list[str] = []
        for index, section in enumerate(sections):
            section_text = self.render_section(units, inline_styles, section)
            if index == 0:
                section_text = trim_leading_spaces(section_text, leading)
            if index == len(sections) - 1:
                section_text = trim_trailing_spaces(section_text, trailing)
            rendered.append(section_text)
        return ''.join(rendered)

    def render_block(self, block: Block) -> str:
        """Render a full block: type prefix, content, separator, list indent."""
        block_type = block.get('type', '')
        prefix = self.block_types_mapping.get(block_type) or ''
        content = f'{prefix}{self.render_block_content(block)}{self.block_separator}'
        if is_list(block_type):
            content = get_depth_padding(block.get('depth') or 0) + content
        return content
