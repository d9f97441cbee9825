"""Configuration and data models for Draft.js to Markdown conversion."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from typing_extensions import NotRequired, TypedDict

# ============================================================================
# Input document (Draft.js raw content)
# ============================================================================


class InlineStyleRange(TypedDict):
    """Style applied to ``[offset, offset + length)`` in UTF-16 code units."""

    offset: int
    length: int
    style: str


class EntityRange(TypedDict):
    """Entity reference over ``[offset, offset + length)`` in UTF-16 code units."""

    offset: int
    length: int
    key: int | str


class Block(TypedDict):
    """One paragraph-level unit of a Draft.js document.

    Only ``text`` and ``type`` are required; the other fields fall back to
    empty values when absent.
    """

    text: str
    type: str
    key: NotRequired[str]
    depth: NotRequired[int]
    entityRanges: NotRequired[list[EntityRange]]
    inlineStyleRanges: NotRequired[list[InlineStyleRange]]
    data: NotRequired[dict[str, Any] | None]


class Entity(TypedDict):
    """Typed, data-bearing annotation (link, image, embed, mention...)."""

    type: str
    mutability: NotRequired[str]
    data: NotRequired[dict[str, Any]]


EntityMap = dict[str, Entity]


class EditorContent(TypedDict):
    """Raw Draft.js editor content."""

    blocks: list[Block]
    entityMap: NotRequired[EntityMap]


CustomEntityTransform = Callable[[Entity, str], str | None]

# Style token: same string on both sides, or a (left, right) pair
StyleToken = str | tuple[str, str] | list[str] | None

# ============================================================================
# Style names and default tables
# ============================================================================

# Order matters: boolean styles are wrapped innermost-first in this order
BOOLEAN_INLINE_STYLE_NAMES: tuple[str, ...] = (
    'SUBSCRIPT',
    'SUPERSCRIPT',
    'CODE',
    'STRIKETHROUGH',
    'UNDERLINE',
    'ITALIC',
    'BOLD',
    'BLOCKQUOTE',
    'CODE-BLOCK',
)
STRING_INLINE_STYLE_NAMES: tuple[str, ...] = (
    'COLOR',
    'BGCOLOR',
    'FONTSIZE',
    'FONTFAMILY',
    'RAWCSS',
)
INLINE_STYLE_NAMES: tuple[str, ...] = BOOLEAN_INLINE_STYLE_NAMES + STRING_INLINE_STYLE_NAMES

DEFAULT_STYLE_TRANSFORM: Mapping[str, StyleToken] = {
    'BOLD': '**',
    'ITALIC': '*',
    'UNDERLINE': '__',
    'STRIKETHROUGH': '~~',
    'CODE': '`',
    'CODE-BLOCK': ('```\n', '\n```'),
    'BLOCKQUOTE': ('> ', ''),
    'SUPERSCRIPT': ('<sup>', '</sup>'),
    'SUBSCRIPT': ('<sub>', '</sub>'),
}

# Block type -> markdown prefix
DEFAULT_BLOCK_TYPES_MAPPING: Mapping[str, str] = {
    'unstyled': '',
    'header-one': '# ',
    'header-two': '## ',
    'header-three': '### ',
    'header-four': '#### ',
    'header-five': '##### ',
    'header-six': '###### ',
    'unordered-list-item': '- ',
    'ordered-list-item': '1. ',
    'blockquote': '> ',
    'code': '    ',
}

LIST_BLOCK_TYPES = frozenset({'unordered-list-item', 'ordered-list-item'})

# Spaces per list nesting level
LIST_INDENT_WIDTH = 4

# ============================================================================
# Per-call configuration
# ============================================================================

# camelCase option names used by Draft.js tooling -> dataclass fields
_CONFIG_OPTION_NAMES: Mapping[str, str] = {
    'customStyleTransform': 'custom_style_transform',
    'emptyLineBeforeBlock': 'empty_line_before_block',
    'printBreakLineLiteral': 'print_break_line_literal',
    'blockTypesMapping': 'block_types_mapping',
    'rawCssInlineStyles': 'raw_css_inline_styles',
}


@dataclass(frozen=True)
class HashConfig:
    """Hashtag detection settings.

    Attributes:
        trigger: String that starts a hashtag (default: '#')
        separator: String that precedes and terminates a hashtag (default: ' ')
    """

    trigger: str = '#'
    separator: str = ' '

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | HashConfig | None) -> HashConfig:
        """Merge a partial ``{'trigger', 'separator'}`` mapping over the defaults."""
        if isinstance(options, HashConfig):
            return options
        if not options:
            return DEFAULT_HASH_CONFIG
        defaults = DEFAULT_HASH_CONFIG
        trigger = options.get('trigger')
        separator = options.get('separator')
        return cls(
            trigger=defaults.trigger if trigger is None else trigger,
            separator=defaults.separator if separator is None else separator,
        )


@dataclass(frozen=True)
class ConversionConfig:
    """Options for a single conversion call.

    This is an immutable dataclass; every option is optional.

    Attributes:
        custom_style_transform: Overrides/extensions of the boolean style
            token table; a ``None`` value disables wrapping for that style
        empty_line_before_block: Separate blocks with a blank line
        print_break_line_literal: Emit a literal ``\\n`` token instead of the
            first real newline of each block separator
        block_types_mapping: Overrides/extensions of the block prefix table;
            a ``None`` value renders that block type without a prefix
        raw_css_inline_styles: Accept JSON-object style names as raw CSS
    """

    custom_style_transform: Mapping[str, StyleToken] = field(default_factory=dict)
    empty_line_before_block: bool = False
    print_break_line_literal: bool = False
    block_types_mapping: Mapping[str, str | None] = field(default_factory=dict)
    raw_css_inline_styles: bool = False

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | ConversionConfig | None) -> ConversionConfig:
        """Build config from camelCase (or snake_case) option names.

        Unrecognized keys are ignored.
        """
        if isinstance(options, ConversionConfig):
            return options
        if not options:
            return DEFAULT_CONFIG
        known = set(_CONFIG_OPTION_NAMES.values())
        kwargs: dict[str, Any] = {}
        for key, value in options.items():
            name = _CONFIG_OPTION_NAMES.get(key, key)
            if name in known and value is not None:
                kwargs[name] = value
        return cls(**kwargs)

    @property
    def style_transform(self) -> dict[str, StyleToken]:
        """Default style token table merged with custom entries."""
        return {**DEFAULT_STYLE_TRANSFORM, **self.custom_style_transform}

    @property
    def merged_block_types_mapping(self) -> dict[str, str | None]:
        """Default block prefix table merged with custom entries."""
        return {**DEFAULT_BLOCK_TYPES_MAPPING, **self.block_types_mapping}


# Default configuration instances
DEFAULT_HASH_CONFIG = HashConfig()
DEFAULT_CONFIG = ConversionConfig()
