"""Inline style materialization and style-run segmentation.

Draft.js stores inline styles as sparse ``(offset, length, style)`` ranges.
Rendering needs the opposite view: for every character, which styles apply.
This module expands the ranges into one dense list per style name
(``InlineStyles``) and then cuts a span of text into maximal runs where a
family of styles stays constant (``StyleSection``).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
import json
import logging
import re
from typing import Any

from draft_md.config import (
    BOOLEAN_INLINE_STYLE_NAMES,
    DEFAULT_CONFIG,
    INLINE_STYLE_NAMES,
    Block,
    ConversionConfig,
)
from draft_md.utils import utf16_units

LOGGER = logging.getLogger(__name__)

# Style name prefix -> string style it carries
STRING_STYLE_PREFIXES: tuple[tuple[str, str], ...] = (
    ('color-', 'COLOR'),
    ('bgcolor-', 'BGCOLOR'),
    ('fontsize-', 'FONTSIZE'),
    ('fontfamily-', 'FONTFAMILY'),
)

_CAMEL_CASE_RE = re.compile(r'[A-Z]')

StyleValue = bool | str | None


@dataclass
class InlineStyles:
    """Dense per-character style arrays for one block.

    Attributes:
        length: Block length in UTF-16 units (length of every array)
        values: Style name -> list of per-character values (None = absent)
    """

    length: int
    values: dict[str, list[StyleValue]] = field(default_factory=dict)

    @classmethod
    def empty(cls, length: int) -> InlineStyles:
        return cls(length, {name: [None] * length for name in INLINE_STYLE_NAMES})

    def __getitem__(self, name: str) -> list[StyleValue]:
        return self.values[name]


@dataclass
class StyleSection:
    """Maximal run of characters sharing one style family's values.

    Attributes:
        styles: All recognized styles active at ``start`` (declared order)
        text: Characters of the run, one UTF-16 slot each
        start: First index of the run
        end: Index right after the run
    """

    styles: dict[str, StyleValue]
    text: list[str]
    start: int
    end: int


def _css_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value)


def parse_raw_css(style: str) -> str | None:
    """Convert a stringified JSON object of CSS properties to declarations.

    Property names are converted from camelCase to kebab-case. JSON arrays
    are rejected like any other non-object value.

    Args:
        style: Inline style name, e.g. '{"fontWeight": "bold"}'

    Returns:
        Declarations like 'font-weight:bold;', or None if style is not a
        JSON object

    Examples:
        >>> parse_raw_css('{"fontWeight": "bold", "color": "red"}')
        'font-weight:bold;color:red;'
        >>> parse_raw_css('BOLD') is None
        True
    """
    try:
        properties = json.loads(style)
    except ValueError:
        return None
    if not isinstance(properties, dict):
        return None
    declarations = [
        f'{_CAMEL_CASE_RE.sub(lambda m: "-" + m.group().lower(), name)}:{_css_value(value)}'
        for name, value in properties.items()
    ]
    return ';'.join(declarations) + ';'


def _resolve_style(style: str, config: ConversionConfig) -> tuple[str, StyleValue] | None:
    """Map an inline style name to (style array name, value)."""
    for prefix, name in STRING_STYLE_PREFIXES:
        if style.startswith(prefix):
            return name, style[len(prefix) :]
    if style in BOOLEAN_INLINE_STYLE_NAMES:
        return style, True
    if config.raw_css_inline_styles:
        raw_css = parse_raw_css(style)
        if raw_css is not None:
            return 'RAWCSS', raw_css
    return None


def get_style_array_for_block(
    block: Block,
    config: ConversionConfig | None = None,
) -> InlineStyles:
    """Expand a block's inline style ranges into per-character arrays.

    Ranges are applied in input order; a later range overwrites an earlier
    one for the same style name. Unknown styles are ignored.

    Args:
        block: Draft.js block
        config: Conversion options (raw CSS support)

    Returns:
        InlineStyles with one array per recognized style name
    """
    config = config or DEFAULT_CONFIG
    length = len(utf16_units(block.get('text') or ''))
    inline_styles = InlineStyles.empty(length)

    for style_range in block.get('inlineStyleRanges') or []:
        resolved = _resolve_style(style_range['style'], config)
        if resolved is None:
            LOGGER.debug('Ignoring unsupported inline style %r', style_range['style'])
            continue
        name, value = resolved
        start = max(style_range['offset'], 0)
        end = min(style_range['offset'] + style_range['length'], length)
        values = inline_styles[name]
        for i in range(start, end):
            values[i] = value

    return inline_styles


def same_style_as_previous(
    inline_styles: InlineStyles,
    match_keys: Sequence[str],
    index: int,
) -> bool:
    """Check whether styles at index equal styles at index - 1.

    Only the styles named in match_keys are compared. Index 0, indices
    outside the block and unknown style names all count as a style change.
    """
    if not 0 < index < inline_styles.length:
        return False
    try:
        return all(inline_styles[key][index] == inline_styles[key][index - 1] for key in match_keys)
    except (KeyError, IndexError) as e:
        LOGGER.warning('Style comparison failed at index %d: %r', index, e)
        return False


def get_styles_at_offset(inline_styles: InlineStyles, offset: int) -> dict[str, StyleValue]:
    """Return every style active at offset, in declared style name order."""
    styles: dict[str, StyleValue] = {}
    for name in INLINE_STYLE_NAMES:
        values = inline_styles.values.get(name)
        if values is None or not 0 <= offset < len(values):
            continue
        if values[offset]:
            styles[name] = values[offset]
    return styles


def get_style_sections(
    units: Sequence[str],
    inline_styles: InlineStyles,
    match_keys: Sequence[str],
    start: int,
    end: int,
) -> list[StyleSection]:
    """Split [start, end) into maximal runs with constant match_keys styles.

    The first character of the span always opens a new run, whatever the
    style of the character before the span.

    Args:
        units: Block text as UTF-16 slots (see utf16_units)
        inline_styles: Per-character styles of the block
        match_keys: Style family to compare
        start: First index of the span
        end: Index right after the span

    Returns:
        Ordered list of StyleSection covering the span
    """
    style_sections: list[StyleSection] = []
    for i in range(start, min(end, len(units))):
        if i == start or not same_style_as_previous(inline_styles, match_keys, i):
            style_sections.append(
                StyleSection(
                    styles=get_styles_at_offset(inline_styles, i),
                    text=[units[i]],
                    start=i,
                    end=i + 1,
                )
            )
        else:
            current = style_sections[-1]
            current.text.append(units[i])
            current.end = i + 1
    return style_sections
