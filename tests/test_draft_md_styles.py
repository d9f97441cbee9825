"""Tests for draft_md styles - per-character arrays and style runs."""

from typing import Any

import pytest

from draft_md.config import (
    BOOLEAN_INLINE_STYLE_NAMES,
    STRING_INLINE_STYLE_NAMES,
    Block,
    ConversionConfig,
)
from draft_md.styles import (
    InlineStyles,
    StyleSection,
    get_style_array_for_block,
    get_style_sections,
    get_styles_at_offset,
    parse_raw_css,
    same_style_as_previous,
)
from draft_md.utils import utf16_units

RAW_CSS_CONFIG = ConversionConfig(raw_css_inline_styles=True)


def _block(text: str, *styles: tuple[int, int, str]) -> Block:
    return {
        'key': 'k',
        'text': text,
        'type': 'unstyled',
        'depth': 0,
        'entityRanges': [],
        'inlineStyleRanges': [
            {'offset': offset, 'length': length, 'style': style} for offset, length, style in styles
        ],
    }


def _sections(block: Block, keys: tuple[str, ...], start: int, end: int) -> list[StyleSection]:
    return get_style_sections(
        utf16_units(block['text']), get_style_array_for_block(block), keys, start, end
    )


# ============================================================================
# Style materialization
# ============================================================================


def test_boolean_style_fills_range() -> None:
    inline_styles = get_style_array_for_block(_block('abcd', (1, 2, 'BOLD')))

    assert inline_styles.length == 4
    assert inline_styles['BOLD'] == [None, True, True, None]
    assert inline_styles['ITALIC'] == [None] * 4


@pytest.mark.parametrize(
    ('style', 'name', 'value'),
    [
        ('color-red', 'COLOR', 'red'),
        ('bgcolor-#fff', 'BGCOLOR', '#fff'),
        ('fontsize-12', 'FONTSIZE', '12'),
        ('fontfamily-Arial', 'FONTFAMILY', 'Arial'),
    ],
)
def test_string_style_prefix_is_stripped(style: str, name: str, value: str) -> None:
    inline_styles = get_style_array_for_block(_block('abc', (0, 2, style)))

    assert inline_styles[name] == [value, value, None]


def test_later_range_overwrites_earlier_one() -> None:
    """Range order is significant: last applied value wins."""
    block = _block('abc', (0, 3, 'color-red'), (1, 1, 'color-blue'))

    assert get_style_array_for_block(block)['COLOR'] == ['red', 'blue', 'red']


def test_unknown_style_is_ignored() -> None:
    inline_styles = get_style_array_for_block(_block('ab', (0, 2, 'SHOUTING')))

    assert all(value is None for values in inline_styles.values.values() for value in values)


def test_raw_css_requires_option() -> None:
    block = _block('ab', (0, 2, '{"fontWeight": "bold"}'))

    assert get_style_array_for_block(block)['RAWCSS'] == [None, None]
    assert get_style_array_for_block(block, RAW_CSS_CONFIG)['RAWCSS'] == [
        'font-weight:bold;',
        'font-weight:bold;',
    ]


def test_range_past_end_of_text_is_clipped() -> None:
    inline_styles = get_style_array_for_block(_block('abc', (2, 10, 'BOLD')))

    assert inline_styles['BOLD'] == [None, None, True]


def test_offsets_are_utf16_units() -> None:
    """An emoji takes two slots, so 'b' sits at offset 3."""
    inline_styles = get_style_array_for_block(_block('a\N{FIRE}b', (3, 1, 'BOLD')))

    assert inline_styles.length == 4
    assert inline_styles['BOLD'] == [None, None, None, True]


@pytest.mark.parametrize(
    ('style', 'expected'),
    [
        ('{"fontWeight": "bold", "color": "red"}', 'font-weight:bold;color:red;'),
        ('{"lineHeight": 1.5}', 'line-height:1.5;'),
        ('{"WebkitTransform": "none"}', '-webkit-transform:none;'),
        ('{}', ';'),
        ('[1, 2]', None),
        ('"text"', None),
        ('{broken', None),
        ('BOLD', None),
    ],
)
def test_parse_raw_css(style: str, expected: str | None) -> None:
    assert parse_raw_css(style) == expected


# ============================================================================
# Style comparison helpers
# ============================================================================


def test_same_style_as_previous() -> None:
    inline_styles = get_style_array_for_block(_block('abcd', (0, 2, 'BOLD')))
    keys = BOOLEAN_INLINE_STYLE_NAMES

    assert same_style_as_previous(inline_styles, keys, 1) is True
    assert same_style_as_previous(inline_styles, keys, 2) is False
    assert same_style_as_previous(inline_styles, keys, 3) is True


@pytest.mark.parametrize('index', [0, 4, 10, -1])
def test_same_style_as_previous_outside_block(index: int) -> None:
    inline_styles = get_style_array_for_block(_block('abcd'))

    assert same_style_as_previous(inline_styles, BOOLEAN_INLINE_STYLE_NAMES, index) is False


def test_same_style_as_previous_unknown_key_never_raises() -> None:
    inline_styles = get_style_array_for_block(_block('abcd'))

    assert same_style_as_previous(inline_styles, ['NOT-A-STYLE'], 1) is False


def test_same_style_as_previous_short_array_never_raises() -> None:
    inline_styles = InlineStyles(3, {'BOLD': [True]})

    assert same_style_as_previous(inline_styles, ['BOLD'], 2) is False


def test_styles_at_offset_in_declared_order() -> None:
    block = _block('ab', (0, 1, 'BOLD'), (0, 1, 'color-red'), (0, 2, 'ITALIC'))
    inline_styles = get_style_array_for_block(block)

    styles = get_styles_at_offset(inline_styles, 0)

    assert list(styles) == ['ITALIC', 'BOLD', 'COLOR']
    assert styles['COLOR'] == 'red'
    assert get_styles_at_offset(inline_styles, 1) == {'ITALIC': True}
    assert get_styles_at_offset(inline_styles, 5) == {}


# ============================================================================
# Style runs
# ============================================================================


def test_boolean_runs_are_maximal() -> None:
    block = _block('abcdef', (0, 2, 'BOLD'), (1, 2, 'ITALIC'))

    runs = _sections(block, BOOLEAN_INLINE_STYLE_NAMES, 0, 6)

    assert [(r.start, r.end) for r in runs] == [(0, 1), (1, 2), (2, 3), (3, 6)]
    assert [''.join(r.text) for r in runs] == ['a', 'b', 'c', 'def']
    assert [list(r.styles) for r in runs] == [['BOLD'], ['ITALIC', 'BOLD'], ['ITALIC'], []]


@pytest.mark.parametrize(
    'styles',
    [
        [],
        [(0, 3, 'BOLD')],
        [(0, 2, 'BOLD'), (1, 4, 'CODE'), (5, 3, 'ITALIC')],
        [(0, 8, 'UNDERLINE'), (2, 2, 'color-red'), (3, 3, 'STRIKETHROUGH')],
    ],
)
def test_runs_tile_span_and_differ_from_neighbours(styles: list[Any]) -> None:
    """Runs cover the span exactly and adjacent runs never share styles."""
    block = _block('abcdefgh', *styles)
    inline_styles = get_style_array_for_block(block)
    keys = BOOLEAN_INLINE_STYLE_NAMES

    runs = get_style_sections(utf16_units(block['text']), inline_styles, keys, 0, 8)

    assert runs[0].start == 0
    assert runs[-1].end == 8
    for previous, current in zip(runs, runs[1:], strict=False):
        assert previous.end == current.start
        assert any(inline_styles[k][previous.start] != inline_styles[k][current.start] for k in keys)
    for run in runs:
        for i in range(run.start + 1, run.end):
            assert same_style_as_previous(inline_styles, keys, i)


def test_span_start_always_opens_new_run() -> None:
    block = _block('abcd', (0, 4, 'BOLD'))

    runs = _sections(block, BOOLEAN_INLINE_STYLE_NAMES, 2, 4)

    assert len(runs) == 1
    assert (runs[0].start, runs[0].end, runs[0].text) == (2, 4, ['c', 'd'])


def test_string_family_ignores_boolean_changes() -> None:
    block = _block('abc', (0, 1, 'BOLD'), (0, 3, 'color-red'))

    runs = _sections(block, STRING_INLINE_STYLE_NAMES, 0, 3)

    assert len(runs) == 1
    assert runs[0].styles == {'BOLD': True, 'COLOR': 'red'}


def test_empty_span_has_no_runs() -> None:
    assert _sections(_block('abc'), BOOLEAN_INLINE_STYLE_NAMES, 1, 1) == []
    assert _sections(_block(''), BOOLEAN_INLINE_STYLE_NAMES, 0, 0) == []
