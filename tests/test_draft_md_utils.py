"""Tests for draft_md.utils module."""

import pytest

from draft_md.utils import is_empty_string, is_list, utf16_len, utf16_units

# ============================================================================
# TESTS: utf16_len / utf16_units
# ============================================================================


@pytest.mark.parametrize(
    ('text', 'expected'),
    [
        ('', 0),
        ('a', 1),
        ('Hello', 5),
        ('\n', 1),
        # Cyrillic and CJK: 1 unit each
        ('Привет', 6),
        ('世界', 2),
        # Astral characters: surrogate pairs
        ('\N{FIRE}', 2),
        ('Hi \N{FIRE}', 5),
        ('\N{FIRE}火\N{FIRE}', 5),
    ],
)
def test_utf16_len_various_characters(text: str, expected: int) -> None:
    """utf16_len counts UTF-16 code units, like JavaScript string length."""
    assert utf16_len(text) == expected, f'Failed for: {text!r}'


def test_utf16_units_pads_astral_characters() -> None:
    """Astral characters take two slots, the second one empty."""
    assert utf16_units('a\N{FIRE}b') == ['a', '\N{FIRE}', '', 'b']


@pytest.mark.parametrize(
    'text',
    ['', 'plain', 'Mixed: Hello \N{EARTH GLOBE EUROPE-AFRICA} 世界', '\N{FIRE}' * 3],
)
def test_utf16_units_matches_utf16_len(text: str) -> None:
    """One slot per code unit, and joining the slots gives back the text."""
    units = utf16_units(text)
    assert len(units) == utf16_len(text)
    assert ''.join(units) == text


# ============================================================================
# TESTS: string and block type helpers
# ============================================================================


@pytest.mark.parametrize(
    ('text', 'expected'),
    [
        (None, True),
        ('', True),
        ('   ', True),
        ('\n\t', True),
        ('a', False),
        (' a ', False),
    ],
)
def test_is_empty_string(text: str | None, expected: bool) -> None:
    assert is_empty_string(text) is expected


@pytest.mark.parametrize(
    ('block_type', 'expected'),
    [
        ('unordered-list-item', True),
        ('ordered-list-item', True),
        ('unstyled', False),
        ('blockquote', False),
        ('list', False),
    ],
)
def test_is_list(block_type: str, expected: bool) -> None:
    assert is_list(block_type) is expected
