"""Utility functions for Draft.js to Markdown conversion."""

from draft_md.config import LIST_BLOCK_TYPES


def utf16_len(text: str) -> int:
    """Calculate length in UTF-16 code units.

    Draft.js measures range offsets and lengths in UTF-16 code units
    (JavaScript string indices), not in Python code points.

    Args:
        text: Input text string

    Returns:
        Length in UTF-16 code units

    Examples:
        >>> utf16_len("Hello")
        5
        >>> utf16_len("\N{EARTH GLOBE EUROPE-AFRICA}")
        2
    """
    return len(text.encode('utf-16-le')) // 2


def utf16_units(text: str) -> list[str]:
    """Expand text into one slot per UTF-16 code unit.

    Astral characters keep their own slot followed by an empty-string slot,
    so list indices match Draft.js offsets and ''.join() of any slice gives
    back whole characters.

    Examples:
        >>> utf16_units('a\N{FIRE}b')
        ['a', '\N{FIRE}', '', 'b']
    """
    units: list[str] = []
    for char in text:
        units.append(char)
        if ord(char) > 0xFFFF:
            units.append('')
    return units


def is_empty_string(text: str | None) -> bool:
    """Return True if the string is None, empty or whitespace only."""
    return text is None or not text.strip()


def is_list(block_type: str) -> bool:
    """Check if a block type is a list item."""
    return block_type in LIST_BLOCK_TYPES
