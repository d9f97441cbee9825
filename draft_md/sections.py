"""Split block text into entity, hashtag and plain sections."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
import logging

from draft_md.config import DEFAULT_HASH_CONFIG, Block, HashConfig
from draft_md.utils import utf16_len, utf16_units

LOGGER = logging.getLogger(__name__)


class SectionType(Enum):
    ENTITY = 'ENTITY'
    HASHTAG = 'HASHTAG'


@dataclass(frozen=True)
class PreSection:
    """Tagged range before ordering (UTF-16 offsets)."""

    offset: int
    length: int
    type: SectionType
    key: int | str | None = None


@dataclass(frozen=True)
class Section:
    """Resolved [start, end) interval of block text.

    Untagged sections (type None) hold plain text between tagged ranges.
    """

    start: int
    end: int
    type: SectionType | None = None
    entity_key: int | str | None = None


def _iter_hashtag_spans(text: str, trigger: str, separator: str) -> Iterator[tuple[int, int]]:
    """Yield (start, end) code point spans of hashtags, trigger included."""
    if not trigger:
        return
    marker = separator + trigger
    pos = 0
    while pos < len(text):
        if pos == 0 and text.startswith(trigger):
            start = 0
        else:
            found = text.find(marker, pos)
            if found < 0:
                return
            start = found + len(separator)
        body_start = start + len(trigger)
        body_end = text.find(separator, body_start) if separator else body_start
        if body_end < 0:
            body_end = len(text)
        if body_end > body_start:
            yield start, body_end
        # Continue right after the trigger
        pos = body_start


def get_hashtag_ranges(text: str, hash_config: HashConfig | None = None) -> list[PreSection]:
    """Find hashtags in block text.

    A hashtag starts with the trigger either at the very start of the text or
    right after a separator, and runs until the next separator or the end of
    the text. Hashtags with an empty body are skipped.

    Args:
        text: Block text
        hash_config: Trigger and separator (defaults: '#' and ' ')

    Returns:
        HASHTAG pre-sections with offsets and lengths in UTF-16 units

    Examples:
        >>> get_hashtag_ranges('hello #world foo')
        [PreSection(offset=6, length=6, type=<SectionType.HASHTAG: 'HASHTAG'>, key=None)]
    """
    hash_config = hash_config or DEFAULT_HASH_CONFIG
    return [
        PreSection(
            offset=utf16_len(text[:start]),
            length=utf16_len(text[start:end]),
            type=SectionType.HASHTAG,
        )
        for start, end in _iter_hashtag_spans(text, hash_config.trigger, hash_config.separator)
    ]


def _sort_key(pre_section: PreSection) -> tuple[int, int]:
    # Entities win ties with hashtags starting at the same offset
    return pre_section.offset, 0 if pre_section.type is SectionType.ENTITY else 1


def _overlaps_any(pre_section: PreSection, others: list[PreSection]) -> bool:
    start = pre_section.offset
    end = start + max(pre_section.length, 0)
    return any(
        other.offset < end and start < other.offset + max(other.length, 0) for other in others
    )


def get_sections(block: Block, hash_config: HashConfig | None = None) -> list[Section]:
    """Partition block text into ordered, non-overlapping sections.

    Entity ranges and detected hashtags become tagged sections; text between
    them becomes untagged gap sections. The result tiles the whole text.
    Hashtags overlapping any entity range are dropped. An entity range
    starting inside an earlier entity range is dropped.

    Args:
        block: Draft.js block
        hash_config: Hashtag detection settings

    Returns:
        Sections in ascending order covering [0, text length)
    """
    text = block.get('text') or ''
    text_length = len(utf16_units(text))

    entity_ranges = [
        PreSection(
            offset=entity_range['offset'],
            length=entity_range['length'],
            type=SectionType.ENTITY,
            key=entity_range['key'],
        )
        for entity_range in block.get('entityRanges') or []
    ]
    hashtags = []
    for hashtag in get_hashtag_ranges(text, hash_config):
        if _overlaps_any(hashtag, entity_ranges):
            LOGGER.debug('Dropping hashtag at %d: overlaps an entity range', hashtag.offset)
            continue
        hashtags.append(hashtag)
    pre_sections = sorted(entity_ranges + hashtags, key=_sort_key)

    sections: list[Section] = []
    last_offset = 0
    for pre_section in pre_sections:
        if pre_section.offset < last_offset or pre_section.offset > text_length:
            LOGGER.debug(
                'Dropping %s range at %d: overlaps covered text or lies outside block %r',
                pre_section.type.value,
                pre_section.offset,
                block.get('key'),
            )
            continue
        if pre_section.offset > last_offset:
            sections.append(Section(start=last_offset, end=pre_section.offset))
        end = min(pre_section.offset + max(pre_section.length, 0), text_length)
        sections.append(
            Section(
                start=pre_section.offset,
                end=end,
                type=pre_section.type,
                entity_key=pre_section.key,
            )
        )
        last_offset = end

    if last_offset < text_length:
        sections.append(Section(start=last_offset, end=text_length))
    return sections
