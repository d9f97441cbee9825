"""Draft.js raw content to Markdown converter.

This module converts Draft.js raw content (blocks with inline style ranges
and entity references) into a Markdown string with inline HTML for styles
markdown cannot express (colors, fonts, superscript...).

Example:
    >>> from draft_md import draft_to_markdown
    >>> content = {
    ...     'blocks': [
    ...         {
    ...             'text': 'Hello world',
    ...             'type': 'unstyled',
    ...             'inlineStyleRanges': [{'offset': 6, 'length': 5, 'style': 'ITALIC'}],
    ...         }
    ...     ]
    ... }
    >>> draft_to_markdown(content)
    'Hello *world*\\n'
"""

from draft_md.config import (
    DEFAULT_BLOCK_TYPES_MAPPING,
    DEFAULT_CONFIG,
    DEFAULT_HASH_CONFIG,
    DEFAULT_STYLE_TRANSFORM,
    ConversionConfig,
    HashConfig,
)
from draft_md.converter import draft_to_markdown
from draft_md.document import load_document, load_document_file
from draft_md.errors import DocumentError, DraftMarkdownError, UnknownEntityError

__version__ = '0.1.0'

__all__ = [
    'draft_to_markdown',
    'load_document',
    'load_document_file',
    'ConversionConfig',
    'HashConfig',
    'DEFAULT_CONFIG',
    'DEFAULT_HASH_CONFIG',
    'DEFAULT_BLOCK_TYPES_MAPPING',
    'DEFAULT_STYLE_TRANSFORM',
    'DraftMarkdownError',
    'DocumentError',
    'UnknownEntityError',
]
