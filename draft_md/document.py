"""Loading and validation of Draft.js raw content documents."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from draft_md.config import EditorContent
from draft_md.errors import DocumentError

LOGGER = logging.getLogger(__name__)

_EDITOR_CONTENT_ADAPTER: TypeAdapter[EditorContent] = TypeAdapter(EditorContent)


def load_document(source: str | bytes | Mapping[str, Any]) -> EditorContent:
    """Validate raw content given as JSON text or as decoded data.

    Args:
        source: JSON string/bytes, or an already decoded mapping

    Returns:
        Validated editor content (plain dicts, ready for draft_to_markdown)

    Raises:
        DocumentError: If the input is not valid Draft.js raw content
    """
    try:
        if isinstance(source, (str, bytes)):
            content = _EDITOR_CONTENT_ADAPTER.validate_json(source)
        else:
            content = _EDITOR_CONTENT_ADAPTER.validate_python(source)
    except ValidationError as e:
        raise DocumentError(f'Invalid Draft.js content: {e.error_count()} error(s)\n{e}') from e

    LOGGER.debug(
        'Loaded document: %d blocks, %d entities',
        len(content['blocks']),
        len(content.get('entityMap') or {}),
    )
    return content


def load_document_file(path: Path) -> EditorContent:
    """Read and validate a UTF-8 JSON file."""
    try:
        raw = path.read_text(encoding='utf-8')
    except OSError as e:
        raise DocumentError(f'Cannot read {path}: {e}') from e
    return load_document(raw)
