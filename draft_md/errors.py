"""Exceptions raised by draft_md.

Conversion itself is defensive: malformed style names are ignored and style
comparison failures just start a new run. Only broken references and
unreadable documents are reported as errors.
"""


class DraftMarkdownError(Exception):
    """Base class for all draft_md errors."""


class UnknownEntityError(DraftMarkdownError, KeyError):
    """Entity range points to an id missing from the entity map."""

    def __init__(self, key: object) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f'unknown entity reference: {self.key!r}'


class DocumentError(DraftMarkdownError, ValueError):
    """Input is not a valid Draft.js raw content document."""
