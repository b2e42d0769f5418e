"""Core exceptions for xrefkit."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from xrefkit.core.types import Document


class XrefkitError(Exception):
    """Base exception for all xrefkit errors."""


class XrefError(XrefkitError):
    """Base exception for failures resolving a single xref key."""

    def __init__(self, key: str, message: str) -> None:
        self.key = key
        super().__init__(message)


class XrefNotFoundError(XrefError):
    """Raised when no document carries the requested xref."""

    def __init__(self, key: str) -> None:
        super().__init__(key, f"Couldn't find a document with xref {key!r}")


class AmbiguousXrefError(XrefError):
    """Raised when more than one document carries the requested xref."""

    def __init__(self, key: str, matches: Sequence[Document]) -> None:
        self.matches = list(matches)
        super().__init__(
            key,
            f"Found {len(self.matches)} documents with xref {key!r}; xrefs must be unique",
        )


class XrefLinkNotFoundError(XrefError):
    """Raised when the xref exists but its document has no output link."""

    def __init__(self, key: str, document: Document) -> None:
        self.document = document
        super().__init__(key, f"Document with xref {key!r} has no link")


class UnresolvedXrefsError(XrefkitError):
    """Raised when one or more xref links in a piece of content can't be resolved."""

    def __init__(self, errors: Sequence[XrefError]) -> None:
        self.errors = list(errors)
        details = "; ".join(str(error) for error in self.errors)
        super().__init__(f"{len(self.errors)} unresolved xref(s): {details}")


class ManifestError(XrefkitError):
    """Raised when a document manifest is malformed."""
