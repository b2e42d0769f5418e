"""Xref resolution over a forest of produced documents.

Every lookup is a single full traversal of the forest. Nothing is cached and
nothing is mutated, so a resolver can be shared between threads as long as the
outputs it reads are finalized.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from xrefkit.core.exceptions import (
    AmbiguousXrefError,
    XrefLinkNotFoundError,
    XrefNotFoundError,
)
from xrefkit.core.logging import get_logger
from xrefkit.core.types import (
    DEFAULT_CONTENT_PIPELINE,
    Document,
    PipelineOutputs,
    get_children,
    get_link,
    get_xref,
)

logger = get_logger(__name__)


def _chars_match(a: str, b: str) -> bool:
    return a == b or a.upper() == b.upper() or a.lower() == b.lower()


def xrefs_match(candidate: str | None, key: str) -> bool:
    """Ordinal case-insensitive xref comparison.

    Characters are compared one to one with simple case mapping, so the
    result never depends on the locale and ``"straße"`` is not ``"strasse"``.
    A missing candidate never matches.
    """
    if candidate is None:
        return False
    return len(candidate) == len(key) and all(_chars_match(a, b) for a, b in zip(candidate, key))


def iter_documents_with_depth(roots: Sequence[Document]) -> Iterator[tuple[Document, int]]:
    """Yield ``(document, depth)`` for the forest in depth-first pre-order.

    Top-level documents have depth 0.
    """
    stack = [(doc, 0) for doc in reversed(roots)]
    while stack:
        doc, depth = stack.pop()
        yield doc, depth
        stack.extend((child, depth + 1) for child in reversed(get_children(doc)))


def iter_documents(roots: Sequence[Document]) -> Iterator[Document]:
    """Yield every document of the forest in depth-first pre-order."""
    for doc, _ in iter_documents_with_depth(roots):
        yield doc


def find_matches(documents: Sequence[Document], key: str) -> list[Document]:
    """Return every document whose xref matches ``key``, in document order.

    The whole forest is always visited.
    """
    if not isinstance(key, str):
        msg = f"xref key must be a string, got {type(key).__name__}"
        raise TypeError(msg)
    return [doc for doc in iter_documents(documents) if xrefs_match(get_xref(doc), key)]


def _single_match(documents: Sequence[Document], key: str) -> Document | None:
    matches = find_matches(documents, key)
    logger.debug("xref %r matched %d document(s)", key, len(matches))
    if len(matches) > 1:
        logger.warning("Ambiguous xref %r shared by %d documents", key, len(matches))
        raise AmbiguousXrefError(key, matches)
    return matches[0] if matches else None


def try_find_document(documents: Sequence[Document], key: str) -> tuple[bool, Document | None]:
    """Look up the document carrying ``key``.

    Returns:
        ``(True, document)`` for a unique match, ``(False, None)`` otherwise.

    Raises:
        AmbiguousXrefError: If more than one document carries ``key``.

    """
    doc = _single_match(documents, key)
    return (doc is not None, doc)


def find_document(documents: Sequence[Document], key: str) -> Document:
    """Return the document carrying ``key``.

    Raises:
        XrefNotFoundError: If no document carries ``key``.
        AmbiguousXrefError: If more than one document carries ``key``.

    """
    doc = _single_match(documents, key)
    if doc is None:
        raise XrefNotFoundError(key)
    return doc


def try_resolve_link(documents: Sequence[Document], key: str) -> tuple[bool, str | None]:
    """Look up the output link of the document carrying ``key``.

    Not-found and no-link both give ``(False, None)``; ambiguity still raises
    :class:`AmbiguousXrefError`.
    """
    doc = _single_match(documents, key)
    if doc is None:
        return (False, None)
    link = get_link(doc)
    return (link is not None, link)


def resolve_link(documents: Sequence[Document], key: str) -> str:
    """Return the output link of the document carrying ``key``, exactly as stored.

    Raises:
        XrefNotFoundError: If no document carries ``key``.
        XrefLinkNotFoundError: If the document exists but has no link.
        AmbiguousXrefError: If more than one document carries ``key``.

    """
    doc = find_document(documents, key)
    link = get_link(doc)
    if link is None:
        raise XrefLinkNotFoundError(key, doc)
    return link


class XrefResolver:
    """Resolves xrefs against the designated pipeline of a set of outputs."""

    def __init__(
        self,
        outputs: PipelineOutputs,
        content_pipeline: str = DEFAULT_CONTENT_PIPELINE,
    ) -> None:
        self.outputs = outputs
        self.content_pipeline = content_pipeline

    @property
    def documents(self) -> Sequence[Document]:
        return self.outputs.documents(self.content_pipeline)

    def try_find_document(self, key: str) -> tuple[bool, Document | None]:
        return try_find_document(self.documents, key)

    def find_document(self, key: str) -> Document:
        return find_document(self.documents, key)

    def try_resolve_link(self, key: str) -> tuple[bool, str | None]:
        return try_resolve_link(self.documents, key)

    def resolve_link(self, key: str) -> str:
        return resolve_link(self.documents, key)
