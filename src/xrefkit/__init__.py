"""Symbolic cross-reference resolution for produced documents."""

from xrefkit.core.exceptions import (
    AmbiguousXrefError,
    UnresolvedXrefsError,
    XrefError,
    XrefkitError,
    XrefLinkNotFoundError,
    XrefNotFoundError,
)
from xrefkit.core.types import Document, PipelineOutputs, get_children, get_link, get_xref
from xrefkit.engine.resolver import (
    XrefResolver,
    find_document,
    resolve_link,
    try_find_document,
    try_resolve_link,
)

__all__ = [
    "AmbiguousXrefError",
    "Document",
    "PipelineOutputs",
    "UnresolvedXrefsError",
    "XrefError",
    "XrefLinkNotFoundError",
    "XrefNotFoundError",
    "XrefResolver",
    "XrefkitError",
    "find_document",
    "get_children",
    "get_link",
    "get_xref",
    "resolve_link",
    "try_find_document",
    "try_resolve_link",
]
