"""Core Data Types for xrefkit."""

from __future__ import annotations

import uuid
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel, Field

# Attribute names used by producers that emit documents as attribute mappings.
XREF_KEY = "Xref"
CHILDREN_KEY = "Children"
LINK_KEY = "Link"

DEFAULT_CONTENT_PIPELINE = "Content"


class Document(BaseModel):
    """A produced document and the documents nested under it.

    The ``id`` is an opaque handle. Two documents with the same xref and link
    are still different documents.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    xref: str | None = None
    link: str | None = None
    children: list[Document] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_attributes(cls, attributes: Mapping[str, Any]) -> Document:
        """Build a document tree from a dynamic attribute mapping.

        ``Xref``, ``Link`` and ``Children`` are lifted into typed fields;
        everything else is kept in ``metadata``. Missing and ``None`` values
        both mean "absent".
        """
        data = dict(attributes)
        raw_children = data.pop(CHILDREN_KEY, None) or []
        children = [
            child if isinstance(child, Document) else cls.from_attributes(child)
            for child in raw_children
        ]
        doc_id = data.pop("id", None)
        kwargs: dict[str, Any] = {
            "xref": data.pop(XREF_KEY, None),
            "link": data.pop(LINK_KEY, None),
            "children": children,
            "metadata": data,
        }
        if doc_id is not None:
            kwargs["id"] = str(doc_id)
        return cls(**kwargs)


def get_xref(doc: Document) -> str | None:
    """Return the document's xref, or ``None`` when it has none."""
    return doc.xref


def get_children(doc: Document) -> Sequence[Document]:
    """Return the document's children, or an empty sequence."""
    return doc.children or ()


def get_link(doc: Document) -> str | None:
    """Return the document's output link, or ``None`` when it is unpublished."""
    return doc.link


class PipelineOutputs(BaseModel):
    """Finalized outputs of a content pipeline run, keyed by pipeline name."""

    pipelines: dict[str, list[Document]] = Field(default_factory=dict)

    def documents(self, pipeline: str = DEFAULT_CONTENT_PIPELINE) -> Sequence[Document]:
        """Top-level documents produced by ``pipeline``.

        A pipeline that produced nothing yields an empty sequence.
        """
        return self.pipelines.get(pipeline, [])

    @property
    def names(self) -> list[str]:
        return list(self.pipelines)
