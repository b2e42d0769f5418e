"""Jinja2 filters exposing xref resolution to templates."""

from collections.abc import Callable
from typing import Any

from jinja2 import Environment

from xrefkit.engine.resolver import XrefResolver


def xref_filters(resolver: XrefResolver) -> dict[str, Callable[..., Any]]:
    """Build the xref filters bound to ``resolver``.

    ``xref_link`` and ``xref_document`` raise on failure; ``try_xref_link``
    returns ``None`` when the xref is missing or unpublished.
    """

    def try_xref_link(key: str) -> str | None:
        _, link = resolver.try_resolve_link(key)
        return link

    return {
        "xref_link": resolver.resolve_link,
        "xref_document": resolver.find_document,
        "try_xref_link": try_xref_link,
    }


def register_xref_filters(env: Environment, resolver: XrefResolver) -> None:
    """Register the xref filters on a Jinja2 environment."""
    env.filters.update(xref_filters(resolver))
