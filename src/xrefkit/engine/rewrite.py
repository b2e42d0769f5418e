"""Rewrite ``xref:`` link targets in document content to published links."""

from __future__ import annotations

import re

from xrefkit.core.exceptions import UnresolvedXrefsError, XrefError
from xrefkit.core.logging import get_logger
from xrefkit.engine.resolver import XrefResolver

logger = get_logger(__name__)

XREF_SCHEME = "xref:"

# [text](xref:key) and [text](xref:key#fragment "title"); the scheme is case-insensitive
XREF_MD_LINK_RE = re.compile(
    r"(?P<prefix>\]\(\s*)xref:(?P<key>[^\s)#]*)(?P<fragment>#[^\s)]*)?",
    re.IGNORECASE,
)
# href="xref:key" / href='xref:key'
XREF_HREF_RE = re.compile(
    r"(?P<prefix>\bhref\s*=\s*(?P<quote>[\"']))xref:(?P<key>[^\"'#]*)(?P<fragment>#[^\"']*)?(?P=quote)",
    re.IGNORECASE,
)


def rewrite_xref_links(content: str, resolver: XrefResolver) -> str:
    """Replace every ``xref:<key>`` link target in ``content`` with its link.

    Markdown inline links and HTML ``href`` attributes are rewritten. Fragments
    after the key are kept. All failures are collected and raised together.

    Raises:
        UnresolvedXrefsError: If any xref is missing, unpublished or ambiguous.

    """
    if XREF_SCHEME not in content.lower():
        return content

    errors: list[XrefError] = []

    def _resolve(match: re.Match[str]) -> str:
        key = match.group("key")
        fragment = match.group("fragment") or ""
        try:
            link = resolver.resolve_link(key)
        except XrefError as exc:
            errors.append(exc)
            return match.group(0)
        replacement = f"{match.group('prefix')}{link}{fragment}"
        if "quote" in match.re.groupindex:
            replacement += match.group("quote")
        return replacement

    rewritten = XREF_MD_LINK_RE.sub(_resolve, content)
    rewritten = XREF_HREF_RE.sub(_resolve, rewritten)

    if errors:
        logger.error("Failed to resolve %d xref link(s)", len(errors))
        raise UnresolvedXrefsError(errors)
    return rewritten
