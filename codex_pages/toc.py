"""Heading slugs and table-of-contents extraction.

Examples
--------
>>> from codex_pages.toc import slug
>>> slug("Hello, World!")
'hello-world'
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from codex_pages.nodes import Heading, Text

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from codex_pages.nodes import Node

_STRIPPED = str.maketrans("", "", ":?!.,;()[]{}'\"\\/<>|")


def slug(text: str) -> str:
    """Return an anchor-safe identifier for ``text``.

    Parameters
    ----------
    text : str
        Heading text to normalise.

    Returns
    -------
    str
        Lowercased text with spaces turned into hyphens and punctuation
        removed. Applying ``slug`` to its own output returns it unchanged.
    """
    return text.lower().replace(" ", "-").translate(_STRIPPED)


def get_text(children: cabc.Iterable[Node]) -> str | None:
    """Return the value of the first direct text child, if there is one."""
    for child in children:
        if isinstance(child, Text):
            return child.value
    return None


@dc.dataclass(frozen=True, slots=True)
class TocEntry:
    """One heading in a document's table of contents."""

    depth: int
    value: str
    slug: str


def build_toc(nodes: cabc.Iterable[Node]) -> list[TocEntry]:
    """Collect headings that sit directly in ``nodes``, in document order.

    Headings nested inside block quotes, lists, or components are not
    visited, and headings without a text child are skipped.
    """
    entries: list[TocEntry] = []
    for node in nodes:
        if not isinstance(node, Heading):
            continue
        text = get_text(node.children)
        if text is None:
            continue
        entries.append(TocEntry(depth=node.depth, value=text, slug=slug(text)))
    return entries


__all__ = ["TocEntry", "build_toc", "get_text", "slug"]
