"""Navigation tree derived from a project's folders and documents."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from codex_pages.project import Document, Folder


@dc.dataclass(frozen=True, slots=True)
class SiteMapPage:
    """Navigation entry for one document."""

    title: str
    url: str
    menu_position: int


@dc.dataclass(frozen=True, slots=True)
class SiteMapFolder:
    """Navigation entry for one folder and everything visible beneath it."""

    name: str
    menu_position: int
    folders: tuple[SiteMapFolder, ...] = ()
    pages: tuple[SiteMapPage, ...] = ()


def build_sitemap(folder: Folder) -> SiteMapFolder:
    """Project ``folder`` into a sorted navigation tree.

    Documents and folders flagged ``menu_exclude`` are dropped. Pages sort by
    ``(menu_position, title)`` and folders by ``(menu_position, display
    name)``; ties keep discovery order. ``folder`` itself is never modified.
    """
    pages = sorted(
        (_page(document) for document in folder.documents if not _excluded(document)),
        key=lambda page: (page.menu_position, page.title),
    )
    folders = sorted(
        (build_sitemap(child) for child in folder.folders if not child.details.menu_exclude),
        key=lambda child: (child.menu_position, child.name),
    )
    return SiteMapFolder(
        name=folder.display_name,
        menu_position=folder.details.menu_position,
        folders=tuple(folders),
        pages=tuple(pages),
    )


def _excluded(document: Document) -> bool:
    return document.frontmatter.menu_exclude


def _page(document: Document) -> SiteMapPage:
    return SiteMapPage(
        title=document.frontmatter.title,
        url=document.url,
        menu_position=document.frontmatter.menu_position,
    )


__all__ = ["SiteMapFolder", "SiteMapPage", "build_sitemap"]
