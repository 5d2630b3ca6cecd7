"""Inputs and outputs of a single render call."""

from __future__ import annotations

import dataclasses as dc
import secrets
import typing as typ

if typ.TYPE_CHECKING:
    from codex_pages.config import FrontMatter, ProjectDetails
    from codex_pages.project import Document, Project
    from codex_pages.sitemap import SiteMapFolder
    from codex_pages.toc import TocEntry


class ElementIdGenerator:
    """Hand out the identifier used by the ``id()`` template helper.

    The first call generates a random identifier; later calls return the same
    value. Each render gets its own generator.
    """

    __slots__ = ("_first",)

    def __init__(self) -> None:
        self._first: str | None = None

    def first(self) -> str:
        if self._first is None:
            self._first = secrets.token_urlsafe(16)
        return self._first


@dc.dataclass(frozen=True, slots=True)
class RenderContext:
    """The project and document a render reads from."""

    project: Project
    document: Document
    element_ids: ElementIdGenerator = dc.field(default_factory=ElementIdGenerator)


@dc.dataclass(slots=True)
class OutputContext:
    """Values handed to the page template once the body has been rendered.

    Attributes
    ----------
    document : FrontMatter
        Copy of the rendered document's frontmatter.
    sitemap : SiteMapFolder
        Navigation tree for the whole project.
    body : str
        Rendered document body, including any schema sections.
    project : ProjectDetails
        Project-wide settings.
    toc : list[TocEntry]
        Top-level headings of the document.
    modified : str or None
        Last modification time of the source file.
    current_url : str
        URL of the rendered document.
    """

    document: FrontMatter
    sitemap: SiteMapFolder
    body: str
    project: ProjectDetails
    toc: list[TocEntry]
    modified: str | None
    current_url: str

    def as_template_context(self) -> dict[str, typ.Any]:
        return {field.name: getattr(self, field.name) for field in dc.fields(self)}


__all__ = ["ElementIdGenerator", "OutputContext", "RenderContext"]
