"""Typed dataclasses describing project, folder, and document metadata."""

from __future__ import annotations

import dataclasses as dc

from codex_pages.errors import MalformedInputError

DEFAULT_PROJECT_NAME = "New Project"
DEFAULT_BUILD_PATH = "dist"
DEFAULT_BASE_URL = "/"
DEFAULT_PYGMENTS_STYLE = "solarized-dark"


class ProjectConfigError(MalformedInputError):
    """Raised when ``codex.yml``, ``group.yml`` or frontmatter is invalid."""


@dc.dataclass(slots=True)
class FrontMatter:
    """Metadata block at the top of a document."""

    title: str = ""
    subtitle: str | None = None
    tags: list[str] = dc.field(default_factory=list)
    menu_position: int = 0
    menu_exclude: bool = False
    json_schema: str | None = None
    pdf_exclude: bool = False


@dc.dataclass(slots=True)
class FolderDetails:
    """Navigation settings read from a folder's ``group.yml``."""

    name: str | None = None
    menu_position: int = 0
    menu_exclude: bool = False


@dc.dataclass(slots=True)
class ProjectDetails:
    """Project-wide settings read from ``codex.yml``."""

    name: str = DEFAULT_PROJECT_NAME
    author: str | None = None
    build_path: str = DEFAULT_BUILD_PATH
    repo_url: str | None = None
    project_page: str | None = None
    base_url: str = DEFAULT_BASE_URL
    pygments_style: str = DEFAULT_PYGMENTS_STYLE

    def __post_init__(self) -> None:
        self.base_url = normalize_base_url(self.base_url)


def normalize_base_url(value: str) -> str:
    """Return ``value`` with exactly one leading and one trailing slash."""
    trimmed = value.strip().strip("/")
    if not trimmed:
        return "/"
    return f"/{trimmed}/"


__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_BUILD_PATH",
    "DEFAULT_PROJECT_NAME",
    "DEFAULT_PYGMENTS_STYLE",
    "FolderDetails",
    "FrontMatter",
    "ProjectConfigError",
    "ProjectDetails",
    "normalize_base_url",
]
