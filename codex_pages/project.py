"""Discover the documents and folders that make up a documentation project.

A project is a directory with an optional ``codex.yml``. Every ``.md`` or
``.mdx`` file below it becomes a :class:`Document` whose URL mirrors its
location, and every directory becomes a :class:`Folder` that can carry a
``group.yml`` with navigation settings.

Example
-------
>>> from pathlib import Path
>>> from codex_pages.project import Project
>>> project = Project.load(Path("docs"))  # doctest: +SKIP
>>> project.get_document_for_url("/getting-started").frontmatter.title  # doctest: +SKIP
'Getting started'
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import logging
import typing as typ
from pathlib import Path

from codex_pages.config import (
    FolderDetails,
    FrontMatter,
    ProjectConfigError,
    ProjectDetails,
    load_folder_details,
    load_project_details,
    parse_frontmatter,
)
from codex_pages.errors import InputNotFoundError, MalformedInputError, RenderError
from codex_pages.markdown_parser import split_frontmatter

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from codex_pages.toc import TocEntry

logger = logging.getLogger(__name__)

DOCUMENT_SUFFIXES = frozenset({".md", ".mdx"})
SKIPPED_DIRECTORIES = frozenset({"static", "_internal", ".git"})
MODIFIED_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def read_text(path: Path) -> str:
    """Read a UTF-8 file, mapping failures onto render errors."""
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        msg = f"File '{path}' not found."
        raise InputNotFoundError(msg) from exc
    except UnicodeDecodeError as exc:
        msg = f"File '{path}' is not valid UTF-8."
        raise MalformedInputError(msg) from exc
    except OSError as exc:
        msg = f"File '{path}' could not be read: {exc.strerror or exc}"
        raise InputNotFoundError(msg) from exc


def document_url(relative_path: Path, base_url: str) -> str:
    """Return the site URL for a document at ``relative_path``.

    ``index`` documents take the URL of their directory; any other document
    uses its path without the extension.

    Examples
    --------
    >>> from pathlib import Path
    >>> document_url(Path("guides/setup.md"), "/docs/")
    '/docs/guides/setup'
    >>> document_url(Path("index.md"), "/docs/")
    '/docs/'
    """
    if relative_path.stem == "index":
        parts = relative_path.parent.parts
    else:
        parts = relative_path.with_suffix("").parts
    path = "/".join(parts)
    return f"{base_url}{path}" if path else base_url


@dc.dataclass(slots=True)
class Document:
    """A markdown file in the project."""

    path: Path
    disk_path: Path
    frontmatter: FrontMatter
    url: str
    toc: list[TocEntry] | None = None

    @classmethod
    def load(cls, disk_path: Path, *, root: Path, base_url: str) -> Document:
        """Read ``disk_path`` and parse its frontmatter.

        Malformed frontmatter is logged and replaced by defaults so the
        document stays part of the project.
        """
        relative = disk_path.relative_to(root)
        yaml_text, _body = split_frontmatter(read_text(disk_path))
        try:
            frontmatter = parse_frontmatter(yaml_text, source=str(relative))
        except ProjectConfigError as exc:
            logger.warning("Using default frontmatter for %s: %s", relative, exc)
            frontmatter = FrontMatter()
        return cls(
            path=relative,
            disk_path=disk_path,
            frontmatter=frontmatter,
            url=document_url(relative, base_url),
        )

    @property
    def directory(self) -> Path:
        return self.disk_path.parent

    def read_source(self) -> str:
        """Return the raw markdown, frontmatter included."""
        return read_text(self.disk_path)

    def last_modified(self) -> str | None:
        """Return the file modification time in UTC, or None if unavailable."""
        try:
            mtime = self.disk_path.stat().st_mtime
        except OSError:
            return None
        return dt.datetime.fromtimestamp(mtime, tz=dt.UTC).strftime(MODIFIED_FORMAT)


@dc.dataclass(slots=True)
class Folder:
    """A directory of documents and sub-folders."""

    name: str
    path: Path
    details: FolderDetails = dc.field(default_factory=FolderDetails)
    documents: list[Document] = dc.field(default_factory=list)
    folders: list[Folder] = dc.field(default_factory=list)

    @property
    def display_name(self) -> str:
        """Return the configured name, falling back to the directory name."""
        return self.details.name or self.name

    def iter_documents(self) -> cabc.Iterator[Document]:
        """Yield this folder's documents, then those of each sub-folder."""
        yield from self.documents
        for folder in self.folders:
            yield from folder.iter_documents()


@dc.dataclass(slots=True)
class Project:
    """Loaded project: settings plus the folder tree rooted at ``root``."""

    root: Path
    details: ProjectDetails
    folder: Folder

    @classmethod
    def load(cls, root: Path, *, ignore_base_url: bool = False) -> Project:
        """Load settings and scan ``root`` for documents.

        Parameters
        ----------
        root : Path
            Project directory.
        ignore_base_url : bool, optional
            Serve every URL from ``/`` regardless of the configured base URL.

        Raises
        ------
        InputNotFoundError
            If ``root`` is not a directory.
        ProjectConfigError
            If ``codex.yml`` or a ``group.yml`` is malformed.
        """
        root = root.resolve()
        if not root.is_dir():
            msg = f"Project directory '{root}' not found."
            raise InputNotFoundError(msg)
        details = load_project_details(root)
        if ignore_base_url:
            details.base_url = "/"
        skipped = SKIPPED_DIRECTORIES.union(Path(details.build_path).parts[:1])
        folder = _scan_folder(root, root=root, details=details, skipped=skipped)
        return cls(root=root, details=details, folder=folder)

    @property
    def build_dir(self) -> Path:
        return self.root / self.details.build_path

    def iter_all_documents(self) -> cabc.Iterator[Document]:
        return self.folder.iter_documents()

    def get_document_for_url(self, url: str) -> Document | None:
        """Return the document served at ``url``; surrounding slashes are ignored."""
        wanted = url.strip("/")
        for document in self.iter_all_documents():
            if document.url.strip("/") == wanted:
                return document
        return None

    def get_document(self, relative_path: Path | str) -> Document | None:
        """Return the document stored at ``relative_path`` below the root."""
        wanted = Path(relative_path)
        for document in self.iter_all_documents():
            if document.path == wanted:
                return document
        return None


def _scan_folder(
    directory: Path,
    *,
    root: Path,
    details: ProjectDetails,
    skipped: frozenset[str],
) -> Folder:
    folder = Folder(
        name=directory.name if directory != root else details.name,
        path=directory.relative_to(root),
        details=load_folder_details(directory),
    )
    for entry in sorted(directory.iterdir(), key=lambda item: item.name):
        if entry.is_dir():
            if entry.name in skipped:
                continue
            folder.folders.append(
                _scan_folder(entry, root=root, details=details, skipped=skipped)
            )
        elif entry.suffix in DOCUMENT_SUFFIXES:
            try:
                document = Document.load(entry, root=root, base_url=details.base_url)
            except RenderError:
                logger.exception("Skipping unreadable document %s", entry)
                continue
            folder.documents.append(document)
    return folder


__all__ = [
    "DOCUMENT_SUFFIXES",
    "Document",
    "Folder",
    "Project",
    "document_url",
    "read_text",
]
