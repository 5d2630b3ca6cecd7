r"""Write rendered projects to disk.

:class:`SiteBuilder` renders every document to an ``index.html`` below the
build directory and copies the project's static assets alongside.
:class:`LatexBookBuilder` concatenates every printable document into a single
``main.tex``. Both keep going when one document fails and report the failures
at the end.

Example
-------
>>> from pathlib import Path
>>> from codex_pages.project import Project
>>> from codex_pages.site import SiteBuilder
>>> report = SiteBuilder(Project.load(Path("docs"))).run()  # doctest: +SKIP
>>> report.written[0]  # doctest: +SKIP
PosixPath('docs/dist/index.html')
"""

from __future__ import annotations

import dataclasses as dc
import logging
import shutil
import typing as typ
from pathlib import Path

from codex_pages._constants import (
    LATEX_BOOK_FILENAME,
    LATEX_PRELUDE_TEMPLATE,
    STATIC_DIRECTORY,
)
from codex_pages.errors import RenderError
from codex_pages.renderer import HtmlRenderer, LatexRenderer, RenderContext
from codex_pages.renderer.highlight import CodeHighlighter
from codex_pages.renderer.latex import latex_escape, latex_label
from codex_pages.templates import TemplateRenderer

if typ.TYPE_CHECKING:
    from codex_pages.project import Document, Project

logger = logging.getLogger(__name__)

DEFAULT_AUTHOR = "Unknown"


@dc.dataclass(slots=True)
class BuildReport:
    """Files written by a build and the documents that failed."""

    written: list[Path] = dc.field(default_factory=list)
    failures: dict[Path, RenderError] = dc.field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures


def output_path(build_dir: Path, document: Document) -> Path:
    """Return where the HTML for ``document`` is written.

    ``guide/index.md`` becomes ``guide/index.html``; any other
    ``guide/setup.md`` becomes ``guide/setup/index.html``.
    """
    if document.path.stem == "index":
        return build_dir / document.path.with_suffix(".html")
    return build_dir / document.path.with_suffix("") / "index.html"


class SiteBuilder:
    """Render every document of a project to HTML."""

    def __init__(self, project: Project, *, output_dir: Path | None = None) -> None:
        self.project = project
        self.output_dir = output_dir or project.build_dir
        self.templates = TemplateRenderer(project.root)
        self.highlighter = CodeHighlighter(project.details.pygments_style)

    def run(self) -> BuildReport:
        """Render all documents and copy static files.

        Returns
        -------
        BuildReport
            Written paths in document order plus any per-document failures.
        """
        report = BuildReport()
        self.output_dir.mkdir(parents=True, exist_ok=True)
        for document in self.project.iter_all_documents():
            try:
                html = self.render_document(document)
            except RenderError as exc:
                logger.error("Failed to render %s: %s", document.path, exc)  # noqa: TRY400
                report.failures[document.path] = exc
                continue
            target = output_path(self.output_dir, document)
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(html, encoding="utf-8")
            logger.debug("Wrote %s", target)
            report.written.append(target)
        report.written.extend(self._copy_static())
        return report

    def render_document(self, document: Document) -> str:
        renderer = HtmlRenderer(
            RenderContext(self.project, document),
            templates=self.templates,
            highlighter=self.highlighter,
        )
        return renderer.render()

    def _copy_static(self) -> list[Path]:
        source = self.project.root / STATIC_DIRECTORY
        if not source.is_dir():
            return []
        target = self.output_dir / STATIC_DIRECTORY
        shutil.copytree(source, target, dirs_exist_ok=True)
        return sorted(path for path in target.rglob("*") if path.is_file())


class LatexBookBuilder:
    """Concatenate printable documents into one LaTeX book."""

    def __init__(self, project: Project, *, output_dir: Path | None = None) -> None:
        self.project = project
        self.output_dir = output_dir or project.build_dir
        self.templates = TemplateRenderer(project.root)

    def run(self) -> tuple[Path, BuildReport]:
        """Write ``main.tex`` and return its path with the build report."""
        report = BuildReport()
        parts = [self.prelude()]
        for document in self.project.iter_all_documents():
            if document.frontmatter.pdf_exclude:
                continue
            try:
                parts.append(self.render_section(document))
            except RenderError as exc:
                logger.error("Failed to render %s: %s", document.path, exc)  # noqa: TRY400
                report.failures[document.path] = exc
        parts.append("\\end{document}\n")

        self.output_dir.mkdir(parents=True, exist_ok=True)
        target = self.output_dir / LATEX_BOOK_FILENAME
        target.write_text("".join(parts), encoding="utf-8")
        report.written.append(target)
        return target, report

    def prelude(self) -> str:
        """Return the preamble with the project title and author filled in."""
        details = self.project.details
        return (
            self.templates.source(LATEX_PRELUDE_TEMPLATE)
            .replace("--TITLE--", latex_escape(details.name))
            .replace("--AUTHOR--", latex_escape(details.author or DEFAULT_AUTHOR))
        )

    def render_section(self, document: Document) -> str:
        """Render one document as a labelled ``\\section`` followed by a page break."""
        frontmatter = document.frontmatter
        title = latex_escape(frontmatter.title)
        label = latex_label(document.url)
        if frontmatter.subtitle:
            subtitle = latex_escape(frontmatter.subtitle)
            heading = (
                f"\\section[{title}]{{{title}{{\\hfill\\normalsize\\color{{subtitle}} "
                f"{subtitle}}}}}\\label{{sec:{label}}}\n"
            )
        else:
            heading = f"\\section{{{title}}}\\label{{sec:{label}}}\n"
        body = LatexRenderer(
            RenderContext(self.project, document), templates=self.templates
        ).render()
        return f"{heading}{body}\\pagebreak\n"


__all__ = ["BuildReport", "LatexBookBuilder", "SiteBuilder", "output_path"]
