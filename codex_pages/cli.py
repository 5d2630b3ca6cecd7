"""Cyclopts CLI entrypoint for building codex documentation projects.

The ``codex`` console script renders a project directory either to a static
HTML site (``codex build``) or to a single LaTeX book (``codex latex``). Both
commands report every file they write and exit non-zero if any document
failed to render. ``codex init <path>`` scaffolds a new project and
``codex eject`` copies the packaged templates into one for customisation.

Examples
--------
Build the HTML site for the project in the current directory:

>>> from codex_pages.cli import main
>>> main()  # doctest: +SKIP

Write the LaTeX book for a project elsewhere:

>>> from codex_pages.cli import app
>>> app(["latex", "--root-path", "docs"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .errors import ProjectExistsError
from .logging_utils import configure_logging
from .project import Project
from .scaffold import eject_templates, init_project
from .site import LatexBookBuilder, SiteBuilder

if typ.TYPE_CHECKING:
    from .site import BuildReport

app = App(name="codex", config=cyclopts.config.Env("CODEX_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _report(report: BuildReport) -> None:
    for path in report.written:
        print(f"wrote {_format_path(path)}")
    for document, error in report.failures.items():
        print(f"failed {document}: {error}")
    if report.failures:
        raise SystemExit(1)


@app.command(help="Render every document in the project to HTML.")
def build(
    *,
    root_path: typ.Annotated[
        Path, Parameter(help="Project directory containing codex.yml")
    ] = Path(),
    output_dir: typ.Annotated[
        Path | None, Parameter(help="Override the build directory")
    ] = None,
    verbose: typ.Annotated[bool, Parameter(help="Enable debug logging")] = False,
    log_file: typ.Annotated[
        Path | None, Parameter(help="Also write log output to this file")
    ] = None,
) -> None:
    """Build the static HTML site for a project.

    Parameters
    ----------
    root_path : Path, optional
        Project directory; defaults to the current directory.
    output_dir : Path or None, optional
        Directory for the generated site; defaults to the project's
        ``build_path``.
    verbose : bool, optional
        Log debug output with timestamps.
    log_file : Path or None, optional
        File that receives a copy of the log output.

    Raises
    ------
    SystemExit
        With status 1 when at least one document failed to render.
    """
    configure_logging(
        logging.DEBUG if verbose else logging.INFO, log_file, verbose=verbose
    )
    project = Project.load(root_path)
    _report(SiteBuilder(project, output_dir=output_dir).run())


@app.command(help="Write all printable documents into a single LaTeX book.")
def latex(
    *,
    root_path: typ.Annotated[
        Path, Parameter(help="Project directory containing codex.yml")
    ] = Path(),
    output_dir: typ.Annotated[
        Path | None, Parameter(help="Override the build directory")
    ] = None,
    verbose: typ.Annotated[bool, Parameter(help="Enable debug logging")] = False,
    log_file: typ.Annotated[
        Path | None, Parameter(help="Also write log output to this file")
    ] = None,
) -> None:
    """Render the project to ``main.tex`` in the build directory."""
    configure_logging(
        logging.DEBUG if verbose else logging.INFO, log_file, verbose=verbose
    )
    project = Project.load(root_path)
    _target, report = LatexBookBuilder(project, output_dir=output_dir).run()
    _report(report)


@app.command(help="Create a new project directory with a starter codex.yml.")
def init(
    path: typ.Annotated[Path, Parameter(help="Directory to create; must not exist")],
) -> None:
    """Scaffold a new project at ``path``.

    Raises
    ------
    SystemExit
        With status 1 when ``path`` already exists.
    """
    try:
        config_path = init_project(path)
    except ProjectExistsError as exc:
        print(exc)
        raise SystemExit(1) from exc
    print(f"wrote {_format_path(config_path)}")


@app.command(help="Copy the packaged templates into the project for editing.")
def eject(
    *,
    root_path: typ.Annotated[
        Path, Parameter(help="Project directory containing codex.yml")
    ] = Path(),
) -> None:
    """Write the packaged ``_internal/`` templates into ``root_path``."""
    for path in eject_templates(root_path):
        print(f"wrote {_format_path(path)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``codex`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
