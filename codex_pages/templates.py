"""Jinja environment used to splice rendered markup into page templates.

Templates are looked up in the project directory first, so a project can
override any file under ``_internal/``, and then in the templates shipped with
the package.

Example
-------
>>> from pathlib import Path
>>> from codex_pages.templates import TemplateRenderer
>>> renderer = TemplateRenderer(Path("docs"))  # doctest: +SKIP
>>> renderer.render(
...     "_internal/templates/code.html", {"lines": ["x = 1"], "lang": "python"}
... )  # doctest: +SKIP
'<div class="code-block" ...'
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    TemplateError,
    TemplateNotFound,
    select_autoescape,
)

from codex_pages._constants import PACKAGE_TEMPLATES_DIR
from codex_pages.errors import InputNotFoundError, MalformedInputError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from jinja2 import Template

logger = logging.getLogger(__name__)


def mul(left: object, right: object) -> int:
    """Multiply two integers; anything that is not an integer counts as zero."""
    return _integer(left) * _integer(right)


def _integer(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return value


class TemplateRenderer:
    """Load and render templates for one project."""

    def __init__(
        self, project_root: Path | None = None, *, templates_dir: Path | None = None
    ) -> None:
        """Create the environment.

        Parameters
        ----------
        project_root : Path, optional
            Project directory searched before the packaged templates.
        templates_dir : Path, optional
            Replacement for the packaged templates directory.
        """
        search_paths = [p for p in (project_root, templates_dir or PACKAGE_TEMPLATES_DIR) if p]
        self.env = Environment(
            loader=ChoiceLoader([FileSystemLoader(str(path)) for path in search_paths]),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.globals["mul"] = mul

    def has_template(self, name: str) -> bool:
        try:
            self.env.get_template(name)
        except TemplateNotFound:
            return False
        return True

    def render(
        self,
        name: str,
        context: cabc.Mapping[str, typ.Any],
        *,
        element_id: cabc.Callable[[], str] | None = None,
    ) -> str:
        """Render template ``name`` with ``context``.

        ``element_id`` backs the ``element_id()`` helper available inside
        templates, also exposed as ``id()`` unless ``context`` already carries
        an ``id`` value such as a component attribute. It is supplied per
        render so identifiers never leak between renders.

        Raises
        ------
        InputNotFoundError
            If the template does not exist.
        MalformedInputError
            If the template fails to compile or render.
        """
        template = self._template(name)
        values = dict(context)
        if element_id is not None:
            values["element_id"] = element_id
            values.setdefault("id", element_id)
        try:
            return template.render(values)
        except TemplateError as exc:
            msg = f"Template '{name}' failed to render: {exc}"
            raise MalformedInputError(msg) from exc

    def source(self, name: str) -> str:
        """Return the raw text of template ``name`` without rendering it."""
        loader = typ.cast("ChoiceLoader", self.env.loader)
        try:
            text, _filename, _uptodate = loader.get_source(self.env, name)
        except TemplateNotFound as exc:
            msg = f"Template '{name}' not found."
            raise InputNotFoundError(msg) from exc
        return text

    def _template(self, name: str) -> Template:
        try:
            template = self.env.get_template(name)
        except TemplateNotFound as exc:
            msg = f"Template '{name}' not found."
            raise InputNotFoundError(msg) from exc
        except TemplateError as exc:
            msg = f"Template '{name}' is invalid: {exc}"
            raise MalformedInputError(msg) from exc
        logger.debug("Loaded template %s from %s", name, template.filename)
        return template


__all__ = ["TemplateRenderer", "mul"]
