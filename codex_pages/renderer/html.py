"""HTML backend producing Bootstrap-flavoured markup."""

from __future__ import annotations

import typing as typ
from html import escape

from codex_pages._constants import ARTICLE_TEMPLATE, CODE_TEMPLATE, COMPONENT_TEMPLATE
from codex_pages.templates import TemplateRenderer

from .base import Renderer
from .highlight import CodeHighlighter

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from .context import OutputContext, RenderContext

HEADING_OFFSET = 3
MAX_HEADING_LEVEL = 6
MISSING_HEADING_TEXT = "<pre>No header text found</pre>"
UNKNOWN_COMPONENT = "<pre>Unknown Component</pre>"


def _attribute(name: str, value: str | None) -> str:
    if value is None:
        return ""
    return f' {name}="{escape(value, quote=True)}"'


class HtmlRenderer(Renderer):
    """Render documents as HTML fragments or complete article pages."""

    def __init__(
        self,
        context: RenderContext,
        *,
        templates: TemplateRenderer | None = None,
        highlighter: CodeHighlighter | None = None,
    ) -> None:
        """Initialize the backend.

        Parameters
        ----------
        context : RenderContext
            Project and document being rendered.
        templates : TemplateRenderer, optional
            Template environment; defaults to one rooted at the project.
        highlighter : CodeHighlighter, optional
            Highlighter for code blocks; defaults to the project's style.
        """
        super().__init__(context)
        self.templates = templates or TemplateRenderer(context.project.root)
        self.highlighter = highlighter or CodeHighlighter(
            context.project.details.pygments_style
        )

    def _template(self, name: str, values: cabc.Mapping[str, typ.Any]) -> str:
        return self.templates.render(
            name, values, element_id=self.context.element_ids.first
        )

    def finalize_render(self, output: OutputContext) -> str:
        return self._template(ARTICLE_TEMPLATE, output.as_template_context())

    def render_custom_component(
        self, name: str, attributes: cabc.Mapping[str, typ.Any], children: str
    ) -> str:
        template = COMPONENT_TEMPLATE.format(name=name.lower(), ext="html")
        if not self.templates.has_template(template):
            return self.render_unknown_component(name)
        return self._template(template, {**attributes, "children": children})

    def render_unknown_component(self, name: str) -> str:
        return UNKNOWN_COMPONENT

    def render_paragraph(self, content: str) -> str:
        return f"<p>{content}</p>"

    def render_heading(self, depth: int, content: str, anchor: str | None) -> str:
        if anchor is None:
            return MISSING_HEADING_TEXT
        level = min(depth + HEADING_OFFSET, MAX_HEADING_LEVEL)
        return f'<h{level} class="mt-4" id="{escape(anchor)}">{content}</h{level}>'

    def render_blockquote(self, content: str) -> str:
        return f'<blockquote class="blockquote">{content}</blockquote>'

    def render_list(self, ordered: bool, content: str) -> str:  # noqa: FBT001
        tag = "ol" if ordered else "ul"
        return f"<{tag}>{content}</{tag}>"

    def render_list_item(self, checked: bool | None, content: str) -> str:  # noqa: FBT001
        match checked:
            case True:
                return (
                    '<div class="d-flex fw-bold task-item">'
                    '<i class="text-success me-2 fal fa-check"></i>'
                    f"<div>{content}</div></div>"
                )
            case False:
                return (
                    '<div class="d-flex task-item">'
                    '<i class="text-danger me-2 fal fa-xmark"></i>'
                    f"<div>{content}</div></div>"
                )
            case _:
                return f"<li>{content}</li>"

    def render_emphasis(self, content: str) -> str:
        return f'<span class="fst-italic">{content}</span>'

    def render_strong(self, content: str) -> str:
        return f'<span class="fw-bold">{content}</span>'

    def render_delete(self, content: str) -> str:
        return f'<span style="text-decoration: line-through">{content}</span>'

    def render_text(self, text: str) -> str:
        return escape(text, quote=False)

    def render_inline_code(self, code: str) -> str:
        return f'<code class="inline">{escape(code, quote=False)}</code>'

    def render_code(self, code: str, lang: str | None, *, collapsed: bool = False) -> str:
        return self._template(
            CODE_TEMPLATE,
            {
                "lines": self.highlighter.highlight_lines(code, lang),
                "lang": lang or "",
                "collapse": collapsed,
            },
        )

    def render_code_file(self, path: Path, source: str, *, collapsed: bool = False) -> str:
        return self._template(
            CODE_TEMPLATE,
            {
                "lines": self.highlighter.highlight_file_lines(path, source),
                "lang": "",
                "collapse": collapsed,
            },
        )

    def render_link(self, url: str, title: str | None, content: str) -> str:
        return f"<a{_attribute('href', url)}{_attribute('title', title)}>{content}</a>"

    def render_image(self, url: str, title: str | None, alt: str) -> str:
        return (
            f'<img class="img-fluid"{_attribute("src", url)}'
            f"{_attribute('alt', alt)}{_attribute('title', title)}/>"
        )

    def render_table(self, header: str, body: str, column_count: int) -> str:
        return f'<table class="table table-sm table-striped">{header}{body}</table>'

    def render_table_header(self, row: str) -> str:
        return f"<thead>{row}</thead>"

    def render_table_body(self, rows: str) -> str:
        return f"<tbody>{rows}</tbody>"

    def render_table_row(self, cells: list[str], *, header: bool) -> str:
        return f"<tr>{''.join(cells)}</tr>"

    def render_table_cell(self, content: str, *, header: bool) -> str:
        if header:
            return f'<th class="text-uppercase">{content}</th>'
        return f"<td>{content}</td>"

    def render_thematic_break(self) -> str:
        return "<hr/>"

    def render_break(self) -> str:
        return "<br/>"


__all__ = ["HEADING_OFFSET", "HtmlRenderer", "MISSING_HEADING_TEXT", "UNKNOWN_COMPONENT"]
