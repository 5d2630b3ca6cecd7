r"""LaTeX backend producing document-body fragments.

The output is meant to be placed inside a document whose preamble loads
``hyperref``, ``listings``, ``xcolor``, ``soul`` and ``amssymb`` and defines a
``\field`` macro; the packaged ``prelude.tex`` does all of this.

Example
-------
>>> latex_escape("50% of $x_1$")
'50\\% of \\$x\\_1\\$'
>>> latex_label("/docs/getting_started#install")
'docs-getting-started-install'
"""

from __future__ import annotations

import re
import typing as typ

from codex_pages._constants import COMPONENT_TEMPLATE
from codex_pages.templates import TemplateRenderer

from .base import Renderer
from .components import FIELD

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .context import RenderContext

_ESCAPES = str.maketrans(
    {
        "\\": r"\textbackslash{}",
        "&": r"\&",
        "%": r"\%",
        "$": r"\$",
        "#": r"\#",
        "_": r"\_",
        "{": r"\{",
        "}": r"\}",
        "~": r"\textasciitilde{}",
        "^": r"\textasciicircum{}",
    }
)
_LABEL_SEPARATORS = re.compile(r"/?#|[/_]")

THEMATIC_BREAK = (
    "{\\color{rulecolor}\\vspace{8pt}\\par\\noindent"
    "\\rule{\\textwidth}{0.4pt}\\vspace{8pt}}\n"
)
MISSING_HEADING_TEXT = "\\texttt{No header text found}\n\n"
UNKNOWN_COMPONENT = "\\texttt{Unknown Component}"


def latex_escape(text: str) -> str:
    """Escape characters that are special in LaTeX text mode."""
    return text.translate(_ESCAPES)


def latex_label(path: str) -> str:
    """Turn a URL path into a label usable with ``\\label`` and ``\\hyperref``."""
    return _LABEL_SEPARATORS.sub("-", path.strip("/"))


class LatexRenderer(Renderer):
    """Render documents as LaTeX."""

    def __init__(
        self, context: RenderContext, *, templates: TemplateRenderer | None = None
    ) -> None:
        super().__init__(context)
        self.templates = templates or TemplateRenderer(context.project.root)

    def render_custom_component(
        self, name: str, attributes: cabc.Mapping[str, typ.Any], children: str
    ) -> str:
        if name == FIELD:
            return (
                f"\\field{{{latex_escape(str(attributes.get('name', '')))}}}"
                f"{{{latex_escape(str(attributes.get('type', '')))}}}"
                f"{{{attributes.get('type_link', '')}}}"
                f"{{\n{children}\n}}\n"
            )
        template = COMPONENT_TEMPLATE.format(name=name.lower(), ext="tex")
        if not self.templates.has_template(template):
            return self.render_unknown_component(name)
        return self.templates.render(
            template,
            {**attributes, "children": children},
            element_id=self.context.element_ids.first,
        )

    def render_unknown_component(self, name: str) -> str:
        return UNKNOWN_COMPONENT

    def render_paragraph(self, content: str) -> str:
        return f"{content}\n\n"

    def render_heading(self, depth: int, content: str, anchor: str | None) -> str:
        if anchor is None:
            return MISSING_HEADING_TEXT
        label = latex_label(f"{self.context.document.url.rstrip('/')}/{anchor}")
        match depth:
            case 1:
                return f"\\subsection{{{content}}}\\label{{sec:{label}}}\n"
            case 2:
                return f"\\subsubsection*{{{content}}}\\label{{sec:{label}}}\n"
            case _:
                return f"\\subsubsection*{{{content}}}\n\n"

    def render_blockquote(self, content: str) -> str:
        return f"\\begin{{quote}}\n{content}\\end{{quote}}\n"

    def render_list(self, ordered: bool, content: str) -> str:  # noqa: FBT001
        environment = "enumerate" if ordered else "itemize"
        return f"\\begin{{{environment}}}\n{content}\\end{{{environment}}}\n"

    def render_list_item(self, checked: bool | None, content: str) -> str:  # noqa: FBT001
        match checked:
            case True:
                marker = "[$\\boxtimes$]"
            case False:
                marker = "[$\\square$]"
            case _:
                marker = ""
        return f"\\item{marker} {content.strip()}\n"

    def render_emphasis(self, content: str) -> str:
        return f"\\textit{{{content}}}"

    def render_strong(self, content: str) -> str:
        return f"\\textbf{{{content}}}"

    def render_delete(self, content: str) -> str:
        return f"\\st{{{content}}}"

    def render_text(self, text: str) -> str:
        return latex_escape(text)

    def render_inline_code(self, code: str) -> str:
        return f"\\textbf{{\\color{{magenta}}{latex_escape(code)}}}"

    def render_code(self, code: str, lang: str | None, *, collapsed: bool = False) -> str:
        return (
            "\\vspace{8pt}\\begin{lstlisting}[]\n"
            f"{code.rstrip()}\n"
            "\\end{lstlisting}\\vspace{3pt}\n"
        )

    def render_link(self, url: str, title: str | None, content: str) -> str:
        if url.startswith("/"):
            return f"\\hyperref[sec:{latex_label(url)}]{{{content}}}"
        return f"\\href{{{url}}}{{{content}}}"

    def render_table(self, header: str, body: str, column_count: int) -> str:
        columns = " ".join("l" * column_count)
        return f"\\begin{{tabular}}{{{columns}}}\n{header}{body}\\end{{tabular}}\n"

    def render_table_header(self, row: str) -> str:
        return row

    def render_table_body(self, rows: str) -> str:
        return rows

    def render_table_row(self, cells: list[str], *, header: bool) -> str:
        if header:
            return " & ".join(cells) + " \\\\\n\\hline\\vspace{2pt}\n"
        return " & ".join(cells) + " \\\\\n"

    def render_table_cell(self, content: str, *, header: bool) -> str:
        return f"\\textbf{{{content}}}" if header else content

    def render_thematic_break(self) -> str:
        return THEMATIC_BREAK

    def render_break(self) -> str:
        return "\\\\\n"


__all__ = [
    "LatexRenderer",
    "MISSING_HEADING_TEXT",
    "THEMATIC_BREAK",
    "UNKNOWN_COMPONENT",
    "latex_escape",
    "latex_label",
]
