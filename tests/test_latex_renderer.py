"""Tests for the LaTeX backend."""

from __future__ import annotations

import typing as typ

import pytest

from codex_pages.project import Project
from codex_pages.renderer import LatexRenderer, RenderContext
from codex_pages.renderer.latex import latex_escape, latex_label

if typ.TYPE_CHECKING:
    from pathlib import Path

    from conftest import PageContextFactory, ProjectFactory


def _latex(page_context: PageContextFactory, markdown: str, **kwargs: typ.Any) -> str:
    return LatexRenderer(page_context(markdown, **kwargs)).render_body()


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("50% off", r"50\% off"),
        ("a_b & c", r"a\_b \& c"),
        ("$5 #1 {x}", r"\$5 \#1 \{x\}"),
        ("C:\\path", r"C:\textbackslash{}path"),
        ("~home ^up", r"\textasciitilde{}home \textasciicircum{}up"),
    ],
)
def test_latex_escape(text: str, expected: str) -> None:
    actual = latex_escape(text)
    assert actual == expected, f"expected {expected!r}, got {actual!r}"


def test_latex_label() -> None:
    assert latex_label("/docs/getting_started") == "docs-getting-started"
    assert latex_label("/guide/setup/#verify") == "guide-setup-verify"
    assert latex_label("/docs/#intro") == "docs-intro"


def test_anchor_link_matches_index_heading_label(make_project: ProjectFactory) -> None:
    root = make_project(
        {
            "codex.yml": "name: Docs\nbase_url: /docs/\n",
            "index.md": "# Intro\n\n[go](/#intro)\n",
        }
    )
    project = Project.load(root)
    document = project.get_document("index.md")
    assert document is not None
    output = LatexRenderer(RenderContext(project, document)).render_body()
    assert "\\label{sec:docs-intro}" in output
    assert "\\hyperref[sec:docs-intro]{go}" in output, (
        f"anchor links resolve to the heading label, got {output!r}"
    )


def test_headings(page_context: PageContextFactory) -> None:
    output = _latex(page_context, "# Intro\n\n## Details\n\n### Deeper\n")
    assert output == (
        "\\subsection{Intro}\\label{sec:page-intro}\n"
        "\\subsubsection*{Details}\\label{sec:page-details}\n"
        "\\subsubsection*{Deeper}\n\n"
    ), f"unexpected headings {output!r}"


def test_paragraph_text_and_inline_styles(page_context: PageContextFactory) -> None:
    output = _latex(page_context, "Save 50% *now* **today** ~~never~~.\n")
    assert output == (
        "Save 50\\% \\textit{now} \\textbf{today} \\st{never}.\n\n"
    ), f"unexpected paragraph {output!r}"


def test_links(page_context: PageContextFactory) -> None:
    output = _latex(
        page_context,
        "[Setup](/guide/setup) or [Ext](https://example.com)\n",
        config="name: Docs\nbase_url: /docs/\n",
    )
    assert "\\hyperref[sec:docs-guide-setup]{Setup}" in output, (
        "internal links point at the section label of the target document"
    )
    assert "\\href{https://example.com}{Ext}" in output


def test_task_list(page_context: PageContextFactory) -> None:
    output = _latex(page_context, "- [x] done\n- [ ] open\n- plain\n")
    assert output.startswith("\\begin{itemize}\n")
    assert "\\item[$\\boxtimes$] done\n" in output
    assert "\\item[$\\square$] open\n" in output
    assert "\\item plain\n" in output


def test_code_block(page_context: PageContextFactory) -> None:
    output = _latex(page_context, "```python\nprint('x')\n```\n")
    assert output == (
        "\\vspace{8pt}\\begin{lstlisting}[]\nprint('x')\n\\end{lstlisting}\\vspace{3pt}\n"
    ), f"unexpected listing {output!r}"


def test_csv_table(page_context: PageContextFactory) -> None:
    output = _latex(
        page_context,
        '<CsvTable file="data.csv" />\n',
        files={"data.csv": "name,age\nAda,36\n"},
    )
    assert (
        "\\begin{tabular}{l l}\n"
        "\\textbf{name} & \\textbf{age} \\\\\n\\hline\\vspace{2pt}\n"
        "Ada & 36 \\\\\n"
        "\\end{tabular}\n"
    ) in output, f"unexpected table {output!r}"


def test_unknown_and_custom_components(page_context: PageContextFactory) -> None:
    output = _latex(
        page_context,
        '<Mystery />\n\n<Note title="Heads up">\nRead this.\n</Note>\n',
        files={
            "_internal/components/note.tex": (
                "\\begin{center}\\textbf{ {{- title -}} }\\end{center}\n{{ children }}"
            )
        },
    )
    assert "\\texttt{Unknown Component}" in output
    assert "\\begin{center}\\textbf{Heads up}\\end{center}\nRead this.\n\n" in output, (
        f"custom .tex templates receive attributes and children: {output!r}"
    )


def test_schema_fields(sample_project_dir: Path) -> None:
    project = Project.load(sample_project_dir)
    document = project.get_document("api/record.md")
    assert document is not None
    output = LatexRenderer(RenderContext(project, document)).render()
    assert "\\subsection{Fields}\\label{sec:docs-api-record-fields}\n" in output
    assert "\\field{allergies}{Array(String)}{}{\n\n}\n" in output
    assert "\\field{patientName}{String}{}{\nFull legal name.\n\n\n}\n" in output
    assert output.index("allergies") < output.index("patientName")
    assert "\\begin{lstlisting}[]\n{\n" in output, "the example is a JSON listing"
