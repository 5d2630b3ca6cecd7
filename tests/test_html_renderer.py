"""Tests for the HTML backend and complete page assembly."""

from __future__ import annotations

import typing as typ

from bs4 import BeautifulSoup

from codex_pages.project import Project
from codex_pages.renderer import HtmlRenderer, RenderContext

if typ.TYPE_CHECKING:
    from pathlib import Path

    from conftest import PageContextFactory

CALLOUT_TEMPLATE = (
    '<div class="callout callout-{{ kind }}" id="callout-{{ id() }}">'
    "{{ children|safe }}</div>\n"
)
CSV_FILES = {"data.csv": "name,age\nAda,36\nGrace,45\n"}


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def _body(page_context: PageContextFactory, markdown: str, **kwargs: typ.Any) -> BeautifulSoup:
    return _soup(HtmlRenderer(page_context(markdown, **kwargs)).render_body())


def test_heading_levels_and_anchors(page_context: PageContextFactory) -> None:
    soup = _body(page_context, "# Getting Started!\n\n#### Deep dive\n")
    h4 = soup.find("h4")
    assert h4 is not None, "depth-1 headings render as h4"
    assert h4["id"] == "getting-started", f"unexpected anchor {h4['id']!r}"
    assert h4.get_text() == "Getting Started!"
    assert soup.find("h6") is not None, "deep headings are capped at h6"


def test_heading_without_text(page_context: PageContextFactory) -> None:
    html = HtmlRenderer(page_context("# **Bold only**\n")).render_body()
    assert html == "<pre>No header text found</pre>", f"unexpected output {html!r}"


def test_text_is_escaped(page_context: PageContextFactory) -> None:
    html = HtmlRenderer(page_context("1 < 2 & `a<b>`\n")).render_body()
    assert "1 &lt; 2 &amp; " in html, f"text should be escaped: {html!r}"
    assert '<code class="inline">a&lt;b&gt;</code>' in html


def test_links_are_rewritten(page_context: PageContextFactory) -> None:
    soup = _body(
        page_context,
        '[Setup](/guide/setup) and [Ext](https://example.com "External")\n',
        config="name: Docs\nbase_url: /docs/\n",
    )
    links = soup.find_all("a")
    assert [link["href"] for link in links] == ["/docs/guide/setup", "https://example.com"]
    assert links[1]["title"] == "External"
    assert not links[0].has_attr("title"), "links without a title have no attribute"


def test_image(page_context: PageContextFactory) -> None:
    soup = _body(page_context, "![Logo](/img/logo.png)\n")
    image = soup.find("img")
    assert image is not None
    assert image["src"] == "/img/logo.png"
    assert image["alt"] == "Logo"
    assert image["class"] == ["img-fluid"]


def test_task_list(page_context: PageContextFactory) -> None:
    soup = _body(page_context, "- [x] shipped\n- [ ] pending\n")
    items = soup.find_all("div", class_="task-item")
    assert len(items) == 2, "task items render as divs"
    assert "fw-bold" in items[0]["class"], "checked items are bold"
    assert items[1].find("i", class_="fa-xmark") is not None


def test_csv_table_component(page_context: PageContextFactory) -> None:
    soup = _body(page_context, '<CsvTable file="data.csv" />\n', files=CSV_FILES)
    table = soup.find("table")
    assert table is not None, "CsvTable should render a table"
    assert [th.get_text() for th in table.find_all("th")] == ["name", "age"]
    assert [td.get_text() for td in table.find_all("td")] == ["Ada", "36", "Grace", "45"]
    assert table.find("thead") is not None
    assert len(table.find("tbody").find_all("tr")) == 2


def test_csv_table_without_headers(page_context: PageContextFactory) -> None:
    soup = _body(
        page_context, '<CsvTable file="data.csv" headers="false" />\n', files=CSV_FILES
    )
    assert [th.get_text() for th in soup.find_all("th")] == ["", ""], (
        "headerless tables get an empty header row"
    )
    assert len(soup.find_all("td")) == 6, "every record lands in the body"


def test_code_file_component(page_context: PageContextFactory) -> None:
    soup = _body(
        page_context,
        '<CodeFile file="example.py" collapsed="true" />\n',
        files={"example.py": "def add(a, b):\n    return a + b\n"},
    )
    block = soup.find("div", class_="code-block")
    assert block is not None
    assert "collapsed" in block["class"]
    lines = [line.get_text() for line in block.find_all("span", class_="code-line")]
    assert lines == ["def add(a, b):", "    return a + b"], f"unexpected lines {lines!r}"


def test_code_block_with_unknown_language(page_context: PageContextFactory) -> None:
    soup = _body(page_context, "```nosuchlang\n<b>\n```\n")
    block = soup.find("div", class_="code-block")
    assert block is not None
    assert block["data-language"] == "nosuchlang"
    assert block.find("span", class_="code-line").get_text() == "<b>", (
        "unknown languages render escaped plain text"
    )
    assert "collapsed" not in block["class"]


def test_custom_component_template(page_context: PageContextFactory) -> None:
    soup = _body(
        page_context,
        '<Callout kind="warning">\nMind the **gap**.\n</Callout>\n',
        files={"_internal/components/callout.html": CALLOUT_TEMPLATE},
    )
    callout = soup.find("div", class_="callout")
    assert callout is not None, "project templates render custom components"
    assert callout["class"] == ["callout", "callout-warning"]
    assert callout.find("span", class_="fw-bold").get_text() == "gap", (
        "children are rendered markdown"
    )


def test_component_id_attribute_is_kept(page_context: PageContextFactory) -> None:
    soup = _body(
        page_context,
        '<Callout id="note">\nRead me.\n</Callout>\n',
        files={
            "_internal/components/callout.html": (
                '<aside data-anchor="{{ id }}" data-generated="{{ element_id() }}">'
                "{{ children|safe }}</aside>\n"
            )
        },
    )
    aside = soup.find("aside")
    assert aside is not None, "project templates render custom components"
    assert aside["data-anchor"] == "note", "a literal id attribute reaches the template"
    assert aside["data-generated"], "element_id() still yields a generated identifier"
    assert aside["data-generated"] != "note"


def test_element_id_is_stable_within_a_render(page_context: PageContextFactory) -> None:
    context = page_context("```python\na = 1\n```\n\n```python\nb = 2\n```\n")
    first = _soup(HtmlRenderer(context).render_body())
    ids = [block["id"] for block in first.find_all("div", class_="code-block")]
    assert len(ids) == 2
    assert ids[0] == ids[1], "id() returns the same value throughout one render"

    fresh = RenderContext(context.project, context.document)
    second = _soup(HtmlRenderer(fresh).render_body())
    assert second.find("div", class_="code-block")["id"] != ids[0], (
        "each render context generates its own identifier"
    )


def test_schema_sections_are_appended(sample_project_dir: Path) -> None:
    project = Project.load(sample_project_dir)
    document = project.get_document("api/record.md")
    assert document is not None
    soup = _soup(HtmlRenderer(RenderContext(project, document)).render())

    article = soup.find("article")
    headings = [h4["id"] for h4 in article.find_all("h4")]
    assert headings == ["fields", "example"], f"unexpected headings {headings!r}"

    fields = article.find_all("div", class_="field")
    names = [field.find("code", class_="field-name").get_text() for field in fields]
    assert names == ["allergies", "patientName"], "fields are sorted by name"
    types = [field.find("span", class_="field-type").get_text() for field in fields]
    assert types == ["Array(String)", "String"]
    assert fields[0].find("span", class_="bg-danger") is None
    assert fields[1].find("span", class_="bg-danger") is not None, "required badge"
    assert fields[1].find("p").get_text() == "Full legal name."

    example = article.find("div", class_="code-block")
    assert example["data-language"] == "JSON"
    text = example.get_text()
    assert '"patientName"' in text
    assert '"Value"' in text
    assert text.index('"allergies"') < text.index('"patientName"'), "keys are sorted"


def test_full_page(sample_project_dir: Path) -> None:
    project = Project.load(sample_project_dir)
    document = project.get_document("guide/setup.md")
    assert document is not None
    soup = _soup(HtmlRenderer(RenderContext(project, document)).render())

    assert soup.title.get_text() == "Setup | Sample Docs"
    assert soup.find("p", class_="lead").get_text() == "Getting going"
    assert [tag.get_text() for tag in soup.find_all("span", class_="bg-secondary")] == [
        "install"
    ]

    toc = soup.find("aside", class_="toc")
    assert [a["href"] for a in toc.find_all("a")] == ["#install-steps", "#verify"]

    nav = soup.find("nav")
    nav_links = {a.get_text(): a for a in nav.find_all("a", class_="nav-link")}
    assert "Hidden" not in nav_links, "excluded pages stay out of the navigation"
    assert "active" in nav_links["Setup"]["class"], "current page is highlighted"
    assert nav_links["Setup"]["href"] == "/docs/guide/setup"
    folders = [span.get_text() for span in nav.find_all("span", class_="nav-folder")]
    assert folders == ["api", "User Guide"]

    article = soup.find("article")
    assert article.find("table") is not None, "CsvTable resolves next to the document"
    assert article.find("div", class_="code-block") is not None
    assert soup.find("span", class_="modified") is not None
