"""Backend-independent tree walk shared by every output format.

:class:`Renderer` owns the dispatch over node kinds, the table protocol,
component expansion, and link rewriting. Output text comes from hook methods
(``render_paragraph``, ``render_heading`` and so on) which all return an
empty string here; a backend overrides the hooks that matter to its format.

Container hooks receive the already-rendered markup of their children, leaf
hooks receive raw values.

Example
-------
>>> from codex_pages.renderer import HtmlRenderer, RenderContext
>>> renderer = HtmlRenderer(RenderContext(project, document))  # doctest: +SKIP
>>> renderer.render_body()  # doctest: +SKIP
'<h4 class="mt-4" id="intro">Intro</h4>...'
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from codex_pages.json_schema import build_example, parse_schema
from codex_pages.markdown_parser import parse_markdown
from codex_pages.nodes import (
    BlockQuote,
    Break,
    Code,
    Component,
    Delete,
    Emphasis,
    Expression,
    FootnoteDefinition,
    FootnoteReference,
    Heading,
    Html,
    Image,
    InlineCode,
    InlineMath,
    Link,
    List,
    ListItem,
    Math,
    Paragraph,
    Root,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
    Yaml,
)
from codex_pages.project import read_text
from codex_pages.sitemap import build_sitemap
from codex_pages.toc import build_toc, get_text, slug

from .components import (
    CODE_FILE,
    CSV_TABLE,
    FIELD,
    JSON_SCHEMA_EXAMPLE,
    JSON_SCHEMA_FIELDS,
    attribute_flag,
    convert_component_attributes,
    read_bytes,
    read_csv_table,
    require_attribute,
    resolve_content_path,
    schema_sections,
)
from .context import OutputContext

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from codex_pages.nodes import Node

    from .context import RenderContext

logger = logging.getLogger(__name__)

EXAMPLE_LANGUAGE = "JSON"


class Renderer:
    """Walk a document tree and assemble output through overridable hooks."""

    def __init__(self, context: RenderContext) -> None:
        self.context = context

    # -- entry points -----------------------------------------------------

    def parse(self) -> Root:
        """Parse the current document's source."""
        return parse_markdown(self.context.document.read_source())

    def render_body(self) -> str:
        """Render the document body only, without page assembly."""
        return self.render_node(self.parse())

    def render(self) -> str:
        """Render the complete output for the document.

        The body is followed by generated "Fields" and "Example" sections when
        the frontmatter names a JSON schema. The assembled
        :class:`OutputContext` is passed to :meth:`finalize_render`.
        """
        document = self.context.document
        project = self.context.project
        root = self.parse()
        body = self.render_node(root)
        if document.frontmatter.json_schema:
            body += self.render_nodes(schema_sections(document.frontmatter.json_schema))
        output = OutputContext(
            document=dc.replace(
                document.frontmatter, tags=list(document.frontmatter.tags)
            ),
            sitemap=build_sitemap(project.folder),
            body=body,
            project=project.details,
            toc=list(document.toc)
            if document.toc is not None
            else build_toc(root.children),
            modified=document.last_modified(),
            current_url=document.url,
        )
        return self.finalize_render(output)

    def finalize_render(self, output: OutputContext) -> str:
        """Turn the output bundle into the final text; returns the body here."""
        return output.body

    # -- dispatch ---------------------------------------------------------

    def render_nodes(self, nodes: cabc.Iterable[Node]) -> str:
        return "".join(self.render_node(node) for node in nodes)

    def render_node(self, node: Node) -> str:  # noqa: C901, PLR0911, PLR0912
        """Render ``node`` and its descendants."""
        match node:
            case Root(children=children):
                return self.render_nodes(children)
            case Paragraph(children=children):
                return self.render_paragraph(self.render_nodes(children))
            case Heading(depth=depth, children=children):
                text = get_text(children)
                anchor = slug(text) if text is not None else None
                return self.render_heading(depth, self.render_nodes(children), anchor)
            case BlockQuote(children=children):
                return self.render_blockquote(self.render_nodes(children))
            case List(ordered=ordered, children=children):
                return self.render_list(ordered, self.render_nodes(children))
            case ListItem(checked=checked, children=children):
                return self.render_list_item(checked, self.render_nodes(children))
            case Emphasis(children=children):
                return self.render_emphasis(self.render_nodes(children))
            case Strong(children=children):
                return self.render_strong(self.render_nodes(children))
            case Delete(children=children):
                return self.render_delete(self.render_nodes(children))
            case Text(value=value):
                return self.render_text(value)
            case InlineCode(value=value):
                return self.render_inline_code(value)
            case Code(value=value, lang=lang):
                return self.render_code(value, lang)
            case Link(url=url, title=title, children=children):
                return self.render_link(
                    self.rewrite_url(url), title, self.render_nodes(children)
                )
            case Image(url=url, title=title, alt=alt):
                return self.render_image(self.rewrite_url(url), title, alt)
            case Table(children=children):
                return self._render_table_rows(children)
            case TableRow():
                return self._render_row(node, header=False)
            case TableCell(children=children):
                return self.render_table_cell(self.render_nodes(children), header=False)
            case ThematicBreak():
                return self.render_thematic_break()
            case Break():
                return self.render_break()
            case Component(name=name, attributes=attributes, children=children):
                return self.render_component(
                    name, convert_component_attributes(attributes), children
                )
            case Expression(value=value):
                return self.render_expression(value)
            case FootnoteDefinition(identifier=identifier, children=children):
                return self.render_footnote_definition(
                    identifier, self.render_nodes(children)
                )
            case Yaml() | Html() | Math() | InlineMath() | FootnoteReference():
                return ""
            case _:
                typ.assert_never(node)

    def rewrite_url(self, url: str) -> str:
        """Prefix project-relative URLs (leading ``/``) with the base URL."""
        if url.startswith("/"):
            return self.context.project.details.base_url + url.lstrip("/")
        return url

    # -- tables -----------------------------------------------------------

    def _render_table_rows(self, children: cabc.Sequence[Node]) -> str:
        rows = [child for child in children if isinstance(child, TableRow)]
        if not rows:
            return ""
        header_row, *body_rows = rows
        header = self.render_table_header(self._render_row(header_row, header=True))
        body = self.render_table_body(
            "".join(self._render_row(row, header=False) for row in body_rows)
        )
        return self.render_table(header, body, len(header_row.children))

    def _render_row(self, row: TableRow, *, header: bool) -> str:
        cells = [
            self.render_table_cell(
                self.render_nodes(cell.children)
                if isinstance(cell, TableCell)
                else self.render_node(cell),
                header=header,
            )
            for cell in row.children
        ]
        return self.render_table_row(cells, header=header)

    # -- components -------------------------------------------------------

    def render_component(
        self,
        name: str,
        attributes: cabc.Mapping[str, str],
        children: cabc.Sequence[Node],
    ) -> str:
        """Expand a component, dispatching built-ins before custom templates.

        Raises
        ------
        InputNotFoundError
            If a built-in component references a missing file.
        MalformedInputError
            If a built-in component lacks its ``file`` attribute or the
            referenced file cannot be parsed.
        """
        logger.debug("Rendering component <%s> %r", name, dict(attributes))
        match name:
            case "CsvTable":
                path = self._component_path(CSV_TABLE, attributes)
                table = read_csv_table(
                    path, has_headers=attribute_flag(attributes, "headers", default=True)
                )
                return self.render_node(table)
            case "JsonSchemaFields":
                schema = read_bytes(self._component_path(JSON_SCHEMA_FIELDS, attributes))
                return "".join(
                    self.render_custom_component(
                        FIELD,
                        {
                            "name": field.name,
                            "type": field.type,
                            "required": field.required,
                            "deprecated": field.deprecated,
                        },
                        self.render_node(parse_markdown(field.children)),
                    )
                    for field in parse_schema(schema)
                )
            case "JsonSchemaExample":
                schema = read_bytes(self._component_path(JSON_SCHEMA_EXAMPLE, attributes))
                return self.render_code(
                    build_example(schema),
                    EXAMPLE_LANGUAGE,
                    collapsed=attribute_flag(attributes, "collapsed"),
                )
            case "CodeFile":
                path = self._component_path(CODE_FILE, attributes)
                return self.render_code_file(
                    path, read_text(path), collapsed=attribute_flag(attributes, "collapsed")
                )
            case _:
                return self.render_custom_component(
                    name, attributes, self.render_nodes(children)
                )

    def _component_path(self, component: str, attributes: cabc.Mapping[str, str]) -> Path:
        reference = require_attribute(component, attributes, "file")
        return resolve_content_path(
            self.context.project, self.context.document, reference
        )

    def render_custom_component(
        self, name: str, attributes: cabc.Mapping[str, typ.Any], children: str
    ) -> str:
        """Render a component that is not built in; unknown by default."""
        return self.render_unknown_component(name)

    def render_unknown_component(self, name: str) -> str:
        return ""

    # -- hooks ------------------------------------------------------------

    def render_paragraph(self, content: str) -> str:
        return ""

    def render_heading(self, depth: int, content: str, anchor: str | None) -> str:
        """Render a heading; ``anchor`` is None when it has no text child."""
        return ""

    def render_blockquote(self, content: str) -> str:
        return ""

    def render_list(self, ordered: bool, content: str) -> str:  # noqa: FBT001
        return ""

    def render_list_item(self, checked: bool | None, content: str) -> str:  # noqa: FBT001
        return ""

    def render_emphasis(self, content: str) -> str:
        return ""

    def render_strong(self, content: str) -> str:
        return ""

    def render_delete(self, content: str) -> str:
        return ""

    def render_text(self, text: str) -> str:
        return ""

    def render_inline_code(self, code: str) -> str:
        return ""

    def render_code(self, code: str, lang: str | None, *, collapsed: bool = False) -> str:
        return ""

    def render_code_file(self, path: Path, source: str, *, collapsed: bool = False) -> str:
        """Render a source file; defaults to an untagged code block."""
        return self.render_code(source, None, collapsed=collapsed)

    def render_link(self, url: str, title: str | None, content: str) -> str:
        return ""

    def render_image(self, url: str, title: str | None, alt: str) -> str:
        return ""

    def render_table(self, header: str, body: str, column_count: int) -> str:
        return ""

    def render_table_header(self, row: str) -> str:
        return ""

    def render_table_body(self, rows: str) -> str:
        return ""

    def render_table_row(self, cells: list[str], *, header: bool) -> str:
        return ""

    def render_table_cell(self, content: str, *, header: bool) -> str:
        return ""

    def render_thematic_break(self) -> str:
        return ""

    def render_break(self) -> str:
        return ""

    def render_expression(self, value: str) -> str:
        return ""

    def render_footnote_definition(self, identifier: str, content: str) -> str:
        return ""


__all__ = ["EXAMPLE_LANGUAGE", "Renderer"]
