r"""Parse markdown documents with embedded components into a node tree.

mistune tokenizes the markdown; this module converts its AST tokens into the
immutable node types from :mod:`codex_pages.nodes`. On top of plain markdown
it recognises:

* a leading ``---`` YAML frontmatter block, kept as a :class:`Yaml` node;
* HTML elements whose tag starts with an uppercase letter, which become
  :class:`Component` nodes whether they are self-closing, opened and closed in
  one block, or wrap several markdown blocks;
* paragraphs consisting of a single ``{...}`` expression.

Example
-------
>>> from codex_pages.markdown_parser import parse_markdown
>>> root = parse_markdown('# Intro\n\n<CsvTable file="data.csv" />\n')
>>> [type(node).__name__ for node in root.children]
['Heading', 'Component']
"""

from __future__ import annotations

import dataclasses as dc
import logging
import re
import textwrap
import typing as typ

import mistune

from codex_pages.nodes import (
    BlockQuote,
    Break,
    Code,
    Component,
    ComponentAttribute,
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

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from codex_pages.nodes import Node

logger = logging.getLogger(__name__)

MISTUNE_PLUGINS = ["strikethrough", "table", "task_lists", "footnotes", "math"]

FRONTMATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(?P<yaml>.*?)^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE
)
_ATTR_VALUE = r"""(?:"[^"]*"|'[^']*'|\{[^}]*\}|[^\s"'=<>`{}]+)"""
_ATTR_NAME = r"""[^\s=/>"'{}]+"""
COMPONENT_TAG_PATTERN = re.compile(
    rf"<(?P<close>/)?(?P<name>[A-Z][\w.]*)"
    rf"(?P<attrs>(?:\s+{_ATTR_NAME}(?:\s*=\s*{_ATTR_VALUE})?)*)"
    r"\s*(?P<self_closing>/)?>"
)
ATTRIBUTE_PATTERN = re.compile(rf"(?P<name>{_ATTR_NAME})(?:\s*=\s*(?P<value>{_ATTR_VALUE}))?")
EXPRESSION_PATTERN = re.compile(r"\A\{(?P<body>.*)\}\Z", re.DOTALL)

Token = dict[str, typ.Any]


def split_frontmatter(text: str) -> tuple[str | None, str]:
    """Separate a leading YAML frontmatter block from the markdown body.

    Returns
    -------
    tuple[str | None, str]
        The YAML text (``None`` when there is no frontmatter) and the
        remaining markdown.
    """
    match = FRONTMATTER_PATTERN.match(text)
    if match is None:
        return None, text
    return match.group("yaml"), text[match.end() :]


def parse_markdown(text: str) -> Root:
    """Parse ``text`` into a :class:`Root` node."""
    frontmatter, body = split_frontmatter(text)
    children = list(_TokenConverter().blocks(_tokenize(body)))
    if frontmatter is not None:
        children.insert(0, Yaml(frontmatter))
    return Root(children=tuple(children))


def parse_attributes(source: str) -> tuple[ComponentAttribute, ...]:
    """Parse the attribute section of a component tag.

    Quoted and bare values are literal; ``{...}`` values and valueless
    attributes have ``value`` set to ``None``.
    """
    attributes: list[ComponentAttribute] = []
    for match in ATTRIBUTE_PATTERN.finditer(source):
        raw = match.group("value")
        value: str | None
        if raw is None or raw.startswith("{"):
            value = None
        elif raw[0] in "\"'":
            value = raw[1:-1]
        else:
            value = raw
        attributes.append(ComponentAttribute(match.group("name"), value))
    return tuple(attributes)


def _tokenize(text: str) -> list[Token]:
    markdown = mistune.create_markdown(renderer=None, plugins=MISTUNE_PLUGINS)
    tokens, _state = markdown.parse(text)
    return list(tokens) if isinstance(tokens, list) else []


@dc.dataclass(slots=True)
class _OpenComponent:
    """Component whose closing tag has not been seen yet."""

    name: str
    attributes: tuple[ComponentAttribute, ...]
    children: list[Node] = dc.field(default_factory=list)

    def close(self) -> Component:
        return Component(self.name, self.attributes, tuple(self.children))


class _ComponentStack:
    """Collect nodes, nesting them inside open components."""

    def __init__(self) -> None:
        self.root: list[Node] = []
        self._open: list[_OpenComponent] = []

    def emit(self, node: Node) -> None:
        target = self._open[-1].children if self._open else self.root
        target.append(node)

    def handle_tag(self, match: re.Match[str]) -> None:
        name = match.group("name")
        if match.group("close"):
            self._close(name, match.group(0))
            return
        attributes = parse_attributes(match.group("attrs"))
        if match.group("self_closing"):
            self.emit(Component(name, attributes))
        else:
            self._open.append(_OpenComponent(name, attributes))

    @property
    def is_open(self) -> bool:
        return bool(self._open)

    def finish(self) -> tuple[Node, ...]:
        while self._open:
            pending = self._open.pop()
            logger.debug("Closing unterminated <%s> at end of input", pending.name)
            self.emit(pending.close())
        return tuple(_merge_text(self.root))

    def _close(self, name: str, raw: str) -> None:
        if not any(frame.name == name for frame in self._open):
            logger.debug("Ignoring unmatched closing tag %s", raw)
            self.emit(Html(raw))
            return
        while self._open:
            frame = self._open.pop()
            self.emit(frame.close())
            if frame.name == name:
                return


class _TokenConverter:
    """Convert mistune AST tokens into nodes."""

    def blocks(self, tokens: cabc.Iterable[Token]) -> tuple[Node, ...]:
        stack = _ComponentStack()
        for token in tokens:
            if token.get("type") == "block_html":
                self._block_html(token.get("raw", ""), stack)
                continue
            for node in self._block(token):
                stack.emit(node)
        return stack.finish()

    def inlines(self, tokens: cabc.Iterable[Token]) -> tuple[Node, ...]:
        stack = _ComponentStack()
        for token in tokens:
            if token.get("type") == "inline_html":
                raw = token.get("raw", "")
                match = COMPONENT_TAG_PATTERN.fullmatch(raw.strip())
                if match is None:
                    stack.emit(Html(raw))
                else:
                    stack.handle_tag(match)
                continue
            node = self._inline(token)
            if node is not None:
                stack.emit(node)
        return stack.finish()

    def _block_html(self, raw: str, stack: _ComponentStack) -> None:
        position = 0
        for match in COMPONENT_TAG_PATTERN.finditer(raw):
            self._block_segment(raw[position : match.start()], stack)
            stack.handle_tag(match)
            position = match.end()
        self._block_segment(raw[position:], stack)

    def _block_segment(self, segment: str, stack: _ComponentStack) -> None:
        if not segment.strip():
            return
        if not stack.is_open:
            stack.emit(Html(segment.strip("\n")))
            return
        nested = textwrap.dedent(segment).strip("\n")
        for node in _TokenConverter().blocks(_tokenize(nested)):
            stack.emit(node)

    def _block(self, token: Token) -> list[Node]:
        kind = token.get("type", "")
        children = token.get("children") or []
        attrs = token.get("attrs") or {}
        match kind:
            case "paragraph" | "block_text":
                return [_paragraph(self.inlines(children))]
            case "heading":
                return [Heading(int(attrs.get("level", 1)), self.inlines(children))]
            case "block_code":
                info = (attrs.get("info") or "").split()
                return [
                    Code(token.get("raw", "").rstrip("\n"), info[0] if info else None)
                ]
            case "block_quote":
                return [BlockQuote(self.blocks(children))]
            case "list":
                return [List(bool(attrs.get("ordered")), self.blocks(children))]
            case "list_item":
                return [ListItem(None, self.blocks(children))]
            case "task_list_item":
                return [ListItem(bool(attrs.get("checked")), self.blocks(children))]
            case "table":
                return [self._table(children)]
            case "thematic_break":
                return [ThematicBreak()]
            case "block_math":
                return [Math(token.get("raw", ""))]
            case "footnotes":
                return [self._footnote(item) for item in children]
            case "blank_line":
                return []
            case _:
                logger.debug("Skipping unsupported block token %r", kind)
                return []

    def _footnote(self, token: Token) -> FootnoteDefinition:
        attrs = token.get("attrs") or {}
        identifier = str(attrs.get("key") or attrs.get("label") or "")
        return FootnoteDefinition(identifier, self.blocks(token.get("children") or []))

    def _table(self, sections: list[Token]) -> Table:
        rows: list[Node] = []
        for section in sections:
            match section.get("type"):
                case "table_head":
                    rows.append(self._table_row(section.get("children") or []))
                case "table_body":
                    rows.extend(
                        self._table_row(row.get("children") or [])
                        for row in section.get("children") or []
                    )
        return Table(tuple(rows))

    def _table_row(self, cells: list[Token]) -> TableRow:
        return TableRow(
            tuple(TableCell(self.inlines(cell.get("children") or [])) for cell in cells)
        )

    def _inline(self, token: Token) -> Node | None:
        kind = token.get("type", "")
        children = token.get("children") or []
        attrs = token.get("attrs") or {}
        match kind:
            case "text":
                return Text(token.get("raw", ""))
            case "softbreak":
                return Text("\n")
            case "linebreak":
                return Break()
            case "emphasis":
                return Emphasis(self.inlines(children))
            case "strong":
                return Strong(self.inlines(children))
            case "strikethrough":
                return Delete(self.inlines(children))
            case "codespan":
                return InlineCode(token.get("raw", ""))
            case "link":
                return Link(attrs.get("url", ""), attrs.get("title"), self.inlines(children))
            case "image":
                return Image(attrs.get("url", ""), attrs.get("title"), _plain_text(children))
            case "inline_math":
                return InlineMath(token.get("raw", ""))
            case "footnote_ref":
                key = token.get("raw") or attrs.get("key") or attrs.get("label") or ""
                return FootnoteReference(str(key))
            case _:
                logger.debug("Skipping unsupported inline token %r", kind)
                return None


def _paragraph(children: tuple[Node, ...]) -> Node:
    if len(children) == 1 and isinstance(children[0], Text):
        match = EXPRESSION_PATTERN.match(children[0].value.strip())
        if match is not None:
            return Expression(match.group("body").strip())
    return Paragraph(children)


def _plain_text(tokens: cabc.Iterable[Token]) -> str:
    parts: list[str] = []
    for token in tokens:
        if token.get("type") in {"text", "codespan"}:
            parts.append(token.get("raw", ""))
        parts.append(_plain_text(token.get("children") or []))
    return "".join(parts)


def _merge_text(nodes: cabc.Iterable[Node]) -> list[Node]:
    merged: list[Node] = []
    for node in nodes:
        if isinstance(node, Text) and merged and isinstance(merged[-1], Text):
            merged[-1] = Text(merged[-1].value + node.value)
        else:
            merged.append(node)
    return merged


__all__ = [
    "COMPONENT_TAG_PATTERN",
    "FRONTMATTER_PATTERN",
    "MISTUNE_PLUGINS",
    "parse_attributes",
    "parse_markdown",
    "split_frontmatter",
]
