"""Immutable document tree produced by the markup parser.

Every node is a frozen, slotted dataclass. Container nodes keep their children
in a tuple so a parsed tree can be shared between renders without copying.

Examples
--------
>>> from codex_pages.nodes import Heading, Root, Text
>>> tree = Root(children=(Heading(depth=1, children=(Text("Intro"),)),))
>>> tree.children[0].depth
1
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ


@dc.dataclass(frozen=True, slots=True)
class Text:
    """Literal text run."""

    value: str


@dc.dataclass(frozen=True, slots=True)
class Root:
    """Top of a parsed document."""

    children: tuple[Node, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class Paragraph:
    children: tuple[Node, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class Heading:
    """Section heading; ``depth`` counts from 1."""

    depth: int
    children: tuple[Node, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class BlockQuote:
    children: tuple[Node, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class Emphasis:
    children: tuple[Node, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class Strong:
    children: tuple[Node, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class Delete:
    children: tuple[Node, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class InlineCode:
    value: str


@dc.dataclass(frozen=True, slots=True)
class Code:
    """Fenced code block with an optional language tag."""

    value: str
    lang: str | None = None


@dc.dataclass(frozen=True, slots=True)
class Link:
    url: str
    title: str | None = None
    children: tuple[Node, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class Image:
    url: str
    title: str | None = None
    alt: str = ""


@dc.dataclass(frozen=True, slots=True)
class List:
    ordered: bool = False
    children: tuple[Node, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class ListItem:
    """List entry; ``checked`` is ``None`` unless the item is a task."""

    checked: bool | None = None
    children: tuple[Node, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class Table:
    children: tuple[Node, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class TableRow:
    children: tuple[Node, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class TableCell:
    children: tuple[Node, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class ThematicBreak:
    pass


@dc.dataclass(frozen=True, slots=True)
class Break:
    pass


@dc.dataclass(frozen=True, slots=True)
class ComponentAttribute:
    """Attribute on an embedded component.

    ``value`` is ``None`` when the attribute was written as an expression
    (``name={...}``) or without any value at all.
    """

    name: str
    value: str | None = None

    @property
    def is_literal(self) -> bool:
        return self.value is not None


@dc.dataclass(frozen=True, slots=True)
class Component:
    """Embedded element such as ``<CsvTable file="data.csv" />``."""

    name: str
    attributes: tuple[ComponentAttribute, ...] = ()
    children: tuple[Node, ...] = ()


@dc.dataclass(frozen=True, slots=True)
class Expression:
    """Embedded ``{...}`` expression block."""

    value: str


@dc.dataclass(frozen=True, slots=True)
class Yaml:
    """Frontmatter block."""

    value: str


@dc.dataclass(frozen=True, slots=True)
class Html:
    value: str


@dc.dataclass(frozen=True, slots=True)
class Math:
    value: str


@dc.dataclass(frozen=True, slots=True)
class InlineMath:
    value: str


@dc.dataclass(frozen=True, slots=True)
class FootnoteReference:
    identifier: str


@dc.dataclass(frozen=True, slots=True)
class FootnoteDefinition:
    identifier: str
    children: tuple[Node, ...] = ()


Node: typ.TypeAlias = (
    Root
    | Paragraph
    | Heading
    | BlockQuote
    | Emphasis
    | Strong
    | Delete
    | InlineCode
    | Code
    | Link
    | Image
    | List
    | ListItem
    | Table
    | TableRow
    | TableCell
    | ThematicBreak
    | Break
    | Text
    | Component
    | Expression
    | Yaml
    | Html
    | Math
    | InlineMath
    | FootnoteReference
    | FootnoteDefinition
)


__all__ = [
    "BlockQuote",
    "Break",
    "Code",
    "Component",
    "ComponentAttribute",
    "Delete",
    "Emphasis",
    "Expression",
    "FootnoteDefinition",
    "FootnoteReference",
    "Heading",
    "Html",
    "Image",
    "InlineCode",
    "InlineMath",
    "Link",
    "List",
    "ListItem",
    "Math",
    "Node",
    "Paragraph",
    "Root",
    "Strong",
    "Table",
    "TableCell",
    "TableRow",
    "Text",
    "ThematicBreak",
    "Yaml",
]
