"""Helpers for expanding embedded components into nodes and values."""

from __future__ import annotations

import csv
import typing as typ
from pathlib import Path

from codex_pages.errors import InputNotFoundError, MalformedInputError
from codex_pages.nodes import (
    Component,
    ComponentAttribute,
    Heading,
    Table,
    TableCell,
    TableRow,
    Text,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from codex_pages.nodes import Node
    from codex_pages.project import Document, Project

CSV_TABLE = "CsvTable"
JSON_SCHEMA_FIELDS = "JsonSchemaFields"
JSON_SCHEMA_EXAMPLE = "JsonSchemaExample"
CODE_FILE = "CodeFile"
FIELD = "Field"


def convert_component_attributes(
    attributes: cabc.Iterable[ComponentAttribute],
) -> dict[str, str]:
    """Keep literal attributes; expression-valued ones are dropped."""
    return {attr.name: attr.value for attr in attributes if attr.value is not None}


def attribute_flag(
    attributes: cabc.Mapping[str, str], name: str, *, default: bool = False
) -> bool:
    """Return True only when the attribute is the literal string ``true``."""
    return attributes.get(name, "true" if default else "false") == "true"


def require_attribute(component: str, attributes: cabc.Mapping[str, str], name: str) -> str:
    """Return a mandatory attribute, raising when it is missing."""
    value = attributes.get(name)
    if not value:
        msg = f"<{component}> requires a '{name}' attribute."
        raise MalformedInputError(msg)
    return value


def resolve_content_path(project: Project, document: Document, reference: str) -> Path:
    """Resolve a file referenced from ``document``.

    Plain paths are relative to the document's directory; paths starting with
    ``/`` are relative to the project root.
    """
    if reference.startswith("/"):
        return project.root / reference.lstrip("/")
    return document.directory / reference


def read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except FileNotFoundError as exc:
        msg = f"Referenced file '{path}' not found."
        raise InputNotFoundError(msg) from exc
    except OSError as exc:
        msg = f"Referenced file '{path}' could not be read: {exc.strerror or exc}"
        raise InputNotFoundError(msg) from exc


def read_csv_table(path: Path, *, has_headers: bool = True) -> Table:
    """Read a CSV file into a table node.

    The first record becomes the header row when ``has_headers`` is true.
    Otherwise a header row of empty cells, as wide as the first record, is
    added so every record lands in the body. An empty file yields a table
    without rows.

    Raises
    ------
    InputNotFoundError
        If the file does not exist or cannot be read.
    MalformedInputError
        If the file is not valid UTF-8 CSV.
    """
    try:
        with path.open(newline="", encoding="utf-8") as handle:
            records = list(csv.reader(handle))
    except FileNotFoundError as exc:
        msg = f"CSV file '{path}' not found."
        raise InputNotFoundError(msg) from exc
    except OSError as exc:
        msg = f"CSV file '{path}' could not be read: {exc.strerror or exc}"
        raise InputNotFoundError(msg) from exc
    except (csv.Error, UnicodeDecodeError) as exc:
        msg = f"CSV file '{path}' could not be parsed: {exc}"
        raise MalformedInputError(msg) from exc

    rows = [_row(record) for record in records]
    if not has_headers and records:
        rows.insert(0, TableRow(tuple(TableCell() for _ in records[0])))
    return Table(tuple(rows))


def schema_sections(schema_reference: str) -> tuple[Node, ...]:
    """Return the nodes appended to documents that declare a JSON schema."""
    file_attribute = (ComponentAttribute("file", schema_reference),)
    return (
        Heading(1, (Text("Fields"),)),
        Component(JSON_SCHEMA_FIELDS, file_attribute),
        Heading(1, (Text("Example"),)),
        Component(JSON_SCHEMA_EXAMPLE, file_attribute),
    )


def _row(record: cabc.Iterable[str]) -> TableRow:
    return TableRow(tuple(TableCell((Text(value),)) for value in record))


__all__ = [
    "CODE_FILE",
    "CSV_TABLE",
    "FIELD",
    "JSON_SCHEMA_EXAMPLE",
    "JSON_SCHEMA_FIELDS",
    "attribute_flag",
    "convert_component_attributes",
    "read_bytes",
    "read_csv_table",
    "require_attribute",
    "resolve_content_path",
    "schema_sections",
]
