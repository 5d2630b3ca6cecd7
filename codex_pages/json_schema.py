"""Turn a small JSON-Schema subset into field documentation and examples.

Only ``type``, ``description``, ``properties``, ``items``, ``required`` and
``format`` are understood; everything else in the schema is ignored. Missing
``type`` values default to ``object``.

Examples
--------
>>> from codex_pages.json_schema import build_example, parse_schema
>>> schema = b'{"properties": {"name": {"type": "string"}}, "required": ["name"]}'
>>> [(f.name, f.type, f.required) for f in parse_schema(schema)]
[('name', 'String', True)]
>>> print(build_example(schema))
{
  "name": "Value"
}
"""

from __future__ import annotations

import dataclasses as dc
import enum
import json
import typing as typ

from codex_pages.errors import MalformedInputError

EXAMPLE_STRING = "Value"
EXAMPLE_NUMBER = 42


class SchemaType(enum.Enum):
    """Types recognised in the ``type`` keyword."""

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    NULL = "null"

    @property
    def label(self) -> str:
        """Return the human-readable type name shown in field listings."""
        if self is SchemaType.NULL:
            return "null"
        return self.value.capitalize()


@dc.dataclass(slots=True)
class JsonSchema:
    """Parsed schema node."""

    type: SchemaType = SchemaType.OBJECT
    description: str = ""
    properties: dict[str, JsonSchema] = dc.field(default_factory=dict)
    items: JsonSchema | None = None
    required: list[str] = dc.field(default_factory=list)
    format: str = ""


@dc.dataclass(slots=True)
class SchemaField:
    """Documentation entry for a single (possibly nested) property.

    Attributes
    ----------
    name : str
        Dotted path from the schema root, for example ``address.city``.
    type : str
        Display type such as ``String`` or ``Array(Object)``.
    required : bool
        Whether the parent schema lists the property as required.
    deprecated : bool
        Reserved; always ``False``.
    children : str
        Markdown documentation for the field.
    """

    name: str
    type: str
    required: bool = False
    deprecated: bool = False
    children: str = ""


def load_schema(data: bytes | str) -> JsonSchema:
    """Parse raw JSON into a :class:`JsonSchema`.

    Raises
    ------
    MalformedInputError
        If the input is not JSON or does not have the expected shape.
    """
    try:
        raw = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        msg = f"Schema is not valid JSON: {exc}"
        raise MalformedInputError(msg) from exc
    return _schema_from_mapping(raw, path="$")


def parse_schema(data: bytes | str | JsonSchema) -> list[SchemaField]:
    """Return every documented property sorted by dotted name.

    Parameters
    ----------
    data : bytes | str | JsonSchema
        Raw schema JSON or an already parsed schema.

    Returns
    -------
    list[SchemaField]
        One field per property at every nesting level. Object properties are
        descended into, as are array items that are themselves objects.

    Raises
    ------
    MalformedInputError
        If raw input cannot be parsed.
    """
    schema = data if isinstance(data, JsonSchema) else load_schema(data)
    fields = _collect_fields(schema, prefix="")
    fields.sort(key=lambda field: field.name)
    return fields


def build_example(data: bytes | str | JsonSchema) -> str:
    """Return a pretty-printed JSON example value mirroring the schema shape."""
    schema = data if isinstance(data, JsonSchema) else load_schema(data)
    return json.dumps(example_value(schema), indent=2, sort_keys=True)


def example_value(schema: JsonSchema) -> typ.Any:
    """Synthesize a placeholder value for ``schema``."""
    match schema.type:
        case SchemaType.OBJECT:
            return {
                name: example_value(child) for name, child in schema.properties.items()
            }
        case SchemaType.ARRAY:
            if schema.items is None:
                return []
            return [example_value(schema.items)]
        case SchemaType.STRING:
            return EXAMPLE_STRING
        case SchemaType.NUMBER | SchemaType.INTEGER:
            return EXAMPLE_NUMBER
        case SchemaType.BOOLEAN:
            return False
        case SchemaType.NULL:
            return None


def type_label(schema: JsonSchema) -> str:
    """Return the display type, wrapping array item types recursively."""
    if schema.type is SchemaType.ARRAY:
        if schema.items is None:
            return SchemaType.ARRAY.label
        return f"Array({type_label(schema.items)})"
    return schema.type.label


def _collect_fields(schema: JsonSchema, prefix: str) -> list[SchemaField]:
    fields: list[SchemaField] = []
    for name, prop in schema.properties.items():
        dotted = f"{prefix}{name}"
        fields.append(
            SchemaField(
                name=dotted,
                type=type_label(prop),
                required=name in schema.required,
                children=_field_docs(prop),
            )
        )
        if prop.type is SchemaType.OBJECT:
            fields.extend(_collect_fields(prop, f"{dotted}."))
        elif (
            prop.type is SchemaType.ARRAY
            and prop.items is not None
            and prop.items.type is SchemaType.OBJECT
        ):
            fields.extend(_collect_fields(prop.items, f"{dotted}."))
    return fields


def _field_docs(schema: JsonSchema) -> str:
    docs = schema.description
    if schema.format:
        docs += f"\n\n---\n**Format:** {schema.format}\n"
    return docs


def _schema_from_mapping(raw: object, *, path: str) -> JsonSchema:
    if not isinstance(raw, dict):
        msg = f"Schema node at {path} must be an object."
        raise MalformedInputError(msg)

    type_value = raw.get("type", SchemaType.OBJECT.value)
    try:
        schema_type = SchemaType(type_value)
    except (TypeError, ValueError) as exc:
        msg = f"Unsupported schema type {type_value!r} at {path}."
        raise MalformedInputError(msg) from exc

    properties_raw = raw.get("properties", {})
    if not isinstance(properties_raw, dict):
        msg = f"'properties' at {path} must be an object."
        raise MalformedInputError(msg)
    properties = {
        str(name): _schema_from_mapping(child, path=f"{path}.{name}")
        for name, child in properties_raw.items()
    }

    items_raw = raw.get("items")
    items = (
        _schema_from_mapping(items_raw, path=f"{path}[]")
        if items_raw is not None
        else None
    )

    required = raw.get("required", [])
    if not isinstance(required, list) or not all(
        isinstance(entry, str) for entry in required
    ):
        msg = f"'required' at {path} must be a list of strings."
        raise MalformedInputError(msg)

    return JsonSchema(
        type=schema_type,
        description=_optional_text(raw.get("description"), "description", path),
        properties=properties,
        items=items,
        required=list(required),
        format=_optional_text(raw.get("format"), "format", path),
    )


def _optional_text(value: object, key: str, path: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        msg = f"'{key}' at {path} must be a string."
        raise MalformedInputError(msg)
    return value


__all__ = [
    "JsonSchema",
    "SchemaField",
    "SchemaType",
    "build_example",
    "example_value",
    "load_schema",
    "parse_schema",
    "type_label",
]
