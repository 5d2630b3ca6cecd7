"""Coercion helpers shared by the configuration loaders."""

from __future__ import annotations

import typing as typ

from .models import ProjectConfigError


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _as_str(value: object | None, default: str = "") -> str:
    """Return ``value`` as a string, falling back to ``default`` for None."""
    if value is None:
        return default
    return str(value)


def _as_int(value: object | None, *, key: str, default: int = 0) -> int:
    """Return an integer setting, rejecting booleans and non-numeric text."""
    match value:
        case None:
            return default
        case bool():
            msg = f"'{key}' must be an integer, got {value!r}."
            raise ProjectConfigError(msg)
        case int():
            return value
        case str() if value.strip().lstrip("-").isdigit():
            return int(value.strip())
        case _:
            msg = f"'{key}' must be an integer, got {value!r}."
            raise ProjectConfigError(msg)


def _as_bool(value: object | None, *, key: str, default: bool = False) -> bool:
    """Return a boolean setting."""
    match value:
        case None:
            return default
        case bool():
            return value
        case _:
            msg = f"'{key}' must be true or false, got {value!r}."
            raise ProjectConfigError(msg)


def _as_str_list(value: object | None, *, key: str) -> list[str]:
    """Normalize a string or list of strings into a list of non-empty strings."""
    match value:
        case None:
            return []
        case str():
            return [value] if value.strip() else []
        case list():
            return [str(entry).strip() for entry in value if str(entry).strip()]
        case _:
            msg = f"'{key}' must be a list of strings, got {value!r}."
            raise ProjectConfigError(msg)


def _require_mapping(loaded: object, *, source: str) -> dict[str, typ.Any]:
    """Return ``loaded`` as a dict, treating empty documents as ``{}``."""
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        msg = f"Top-level YAML structure in {source} must be a mapping."
        raise ProjectConfigError(msg)
    return dict(loaded)


__all__ = [
    "_as_bool",
    "_as_int",
    "_as_str",
    "_as_str_list",
    "_optional_str",
    "_require_mapping",
]
