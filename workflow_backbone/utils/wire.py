"""Helpers for translating between wire-format keys and model field names."""

from collections.abc import Iterable
from typing import Any


def field_name(key: str, mapping: dict[str, str], fields: Iterable[str] = ()) -> str:
    """Model field name for a single wire key.

    Unknown keys stay as they are so that the model's ``extra="forbid"``
    rejects them. A key spelled like a field name (a mapped one, or one of
    ``fields``) is not a wire key either; it is renamed so that it cannot
    fill that field.
    """
    if key in mapping:
        return mapping[key]
    if key in mapping.values() or key in fields:
        return f"{key} (not a wire key)"
    return key


def rename_keys(data: Any, mapping: dict[str, str]) -> Any:
    """Translate the keys of a wire record into model field names.

    Non-dict values are returned as-is so the model reports the type error.
    """
    if not isinstance(data, dict):
        return data
    return {field_name(key, mapping): value for key, value in data.items()}


def rename_each(items: Any, mapping: dict[str, str]) -> Any:
    """Apply ``rename_keys`` to every record of a wire list."""
    if not isinstance(items, list):
        return items
    return [rename_keys(item, mapping) for item in items]
