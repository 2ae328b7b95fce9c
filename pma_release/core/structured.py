"""Helpers for safely reading the untyped TOML release configuration.

They provide runtime validation and static type narrowing at the boundary
where `tomllib` output enters the typed config.
"""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]
ObjList = list[object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict with string keys."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    if is_str_dict(obj):
        return obj
    return None


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a string value from a mapping, stripping whitespace.

    Returns None if missing or empty after stripping.

    Raises:
        TypeError: If the value is present but not a string.
    """
    value = table.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string")
    s = value.strip()
    return s or None


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    """Get a nested table (dict with string keys) from a mapping.

    Raises:
        TypeError: If the value is present but not a table.
    """
    value = table.get(key)
    if value is None:
        return None
    result = as_str_dict(value)
    if result is None:
        raise TypeError(f"{key} must be a table")
    return result


def get_str_list(table: Mapping[str, object], key: str) -> tuple[str, ...] | None:
    """Get a list of non-empty strings from a mapping.

    Returns None if the key is missing.

    Raises:
        TypeError: If the value is not a list of strings.
    """
    value = table.get(key)
    if value is None:
        return None
    if not isinstance(value, list):
        raise TypeError(f"{key} must be a list of strings")
    items: list[str] = []
    for item in cast(list[object], value):
        if not isinstance(item, str) or not item.strip():
            raise TypeError(f"{key} must be a list of strings")
        items.append(item.strip())
    return tuple(items)
