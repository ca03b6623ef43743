from __future__ import annotations

import copy
from typing import Any

from ..core.exceptions import BadRequestError


def to_list(*values: Any) -> list:
    """Flatten positional values and sequences into one list.

    None values are skipped.
    """
    result: list = []
    for value in values:
        if value is None:
            continue
        if isinstance(value, (list, tuple, set)):
            result.extend(value)
        else:
            result.append(value)
    return result


def merge(base: dict, override: dict) -> dict:
    """Deep merge two mappings.

    Nested mappings are merged, lists are concatenated and scalar
    values from override win.
    """
    result = dict(base)
    for key, value in override.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = merge(current, value)
        elif isinstance(current, list) and isinstance(value, list):
            result[key] = current + value
        else:
            result[key] = value
    return result


def set_path(data: dict, path: str, value: Any) -> dict:
    """Set a value by dotted path, creating containers on the way.

    Numeric segments address list positions, so "query.bool.should.0"
    creates a list under "should".
    """
    keys = path.split(".")
    target: Any = data
    for i, key in enumerate(keys[:-1]):
        child = _get_child(target, key)
        if not isinstance(child, (dict, list)):
            child = [] if keys[i + 1].isdigit() else {}
            _set_child(target, key, child)
        target = child
    _set_child(target, keys[-1], copy.deepcopy(value))
    return data


def _get_child(target: dict | list, key: str) -> Any:
    if isinstance(target, list):
        index = _to_index(key)
        return target[index] if index < len(target) else None
    return target.get(key)


def _set_child(target: dict | list, key: str, value: Any) -> None:
    if isinstance(target, list):
        index = _to_index(key)
        if index < len(target):
            target[index] = value
        else:
            target.extend([None] * (index - len(target)))
            target.append(value)
    else:
        target[key] = value


def _to_index(key: str) -> int:
    if not key.isdigit():
        raise BadRequestError(f"Path segment {key} is not a list index")
    return int(key)
