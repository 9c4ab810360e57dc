"""Structured value helpers.

A structured value is the JSON-shaped data used both for constants declared
in a schema (select items, condition triggers) and for every collected
answer: ``None``, ``bool``, ``int``, ``float``, ``str``, ``list`` of
structured values, or ``dict`` mapping ``str`` to structured values.
"""

from __future__ import annotations

import json
import re
from typing import Any, Union

StructuredValue = Union[
    None,
    bool,
    int,
    float,
    str,
    list["StructuredValue"],
    dict[str, "StructuredValue"],
]

_WORD_BOUNDARY = re.compile(r"[\s_\-.]+")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def is_structured_value(value: Any) -> bool:
    """Return True when ``value`` is a well-formed structured value."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return True
    if isinstance(value, list):
        return all(is_structured_value(item) for item in value)
    if isinstance(value, dict):
        return all(
            isinstance(key, str) and is_structured_value(item)
            for key, item in value.items()
        )
    return False


def values_equal(left: StructuredValue, right: StructuredValue) -> bool:
    """Structural equality that keeps the value kinds apart.

    Python treats ``True == 1`` and ``1 == 1.0``; a picked trigger of ``1``
    must not fire for a selected ``true`` or ``1.0``, so kinds are compared
    before contents. Object comparison ignores key order.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right
    if isinstance(left, int) and isinstance(right, int):
        return left == right
    if isinstance(left, float) and isinstance(right, float):
        return left == right
    if isinstance(left, str) and isinstance(right, str):
        return left == right
    if left is None or right is None:
        return left is None and right is None
    if isinstance(left, list) and isinstance(right, list):
        return len(left) == len(right) and all(
            values_equal(a, b) for a, b in zip(left, right)
        )
    if isinstance(left, dict) and isinstance(right, dict):
        return left.keys() == right.keys() and all(
            values_equal(item, right[key]) for key, item in left.items()
        )
    return False


def display_value(value: StructuredValue) -> str:
    """Render a value as a menu label."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, str)):
        return str(value)
    return json.dumps(value, ensure_ascii=False)


def title_case(key: str) -> str:
    """Turn a field key into a human title (``source_id`` -> ``Source Id``)."""
    words: list[str] = []
    for chunk in _WORD_BOUNDARY.split(key):
        if chunk:
            words.extend(part for part in _CAMEL_BOUNDARY.split(chunk) if part)
    return " ".join(word[:1].upper() + word[1:].lower() for word in words)
