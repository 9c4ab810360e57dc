from __future__ import annotations

import pytest

from formwalk.values import display_value, is_structured_value, title_case, values_equal


@pytest.mark.parametrize(
    ("left", "right", "expected"),
    [
        ("a", "a", True),
        ("a", "b", False),
        (1, 1, True),
        (1, 1.0, False),
        (True, 1, False),
        (False, False, True),
        (None, None, True),
        (None, "null", False),
        ([1, "a"], [1, "a"], True),
        ([1, "a"], ["a", 1], False),
        ({"x": 1, "y": [True]}, {"y": [True], "x": 1}, True),
        ({"x": 1}, {"x": 1, "y": 2}, False),
    ],
)
def test_values_equal(left, right, expected):
    assert values_equal(left, right) is expected


def test_display_value():
    assert display_value(None) == "null"
    assert display_value(True) == "true"
    assert display_value(42) == "42"
    assert display_value(1.5) == "1.5"
    assert display_value("kafka") == "kafka"
    assert display_value({"a": [1, 2]}) == '{"a": [1, 2]}'


def test_is_structured_value():
    assert is_structured_value({"a": [1, 2.5, None, "x", {"b": False}]})
    assert not is_structured_value({1: "a"})
    assert not is_structured_value(object())


@pytest.mark.parametrize(
    ("key", "expected"),
    [
        ("source_id", "Source Id"),
        ("sourceType", "Source Type"),
        ("max-retries", "Max Retries"),
        ("name", "Name"),
    ],
)
def test_title_case(key, expected):
    assert title_case(key) == expected
