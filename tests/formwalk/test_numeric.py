from __future__ import annotations

import pytest

from formwalk.exceptions import ValidationFailure
from formwalk.numeric import F32_MAX, NumericKind


@pytest.mark.parametrize(
    ("kind", "low", "high"),
    [
        (NumericKind.U8, 0, 255),
        (NumericKind.U64, 0, 2**64 - 1),
        (NumericKind.I8, -128, 127),
        (NumericKind.I32, -(2**31), 2**31 - 1),
        (NumericKind.F32, -F32_MAX, F32_MAX),
    ],
)
def test_bounds(kind, low, high):
    assert kind.min == low
    assert kind.max == high


def test_parse_integers():
    assert NumericKind.I16.parse("-42") == -42
    assert NumericKind.U32.parse("+7") == 7
    assert NumericKind.U8.parse(" 9 ") == 9


@pytest.mark.parametrize(
    ("kind", "raw", "message"),
    [
        (NumericKind.U8, "256", "Value (256) is not a valid positive 8-bit number."),
        (NumericKind.U64, "-1", "Value (-1) is not a valid positive number."),
        (NumericKind.I8, "1.5", "Value (1.5) is not a valid 8-bit number."),
        (NumericKind.I64, "abc", "Value (abc) is not a valid number."),
        (NumericKind.F64, "nan", "Value (nan) is not a valid float."),
        (NumericKind.F32, "1e39", "Value (1e39) is not a valid 32-bit float."),
    ],
)
def test_parse_rejects(kind, raw, message):
    with pytest.raises(ValidationFailure) as exc_info:
        kind.parse(raw)
    assert exc_info.value.message == message


def test_parse_floats():
    assert NumericKind.F64.parse("2.5e3") == 2500.0
    assert NumericKind.F32.parse(".5") == 0.5
    assert isinstance(NumericKind.F64.parse("3"), float)


def test_representable_rejects_booleans():
    assert not NumericKind.I32.representable(True)
