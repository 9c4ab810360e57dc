"""Numeric field kinds: parsing rules and representable bounds.

One ``NumericKind`` member exists per width/sign variant a schema can
declare. The engine uses a single resolver for all of them; everything that
differs between widths lives here.
"""

from __future__ import annotations

import math
import re
from enum import StrEnum

from .exceptions import ValidationFailure

F32_MAX = 3.4028234663852886e38
F64_MAX = 1.7976931348623157e308

_INT_PATTERN = re.compile(r"^[+-]?\d+$")
_FLOAT_PATTERN = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")


class NumericKind(StrEnum):
    """Numeric value kinds, named as they appear in a schema ``type``."""

    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    F32 = "f32"
    F64 = "f64"

    @property
    def is_float(self) -> bool:
        return self.value.startswith("f")

    @property
    def is_unsigned(self) -> bool:
        return self.value.startswith("u")

    @property
    def bits(self) -> int:
        return int(self.value[1:])

    @property
    def min(self) -> int | float:
        if self.is_float:
            return -F32_MAX if self is NumericKind.F32 else -F64_MAX
        if self.is_unsigned:
            return 0
        return -(2 ** (self.bits - 1))

    @property
    def max(self) -> int | float:
        if self.is_float:
            return F32_MAX if self is NumericKind.F32 else F64_MAX
        if self.is_unsigned:
            return 2**self.bits - 1
        return 2 ** (self.bits - 1) - 1

    @property
    def invalid_message(self) -> str:
        """Explain what a valid answer for this kind looks like."""
        if self.is_float:
            return "is not a valid float" if self.bits == 64 else "is not a valid 32-bit float"
        width = "" if self.bits == 64 else f" {self.bits}-bit"
        if self.is_unsigned:
            return f"is not a valid positive{width} number"
        return f"is not a valid{width} number"

    def representable(self, value: int | float) -> bool:
        """Return True when ``value`` fits this kind."""
        if isinstance(value, bool):
            return False
        if self.is_float:
            return isinstance(value, (int, float)) and math.isfinite(value) and abs(value) <= self.max
        return isinstance(value, int) and self.min <= value <= self.max

    def parse(self, raw: str) -> int | float:
        """Parse operator text into a value of this kind.

        Raises:
            ValidationFailure: The text is not a number of this kind or
                falls outside its representable range.
        """
        text = raw.strip()
        pattern = _FLOAT_PATTERN if self.is_float else _INT_PATTERN
        if not pattern.match(text) or (self.is_unsigned and text.startswith("-")):
            raise ValidationFailure(f"Value ({raw}) {self.invalid_message}.")

        value: int | float = float(text) if self.is_float else int(text)
        if not self.representable(value):
            raise ValidationFailure(f"Value ({raw}) {self.invalid_message}.")
        return value


def numeric_kind_names() -> list[str]:
    """Return every numeric ``type`` name in declaration order."""
    return [kind.value for kind in NumericKind]
