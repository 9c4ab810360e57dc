"""Constraint sets attached to field kinds.

Every ``check_*`` method raises ``ValidationFailure`` with an operator-facing
message naming the offending value and the violated bound; they never
return a status.
"""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Mapping

from .exceptions import ValidationFailure
from .numeric import NumericKind
from .values import StructuredValue

if TYPE_CHECKING:
    from .schema import Field

MAX_COUNT = sys.maxsize


@dataclass(frozen=True)
class NoConstraints:
    """Constraint set for kinds that need none (booleans)."""

    def check(self, value: object) -> None:
        return None


@dataclass(frozen=True)
class CollectionConstraints:
    """Item-count bounds for array fields."""

    min_items: int = 0
    max_items: int = MAX_COUNT

    def __post_init__(self) -> None:
        if self.min_items < 0 or self.max_items < 0:
            raise ValueError("Item counts cannot be negative")


@dataclass(frozen=True)
class StringConstraints:
    """Length bounds and an optional regex for string answers."""

    min_length: int = 0
    max_length: int = MAX_COUNT
    regex: str | None = None
    _pattern: re.Pattern[str] | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.regex is not None:
            try:
                object.__setattr__(self, "_pattern", re.compile(self.regex))
            except re.error as exc:
                raise ValueError(f"Invalid regex pattern {self.regex!r}: {exc}") from exc

    def check(self, value: str) -> None:
        if len(value) < self.min_length:
            raise ValidationFailure(
                f"Value {value!r} does not meet the minimum required length ({self.min_length})"
            )
        if len(value) > self.max_length:
            raise ValidationFailure(
                f"Value {value!r} exceeds the maximum allowed length ({self.max_length})"
            )
        if self._pattern is not None and not self._pattern.search(value):
            raise ValidationFailure(
                f"Value {value!r} does not match regex pattern: {self.regex!r}"
            )


@dataclass(frozen=True)
class NumericConstraints:
    """Inclusive range for one numeric kind.

    Unset bounds default to the kind's representable range.
    """

    kind: NumericKind
    min: int | float | None = None
    max: int | float | None = None

    def __post_init__(self) -> None:
        if self.min is None:
            object.__setattr__(self, "min", self.kind.min)
        if self.max is None:
            object.__setattr__(self, "max", self.kind.max)
        for bound in (self.min, self.max):
            if not self.kind.representable(bound):
                raise ValueError(f"Bound {bound!r} is not a valid {self.kind.value} value")

    def check(self, value: int | float) -> None:
        if value < self.min:
            raise ValidationFailure(f"Value {value} cannot be less than {self.min}")
        if value > self.max:
            raise ValidationFailure(f"Value {value} cannot be greater than {self.max}")


@dataclass(frozen=True)
class SelectConstraints:
    """Selectable items and how many of them may be picked.

    ``select_many`` decides between a single-choice menu and a multi-choice
    menu. ``max_selected`` only caps the multi-choice menu.
    """

    items: tuple[StructuredValue, ...] = ()
    select_many: bool = False
    max_selected: int | None = None

    def __post_init__(self) -> None:
        if self.max_selected is not None and self.max_selected < 1:
            raise ValueError("max_selected must be at least 1")

    def check_selection(self, count: int) -> None:
        if self.max_selected is not None and count > self.max_selected:
            raise ValidationFailure(
                f"{count} items selected but at most {self.max_selected} may be picked"
            )


@dataclass(frozen=True)
class IfCondition:
    """Dependent fields prompted when ``picked`` is selected."""

    picked: StructuredValue
    fields: Mapping[str, Field] = field(default_factory=dict)


@dataclass(frozen=True)
class Conditions:
    """Prompts triggered by a select answer.

    Never evaluated when the selection itself was skipped.
    """

    insert_at_root: bool = False
    if_conditions: tuple[IfCondition, ...] = ()
