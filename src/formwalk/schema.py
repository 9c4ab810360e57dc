"""Schema model: fields and the closed set of field kinds."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Mapping, Union

from .constraints import (
    CollectionConstraints,
    Conditions,
    NoConstraints,
    NumericConstraints,
    SelectConstraints,
    StringConstraints,
)
from .numeric import NumericKind
from .values import StructuredValue, title_case

if TYPE_CHECKING:
    from .prompter import Prompter


@dataclass(frozen=True)
class BoolKind:
    """A yes/no question."""

    constraints: NoConstraints = field(default_factory=NoConstraints)

    @property
    def type_name(self) -> str:
        return "bool"


@dataclass(frozen=True)
class StringKind:
    """Free text checked against length bounds and an optional regex."""

    constraints: StringConstraints = field(default_factory=StringConstraints)

    @property
    def type_name(self) -> str:
        return "string"


@dataclass(frozen=True)
class NumberKind:
    """A number of one width/sign, checked against an inclusive range."""

    constraints: NumericConstraints

    @property
    def numeric(self) -> NumericKind:
        return self.constraints.kind

    @property
    def type_name(self) -> str:
        return self.constraints.kind.value


@dataclass(frozen=True)
class SelectKind:
    """A menu over constant items, with optional conditional follow-ups."""

    constraints: SelectConstraints = field(default_factory=SelectConstraints)
    conditions: Conditions = field(default_factory=Conditions)

    @property
    def type_name(self) -> str:
        return "select"


@dataclass(frozen=True)
class ObjectKind:
    """A nested group of fields collected into one object."""

    fields: Mapping[str, Field] = field(default_factory=dict)

    @property
    def type_name(self) -> str:
        return "object"


ItemKind = Union[StringKind, NumberKind]


@dataclass(frozen=True)
class ArrayKind:
    """A list of primitive answers bounded by an item count."""

    item: ItemKind
    collection: CollectionConstraints = field(default_factory=CollectionConstraints)

    @property
    def type_name(self) -> str:
        return f"{self.item.type_name}[]"


FieldKind = Union[BoolKind, StringKind, NumberKind, SelectKind, ObjectKind, ArrayKind]


@dataclass(frozen=True)
class Field:
    """One named question in a schema."""

    kind: FieldKind
    display_name: str | None = None
    prompt: str | None = None
    description: str = ""
    can_skip: bool = False

    def label(self, key: str) -> str:
        """Text shown when asking: prompt, else display name, else the titled key."""
        return self.prompt or self.display_name or title_case(key)


@dataclass(frozen=True)
class Schema:
    """Ordered fields to prompt, in declaration order."""

    fields: Mapping[str, Field] = field(default_factory=dict)

    def prompt(self, prompter: Prompter, quiet: bool = False) -> dict[str, StructuredValue]:
        """Collect one answer per field; see ``formwalk.engine.traverse``."""
        from .engine import traverse

        return traverse(self, prompter, quiet=quiet)
