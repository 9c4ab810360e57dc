"""Schema-driven interactive data collection.

A ``Schema`` of typed fields is walked by ``traverse``, which asks an
operator for each answer through a ``Prompter``, validates it and returns
one structured result document.
"""

from __future__ import annotations

from .constraints import (
    CollectionConstraints,
    Conditions,
    IfCondition,
    NoConstraints,
    NumericConstraints,
    SelectConstraints,
    StringConstraints,
)
from .engine import apply_conditions, collect, resolve_field, traverse
from .exceptions import (
    ConfigError,
    FormwalkError,
    InputChannelError,
    SchemaError,
    ValidationFailure,
)
from .loader import load_schema_file, schema_from_dict
from .numeric import NumericKind
from .prompter import Prompter
from .schema import (
    ArrayKind,
    BoolKind,
    Field,
    FieldKind,
    NumberKind,
    ObjectKind,
    Schema,
    SelectKind,
    StringKind,
)
from .values import StructuredValue, display_value, values_equal

__all__ = [
    "ArrayKind",
    "BoolKind",
    "CollectionConstraints",
    "Conditions",
    "ConfigError",
    "Field",
    "FieldKind",
    "FormwalkError",
    "IfCondition",
    "InputChannelError",
    "NoConstraints",
    "NumberKind",
    "NumericConstraints",
    "NumericKind",
    "ObjectKind",
    "Prompter",
    "Schema",
    "SchemaError",
    "SelectConstraints",
    "SelectKind",
    "StringConstraints",
    "StringKind",
    "StructuredValue",
    "ValidationFailure",
    "apply_conditions",
    "collect",
    "display_value",
    "load_schema_file",
    "resolve_field",
    "schema_from_dict",
    "traverse",
    "values_equal",
]
