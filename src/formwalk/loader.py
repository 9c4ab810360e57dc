"""Build a ``Schema`` from its YAML form.

Layout::

    fields:
      source_id:
        type: string
        display_name: "Source ID"
        min_length: 3
        regex: "^[a-zA-Z][a-zA-Z0-9-_]*$"
      source_type:
        type: select
        items: [file, kafka]
        then:
          insert_at_root: false
          if:
            - picked: file
              fields:
                path: {type: string}

Constraint keys sit directly on the field next to ``type``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

import yaml

from .constraints import (
    MAX_COUNT,
    CollectionConstraints,
    Conditions,
    IfCondition,
    NumericConstraints,
    SelectConstraints,
    StringConstraints,
)
from .exceptions import SchemaError
from .numeric import NumericKind, numeric_kind_names
from .schema import (
    ArrayKind,
    BoolKind,
    Field,
    FieldKind,
    ItemKind,
    NumberKind,
    ObjectKind,
    Schema,
    SelectKind,
    StringKind,
)
from .values import is_structured_value

logger = logging.getLogger(__name__)

COMMON_KEYS = {"type", "display_name", "prompt", "description", "can_skip"}
STRING_KEYS = {"min_length", "max_length", "regex"}
NUMERIC_KEYS = {"min", "max"}
COLLECTION_KEYS = {"min_items", "max_items"}
SELECT_KEYS = {"items", "select_many", "max_selected", "then"}
OBJECT_KEYS = {"fields"}


def load_schema_file(path: Path | str) -> Schema:
    """Load a prompt schema from a YAML file."""
    schema_path = Path(path)
    try:
        raw = yaml.safe_load(schema_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise SchemaError(f"Unable to read schema: {schema_path}") from exc
    except yaml.YAMLError as exc:
        raise SchemaError(f"Invalid YAML in schema: {schema_path}") from exc

    logger.debug("Loaded schema document from %s", schema_path)
    return schema_from_dict(raw)


def schema_from_dict(raw: Any) -> Schema:
    """Build a schema from already-parsed data."""
    if not isinstance(raw, dict):
        raise SchemaError("root must be a mapping")
    return Schema(fields=_fields(raw.get("fields"), path="fields"))


def _fields(raw: Any, *, path: str) -> dict[str, Field]:
    if not isinstance(raw, dict):
        raise SchemaError("must be a mapping of field keys to fields", path)

    fields: dict[str, Field] = {}
    for key, field_raw in raw.items():
        if not isinstance(key, str) or not key.strip():
            raise SchemaError(f"field key {key!r} must be a non-empty string", path)
        fields[key] = _field(field_raw, path=f"{path}.{key}")
    return fields


def _field(raw: Any, *, path: str) -> Field:
    if not isinstance(raw, dict):
        raise SchemaError("field must be a mapping", path)

    type_name = raw.get("type")
    if not isinstance(type_name, str):
        raise SchemaError("missing 'type'", path)

    kind, accepted = _kind(type_name, raw, path=path)
    unknown = set(raw) - COMMON_KEYS - accepted
    if unknown:
        logger.warning("Ignoring unknown keys at %s: %s", path, ", ".join(sorted(map(str, unknown))))

    can_skip = _as_bool(raw.get("can_skip"), default=False, path=f"{path}.can_skip")
    if isinstance(kind, SelectKind) and not kind.constraints.items:
        if not kind.constraints.select_many and not can_skip:
            raise SchemaError("a select that cannot be skipped needs at least one item", f"{path}.items")

    return Field(
        kind=kind,
        display_name=_optional_str(raw.get("display_name"), path=f"{path}.display_name"),
        prompt=_optional_str(raw.get("prompt"), path=f"{path}.prompt"),
        description=_optional_str(raw.get("description"), path=f"{path}.description") or "",
        can_skip=can_skip,
    )


def _kind(type_name: str, raw: Mapping[str, Any], *, path: str) -> tuple[FieldKind, set[str]]:
    """Return the field kind for ``type_name`` and the keys it consumes."""
    if type_name == "bool":
        return BoolKind(), set()
    if type_name == "select":
        return _select(raw, path=path), SELECT_KEYS
    if type_name == "object":
        return ObjectKind(fields=_fields(raw.get("fields"), path=f"{path}.fields")), OBJECT_KEYS

    if type_name.endswith("[]"):
        item_name = type_name[:-2]
        item, item_keys = _item_kind(item_name, raw, path=path)
        if item is None:
            raise SchemaError(f"unknown array type {type_name!r}", path)
        collection = CollectionConstraints(
            min_items=_as_count(raw.get("min_items"), default=0, path=f"{path}.min_items"),
            max_items=_as_count(raw.get("max_items"), default=MAX_COUNT, path=f"{path}.max_items"),
        )
        return ArrayKind(item=item, collection=collection), item_keys | COLLECTION_KEYS

    item, item_keys = _item_kind(type_name, raw, path=path)
    if item is None:
        known = ", ".join(["bool", "string", "select", "object", *numeric_kind_names()])
        raise SchemaError(f"unknown type {type_name!r} (expected one of: {known})", path)
    return item, item_keys


def _item_kind(type_name: str, raw: Mapping[str, Any], *, path: str) -> tuple[ItemKind | None, set[str]]:
    if type_name == "string":
        regex = _optional_str(raw.get("regex"), path=f"{path}.regex")
        try:
            constraints = StringConstraints(
                min_length=_as_count(raw.get("min_length"), default=0, path=f"{path}.min_length"),
                max_length=_as_count(raw.get("max_length"), default=MAX_COUNT, path=f"{path}.max_length"),
                regex=regex,
            )
        except ValueError as exc:
            raise SchemaError(str(exc), f"{path}.regex") from exc
        return StringKind(constraints=constraints), STRING_KEYS

    try:
        numeric = NumericKind(type_name)
    except ValueError:
        return None, set()

    try:
        constraints = NumericConstraints(
            kind=numeric,
            min=_optional_number(raw.get("min"), path=f"{path}.min"),
            max=_optional_number(raw.get("max"), path=f"{path}.max"),
        )
    except ValueError as exc:
        raise SchemaError(str(exc), path) from exc
    return NumberKind(constraints=constraints), NUMERIC_KEYS


def _select(raw: Mapping[str, Any], *, path: str) -> SelectKind:
    items_raw = raw.get("items", [])
    if not isinstance(items_raw, list):
        raise SchemaError("'items' must be a list", f"{path}.items")
    for index, item in enumerate(items_raw):
        if not is_structured_value(item):
            raise SchemaError("item is not a plain data value", f"{path}.items[{index}]")

    max_selected_raw = raw.get("max_selected")
    max_selected = None
    if max_selected_raw is not None:
        max_selected = _as_count(max_selected_raw, default=0, path=f"{path}.max_selected")

    try:
        constraints = SelectConstraints(
            items=tuple(items_raw),
            select_many=_as_bool(raw.get("select_many"), default=False, path=f"{path}.select_many"),
            max_selected=max_selected,
        )
    except ValueError as exc:
        raise SchemaError(str(exc), f"{path}.max_selected") from exc

    return SelectKind(constraints=constraints, conditions=_conditions(raw.get("then"), path=f"{path}.then"))


def _conditions(raw: Any, *, path: str) -> Conditions:
    if raw is None:
        return Conditions()
    if not isinstance(raw, dict):
        raise SchemaError("must be a mapping", path)

    if_raw = raw.get("if", [])
    if not isinstance(if_raw, list):
        raise SchemaError("'if' must be a list", f"{path}.if")

    if_conditions: list[IfCondition] = []
    for index, entry in enumerate(if_raw):
        entry_path = f"{path}.if[{index}]"
        if not isinstance(entry, dict) or "picked" not in entry:
            raise SchemaError("condition must be a mapping with 'picked'", entry_path)
        if not is_structured_value(entry["picked"]):
            raise SchemaError("'picked' is not a plain data value", f"{entry_path}.picked")
        if_conditions.append(
            IfCondition(
                picked=entry["picked"],
                fields=_fields(entry.get("fields", {}), path=f"{entry_path}.fields"),
            )
        )

    return Conditions(
        insert_at_root=_as_bool(raw.get("insert_at_root"), default=False, path=f"{path}.insert_at_root"),
        if_conditions=tuple(if_conditions),
    )


def _optional_str(value: Any, *, path: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise SchemaError("must be a string", path)
    return value


def _as_bool(value: Any, *, default: bool, path: str) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise SchemaError("must be true or false", path)
    return value


def _as_count(value: Any, *, default: int, path: str) -> int:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise SchemaError("must be a non-negative integer", path)
    return value


def _optional_number(value: Any, *, path: str) -> int | float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SchemaError("must be a number", path)
    return value
