"""Schema traversal: ask, validate and assemble one result document.

The traversal is strictly sequential. A single result mapping is created by
``traverse`` and passed down through every resolution; conditional branches
that insert at the root write straight into it. Nothing here catches
prompter exceptions: an input failure anywhere aborts the whole traversal.
"""

from __future__ import annotations

import copy
import logging
from typing import assert_never

from .constraints import CollectionConstraints, Conditions
from .exceptions import ValidationFailure
from .prompter import Converter, Prompter
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
from .values import StructuredValue, display_value, values_equal

logger = logging.getLogger(__name__)

SKIP_MESSAGE = "Did you mean to skip this field entirely?"
SKIP_CONFIRMATION = "Skip this field?"

Result = dict[str, StructuredValue]


def traverse(schema: Schema, prompter: Prompter, quiet: bool = False) -> Result:
    """Prompt every field of ``schema`` in order and return the answers.

    The returned mapping holds one entry per top-level field key, plus any
    keys inserted at the root by conditional branches.
    """
    result: Result = {}
    for key, field in schema.fields.items():
        value = resolve_field(field, key, prompter, quiet=quiet, suppress_title=False, result=result)
        result[key] = value
    logger.debug("Traversal complete with %d keys", len(result))
    return result


def resolve_field(
    field: Field,
    key: str,
    prompter: Prompter,
    *,
    quiet: bool,
    suppress_title: bool,
    result: Result,
) -> StructuredValue:
    """Resolve one field definition to exactly one value."""
    if not quiet:
        if not suppress_title:
            prompter.show_heading(field.display_name)
        for line in field.description.splitlines():
            prompter.show_description(line)

    value = resolve_kind(
        field.kind,
        field.label(key),
        prompter,
        can_skip=field.can_skip,
        quiet=quiet,
        result=result,
    )
    logger.debug("Resolved %s (%s)", key, field.kind.type_name)
    return value


def resolve_kind(
    kind: FieldKind,
    label: str,
    prompter: Prompter,
    *,
    can_skip: bool,
    quiet: bool,
    result: Result,
) -> StructuredValue:
    if isinstance(kind, BoolKind):
        return prompter.ask_yes_no(label, optional=can_skip)
    if isinstance(kind, (StringKind, NumberKind)):
        return prompter.ask_text(label, item_converter(kind), allow_empty=can_skip)
    if isinstance(kind, SelectKind):
        return resolve_select(kind, label, prompter, can_skip=can_skip, quiet=quiet, result=result)
    if isinstance(kind, ObjectKind):
        return resolve_object(kind, prompter, quiet=quiet, result=result)
    if isinstance(kind, ArrayKind):
        return collect(kind.item, kind.collection, label, can_skip, prompter)
    assert_never(kind)


def item_converter(kind: ItemKind) -> Converter[StructuredValue]:
    """Build the parse-and-check function for one primitive answer."""
    if isinstance(kind, StringKind):
        constraints = kind.constraints

        def convert_string(raw: str) -> StructuredValue:
            constraints.check(raw)
            return raw

        return convert_string

    if isinstance(kind, NumberKind):
        numeric = kind.numeric
        bounds = kind.constraints

        def convert_number(raw: str) -> StructuredValue:
            value = numeric.parse(raw)
            bounds.check(value)
            return value

        return convert_number

    assert_never(kind)


def resolve_object(kind: ObjectKind, prompter: Prompter, *, quiet: bool, result: Result) -> StructuredValue:
    nested: Result = {}
    for key, child in kind.fields.items():
        nested[key] = resolve_field(child, key, prompter, quiet=quiet, suppress_title=True, result=result)
    return nested


def resolve_select(
    kind: SelectKind,
    label: str,
    prompter: Prompter,
    *,
    can_skip: bool,
    quiet: bool,
    result: Result,
) -> StructuredValue:
    """Ask a select menu and apply its conditional branches.

    A skipped or cancelled menu resolves to ``None`` without looking at the
    conditions.
    """
    items = kind.constraints.items
    labels = [display_value(item) for item in items]

    if kind.constraints.select_many:
        indices = _ask_multi(kind, label, labels, prompter)
        if indices is None:
            return None

        values: list[StructuredValue] = []
        for index in indices:
            selected = copy.deepcopy(items[index])
            override = apply_conditions(kind.conditions, selected, prompter, quiet=quiet, result=result)
            values.append(selected if override is None else override)
        return values

    if not items:
        # the loader refuses this for mandatory fields; hand-built schemas get null
        if not can_skip:
            logger.warning("Select field %r has no items to choose from", label)
        return None

    index = prompter.ask_single(label, labels, optional=can_skip)
    if index is None:
        return None

    selected = copy.deepcopy(items[index])
    override = apply_conditions(kind.conditions, selected, prompter, quiet=quiet, result=result)
    return selected if override is None else override


def _ask_multi(kind: SelectKind, label: str, labels: list[str], prompter: Prompter) -> list[int] | None:
    if not labels:
        return []
    while True:
        indices = prompter.ask_multi(label, labels)
        if indices is None:
            return None
        unique = sorted(set(indices))
        try:
            kind.constraints.check_selection(len(unique))
        except ValidationFailure as exc:
            prompter.show_error(exc.message)
            continue
        return unique


def apply_conditions(
    conditions: Conditions,
    selected: StructuredValue,
    prompter: Prompter,
    *,
    quiet: bool,
    result: Result,
) -> StructuredValue | None:
    """Prompt the first branch whose ``picked`` value equals ``selected``.

    Returns the nested object that replaces the selected value, or ``None``
    when no branch fired or the branch inserted its answers at the root.
    """
    for condition in conditions.if_conditions:
        if not values_equal(condition.picked, selected):
            continue

        logger.debug("Condition on %r fired (insert_at_root=%s)", selected, conditions.insert_at_root)
        nested: Result = {}
        for key, field in condition.fields.items():
            value = resolve_field(field, key, prompter, quiet=quiet, suppress_title=False, result=result)
            if conditions.insert_at_root:
                result[key] = value
            else:
                nested[key] = value

        if conditions.insert_at_root:
            return None
        return nested

    return None


def collect(
    item: ItemKind,
    constraints: CollectionConstraints,
    label: str,
    can_skip: bool,
    prompter: Prompter,
) -> list[StructuredValue]:
    """Ask for items one at a time, at most ``max_items`` times.

    A blank answer means "stop adding". Below ``min_items`` the shortfall is
    reported instead: a skippable field may then be abandoned after
    confirmation, while a non-skippable one keeps asking with blank answers
    refused. Every question, blank or not, uses one of the ``max_items``
    turns, so the result can fall short of ``min_items`` once they run out.
    """
    convert = item_converter(item)
    required = _require_value(convert)

    values: list[StructuredValue] = []
    mandatory = False
    for _ in range(constraints.max_items):
        if mandatory:
            value = prompter.ask_text(label, required, allow_empty=False)
        else:
            value = prompter.ask_text(label, convert, allow_empty=True)

        if value is not None:
            values.append(value)
            if len(values) >= constraints.min_items:
                mandatory = False
            continue

        if len(values) >= constraints.min_items:
            break

        message = f"This field requires a minimum of {constraints.min_items} values to be provided."
        if can_skip:
            message = f"{message} {SKIP_MESSAGE}"
        prompter.show_error(message)

        if can_skip:
            if prompter.confirm(SKIP_CONFIRMATION):
                logger.debug("Collection %r abandoned with %d items", label, len(values))
                break
        else:
            mandatory = True

    return values


def _require_value(convert: Converter[StructuredValue]) -> Converter[StructuredValue]:
    def convert_required(raw: str) -> StructuredValue:
        if not raw.strip():
            raise ValidationFailure("A value is required here")
        return convert(raw)

    return convert_required
