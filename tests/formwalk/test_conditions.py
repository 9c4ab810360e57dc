"""Tests for select-triggered conditional fields."""

from __future__ import annotations

from formwalk.constraints import Conditions, IfCondition, SelectConstraints
from formwalk.engine import apply_conditions, traverse
from formwalk.schema import Field, ObjectKind, Schema, SelectKind, StringKind


def _select(*conditions: IfCondition, insert_at_root: bool = False, select_many: bool = False) -> SelectKind:
    return SelectKind(
        constraints=SelectConstraints(items=("a", "b"), select_many=select_many),
        conditions=Conditions(insert_at_root=insert_at_root, if_conditions=conditions),
    )


def _when(picked, *keys: str) -> IfCondition:
    return IfCondition(picked=picked, fields={key: Field(kind=StringKind()) for key in keys})


def test_nested_branch_replaces_selected_value(scripted):
    schema = Schema(fields={"choice": Field(kind=_select(_when("a", "x")))})

    result = traverse(schema, scripted([0, "answer"]), quiet=True)

    assert result == {"choice": {"x": "answer"}}


def test_root_branch_keeps_selected_value(scripted):
    schema = Schema(fields={"choice": Field(kind=_select(_when("a", "x"), insert_at_root=True))})

    result = traverse(schema, scripted([0, "answer"]), quiet=True)

    assert result == {"choice": "a", "x": "answer"}


def test_root_branch_inside_object_lands_at_top_level(scripted):
    inner = ObjectKind(fields={"choice": Field(kind=_select(_when("a", "x"), insert_at_root=True))})
    schema = Schema(fields={"outer": Field(kind=inner)})

    result = traverse(schema, scripted([0, "answer"]), quiet=True)

    assert result == {"x": "answer", "outer": {"choice": "a"}}


def test_unmatched_selection_stands(scripted):
    schema = Schema(fields={"choice": Field(kind=_select(_when("a", "x")))})
    prompter = scripted([1])

    result = traverse(schema, prompter, quiet=True)

    assert result == {"choice": "b"}
    assert prompter.answers == []


def test_first_matching_condition_wins(scripted):
    schema = Schema(fields={"choice": Field(kind=_select(_when("a", "first"), _when("a", "second")))})
    prompter = scripted([0, "one", "never asked"])

    result = traverse(schema, prompter, quiet=True)

    assert result == {"choice": {"first": "one"}}
    assert prompter.labels == ["Choice", "First"]


def test_multi_select_applies_conditions_per_value(scripted):
    schema = Schema(fields={"choice": Field(kind=_select(_when("b", "x"), select_many=True))})

    result = traverse(schema, scripted([[0, 1], "answer"]), quiet=True)

    assert result == {"choice": ["a", {"x": "answer"}]}


def test_dependent_fields_get_their_own_headings(scripted):
    kind = _select(IfCondition(picked="a", fields={"x": Field(kind=StringKind(), display_name="Extra")}))
    schema = Schema(fields={"choice": Field(kind=kind, display_name="Choice")})
    prompter = scripted([0, "answer"])

    traverse(schema, prompter)

    assert prompter.headings == ["Choice", "Extra"]


def test_picked_values_compare_structurally(scripted):
    conditions = Conditions(if_conditions=(_when(1, "x"),))

    assert apply_conditions(conditions, True, scripted([]), quiet=True, result={}) is None
    assert apply_conditions(conditions, 1.0, scripted([]), quiet=True, result={}) is None
    assert apply_conditions(conditions, 1, scripted(["y"]), quiet=True, result={}) == {"x": "y"}


def test_no_conditions_returns_none(scripted):
    assert apply_conditions(Conditions(), "a", scripted([]), quiet=True, result={}) is None
