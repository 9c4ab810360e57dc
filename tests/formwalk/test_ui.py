from __future__ import annotations

import io

import pytest
from rich.console import Console

from formwalk.cli import ui
from formwalk.exceptions import InputChannelError
from formwalk.loader import schema_from_dict


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=100)


def _press(monkeypatch, *keys):
    sequence = iter(keys)

    def fake_key():
        key = next(sequence)
        if key == "ctrl-c":
            raise KeyboardInterrupt
        return key

    monkeypatch.setattr(ui, "get_key", fake_key)


def test_select_moves_and_wraps(monkeypatch, console):
    _press(monkeypatch, "up", "enter")
    assert ui.select_with_arrows(["a", "b", "c"], "Pick", console=console) == 2


def test_select_escape_skips_when_optional(monkeypatch, console):
    _press(monkeypatch, "escape")
    assert ui.select_with_arrows(["a", "b"], "Pick", optional=True, console=console) is None


def test_select_escape_ignored_when_mandatory(monkeypatch, console):
    _press(monkeypatch, "escape", "down", "enter")
    assert ui.select_with_arrows(["a", "b"], "Pick", optional=False, console=console) == 1


def test_select_interrupt_is_input_failure(monkeypatch, console):
    _press(monkeypatch, "ctrl-c")
    with pytest.raises(InputChannelError):
        ui.select_with_arrows(["a"], "Pick", console=console)


def test_multi_select_toggles(monkeypatch, console):
    _press(monkeypatch, " ", "down", "down", " ", "up", "up", " ", " ", "enter")
    assert ui.multi_select_with_arrows(["a", "b", "c"], "Pick", console=console) == [0, 2]


def test_multi_select_allows_empty_choice(monkeypatch, console):
    _press(monkeypatch, "enter")
    assert ui.multi_select_with_arrows(["a", "b"], "Pick", console=console) == []


def test_multi_select_escape_cancels(monkeypatch, console):
    _press(monkeypatch, " ", "escape")
    assert ui.multi_select_with_arrows(["a", "b"], "Pick", console=console) is None


def test_render_schema_tree(console):
    schema = schema_from_dict(
        {
            "fields": {
                "port": {"type": "u16", "min": 1024, "can_skip": True},
                "mode": {
                    "type": "select",
                    "items": ["x", "y"],
                    "then": {"insert_at_root": True, "if": [{"picked": "x", "fields": {"path": {"type": "string"}}}]},
                },
            }
        }
    )

    console.print(ui.render_schema_tree(schema, "demo"))
    text = console.file.getvalue()

    assert "port" in text and "u16" in text and "min=1024" in text and "optional" in text
    assert "if x" in text and "(root)" in text and "path" in text
