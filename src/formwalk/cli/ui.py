"""Reusable UI helpers for formwalk terminal interactions."""

from __future__ import annotations

from typing import List, Optional, Sequence

import readchar
from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from formwalk.constraints import MAX_COUNT
from formwalk.exceptions import InputChannelError
from formwalk.schema import ArrayKind, Field, NumberKind, ObjectKind, Schema, SelectKind, StringKind
from formwalk.values import display_value


def get_key() -> str:
    """Get a single keypress in a cross-platform way using readchar."""
    key = readchar.readkey()

    if key == readchar.key.UP or key == readchar.key.CTRL_P:
        return "up"
    if key == readchar.key.DOWN or key == readchar.key.CTRL_N:
        return "down"

    if key == readchar.key.ENTER:
        return "enter"

    if key == readchar.key.ESC or key == "\x1b":
        return "escape"

    if key == readchar.key.CTRL_C:
        raise KeyboardInterrupt

    return key


def _resolve_console(console: Optional[Console]) -> Console:
    return console or Console()


def select_with_arrows(
    items: Sequence[str],
    prompt_text: str = "Select an option",
    optional: bool = False,
    console: Console | None = None,
) -> int | None:
    """
    Interactive single choice using arrow keys with Rich Live display.

    Returns the chosen index. Esc returns ``None`` when ``optional``, and is
    ignored otherwise.
    """
    console = _resolve_console(console)
    selected_index = 0
    footer = "Use ↑/↓ to navigate, Enter to select"
    if optional:
        footer += ", Esc to skip"

    def create_selection_panel():
        """Create the selection panel with current selection highlighted."""
        table = Table.grid(padding=(0, 2))
        table.add_column(style="cyan", justify="left", width=3)
        table.add_column(style="white", justify="left")

        for i, label in enumerate(items):
            pointer = "▶" if i == selected_index else " "
            table.add_row(pointer, f"[cyan]{escape(label)}[/cyan]" if i == selected_index else escape(label))

        table.add_row("", "")
        table.add_row("", f"[dim]{footer}[/dim]")

        return Panel(
            table,
            title=f"[bold]{escape(prompt_text)}[/bold]",
            border_style="cyan",
            padding=(1, 2),
        )

    chosen: int | None = None
    try:
        with Live(create_selection_panel(), console=console, transient=True, auto_refresh=False) as live:
            while True:
                key = get_key()
                if key == "up":
                    selected_index = (selected_index - 1) % len(items)
                elif key == "down":
                    selected_index = (selected_index + 1) % len(items)
                elif key == "enter":
                    chosen = selected_index
                    break
                elif key == "escape" and optional:
                    break

                live.update(create_selection_panel(), refresh=True)
    except KeyboardInterrupt as exc:
        console.print("\n[yellow]Selection cancelled[/yellow]")
        raise InputChannelError("interrupted") from exc

    shown = "[dim]skipped[/dim]" if chosen is None else f"[cyan]{escape(items[chosen])}[/cyan]"
    console.print(f"[bold]{escape(prompt_text)}[/bold]: {shown}")
    return chosen


def multi_select_with_arrows(
    items: Sequence[str],
    prompt_text: str = "Select options",
    console: Console | None = None,
) -> List[int] | None:
    """Toggle any number of items with arrow keys + space.

    Returns the chosen indices in menu order (possibly none), or ``None``
    when the menu is cancelled with Esc.
    """
    console = _resolve_console(console)
    selected_indices: set[int] = set()
    cursor_index = 0

    def build_panel():
        table = Table.grid(padding=(0, 2))
        table.add_column(style="cyan", justify="left", width=3)
        table.add_column(style="white", justify="left")

        for i, label in enumerate(items):
            indicator = "[cyan]☑" if i in selected_indices else "[bright_black]☐"
            pointer = "▶" if i == cursor_index else " "
            table.add_row(pointer, f"{indicator} [white]{escape(label)}[/white]")

        table.add_row("", "")
        table.add_row(
            "",
            "[dim]Use ↑/↓ to move, Space to toggle, Enter to confirm, Esc to cancel[/dim]",
        )

        return Panel(table, title=f"[bold]{escape(prompt_text)}[/bold]", border_style="cyan", padding=(1, 2))

    chosen: List[int] | None = None
    try:
        with Live(build_panel(), console=console, transient=True, auto_refresh=False) as live:
            while True:
                key = get_key()
                if key == "up":
                    cursor_index = (cursor_index - 1) % len(items)
                elif key == "down":
                    cursor_index = (cursor_index + 1) % len(items)
                elif key in (" ", readchar.key.SPACE):
                    if cursor_index in selected_indices:
                        selected_indices.remove(cursor_index)
                    else:
                        selected_indices.add(cursor_index)
                elif key == "enter":
                    chosen = sorted(selected_indices)
                    break
                elif key == "escape":
                    break

                live.update(build_panel(), refresh=True)
    except KeyboardInterrupt as exc:
        console.print("\n[yellow]Selection cancelled[/yellow]")
        raise InputChannelError("interrupted") from exc

    if chosen is None:
        shown = "[dim]cancelled[/dim]"
    else:
        shown = ", ".join(f"[cyan]{escape(items[i])}[/cyan]" for i in chosen) or "[dim]none[/dim]"
    console.print(f"[bold]{escape(prompt_text)}[/bold]: {shown}")
    return chosen


def _constraint_summary(field: Field) -> str:
    kind = field.kind
    parts: list[str] = []
    if isinstance(kind, ArrayKind):
        collection = kind.collection
        if collection.min_items:
            parts.append(f"min_items={collection.min_items}")
        if collection.max_items != MAX_COUNT:
            parts.append(f"max_items={collection.max_items}")
        kind = kind.item

    if isinstance(kind, StringKind):
        constraints = kind.constraints
        if constraints.min_length:
            parts.append(f"min_length={constraints.min_length}")
        if constraints.max_length != MAX_COUNT:
            parts.append(f"max_length={constraints.max_length}")
        if constraints.regex:
            parts.append(f"regex={constraints.regex!r}")
    elif isinstance(kind, NumberKind):
        numeric = kind.numeric
        if kind.constraints.min != numeric.min:
            parts.append(f"min={kind.constraints.min}")
        if kind.constraints.max != numeric.max:
            parts.append(f"max={kind.constraints.max}")
    elif isinstance(kind, SelectKind):
        items = ", ".join(display_value(item) for item in kind.constraints.items)
        parts.append(f"items=[{items}]")
        if kind.constraints.select_many:
            parts.append("select_many")
        if kind.constraints.max_selected is not None:
            parts.append(f"max_selected={kind.constraints.max_selected}")

    return ", ".join(parts)


def _add_fields(tree: Tree, fields) -> None:
    for key, field in fields.items():
        summary = _constraint_summary(field)
        skip = " [yellow]optional[/yellow]" if field.can_skip else ""
        line = f"[white]{escape(key)}[/white] [cyan]{escape(field.kind.type_name)}[/cyan]{skip}"
        if summary:
            line += f" [bright_black]({escape(summary)})[/bright_black]"
        branch = tree.add(line)

        kind = field.kind
        if isinstance(kind, ObjectKind):
            _add_fields(branch, kind.fields)
        elif isinstance(kind, SelectKind):
            placement = "root" if kind.conditions.insert_at_root else "nested"
            for condition in kind.conditions.if_conditions:
                picked = escape(display_value(condition.picked))
                condition_branch = branch.add(f"[magenta]if {picked}[/magenta] [dim]({placement})[/dim]")
                _add_fields(condition_branch, condition.fields)


def render_schema_tree(schema: Schema, title: str) -> Tree:
    """Render the schema's fields as a Rich tree."""
    tree = Tree(f"[cyan]{escape(title)}[/cyan]", guide_style="grey50")
    _add_fields(tree, schema.fields)
    return tree


__all__ = [
    "get_key",
    "multi_select_with_arrows",
    "render_schema_tree",
    "select_with_arrows",
]
