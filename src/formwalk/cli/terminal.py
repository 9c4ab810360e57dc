"""Terminal implementation of the ``Prompter`` capability.

Text questions go through ``typer.prompt``: converters raising
``ValidationFailure`` are surfaced as ``typer.BadParameter`` so click prints
the message and asks again. Menus use the arrow-key helpers in
``formwalk.cli.ui``.
"""

from __future__ import annotations

from typing import List, Sequence, TypeVar

import typer
from rich.console import Console
from rich.markup import escape

from formwalk.exceptions import InputChannelError, ValidationFailure
from formwalk.prompter import Converter

from .ui import multi_select_with_arrows, select_with_arrows

T = TypeVar("T")

_YES = {"y", "yes", "true"}
_NO = {"n", "no", "false"}


class TerminalPrompter:
    """Ask questions on the controlling terminal."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def ask_text(self, label: str, convert: Converter[T], allow_empty: bool) -> T | None:
        def value_proc(raw: str) -> T | None:
            if allow_empty and not raw.strip():
                return None
            try:
                return convert(raw)
            except ValidationFailure as exc:
                raise typer.BadParameter(exc.message) from exc

        try:
            return typer.prompt(
                label,
                default="" if allow_empty else None,
                show_default=False,
                value_proc=value_proc,
            )
        except typer.Abort as exc:
            raise InputChannelError("input aborted") from exc

    def ask_yes_no(self, label: str, optional: bool = False) -> bool | None:
        try:
            if not optional:
                return typer.confirm(label)
            return typer.prompt(
                f"{label} [y/n]",
                default="",
                show_default=False,
                value_proc=_parse_optional_flag,
            )
        except typer.Abort as exc:
            raise InputChannelError("input aborted") from exc

    def ask_single(self, label: str, items: Sequence[str], optional: bool) -> int | None:
        return select_with_arrows(items, prompt_text=label, optional=optional, console=self.console)

    def ask_multi(self, label: str, items: Sequence[str]) -> List[int] | None:
        return multi_select_with_arrows(items, prompt_text=label, console=self.console)

    def confirm(self, label: str) -> bool:
        try:
            return typer.confirm(label, default=False)
        except typer.Abort as exc:
            raise InputChannelError("input aborted") from exc

    def show_heading(self, text: str | None) -> None:
        if text:
            self.console.print(f"\n[bold underline]{escape(text)}[/bold underline]:")
        else:
            self.console.print()

    def show_description(self, line: str) -> None:
        self.console.print(f"  [dim italic]{escape(line)}[/dim italic]")

    def show_error(self, message: str) -> None:
        self.console.print(f"[red italic]{escape(message)}[/red italic]")


def _parse_optional_flag(raw: str) -> bool | None:
    answer = raw.strip().lower()
    if not answer:
        return None
    if answer in _YES:
        return True
    if answer in _NO:
        return False
    raise typer.BadParameter(f"Value {raw!r} is not yes or no")
