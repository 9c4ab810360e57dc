from __future__ import annotations

from typing import Any, Iterable, Sequence

import pytest

from formwalk.exceptions import InputChannelError, ValidationFailure


class ScriptedPrompter:
    """Replays a fixed answer sequence and records every interaction.

    Text answers are raw strings run through the engine's converter the way
    a real prompter would: rejected answers are recorded in ``errors`` and
    the next scripted answer is tried for the same question. Running out of
    answers behaves like a closed input channel.
    """

    def __init__(self, answers: Iterable[Any] = ()):
        self.answers = list(answers)
        self.asked: list[tuple[str, str]] = []
        self.errors: list[str] = []
        self.headings: list[str | None] = []
        self.descriptions: list[str] = []
        self.menus: list[list[str]] = []

    def _next(self, method: str, label: str) -> Any:
        self.asked.append((method, label))
        if not self.answers:
            raise InputChannelError("script exhausted")
        return self.answers.pop(0)

    def ask_text(self, label, convert, allow_empty):
        while True:
            raw = self._next("text", label)
            if allow_empty and not raw.strip():
                return None
            try:
                return convert(raw)
            except ValidationFailure as exc:
                self.errors.append(exc.message)

    def ask_yes_no(self, label, optional=False):
        answer = self._next("yes_no", label)
        assert answer is not None or optional, "blank answer to a mandatory yes/no"
        return answer

    def ask_single(self, label, items: Sequence[str], optional):
        self.menus.append(list(items))
        answer = self._next("single", label)
        assert answer is not None or optional, "no choice for a mandatory menu"
        return answer

    def ask_multi(self, label, items: Sequence[str]):
        self.menus.append(list(items))
        return self._next("multi", label)

    def confirm(self, label):
        return self._next("confirm", label)

    def show_heading(self, text):
        self.headings.append(text)

    def show_description(self, line):
        self.descriptions.append(line)

    def show_error(self, message):
        self.errors.append(message)

    @property
    def labels(self) -> list[str]:
        return [label for _, label in self.asked]


@pytest.fixture
def scripted():
    """Factory for scripted prompters."""
    return ScriptedPrompter
