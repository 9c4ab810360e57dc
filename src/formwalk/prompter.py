"""The operator input capability consumed by the traversal engine.

The engine never reads a terminal itself. Everything it asks goes through an
object satisfying ``Prompter``; the terminal implementation lives in
``formwalk.cli.terminal`` and tests drive the engine with a scripted one.
"""

from __future__ import annotations

from typing import Callable, Protocol, Sequence, TypeVar, runtime_checkable

T = TypeVar("T")

Converter = Callable[[str], T]


@runtime_checkable
class Prompter(Protocol):
    """Blocking questions asked of the operator.

    Exceptions raised by these methods are input channel failures: the
    engine lets them propagate and the traversal ends without a result.
    """

    def ask_text(self, label: str, convert: Converter[T], allow_empty: bool) -> T | None:
        """Ask for a line of text and convert it.

        ``convert`` raises ``ValidationFailure`` for unacceptable answers;
        the prompter shows the message and asks again. Returns ``None``
        exactly when ``allow_empty`` is set and the answer was blank;
        ``convert`` is not called for that answer.
        """
        ...

    def ask_yes_no(self, label: str, optional: bool = False) -> bool | None:
        """Ask a yes/no question; ``None`` only when ``optional`` and blank."""
        ...

    def ask_single(self, label: str, items: Sequence[str], optional: bool) -> int | None:
        """Pick one item by index; ``None`` only when ``optional`` and no choice made."""
        ...

    def ask_multi(self, label: str, items: Sequence[str]) -> list[int] | None:
        """Pick any number of items by index; ``None`` when cancelled."""
        ...

    def confirm(self, label: str) -> bool:
        """Ask the operator to confirm an action."""
        ...

    def show_heading(self, text: str | None) -> None:
        """Announce a field; ``None`` means a plain separator."""
        ...

    def show_description(self, line: str) -> None:
        """Show one line of a field's help text."""
        ...

    def show_error(self, message: str) -> None:
        """Report a problem the operator has to act on."""
        ...
