"""Exception hierarchy for schema-driven prompting."""

from __future__ import annotations


class FormwalkError(Exception):
    """Base exception for formwalk errors."""
    pass


class ValidationFailure(FormwalkError):
    """An answer failed to parse or violated a constraint.

    Raised by value converters and constraint checks. Prompters catch it,
    show ``message`` to the operator and ask the same question again; it
    never escapes a single field resolution.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class SchemaError(FormwalkError):
    """The schema cannot be loaded or cannot be prompted as declared."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        if path:
            super().__init__(f"{path}: {message}")
        else:
            super().__init__(message)


class InputChannelError(FormwalkError):
    """The operator input channel failed (closed stream, abort, interrupt).

    Never retried. It propagates through every enclosing resolution and
    aborts the whole traversal.
    """

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Input channel failed: {reason}")


class ConfigError(FormwalkError):
    """Raised when formwalk configuration is invalid."""
