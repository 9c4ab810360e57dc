"""CLI helpers exposed for other modules."""

from .terminal import TerminalPrompter
from .ui import multi_select_with_arrows, render_schema_tree, select_with_arrows

__all__ = ["TerminalPrompter", "multi_select_with_arrows", "render_schema_tree", "select_with_arrows"]
