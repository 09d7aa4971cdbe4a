"""Terminal session infrastructure for CLI applications."""

from cellterm.cli.core.terminal import Terminal, TerminalSize

__all__ = ["Terminal", "TerminalSize"]
