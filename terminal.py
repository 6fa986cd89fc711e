#!/usr/bin/env python3
"""
Terminal output for mdsaad
Capability detection and a scoped session that owns cursor state
"""

import os
import sys
from typing import Mapping, Optional, TextIO, Tuple

from rich.console import Console

CLEAR_SCREEN = "\033[2J"
CURSOR_HOME = "\033[H"
HIDE_CURSOR = "\033[?25l"
SHOW_CURSOR = "\033[?25h"

DEFAULT_ROWS = 25


def detect_ansi_support(is_interactive: bool, env: Mapping[str, str],
                        platform: str, legacy_console: bool = False) -> bool:
    """Decide whether control sequences can be written to the output.

    Legacy Windows consoles without a modern terminal host never get them.
    Elsewhere a color/xterm TERM, a truecolor COLORTERM or an interactive
    stream is enough.
    """
    if platform == "win32" and not env.get("WT_SESSION"):
        if legacy_console or not env.get("TERM"):
            return False

    term = env.get("TERM", "")
    colorterm = env.get("COLORTERM", "")
    return (
        "color" in term
        or "ansi" in term
        or "xterm" in term
        or "truecolor" in colorterm
        or "24bit" in colorterm
        or is_interactive
    )


class TerminalSink:
    """Writer plus capability queries for one output stream."""

    def __init__(self, stream: Optional[TextIO] = None, console: Optional[Console] = None,
                 env: Optional[Mapping[str, str]] = None, platform: Optional[str] = None,
                 force_ansi: Optional[bool] = None):
        if console is None:
            console = Console(file=stream or sys.stdout, highlight=False)
        self.console = console
        self.stream = console.file
        self._env = os.environ if env is None else env
        self._platform = platform or sys.platform
        if force_ansi is None:
            self.supports_ansi = detect_ansi_support(
                self.is_interactive, self._env, self._platform,
                legacy_console=bool(getattr(console, "legacy_windows", False)))
        else:
            self.supports_ansi = force_ansi

    @property
    def is_interactive(self) -> bool:
        return self.console.is_terminal

    @property
    def supports_color(self) -> bool:
        return self.console.color_system is not None and not self.console.no_color

    @property
    def supports_truecolor(self) -> bool:
        return self.supports_color and self.console.color_system == "truecolor"

    def size(self) -> Tuple[int, int]:
        """(columns, rows) of the terminal, with sane defaults off a TTY."""
        width, height = self.console.size
        return (width or 80, height or DEFAULT_ROWS)

    def write(self, text: str):
        self.stream.write(text)
        self.flush()

    def flush(self):
        self.stream.flush()


class TerminalSession:
    """Owns the cursor for the duration of a render call.

    Use as a context manager: the cursor is hidden on entry (if requested)
    and always shown again on exit, whatever the exit path.
    """

    def __init__(self, sink: TerminalSink, hide_cursor: bool = True):
        self.sink = sink
        self._hide_on_enter = hide_cursor
        self.cursor_hidden = False

    def __enter__(self) -> "TerminalSession":
        if self._hide_on_enter:
            self.hide_cursor()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.show_cursor()
        return False

    def hide_cursor(self):
        if self.sink.supports_ansi:
            self.sink.write(HIDE_CURSOR)
        self.cursor_hidden = True

    def show_cursor(self):
        if self.sink.supports_ansi:
            self.sink.write(SHOW_CURSOR)
        self.cursor_hidden = False

    def clear_screen(self):
        """Clear and home the cursor, or push old output away with newlines."""
        if self.sink.supports_ansi:
            self.sink.write(CLEAR_SCREEN + CURSOR_HOME)
        else:
            _, rows = self.sink.size()
            self.sink.write("\n" * rows)

    def move_cursor(self, row: int, col: int):
        if self.sink.supports_ansi:
            self.sink.write(f"\033[{row};{col}H")
