import io

import pytest
from rich.console import Console

from terminal import (CLEAR_SCREEN, CURSOR_HOME, HIDE_CURSOR, SHOW_CURSOR, TerminalSession,
                      TerminalSink, detect_ansi_support)

from conftest import make_sink


@pytest.mark.parametrize("interactive, env, platform, legacy, expected", [
    (True, {}, "linux", False, True),
    (False, {}, "linux", False, False),
    (False, {"TERM": "xterm-256color"}, "linux", False, True),
    (False, {"TERM": "dumb"}, "linux", False, False),
    (False, {"COLORTERM": "truecolor"}, "darwin", False, True),
    (True, {}, "win32", False, False),
    (True, {"TERM": "xterm"}, "win32", True, False),
    (True, {"TERM": "xterm"}, "win32", False, True),
    (True, {"WT_SESSION": "1"}, "win32", True, True),
])
def test_detect_ansi_support(interactive, env, platform, legacy, expected):
    assert detect_ansi_support(interactive, env, platform, legacy_console=legacy) is expected


def test_sink_detects_non_interactive_stream():
    console = Console(file=io.StringIO(), force_terminal=False, color_system=None)
    sink = TerminalSink(console=console, env={}, platform="linux")
    assert not sink.is_interactive
    assert not sink.supports_ansi
    assert not sink.supports_color


def test_sink_capabilities():
    sink, _ = make_sink(color_system="truecolor")
    assert sink.is_interactive
    assert sink.supports_color
    assert sink.supports_truecolor

    sink, _ = make_sink(color_system="256")
    assert sink.supports_color
    assert not sink.supports_truecolor


def test_sink_write_and_size():
    sink, buffer = make_sink(width=100, height=30)
    sink.write("a")
    sink.write("b\n")
    assert buffer.getvalue() == "ab\n"
    assert sink.size() == (100, 30)


def test_session_hides_and_always_shows_cursor():
    sink, buffer = make_sink()
    with pytest.raises(KeyboardInterrupt):
        with TerminalSession(sink) as session:
            assert session.cursor_hidden
            raise KeyboardInterrupt

    assert not session.cursor_hidden
    assert buffer.getvalue() == HIDE_CURSOR + SHOW_CURSOR


def test_session_without_hide():
    sink, buffer = make_sink()
    with TerminalSession(sink, hide_cursor=False) as session:
        assert not session.cursor_hidden
    assert buffer.getvalue() == SHOW_CURSOR


def test_clear_screen_and_move_cursor():
    sink, buffer = make_sink()
    session = TerminalSession(sink)
    session.clear_screen()
    session.move_cursor(3, 4)
    assert buffer.getvalue() == CLEAR_SCREEN + CURSOR_HOME + "\033[3;4H"


def test_clear_screen_falls_back_to_newlines():
    sink, buffer = make_sink(color_system=None, ansi=False, height=12)
    with TerminalSession(sink) as session:
        session.clear_screen()
        session.move_cursor(1, 1)
    assert buffer.getvalue() == "\n" * 12
