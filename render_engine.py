#!/usr/bin/env python3
"""
ASCII Art Render Engine
Static and animated display of text art on a terminal sink.

Only one animation runs at a time. The engine moves between two states,
idle and running, and each run is represented by an AnimationToken whose
stop event doubles as the frame timer: frame delays are waits on that
event, so stop_animation() wakes a sleeping loop immediately.
"""

import math
import random
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from colors import (Color, DEFAULT_COLOR, PULSE_COLORS, RESET, color_or_default,
                    colorize, resolve_scheme, truecolor_code, available_colors)
from errors import AnimationBusyError
from logger import get_logger
from terminal import TerminalSession, TerminalSink

MATRIX_SYMBOLS = "01"
MATRIX_FILL = 0.7
WAVE_AMPLITUDE = 3
WAVE_FREQUENCY = 0.3

log = get_logger("render")


class AnimationMode(Enum):
    STATIC = "static"
    TYPEWRITER = "typewriter"
    FADE_IN = "fadein"
    SLIDE_IN = "slidein"
    MATRIX = "matrix"
    PULSE = "pulse"
    WAVE = "wave"


ANIMATION_DESCRIPTIONS: Dict[AnimationMode, str] = {
    AnimationMode.TYPEWRITER: "Typewriter effect (character by character)",
    AnimationMode.FADE_IN: "Fade in effect (gradual appearance)",
    AnimationMode.SLIDE_IN: "Slide in from specified direction",
    AnimationMode.MATRIX: "Matrix digital rain effect",
    AnimationMode.PULSE: "Pulsing color effect",
    AnimationMode.WAVE: "Wavy movement effect",
}

SLIDE_DIRECTIONS = {
    "right": "right",
    "left": "left",
    "top": "top",
    "up": "top",
    "bottom": "bottom",
    "down": "bottom",
}


def resolve_animation(name: Union[str, AnimationMode, None]) -> AnimationMode:
    """Map an animation name to a mode; unknown names fall back to static."""
    if isinstance(name, AnimationMode):
        return name
    if not name:
        return AnimationMode.STATIC
    normalized = name.strip().lower().replace("-", "").replace("_", "")
    try:
        return AnimationMode(normalized)
    except ValueError:
        log.warning("Unknown animation '%s', using static display", name)
        return AnimationMode.STATIC


def resolve_direction(name: Optional[str]) -> str:
    direction = SLIDE_DIRECTIONS.get((name or "right").strip().lower())
    if direction is None:
        log.warning("Unknown slide direction '%s', using right", name)
        return "right"
    return direction


def adjust_width(content: str, max_width: int) -> str:
    """Cut lines longer than ``max_width`` to ``max_width - 3`` chars plus '...'."""
    if max_width <= 0:
        return content
    lines = []
    for line in content.split("\n"):
        if len(line) <= max_width:
            lines.append(line)
        else:
            lines.append(line[:max(0, max_width - 3)] + "...")
    return "\n".join(lines)


@dataclass(frozen=True)
class DisplayConfig:
    """Options for one render call."""
    colors: Optional[Tuple[Color, ...]] = None
    animation: AnimationMode = AnimationMode.STATIC
    speed: int = 100
    direction: str = "right"
    cycles: Optional[int] = None
    duration_ms: int = 5000
    steps: int = 10
    frames: int = 20
    line_delay_ms: int = 100

    def __post_init__(self):
        if self.colors is not None and not self.colors:
            raise ValueError("DisplayConfig colors must not be empty")
        if self.speed <= 0:
            raise ValueError(f"speed must be positive, got {self.speed}")

    @property
    def palette(self) -> Tuple[Color, ...]:
        """The chosen colors, or the default color when none was chosen."""
        return self.colors or (DEFAULT_COLOR,)

    @property
    def primary_color(self) -> Color:
        return self.palette[0]

    @classmethod
    def build(cls, color: Optional[str] = None, color_scheme: Optional[str] = None,
              animation: Union[str, AnimationMode, None] = None, speed: int = 100,
              **params) -> "DisplayConfig":
        """Build a config from user-facing names, correcting bad ones with a warning.

        A named scheme other than ``default`` wins over a single color.
        """
        colors: Optional[Sequence[Color]] = None
        if color_scheme and color_scheme.strip().lower() != "default":
            colors = resolve_scheme(color_scheme)
            if colors is None:
                log.warning("Unknown color scheme '%s', using color '%s'",
                            color_scheme, color or DEFAULT_COLOR.value)
        if not colors and color and color != "default":
            colors = (color_or_default(color),)

        if "direction" in params:
            params["direction"] = resolve_direction(params["direction"])
        return cls(colors=tuple(colors) if colors else None, animation=resolve_animation(animation),
                   speed=speed, **params)


class AnimationToken:
    """One running render: a stop flag plus a completion flag."""

    def __init__(self, mode: AnimationMode):
        self.mode = mode
        self._stop = threading.Event()
        self._done = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._stop.is_set()

    @property
    def running(self) -> bool:
        return not self._stop.is_set()

    def cancel(self):
        self._stop.set()

    def sleep(self, ms: float) -> bool:
        """Wait ``ms`` milliseconds; returns False if stopped meanwhile."""
        if ms > 0:
            return not self._stop.wait(ms / 1000.0)
        return self.running

    def finish(self):
        self._done.set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self._done.wait(timeout)


class RenderEngine:
    """Turns art text plus a DisplayConfig into terminal output."""

    def __init__(self, sink: Optional[TerminalSink] = None,
                 rng: Optional[random.Random] = None,
                 clock: Callable[[], float] = time.monotonic,
                 preempt_timeout: float = 5.0):
        self.sink = sink or TerminalSink()
        self._rng = rng or random.Random()
        self._clock = clock
        self._preempt_timeout = preempt_timeout
        self._lock = threading.Lock()
        self._token: Optional[AnimationToken] = None

    # State

    @property
    def state(self) -> str:
        return "running" if self._token is not None else "idle"

    def is_running(self) -> bool:
        return self._token is not None

    def stop_animation(self) -> bool:
        """Ask the running animation to stop. Returns False when idle."""
        token = self._token
        if token is None:
            return False
        token.cancel()
        return True

    def _acquire(self, mode: AnimationMode, preempt: bool) -> AnimationToken:
        with self._lock:
            current = self._token
            if current is None:
                self._token = AnimationToken(mode)
                return self._token
            if not preempt:
                raise AnimationBusyError(f"Animation '{current.mode.value}' is already running")
            current.cancel()

        if not current.wait(self._preempt_timeout):
            raise AnimationBusyError(f"Animation '{current.mode.value}' did not stop in time")

        with self._lock:
            if self._token is not None:
                raise AnimationBusyError(f"Animation '{self._token.mode.value}' is already running")
            self._token = AnimationToken(mode)
            return self._token

    def _release(self, token: AnimationToken):
        with self._lock:
            if self._token is token:
                self._token = None
        token.finish()

    # Entry point

    def render(self, content: str, config: Optional[DisplayConfig] = None,
               preempt: bool = False) -> bool:
        """Render ``content``. Returns True if it ran to completion, False if stopped."""
        config = config or DisplayConfig()
        token = self._acquire(config.animation, preempt)
        try:
            handler = self._handlers().get(config.animation, self._render_static)
            handler(content, config, token)
            return not token.cancelled
        finally:
            self._release(token)

    def _handlers(self):
        return {
            AnimationMode.STATIC: self._render_static,
            AnimationMode.TYPEWRITER: self._animate_typewriter,
            AnimationMode.FADE_IN: self._animate_fade_in,
            AnimationMode.SLIDE_IN: self._animate_slide_in,
            AnimationMode.MATRIX: self._animate_matrix_rain,
            AnimationMode.PULSE: self._animate_pulse,
            AnimationMode.WAVE: self._animate_wave,
        }

    # Helpers

    def _paint(self, text: str, color: Color) -> str:
        return colorize(text, color, enabled=self.sink.supports_color)

    def _draw_lines(self, lines: Sequence[str], color: Color):
        self.sink.write("".join(self._paint(line, color) + "\n" for line in lines))

    @staticmethod
    def _split(content: str) -> Tuple[List[str], int]:
        lines = content.split("\n")
        return lines, max(len(line) for line in lines)

    # Static

    def _render_static(self, content: str, config: DisplayConfig, token: AnimationToken):
        """One color for the block, or palette colors line by line."""
        palette = config.palette
        if len(palette) > 1:
            lines = content.split("\n")
            self.sink.write("".join(
                self._paint(line, palette[i % len(palette)]) + "\n"
                for i, line in enumerate(lines)))
        else:
            self.sink.write(self._paint(content, config.primary_color) + "\n")

    # Animations

    def _animate_typewriter(self, content: str, config: DisplayConfig, token: AnimationToken):
        lines = content.split("\n")
        with TerminalSession(self.sink):
            for i, line in enumerate(lines):
                if not token.running:
                    break
                for char in line:
                    if not token.running:
                        break
                    self.sink.write(self._paint(char, config.primary_color))
                    if char != " " and not token.sleep(config.speed):
                        break
                if i < len(lines) - 1 and token.running:
                    self.sink.write("\n")
                    token.sleep(config.line_delay_ms)
            self.sink.write("\n")

    def _animate_fade_in(self, content: str, config: DisplayConfig, token: AnimationToken):
        lines, max_width = self._split(content)
        steps = max(1, config.steps)
        truecolor = self.sink.supports_truecolor

        with TerminalSession(self.sink) as session:
            for step in range(1, steps + 1):
                if not token.running:
                    break
                session.clear_screen()
                session.move_cursor(1, 1)

                visible = (max_width * step) // steps
                if truecolor:
                    gray = (255 * step) // steps
                    code = truecolor_code(gray, gray, gray)
                    self.sink.write("".join(
                        (f"{code}{line[:visible]}{RESET}" if line[:visible] else "") + "\n"
                        for line in lines))
                else:
                    self._draw_lines([line[:visible] for line in lines], config.primary_color)

                token.sleep(config.speed)

    def slide_frame(self, lines: Sequence[str], max_width: int, direction: str, step: int) -> List[str]:
        """Lines visible at ``step`` (0-based) of a slide-in."""
        if direction == "left":
            return [" " * max(0, max_width - step - 1) + line[max(0, len(line) - step - 1):]
                    for line in lines]
        if direction == "top":
            return list(lines[:step + 1])
        if direction == "bottom":
            return list(lines[max(0, len(lines) - step - 1):])
        return [line[:step + 1] for line in lines]

    def _animate_slide_in(self, content: str, config: DisplayConfig, token: AnimationToken):
        lines, max_width = self._split(content)
        direction = resolve_direction(config.direction)
        steps = len(lines) if direction in ("top", "bottom") else max_width

        with TerminalSession(self.sink) as session:
            for step in range(steps):
                if not token.running:
                    break
                session.clear_screen()
                session.move_cursor(1, 1)
                self._draw_lines(self.slide_frame(lines, max_width, direction, step),
                                 config.primary_color)
                token.sleep(config.speed)

    def matrix_frame(self, height: int, width: int, symbols: str = MATRIX_SYMBOLS) -> List[str]:
        """One grid of random symbols, about 70% filled."""
        rows = []
        for _ in range(height):
            rows.append("".join(
                self._rng.choice(symbols) if self._rng.random() < MATRIX_FILL else " "
                for _ in range(width)))
        return rows

    def _animate_matrix_rain(self, content: str, config: DisplayConfig, token: AnimationToken):
        lines, max_width = self._split(content)
        duration = config.duration_ms / 1000.0

        with TerminalSession(self.sink) as session:
            start = self._clock()
            while token.running and (self._clock() - start) < duration:
                session.clear_screen()
                session.move_cursor(1, 1)
                self._draw_lines(self.matrix_frame(len(lines), max_width), config.primary_color)
                token.sleep(config.speed)

            if token.running:
                session.clear_screen()
                session.move_cursor(1, 1)
                self.sink.write(self._paint(content, config.primary_color) + "\n")

    def _animate_pulse(self, content: str, config: DisplayConfig, token: AnimationToken):
        palette = config.colors or PULSE_COLORS
        cycles = config.cycles if config.cycles is not None else 3

        with TerminalSession(self.sink) as session:
            for _ in range(cycles):
                for color in palette:
                    if not token.running:
                        return
                    session.clear_screen()
                    session.move_cursor(1, 1)
                    self.sink.write(self._paint(content, color) + "\n")
                    token.sleep(config.speed)

    @staticmethod
    def wave_offset(frame: int, line_index: int) -> int:
        return max(0, math.floor(math.sin((frame + line_index) * WAVE_FREQUENCY) * WAVE_AMPLITUDE))

    def _animate_wave(self, content: str, config: DisplayConfig, token: AnimationToken):
        lines = content.split("\n")
        cycles = config.cycles if config.cycles is not None else 2

        with TerminalSession(self.sink) as session:
            for _ in range(cycles):
                for frame in range(config.frames):
                    if not token.running:
                        return
                    session.clear_screen()
                    session.move_cursor(1, 1)
                    self._draw_lines([" " * self.wave_offset(frame, i) + line
                                      for i, line in enumerate(lines)],
                                     config.primary_color)
                    token.sleep(config.speed)

    # Introspection

    def get_animation_types(self) -> List[str]:
        return [mode.value for mode in ANIMATION_DESCRIPTIONS]

    def get_available_colors(self) -> List[str]:
        return available_colors()

    def get_terminal_size(self) -> Tuple[int, int]:
        return self.sink.size()
