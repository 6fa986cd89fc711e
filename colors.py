#!/usr/bin/env python3
"""
Color table for mdsaad
Closed set of supported colors, their ANSI codes and the named color schemes
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

from logger import get_logger

RESET = "\033[0m"

log = get_logger("colors")


class Color(Enum):
    BLACK = "black"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"
    MAGENTA = "magenta"
    CYAN = "cyan"
    WHITE = "white"
    GRAY = "gray"
    GREY = "grey"
    BRIGHT_RED = "bright_red"
    BRIGHT_GREEN = "bright_green"
    BRIGHT_YELLOW = "bright_yellow"
    BRIGHT_BLUE = "bright_blue"
    BRIGHT_MAGENTA = "bright_magenta"
    BRIGHT_CYAN = "bright_cyan"
    BRIGHT_WHITE = "bright_white"
    DIM = "dim"


DEFAULT_COLOR = Color.WHITE

# SGR parameters per color; every Color member must appear here.
ANSI_CODES: Dict[Color, str] = {
    Color.BLACK: "30",
    Color.RED: "31",
    Color.GREEN: "32",
    Color.YELLOW: "33",
    Color.BLUE: "34",
    Color.MAGENTA: "35",
    Color.CYAN: "36",
    Color.WHITE: "37",
    Color.GRAY: "90",
    Color.GREY: "90",
    Color.BRIGHT_RED: "91",
    Color.BRIGHT_GREEN: "92",
    Color.BRIGHT_YELLOW: "93",
    Color.BRIGHT_BLUE: "94",
    Color.BRIGHT_MAGENTA: "95",
    Color.BRIGHT_CYAN: "96",
    Color.BRIGHT_WHITE: "97",
    Color.DIM: "2",
}

# Rich style names for previewing colors on a Rich console.
RICH_STYLES: Dict[Color, str] = {
    Color.BLACK: "black",
    Color.RED: "red",
    Color.GREEN: "green",
    Color.YELLOW: "yellow",
    Color.BLUE: "blue",
    Color.MAGENTA: "magenta",
    Color.CYAN: "cyan",
    Color.WHITE: "white",
    Color.GRAY: "bright_black",
    Color.GREY: "bright_black",
    Color.BRIGHT_RED: "bright_red",
    Color.BRIGHT_GREEN: "bright_green",
    Color.BRIGHT_YELLOW: "bright_yellow",
    Color.BRIGHT_BLUE: "bright_blue",
    Color.BRIGHT_MAGENTA: "bright_magenta",
    Color.BRIGHT_CYAN: "bright_cyan",
    Color.BRIGHT_WHITE: "bright_white",
    Color.DIM: "dim",
}

COLOR_SCHEMES: Dict[str, Tuple[Color, ...]] = {
    "default": (Color.WHITE,),
    "rainbow": (Color.RED, Color.YELLOW, Color.GREEN, Color.CYAN, Color.BLUE, Color.MAGENTA),
    "fire": (Color.RED, Color.BRIGHT_RED, Color.YELLOW, Color.BRIGHT_YELLOW),
    "ocean": (Color.BLUE, Color.BRIGHT_BLUE, Color.CYAN, Color.BRIGHT_CYAN),
    "forest": (Color.GREEN, Color.BRIGHT_GREEN, Color.YELLOW, Color.BRIGHT_YELLOW),
    "sunset": (Color.RED, Color.YELLOW, Color.MAGENTA, Color.BRIGHT_YELLOW),
    "monochrome": (Color.WHITE, Color.GRAY, Color.BRIGHT_WHITE, Color.DIM),
}

PULSE_COLORS: Tuple[Color, ...] = (Color.WHITE, Color.YELLOW, Color.CYAN, Color.MAGENTA)

_CAMEL_BOUNDARY = re.compile(r'(?<=[a-z])(?=[A-Z])')


@dataclass(frozen=True)
class UnknownColor:
    """A color name that is not in the table."""
    name: str


def _normalize(name: str) -> str:
    name = _CAMEL_BOUNDARY.sub("_", name.strip())
    return name.replace("-", "_").replace(" ", "_").lower()


def resolve_color(name: Union[str, Color, None]) -> Union[Color, UnknownColor]:
    """Map a user-supplied name (``brightRed``, ``bright-red``, ``bright_red``) to a Color."""
    if isinstance(name, Color):
        return name
    if not name:
        return UnknownColor(name or "")
    try:
        return Color(_normalize(name))
    except ValueError:
        return UnknownColor(name)


def color_or_default(name: Union[str, Color, None], default: Color = DEFAULT_COLOR) -> Color:
    """Resolve a color name, substituting ``default`` with a warning when unknown."""
    resolved = resolve_color(name)
    if isinstance(resolved, UnknownColor):
        log.warning("Invalid color '%s', using %s", resolved.name, default.value)
        return default
    return resolved


def resolve_scheme(name: Optional[str]) -> Optional[Tuple[Color, ...]]:
    """Palette for a named color scheme, or None if the name is unknown."""
    if not name:
        return None
    return COLOR_SCHEMES.get(name.strip().lower())


def ansi_code(color: Color) -> str:
    return f"\033[{ANSI_CODES[color]}m"


def truecolor_code(red: int, green: int, blue: int) -> str:
    return f"\033[38;2;{red};{green};{blue}m"


def colorize(text: str, color: Color, enabled: bool = True) -> str:
    """Wrap ``text`` in the color's SGR code. Empty text stays empty."""
    if not enabled or not text:
        return text
    return f"{ansi_code(color)}{text}{RESET}"


def available_colors() -> List[str]:
    return [color.value for color in Color]
