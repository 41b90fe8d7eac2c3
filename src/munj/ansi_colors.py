"""ANSI coloring for rendered scalar tokens."""
from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import TextIO

__all__ = ["ColorMode", "PLAIN", "detect_color_mode", "style", "paint"]

CSI = "\x1b["

FG_GREEN = 32
FG_BLUE = 34
FG_CYAN = 36
FG_GRAY = 90

# token role -> foreground color
TOKEN_COLORS = {
    "string": FG_GREEN,
    "number": FG_CYAN,
    "literal": FG_GRAY,
    "key": FG_BLUE,
    "handle": FG_GREEN,
}


@dataclass(frozen=True)
class ColorMode:
    enabled: bool


PLAIN = ColorMode(enabled=False)


def detect_color_mode(mode: str, stream: TextIO | None = None) -> ColorMode:
    """
    Decide whether rendered output gets colored.

    Args:
        mode: "auto", "always", or "never"
        stream: stream the output goes to (stdout by default)

    Returns:
        ColorMode; "auto" enables colors only for a tty without NO_COLOR.
    """
    m = (mode or "auto").lower().strip()
    if m == "never":
        return PLAIN
    if m == "always":
        return ColorMode(enabled=True)

    stream = stream if stream is not None else sys.stdout
    isatty = getattr(stream, "isatty", None)
    if isatty is None or not isatty():
        return PLAIN
    if os.getenv("NO_COLOR"):
        return PLAIN
    return ColorMode(enabled=True)


def style(text: str, *, mode: ColorMode, fg: int | None = None) -> str:
    if not mode.enabled or fg is None:
        return text
    return f"{CSI}{fg}m{text}{CSI}0m"


def paint(token: str, role: str, mode: ColorMode) -> str:
    """Color a rendered token according to its role (see TOKEN_COLORS)."""
    return style(token, mode=mode, fg=TOKEN_COLORS.get(role))
