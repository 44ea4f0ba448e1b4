"""
Final status glyphs for committed lines.

When a line is committed it is redrawn with one of four colored glyphs in
place of the spinner frame. The mapping is fixed: colors are raw ANSI SGR
codes, each followed by a reset so the text after the glyph keeps the
terminal's default style.
"""

from enum import Enum

RESET = "\x1b[0m"


class Status(Enum):
    """Outcome of a committed line. The value is (SGR color code, glyph)."""

    SUCCESS = ("\x1b[32m", "✔")
    FAIL = ("\x1b[31m", "✖")
    WARN = ("\x1b[33m", "⚠")
    INFO = ("\x1b[34m", "ℹ")

    @property
    def glyph(self) -> str:
        """The colored glyph, ready to write to a terminal."""
        color, symbol = self.value
        return f"{color}{symbol}{RESET}"


def format_status(status: Status) -> str:
    return status.glyph
