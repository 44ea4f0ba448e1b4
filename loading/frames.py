"""
Spinner frame sequences.

A `Spinner` is an ordered, non-empty list of glyphs plus a cursor. Each call
to `next()` hands back one glyph and advances the cursor, wrapping around
when it runs off the end. Glyphs are plain strings, so a frame can be a
single braille dot or a multi-character decoration like "∙●∙".

The animation thread owns its own copy of a spinner, so the cursor is never
touched by more than one thread.
"""

from __future__ import annotations

from collections.abc import Iterable

from .errors import FrameError

# Braille dots, the classic terminal spinner
DEFAULT_FRAMES: tuple[str, ...] = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")

# Named presets, selectable with LOADING_SPINNER or `loading --spinner NAME`.
SPINNERS: dict[str, tuple[str, ...]] = {
    "dots": DEFAULT_FRAMES,
    "circle": ("◐", "◓", "◑", "◒"),
    "bounce": ("∙∙∙", "●∙∙", "∙●∙", "∙∙●"),
    "line": ("-", "\\", "|", "/"),
    "arrow": ("←", "↖", "↑", "↗", "→", "↘", "↓", "↙"),
}


class Spinner:
    """Cycles through a fixed sequence of frame glyphs."""

    def __init__(self, frames: Iterable[str] = DEFAULT_FRAMES):
        # A bare string is treated as a sequence of single-character frames
        self.frames: list[str] = [str(frame) for frame in frames]
        if not self.frames:
            raise FrameError("A spinner needs at least one frame")
        self.index = 0

    def next(self) -> str:
        """Return the current glyph and advance the cursor.

        Past the last glyph the cursor is reset to 1 and glyph 0 is returned
        directly, so the N+1-th call yields glyph 0 and the one after it
        glyph 1: a regular cycle with no skipped or repeated frames.
        """
        if self.index < len(self.frames):
            frame = self.frames[self.index]
            self.index += 1
            return frame
        self.index = 1
        return self.frames[0]

    def copy(self) -> Spinner:
        """Return an independent spinner with the same frames and cursor."""
        clone = Spinner(self.frames)
        clone.index = self.index
        return clone

    def __len__(self) -> int:
        return len(self.frames)

    def __repr__(self) -> str:
        return f"Spinner(frames={self.frames!r}, index={self.index})"


def get_spinner(name: str) -> Spinner:
    """Build a fresh spinner from one of the named presets in SPINNERS."""
    try:
        return Spinner(SPINNERS[name])
    except KeyError:
        available = ", ".join(sorted(SPINNERS))
        raise FrameError(f"Unknown spinner '{name}'. Available: {available}") from None
