"""
The render thread: sole owner of the output stream and the display state.

Rendering is a small state machine. Until some text has been set the engine
is *idle* and frame ticks draw nothing. Once text exists, every tick redraws
`<frame> <text>` in place. Committing a line prints the status glyph and a
newline, then drops back to idle so the committed text is never redrawn on
the fresh line.

Every redraw is a single write of `ESC[2K` (erase the whole line) plus
`ESC[0G` (cursor to column 0) plus the new content, followed by a flush. A
signal is fully written before the next one is read, so a redraw is never
interleaved with another.

Stream errors (a closed pipe, a closed file) are swallowed per write. The
renderer keeps consuming signals and the output is lost.

Why one write per redraw?
  The clear sequence and the new content go out in a single `write()` call
  followed by one `flush()`. A terminal never sees an erased line without
  its replacement, which keeps the redraw free of flicker even on slow
  pipes.

Why is the renderer runnable without a thread?
  `Renderer.run()` is a plain blocking loop and `RenderTask` only puts it on
  a thread. Tests queue signals ahead of time and call `run()` directly,
  which makes every expected write sequence exact.
"""

from __future__ import annotations

import logging
import threading
from typing import Protocol

from .signals import Commit, FrameTick, Shutdown, Signal, SignalChannel, TextUpdate

logger = logging.getLogger(__name__)

CLEAR_LINE = "\x1b[2K\x1b[0G"


class Writable(Protocol):
    def write(self, s: str, /) -> object: ...
    def flush(self) -> object: ...


class Renderer:
    """Applies signals to the display state and writes the result."""

    def __init__(self, channel: SignalChannel, stream: Writable, frame: str = ""):
        self.channel = channel
        self.stream = stream
        self.frame = frame
        # None means idle: nothing to draw next to the spinner yet
        self.text: str | None = None

    def _write(self, content: str = "") -> None:
        try:
            self.stream.write(CLEAR_LINE + content)
            self.stream.flush()
        except (OSError, ValueError) as e:
            logger.debug("Dropped status line output: %s", e)

    def handle(self, signal: Signal) -> bool:
        """Apply one signal. Returns False once rendering should stop."""
        if isinstance(signal, FrameTick):
            self.frame = signal.glyph
            if self.text is not None:
                self._write(f"{self.frame} {self.text}")
        elif isinstance(signal, TextUpdate):
            self._write(f"{self.frame} {signal.text}")
            self.text = signal.text
        elif isinstance(signal, Commit):
            self._write(f"{signal.status.glyph} {signal.text}\n")
            self.text = None
        elif isinstance(signal, Shutdown):
            logger.debug("Render thread shutting down")
            self._write()
            # Close before acknowledging so nothing can be queued behind us.
            # A concurrent end() may already have queued its own Shutdown.
            for pending in self.channel.close():
                if isinstance(pending, Shutdown):
                    pending.ack.set()
            signal.ack.set()
            return False
        else:
            raise TypeError(f"Unknown signal: {signal!r}")
        return True

    def run(self) -> None:
        """Consume signals in arrival order until a Shutdown is handled."""
        while self.handle(self.channel.recv()):
            pass


class RenderTask:
    """Runs a `Renderer` on its own daemon thread."""

    def __init__(self, renderer: Renderer):
        self.renderer = renderer
        self.thread = threading.Thread(target=renderer.run, name="loading-render", daemon=True)

    def start(self) -> None:
        self.thread.start()

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout)
