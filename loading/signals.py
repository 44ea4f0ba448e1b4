"""
Messages and the channel that carries them to the render thread.

There is exactly one channel per running engine. Two kinds of producers feed
it: the `Loading` handle (text updates, commits, shutdown) and the animation
thread (frame ticks). The render thread is the only consumer. Because every
display change travels through this one FIFO, the order in which a producer
sends is the order in which its changes reach the terminal; no other state
is shared between threads.

Closing the channel is how teardown propagates. The render thread closes it
when it handles `Shutdown`; from then on every `send()` returns False, which
is the animation thread's cue to stop.

Why dataclasses instead of tuples or string tags?
  Each signal kind carries different data, and the renderer dispatches on
  the type with `isinstance`. Frozen dataclasses make each kind a distinct,
  immutable type with named fields, so a typo in a field name fails loudly
  and an unknown signal can be rejected outright.

Why a close flag on top of `queue.SimpleQueue`?
  A Python queue has no notion of its reader going away; `put()` always
  succeeds. The explicit close flag gives producers the "receiver is gone"
  answer they need, and `wait_closed()` lets the animation thread sleep on
  that same flag so shutdown wakes it at once instead of after an interval.
"""

from __future__ import annotations

import queue
import threading
from dataclasses import dataclass, field
from typing import Union

from .status import Status


@dataclass(frozen=True)
class FrameTick:
    """The animation advanced to a new frame glyph."""

    glyph: str


@dataclass(frozen=True)
class TextUpdate:
    """Replace the text shown next to the spinner."""

    text: str


@dataclass(frozen=True)
class Commit:
    """Finish the current line with a status glyph and start a new one."""

    status: Status
    text: str


@dataclass(frozen=True)
class Shutdown:
    """Clear the line, stop rendering, then set `ack`."""

    ack: threading.Event = field(default_factory=threading.Event)


Signal = Union[FrameTick, TextUpdate, Commit, Shutdown]


class SignalChannel:
    """Unbounded multi-producer, single-consumer FIFO of signals."""

    def __init__(self):
        self._queue: queue.SimpleQueue[Signal] = queue.SimpleQueue()
        self._closed = threading.Event()
        # Makes "check closed, then enqueue" atomic against close()
        self._send_lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def send(self, signal: Signal) -> bool:
        """Enqueue a signal. Returns False instead of raising once closed."""
        with self._send_lock:
            if self._closed.is_set():
                return False
            self._queue.put(signal)
            return True

    def recv(self) -> Signal:
        """Block until the next signal arrives."""
        return self._queue.get()

    def close(self) -> list[Signal]:
        """Refuse further sends. Called by the consumer when it stops.

        Returns whatever was still queued, oldest first.
        """
        with self._send_lock:
            self._closed.set()
        pending = []
        while True:
            try:
                pending.append(self._queue.get_nowait())
            except queue.Empty:
                return pending

    def wait_closed(self, timeout: float | None = None) -> bool:
        """Sleep up to `timeout` seconds, waking early if the channel closes.

        Returns True if the channel is closed.
        """
        return self._closed.wait(timeout)
