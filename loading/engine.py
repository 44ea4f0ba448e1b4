"""
The `Loading` handle: the public face of the spinner engine.

A handle starts life as an unstarted builder. Calling `start()` creates the
signal channel, the render thread and the animation thread together; from
then on the handle only holds the producer side of the channel and every
command is a non-blocking send.

Typical use:

    loading = Loading().frames(["◐", "◓", "◑", "◒"]).start()
    for i in range(100):
        loading.text(f"Loading {i}")
        do_work(i)
    loading.success("OK")
    loading.end()

or, with guaranteed cleanup:

    with Loading() as loading:
        loading.text("Working")
        ...

Lifecycle rules:
  - `start()` runs at most once; a second call raises AlreadyStartedError.
  - Commands before `start()` raise NotStartedError; there is no channel
    to send them into yet.
  - `start()` may be raced from several threads; exactly one wins, the others
    get AlreadyStartedError.
  - `end()` blocks until the render thread has drawn everything queued
    before it and cleared the line. Nothing is written to the stream after
    `end()` returns. If the render thread never drains the channel, `end()`
    waits forever; there is no timeout.
  - A started handle that is garbage-collected without `end()` sends a
    non-blocking Shutdown from a `weakref.finalize` callback, so both
    threads still stop and the line is cleared.

Why two threads and a queue instead of a lock around the stream?
  The animation ticks on its own schedule while the caller updates text on
  theirs. Funnelling both into one FIFO read by a single writer means the
  display state has exactly one owner, and the order of the queue is the
  order of the output. Nothing else needs to be synchronised.

Why does the finalizer not hold the handle?
  `weakref.finalize` keeps strong references to its callback and arguments.
  If those reached back to `self`, the handle could never be collected and
  the finalizer would never fire. It only captures the channel, which the
  threads share anyway.
"""

from __future__ import annotations

import logging
import sys
import threading
import weakref
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from .animation import AnimationTask
from .config import get_interval, get_spinner_name, get_stream_name
from .errors import AlreadyStartedError, NotStartedError
from .frames import Spinner, get_spinner
from .render import Renderer, RenderTask, Writable
from .signals import Commit, Shutdown, Signal, SignalChannel, TextUpdate
from .status import Status

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 0.08


def resolve_stream(target: str | Writable | None) -> Writable:
    """Turn "stdout"/"stderr"/None into the live sys stream; pass sinks through."""
    if target is None or target == "stdout":
        return sys.stdout
    if target == "stderr":
        return sys.stderr
    if isinstance(target, str):
        raise ValueError(f"Unknown stream '{target}', expected 'stdout' or 'stderr'")
    return target


class Loading:
    """Animated status line with commit-and-continue support."""

    def __init__(
        self,
        spinner: Spinner | Iterable[str] | None = None,
        interval: float | None = None,
        stream: str | Writable | None = None,
    ):
        self._spinner = self._as_spinner(spinner) if spinner is not None else Spinner()
        self._interval = DEFAULT_INTERVAL if interval is None else self._check_interval(interval)
        self._stream = stream
        self._channel: SignalChannel | None = None
        self._render_task: RenderTask | None = None
        self._animation_task: AnimationTask | None = None
        self._finalizer: weakref.finalize | None = None
        self._start_lock = threading.Lock()

    # --- Unified constructors (build and start in one go) ---

    @classmethod
    def default(cls) -> Loading:
        """Start a spinner configured from env vars / the config file."""
        return cls(get_spinner(get_spinner_name()), get_interval(), get_stream_name()).start()

    @classmethod
    def with_stdout(cls, spinner: Spinner | Iterable[str] | None = None) -> Loading:
        return cls(spinner, stream="stdout").start()

    @classmethod
    def with_stderr(cls, spinner: Spinner | Iterable[str] | None = None) -> Loading:
        return cls(spinner, stream="stderr").start()

    # --- Builder (only before start) ---

    def frames(self, frames: Spinner | Iterable[str]) -> Loading:
        """Replace the spinner frames."""
        self._ensure_not_started()
        self._spinner = self._as_spinner(frames)
        return self

    def interval(self, seconds: float) -> Loading:
        """Set the time between frames. Default: 0.08 seconds."""
        self._ensure_not_started()
        self._interval = self._check_interval(seconds)
        return self

    def stream(self, target: str | Writable) -> Loading:
        """Write to "stdout", "stderr", or any object with write() and flush()."""
        self._ensure_not_started()
        self._stream = target
        return self

    @staticmethod
    def _as_spinner(frames: Spinner | Iterable[str]) -> Spinner:
        # Each engine gets its own cursor, even when handed a shared Spinner
        if isinstance(frames, Spinner):
            return frames.copy()
        return Spinner(frames)

    @staticmethod
    def _check_interval(seconds: float) -> float:
        if seconds <= 0:
            raise ValueError(f"Interval must be positive, got {seconds}")
        return seconds

    def _ensure_not_started(self) -> None:
        if self._channel is not None:
            raise AlreadyStartedError("The loading engine is already started")

    # --- Lifecycle ---

    @property
    def started(self) -> bool:
        return self._channel is not None

    def start(self) -> Loading:
        """Spin up the render and animation threads."""
        with self._start_lock:
            if self._channel is not None:
                raise AlreadyStartedError("`start()` can only be called once")

            stream = resolve_stream(self._stream)
            channel = SignalChannel()
            # The first frame seeds the renderer so text shows a glyph right away;
            # the animation thread continues from the second one.
            spinner = self._spinner.copy()
            renderer = Renderer(channel, stream, frame=spinner.next())

            self._render_task = RenderTask(renderer)
            self._animation_task = AnimationTask(channel, spinner, self._interval)
            # Must not reference self, or the handle could never be collected
            self._finalizer = weakref.finalize(self, channel.send, Shutdown())
            self._channel = channel
            self._render_task.start()
            self._animation_task.start()
        logger.debug(
            "Loading started (%d frames, interval %.3fs)", len(spinner), self._interval
        )
        return self

    def end(self) -> None:
        """Clear the line and stop both threads. Blocks until done."""
        channel = self._require_channel()
        if self._finalizer is not None:
            self._finalizer.detach()
        shutdown = Shutdown()
        if channel.send(shutdown):
            shutdown.ack.wait()
        # Already closed: an earlier end() finished the handshake

        if self._render_task is not None:
            self._render_task.join()
        if self._animation_task is not None:
            self._animation_task.join()
        logger.debug("Loading ended")

    shutdown = end

    def __enter__(self) -> Loading:
        if self._channel is None:
            self.start()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.end()

    # --- Commands ---

    def _require_channel(self) -> SignalChannel:
        if self._channel is None:
            raise NotStartedError("Please call `start()` first")
        return self._channel

    def _send(self, signal: Signal) -> None:
        # A False return means the render thread is gone; nothing to do
        self._require_channel().send(signal)

    def text(self, text: object) -> None:
        """Change the text shown next to the spinner."""
        self._send(TextUpdate(str(text)))

    def success(self, text: object) -> None:
        """Save the current line as 'success' and keep loading on the next line."""
        self._send(Commit(Status.SUCCESS, str(text)))

    def fail(self, text: object) -> None:
        """Save the current line as 'fail' and keep loading on the next line."""
        self._send(Commit(Status.FAIL, str(text)))

    def warn(self, text: object) -> None:
        """Save the current line as 'warn' and keep loading on the next line."""
        self._send(Commit(Status.WARN, str(text)))

    def info(self, text: object) -> None:
        """Save the current line as 'info' and keep loading on the next line."""
        self._send(Commit(Status.INFO, str(text)))

    def __repr__(self) -> str:
        state = "started" if self.started else "idle"
        return f"<Loading {state} interval={self._interval}>"


@contextmanager
def loading(
    spinner: Spinner | Iterable[str] | None = None,
    interval: float | None = None,
    stream: str | Writable | None = None,
) -> Iterator[Loading]:
    """Context manager for spinner usage."""
    handle = Loading(spinner, interval, stream).start()
    try:
        yield handle
    finally:
        handle.end()
