"""Background thread that feeds frame ticks into the signal channel."""

from __future__ import annotations

import logging
import threading

from .frames import Spinner
from .signals import FrameTick, SignalChannel

logger = logging.getLogger(__name__)


class AnimationTask:
    """Advances a spinner every `interval` seconds and sends each frame.

    There is no stop flag. The loop ends as soon as the channel is closed,
    which the render thread does when it shuts down, so the ticker can never
    outlive the renderer it is feeding.
    """

    def __init__(self, channel: SignalChannel, spinner: Spinner, interval: float):
        self.channel = channel
        self.spinner = spinner
        self.interval = interval
        self.thread = threading.Thread(target=self.run, name="loading-animation", daemon=True)

    def start(self) -> None:
        self.thread.start()

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout)

    def run(self) -> None:
        # wait_closed() doubles as the sleep, so closure wakes us immediately
        while not self.channel.wait_closed(self.interval):
            if not self.channel.send(FrameTick(self.spinner.next())):
                break
        logger.debug("Animation thread stopped")
