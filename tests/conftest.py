"""Pytest configuration and common fixtures for the loading tests."""

import threading
import time

import pytest

import loading.config


class RecordingStream:
    """In-memory sink that remembers every write, in order, with a timestamp.

    The timestamps let tests prove that nothing was written after `end()`
    returned, not just that the final content looks right.
    """

    def __init__(self):
        self.writes: list[str] = []
        self.times: list[float] = []
        self.flushes = 0

    def write(self, s: str) -> int:
        self.writes.append(s)
        self.times.append(time.monotonic())
        return len(s)

    def flush(self) -> None:
        self.flushes += 1

    def getvalue(self) -> str:
        return "".join(self.writes)


class BrokenStream:
    """Sink that fails like a closed pipe on every write."""

    def __init__(self):
        self.attempts = 0

    def write(self, s: str) -> int:
        self.attempts += 1
        raise BrokenPipeError("Broken pipe")

    def flush(self) -> None:
        raise BrokenPipeError("Broken pipe")


def wait_until(predicate, timeout: float = 2.0) -> bool:
    """Poll `predicate` until it is true or `timeout` seconds pass."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


@pytest.fixture
def stream():
    return RecordingStream()


@pytest.fixture
def broken_stream():
    return BrokenStream()


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep tests away from ~/.loading and from the developer's environment."""
    for key in loading.config.DEFAULT_CONFIG:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(loading.config, "LOADING_DIR", tmp_path)
    monkeypatch.setattr(loading.config, "CONFIG_FILE", tmp_path / "config.json")
    yield tmp_path


@pytest.fixture
def no_leaked_threads():
    """Fail the test if it leaves loading threads running."""
    yield
    leftover = [
        t for t in threading.enumerate() if t.name in ("loading-render", "loading-animation")
    ]
    for t in leftover:
        t.join(timeout=1.0)
    assert not [t for t in leftover if t.is_alive()]
