"""
Exceptions raised by the loading engine.

All of these signal programmer errors (misuse of the API), not runtime
conditions. They are raised immediately so a broken caller fails loudly
instead of silently drawing nothing. Transient problems such as a closed
channel or a broken output pipe are never reported through exceptions.
"""


class LoadingError(Exception):
    """Base class for loading engine misuse errors."""


class NotStartedError(LoadingError, RuntimeError):
    """A command was sent before `Loading.start()` was called."""


class AlreadyStartedError(LoadingError, RuntimeError):
    """`Loading.start()` was called twice, or the engine was reconfigured after starting."""


class FrameError(LoadingError, ValueError):
    """A spinner was built without frames, or an unknown preset was requested."""
