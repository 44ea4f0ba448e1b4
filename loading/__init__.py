"""loading - Animated terminal status line with success/fail/warn/info commits"""

from .config import (
    CONFIG_FILE,
    DEFAULT_CONFIG,
    LOADING_DIR,
    get_interval,
    get_setting,
    get_spinner_name,
    get_stream_name,
    load_config,
    save_config,
)
from .engine import DEFAULT_INTERVAL, Loading, loading
from .errors import AlreadyStartedError, FrameError, LoadingError, NotStartedError
from .frames import DEFAULT_FRAMES, SPINNERS, Spinner, get_spinner
from .status import Status, format_status

__all__ = [
    # Engine
    "DEFAULT_INTERVAL",
    "Loading",
    "loading",
    # Frames
    "DEFAULT_FRAMES",
    "SPINNERS",
    "Spinner",
    "get_spinner",
    # Status
    "Status",
    "format_status",
    # Errors
    "AlreadyStartedError",
    "FrameError",
    "LoadingError",
    "NotStartedError",
    # Config
    "CONFIG_FILE",
    "DEFAULT_CONFIG",
    "LOADING_DIR",
    "get_interval",
    "get_setting",
    "get_spinner_name",
    "get_stream_name",
    "load_config",
    "save_config",
]
