import json
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .console import console

# Load environment variables from .env file
load_dotenv()

# Configuration Defaults
DEFAULT_CONFIG = {
    "LOADING_INTERVAL_MS": "80",
    "LOADING_SPINNER": "dots",
    "LOADING_STREAM": "stdout",
}

STREAM_NAMES = ("stdout", "stderr")

# File Paths
LOADING_DIR = Path(os.getenv("LOADING_DIR", str(Path.home() / ".loading")))
CONFIG_FILE = Path(os.getenv("LOADING_CONFIG_FILE", str(LOADING_DIR / "config.json")))


def load_config(config_file: Path | None = None) -> dict[str, Any]:
    """Load configuration from file"""
    config_file = config_file or CONFIG_FILE
    if config_file.exists():
        try:
            with open(config_file) as f:
                config: dict[str, Any] = json.load(f)
                return config
        except Exception as e:
            console.print(f"[yellow]Warning: Could not load config file: {e}[/yellow]")
    return {}


def save_config(config: dict[str, Any], config_file: Path | None = None) -> bool:
    """Save configuration to file"""
    config_file = config_file or CONFIG_FILE
    try:
        config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(config_file, "w") as f:
            json.dump(config, f, indent=2)
        return True
    except Exception as e:
        console.print(f"[red]Error saving config file: {e}[/red]")
        return False


def get_setting(key: str, default: str) -> str:
    """Get setting with priority: Env Var > Config File > Default"""
    # 1. Environment Variable
    env_val = os.getenv(key)
    if env_val:
        return env_val

    # 2. Config File
    config = load_config()
    if key in config:
        return str(config[key])

    # 3. Default
    return default


def get_int_setting(key: str, default: int) -> int:
    """Get integer setting with priority: Env Var > Config File > Default"""
    value = get_setting(key, str(default))
    try:
        return int(value)
    except ValueError:
        console.print(
            f"[yellow]Warning: Invalid integer value for {key}: {value}, using default {default}[/yellow]"
        )
        return default

# Engine defaults are resolved at call time rather than import time so that a
# `config set` or an exported variable takes effect without re-importing.


def get_interval() -> float:
    """Frame interval in seconds (LOADING_INTERVAL_MS, default 80 ms)"""
    default = int(DEFAULT_CONFIG["LOADING_INTERVAL_MS"])
    interval_ms = get_int_setting("LOADING_INTERVAL_MS", default)
    if interval_ms <= 0:
        console.print(
            f"[yellow]Warning: LOADING_INTERVAL_MS must be positive, using default {default}[/yellow]"
        )
        interval_ms = default
    return interval_ms / 1000


def get_spinner_name() -> str:
    """Name of the spinner preset to use by default"""
    return get_setting("LOADING_SPINNER", DEFAULT_CONFIG["LOADING_SPINNER"])


def get_stream_name() -> str:
    """Either 'stdout' or 'stderr'"""
    value = get_setting("LOADING_STREAM", DEFAULT_CONFIG["LOADING_STREAM"]).strip().lower()
    if value not in STREAM_NAMES:
        console.print(
            f"[yellow]Warning: Invalid LOADING_STREAM value: {value}, using stdout[/yellow]"
        )
        return "stdout"
    return value
