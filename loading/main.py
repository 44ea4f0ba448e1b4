"""
Command-line entry point: demo programs and configuration management.

    loading demo [loading|download|status|spinner]
    loading spinners
    loading config [list|get KEY|set KEY VALUE]

The demos double as executable documentation for the `Loading` API. Each one
receives an unstarted handle (built from the command-line flags, falling back
to env vars and ~/.loading/config.json) plus a `sleep` callable, so tests can
run them instantly against an in-memory stream.
"""

import argparse
import logging
import time
from collections.abc import Callable

from rich import box
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text

from .config import (
    CONFIG_FILE,
    DEFAULT_CONFIG,
    get_interval,
    get_setting,
    get_spinner_name,
    get_stream_name,
    load_config,
    save_config,
)
from .console import console
from .engine import Loading
from .errors import FrameError
from .frames import SPINNERS, Spinner, get_spinner
from .status import Status
from .utils import get_version

Sleep = Callable[[float], None]


def setup_logging(verbose: bool) -> None:
    """Route library log records through the shared console (stderr)."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def build_loading(
    spinner_name: str | None = None,
    interval_ms: int | None = None,
    use_stderr: bool = False,
) -> Loading:
    """Build an unstarted handle. Flags win over env vars and the config file."""
    spinner = get_spinner(spinner_name or get_spinner_name())
    interval = interval_ms / 1000 if interval_ms else get_interval()
    stream = "stderr" if use_stderr else get_stream_name()
    return Loading(spinner, interval, stream)


# --- Demos ---


def demo_loading(loading: Loading, sleep: Sleep = time.sleep) -> None:
    """Count to 100, then commit a single success line."""
    with loading:
        for i in range(101):
            loading.text(f"Loading {i}")
            sleep(0.05)
        loading.success("OK")


def demo_download(loading: Loading, sleep: Sleep = time.sleep) -> None:
    """Two fake downloads: the first fails, the second succeeds."""
    with loading:
        for i in range(100):
            loading.text(f"Download 'loading.rar' {i}%")
            sleep(0.03)
        loading.fail("Download 'loading.rar' failed")

        for i in range(100):
            loading.text(f"Download 'loading.zip' {i}%")
            sleep(0.03)
        loading.success("Download 'loading.zip' successfully")


def demo_status(loading: Loading, sleep: Sleep = time.sleep) -> None:
    """Commit one line with each of the four status glyphs."""
    commits = [
        (loading.fail, "Fail ..."),
        (loading.warn, "Warn ..."),
        (loading.info, "Info ..."),
        (loading.success, "Success ..."),
    ]
    with loading:
        for commit, message in commits:
            for i in range(5):
                loading.text(f"Loading {i}")
                sleep(0.2)
            commit(message)


def demo_spinner(loading: Loading, sleep: Sleep = time.sleep) -> None:
    """A custom spinner on the configured stream, then a second one on stderr."""
    with loading.frames(SPINNERS["circle"]):
        for i in range(10):
            loading.text(f"Loading {i}")
            sleep(0.2)
        loading.success("Success ...")

    with Loading.with_stderr(Spinner(SPINNERS["bounce"])) as handle:
        for i in range(10):
            handle.text(f"Loading {i}")
            sleep(0.2)
        handle.fail("Error ...")


DEMOS: dict[str, Callable[[Loading, Sleep], None]] = {
    "loading": demo_loading,
    "download": demo_download,
    "status": demo_status,
    "spinner": demo_spinner,
}


# --- Listings and configuration ---


def print_spinners() -> None:
    """Show the spinner presets and the status glyphs."""
    table = Table(title="Spinners", box=box.ROUNDED)
    table.add_column("Name", style="green")
    table.add_column("Frames")
    default = get_spinner_name()
    for name, frames in SPINNERS.items():
        label = f"{name} (default)" if name == default else name
        table.add_row(label, "  ".join(frames))
    console.print(table)

    statuses = Table(title="Status glyphs", box=box.ROUNDED)
    statuses.add_column("Status", style="green")
    statuses.add_column("Glyph")
    for status in Status:
        # The glyphs carry raw SGR codes; let rich translate them
        statuses.add_row(status.name.lower(), Text.from_ansi(status.glyph))
    console.print(statuses)


def handle_config(action: str, key: str | None, value: list[str]) -> int:
    """List, read or persist settings in the config file."""
    if action == "list":
        console.print("\n[bold]Configuration:[/bold]")
        for setting, default in DEFAULT_CONFIG.items():
            console.print(f"  {setting + ':':<22}[cyan]{get_setting(setting, default)}[/cyan]")
        console.print(f"  {'Config File:':<22}[dim]{CONFIG_FILE}[/dim]\n")
        return 0

    if not key:
        usage = "KEY VALUE" if action == "set" else "KEY"
        console.print(f"[red]Usage: loading config {action} {usage}[/red]")
        return 2

    key = key.upper()
    if key not in DEFAULT_CONFIG:
        console.print(f"[red]Unknown setting: {key}[/red]")
        console.print(f"Available keys: {', '.join(DEFAULT_CONFIG.keys())}")
        return 2

    if action == "get":
        console.print(get_setting(key, DEFAULT_CONFIG[key]))
        return 0

    if not value:
        console.print(f"[red]Usage: loading config set {key} VALUE[/red]")
        return 2
    config = load_config()
    config[key] = " ".join(value)
    if not save_config(config):
        return 1
    console.print(f"[green]✓ Saved {key} = {config[key]} to {CONFIG_FILE}[/green]")
    return 0


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="loading",
        description="Animated terminal status line with success/fail/warn/info commits",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_version()}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")
    parser.add_argument("--spinner", help="Spinner preset name (see `loading spinners`)")
    parser.add_argument("--interval", type=int, metavar="MS", help="Milliseconds between frames")
    parser.add_argument("--stderr", action="store_true", help="Draw on stderr instead of stdout")

    subparsers = parser.add_subparsers(dest="command")

    demo = subparsers.add_parser("demo", help="Run a demo program")
    demo.add_argument("name", nargs="?", default="loading", choices=sorted(DEMOS))

    subparsers.add_parser("spinners", help="List spinner presets and status glyphs")

    config = subparsers.add_parser("config", help="Manage configuration")
    config.add_argument("action", nargs="?", default="list", choices=["list", "get", "set"])
    config.add_argument("key", nargs="?")
    config.add_argument("value", nargs="*")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if args.command == "spinners":
        print_spinners()
        return 0

    if args.command == "config":
        return handle_config(args.action, args.key, args.value)

    if args.interval is not None and args.interval <= 0:
        parser.error("--interval must be a positive number of milliseconds")

    try:
        loading = build_loading(args.spinner, args.interval, args.stderr)
    except FrameError as e:
        console.print(f"[red]{e}[/red]")
        return 2

    demo_name = getattr(args, "name", None) or "loading"
    try:
        DEMOS[demo_name](loading, time.sleep)
    except KeyboardInterrupt:
        # The `with` block already cleared the line
        console.print("[yellow]Interrupted[/yellow]")
        return 130
    return 0
