"""
Shared Rich Console for everything that is not the status line itself.

The spinner writes raw escape sequences to its own stream (stdout by
default). Warnings, log records and CLI tables go through this one console
on stderr instead, so they never land in the middle of the line the render
thread is redrawing.

Usage:
    from .console import console
    console.print("[yellow]Warning: ...[/yellow]")
"""

from rich.console import Console

console = Console(stderr=True)
