"""
Small helpers shared by the CLI.
"""

from importlib.metadata import PackageNotFoundError, version


def get_version() -> str:
    """Get the installed package version from Python package metadata.

    Uses importlib.metadata, so the version always matches what pip installed.
    Returns "dev" when running from source without installing.
    """
    try:
        return version("loading")
    except PackageNotFoundError:
        return "dev"
