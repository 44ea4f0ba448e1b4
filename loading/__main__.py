"""
Entry point for running the demos as a module: `python -m loading`
"""

from .main import main

if __name__ == "__main__":
    raise SystemExit(main())
