"""Command line entry point for a single grid search."""

from __future__ import annotations

import sys

from .cli import main

if __name__ == "__main__":  # pragma: no cover - module entry point
    sys.exit(main())
