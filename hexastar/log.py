"""Stderr logging setup; stdout only ever carries the response document."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str | int = "WARNING", stream: TextIO | None = None) -> None:
    """Configure the root logger to write to ``stream`` (stderr by default)."""

    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(
        stream=stream if stream is not None else sys.stderr,
        level=level,
        format=LOG_FORMAT,
        force=True,
    )
    logging.getLogger(__name__).debug(
        "Logging initialized at %s.", logging.getLevelName(logging.getLogger().level)
    )


__all__ = ["LOG_FORMAT", "setup_logging"]
