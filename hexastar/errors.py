"""Exception hierarchy shared by the codec, the grid and the search engine."""

from __future__ import annotations


class HexastarError(Exception):
    """Base class for every error raised by :mod:`hexastar`."""


class DecodeError(HexastarError, ValueError):
    """The request document is not valid JSON or does not match the schema."""

    def __init__(self, message: str, *, raw: str | bytes | None = None) -> None:
        super().__init__(message)
        self.raw = raw


class SearchError(HexastarError):
    """A search could not produce a path.  Recovered by ``find_path``."""


class OutOfRange(SearchError, IndexError):
    """A cell id does not exist in the grid."""

    def __init__(self, cell_id: int, size: int) -> None:
        super().__init__(f"cell id {cell_id} is outside a grid of {size} cells")
        self.cell_id = cell_id
        self.size = size


class GoalBlocked(SearchError):
    """The goal cell is blocked, so it can never be entered."""


class NoPathFound(SearchError):
    """The open frontier emptied before the goal was reached."""


class ReconstructionInconsistency(NoPathFound):
    """The parent chain from the goal never reached the start."""


__all__ = [
    "DecodeError",
    "GoalBlocked",
    "HexastarError",
    "NoPathFound",
    "OutOfRange",
    "ReconstructionInconsistency",
    "SearchError",
]
