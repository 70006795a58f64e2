"""Hex-grid A* path search with a JSON request/response front end."""

__version__ = "0.1.0"

from .config import RelaxationPolicy, SearchConfig
from .hexpath import Cell, Grid, SearchResult, find_path

__all__ = ["Cell", "Grid", "RelaxationPolicy", "SearchConfig", "SearchResult", "find_path"]
