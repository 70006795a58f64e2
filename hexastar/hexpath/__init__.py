from .coords import Axial, CubeCoord
from .conversions import axial_to_cube
from .heuristics import hex_distance_cube
from .neighbors import CUBE_DIRECTIONS, neighbors_cube
from .grid import BLOCKED_STATE, OPEN_STATE, Cell, Grid
from .astar import AStarSearch, SearchResult, find_path, heuristic

__all__ = [
    "Axial",
    "CubeCoord",
    "axial_to_cube",
    "hex_distance_cube",
    "CUBE_DIRECTIONS",
    "neighbors_cube",
    "BLOCKED_STATE",
    "OPEN_STATE",
    "Cell",
    "Grid",
    "AStarSearch",
    "SearchResult",
    "find_path",
    "heuristic",
]
