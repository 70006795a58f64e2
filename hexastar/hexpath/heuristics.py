from __future__ import annotations

from .coords import CubeCoord


def hex_distance_cube(a: CubeCoord, b: CubeCoord) -> int:
    """Step count between two cube coordinates (half the summed axis deltas)."""
    return (abs(b.q - a.q) + abs(b.s - a.s) + abs(b.r - a.r)) // 2
