from __future__ import annotations

from .coords import Axial, CubeCoord


def axial_to_cube(a: Axial) -> CubeCoord:
    return CubeCoord(a.q, a.r, -a.q - a.r)
