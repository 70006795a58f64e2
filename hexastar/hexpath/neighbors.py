from __future__ import annotations

from typing import Iterable

from .coords import CubeCoord

# Order matters: on equal costs the first direction is evaluated first.
CUBE_DIRECTIONS: tuple[CubeCoord, ...] = (
    CubeCoord(+1, -1, 0),
    CubeCoord(+1, 0, -1),
    CubeCoord(0, +1, -1),
    CubeCoord(-1, +1, 0),
    CubeCoord(-1, 0, +1),
    CubeCoord(0, -1, +1),
)


def neighbors_cube(c: CubeCoord) -> Iterable[CubeCoord]:
    for d in CUBE_DIRECTIONS:
        yield c + d
