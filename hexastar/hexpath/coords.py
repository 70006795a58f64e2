from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Axial:
    q: int
    r: int


@dataclass(frozen=True, slots=True)
class CubeCoord:
    q: int
    r: int
    s: int

    def __post_init__(self) -> None:
        if self.q + self.r + self.s != 0:
            raise ValueError("For cube coords, q + r + s must be 0")

    def __add__(self, other: CubeCoord) -> CubeCoord:
        return CubeCoord(self.q + other.q, self.r + other.r, self.s + other.s)
