"""Pydantic models describing the request and response documents."""

from __future__ import annotations

from collections.abc import Collection

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .config import DEFAULT_BLOCKED_STATES
from .errors import DecodeError
from .hexpath.coords import CubeCoord
from .hexpath.grid import Cell, Grid


class CellModel(BaseModel):
    """One grid node on the wire.  ``cost`` carries the cell's f-cost."""

    model_config = ConfigDict(extra="ignore")

    id: int
    state: str
    neighbors: list[int]
    distance: int
    visited: bool = False
    cost: int
    q: int
    r: int
    s: int

    @model_validator(mode="after")
    def _check_cube_invariant(self) -> CellModel:
        if self.q + self.r + self.s != 0:
            raise ValueError(
                f"cell {self.id}: q + r + s must be 0, got ({self.q}, {self.r}, {self.s})"
            )
        return self

    def to_cell(self) -> Cell:
        return Cell(
            id=self.id,
            state=self.state,
            coord=CubeCoord(self.q, self.r, self.s),
            neighbors=list(self.neighbors),
            distance=self.distance,
            f_cost=self.cost,
        )

    @classmethod
    def from_cell(cls, cell: Cell) -> CellModel:
        return cls(
            id=cell.id,
            state=cell.state,
            neighbors=list(cell.neighbors),
            distance=cell.distance,
            visited=cell.visited,
            cost=cell.f_cost,
            q=cell.q,
            r=cell.r,
            s=cell.s,
        )


class GridDataModel(BaseModel):
    """The ``gridData`` object.  Keys other than ``nodes`` pass through untouched."""

    model_config = ConfigDict(extra="allow")

    nodes: list[CellModel]

    @model_validator(mode="after")
    def _check_unique_ids(self) -> GridDataModel:
        seen: set[int] = set()
        for node in self.nodes:
            if node.id in seen:
                raise ValueError(f"duplicate cell id {node.id}")
            seen.add(node.id)
        return self

    def to_grid(self, blocked_states: Collection[str] = DEFAULT_BLOCKED_STATES) -> Grid:
        return Grid((node.to_cell() for node in self.nodes), blocked_states=blocked_states)

    def with_grid(self, grid: Grid) -> GridDataModel:
        return self.model_copy(update={"nodes": [CellModel.from_cell(cell) for cell in grid]})


class SearchRequest(BaseModel):
    """A single search: the grid plus start and goal ids."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    grid_data: GridDataModel = Field(alias="gridData")
    start_id: int = Field(alias="startId")
    end_id: int = Field(alias="endId")

    @classmethod
    def from_grid(cls, grid: Grid, start_id: int, end_id: int) -> SearchRequest:
        return cls(
            grid_data=GridDataModel(nodes=[CellModel.from_cell(cell) for cell in grid]),
            start_id=start_id,
            end_id=end_id,
        )

    def dump(self) -> str:
        """Compact request JSON, without the response-only ``visited`` flag."""

        return self.model_dump_json(
            by_alias=True,
            exclude={"grid_data": {"nodes": {"__all__": {"visited"}}}},
        )


def decode_request(raw: str | bytes) -> SearchRequest:
    """Parse and validate a request document, raising :class:`DecodeError`."""

    try:
        return SearchRequest.model_validate_json(raw)
    except ValidationError as exc:
        raise DecodeError(f"invalid search request: {exc}", raw=raw) from exc


def encode_grid(grid_data: GridDataModel, grid: Grid) -> str:
    """Serialise ``grid_data`` with its nodes replaced by the searched cells."""

    return grid_data.with_grid(grid).model_dump_json()


__all__ = [
    "CellModel",
    "GridDataModel",
    "SearchRequest",
    "decode_request",
    "encode_grid",
]
