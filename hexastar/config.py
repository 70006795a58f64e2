"""Validated configuration for a single search run."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_BLOCKED_STATES = frozenset({"BLOCKED", "CLOSED"})


class RelaxationPolicy(str, Enum):
    """When a discovered neighbour has its parent and costs overwritten."""

    STRICT = "strict"
    NON_WORSE = "non_worse"
    ALWAYS = "always"

    def should_relax(self, current_g: float, tentative_g: float) -> bool:
        if self is RelaxationPolicy.STRICT:
            return tentative_g < current_g
        if self is RelaxationPolicy.NON_WORSE:
            return not current_g < tentative_g
        return True


class SearchConfig(BaseModel):
    """Knobs for the grid contract and the A* engine."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    relaxation: RelaxationPolicy = Field(default=RelaxationPolicy.STRICT)
    blocked_states: frozenset[str] = Field(default=DEFAULT_BLOCKED_STATES)
    max_hops: int | None = Field(default=None, ge=1)

    @field_validator("blocked_states", mode="before")
    @classmethod
    def _normalise_states(cls, value: object) -> frozenset[str]:
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple, set, frozenset)):
            raise TypeError("blocked_states must be a collection of strings")
        states = {str(item).strip() for item in value}
        states.discard("")
        if not states:
            raise ValueError("blocked_states must name at least one state")
        return frozenset(states)

    @classmethod
    def from_cli(cls, namespace: Any) -> SearchConfig:
        """Build a config from an ``argparse`` namespace, keeping defaults for unset flags."""

        values: dict[str, Any] = {}
        relaxation = getattr(namespace, "relaxation", None)
        if relaxation is not None:
            values["relaxation"] = relaxation
        blocked = getattr(namespace, "blocked_states", None)
        if blocked:
            values["blocked_states"] = blocked
        max_hops = getattr(namespace, "max_hops", None)
        if max_hops is not None:
            values["max_hops"] = max_hops
        return cls(**values)


__all__ = ["DEFAULT_BLOCKED_STATES", "RelaxationPolicy", "SearchConfig"]
