"""Parking resource records: single sites, grid aggregates and cache hits."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

AVG_SPEED = 40.0 / 3.6
"""Assumed travel speed in metres per second."""

AGGREGATE_EDGE_LENGTH = 75
"""Edge length of a level-zero grid cell."""

_USHORT_MASK = 0xFFFF


@dataclass(frozen=True)
class Position:
    """A point in the simulation plane."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def distance(self, other: Position) -> float:
        """Euclidean distance to ``other``."""
        return math.dist((self.x, self.y, self.z), (other.x, other.y, other.z))


def _cell(coordinate: float) -> int:
    return int(coordinate / AGGREGATE_EDGE_LENGTH + 1)


def grid_key(position: Position) -> str:
    """The ``"i;j"`` key of the level-zero grid cell holding ``position``."""
    return f"{_cell(position.x)};{_cell(position.z)}"


@dataclass(kw_only=True)
class ResourceInformation(ABC):
    """What is known about parking capacity at a time (``too``) and place (``poo``)."""

    too: float = 0.0
    poo: Position = field(default_factory=Position)
    capacity: int = 0
    occupancy: int = 0
    last_relevance: float = 0.0

    @abstractmethod
    def relevance(self, position: Position, time: float) -> float:
        """How useful this record is to a vehicle at ``position`` at ``time``."""

    def save_relevance(self, position: Position, time: float) -> None:
        """Compute the relevance and keep it in ``last_relevance``."""
        self.last_relevance = self.relevance(position, time)


@dataclass(kw_only=True)
class AtomicInformation(ResourceInformation):
    """The state of one parking site."""

    id: int = 0

    def relevance(self, position: Position, time: float) -> float:
        distance = position.distance(self.poo)
        return -distance / AVG_SPEED - (time - self.too)


@dataclass(kw_only=True)
class AggregateInformation(ResourceInformation):
    """Combined state of the parking sites inside one grid cell."""

    i: int = 0
    j: int = 0
    level: int = 0
    n: int = 0
    is_new: bool = True

    @classmethod
    def from_position(cls, position: Position, level: int) -> AggregateInformation:
        """An empty aggregate for the cell holding ``position``."""
        i = _cell(position.x)
        j = _cell(position.z)
        poo = Position(
            x=(i - 1) * (position.x / AGGREGATE_EDGE_LENGTH + 1),
            z=(j - 1) * (position.z / AGGREGATE_EDGE_LENGTH + 1),
        )
        return cls(poo=poo, i=i, j=j, level=level)

    def relevance(self, position: Position, time: float) -> float:
        age = time - self.too
        if self.is_within(position):
            return -age
        distance = position.distance(self.poo)
        factor = math.inf if self.n == 0 else 1.0 / self.n
        return factor * (-distance / AVG_SPEED - age)

    def add(self, info: ResourceInformation) -> None:
        """Fold another record into this aggregate."""
        self.too = (self.n * info.too + info.too) / (self.n + 1)
        self.n = (self.n + 1) & _USHORT_MASK
        self.capacity = (self.capacity + info.capacity) & _USHORT_MASK
        # The aggregate's own occupancy is doubled; the added one is not used.
        self.occupancy = (self.occupancy * 2) & _USHORT_MASK

    def is_within(self, position: Position) -> bool:
        """Whether ``position`` lies in this aggregate's cell at its level."""
        edge = 2**self.level * AGGREGATE_EDGE_LENGTH
        horizontal_min = edge * (self.i - 1)
        vertical_min = edge * (self.j - 1)
        return (
            horizontal_min <= position.x < horizontal_min + edge
            and vertical_min <= position.z < vertical_min + edge
        )

    def key(self) -> str:
        """The ``"i;j"`` key of this aggregate's cell."""
        return f"{self.i};{self.j}"


@dataclass(frozen=True)
class CacheHit:
    """An occupancy estimate and the cache level it came from."""

    occupancy: int = 0
    level: int = 0
    miss: bool = False