"""Measuring how well a vehicle's cache matches the real parking occupancy."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field

from p2proute.cache import Cache
from p2proute.resources import Position
from p2proute.sites import ParkingSite


@dataclass
class CorrectnessStats:
    """Running counts and samples collected by :func:`measure_correctness`."""

    cache_hits: int = 0
    cache_misses: int = 0
    accuracy: list[float] = field(default_factory=list)
    hit_levels: list[int] = field(default_factory=list)

    def hit_ratio(self) -> float:
        """Share of lookups that found an estimate; NaN before any lookup."""
        total = self.cache_hits + self.cache_misses
        if total == 0:
            return math.nan
        return self.cache_hits / total


def _channel(value: float) -> int:
    return max(0, min(255, int(value)))


def accuracy_color(accuracy: float) -> str:
    """A display string shading from red (0) to green (1)."""
    red = _channel(255 * (1 - accuracy))
    green = _channel(255 * accuracy)
    return f"r=10,#{red:02x}{green:02x}00"


def measure_correctness(
    cache: Cache,
    sites: Iterable[ParkingSite],
    position: Position,
    time: float,
    stats: CorrectnessStats,
) -> str | None:
    """Compare the cache's estimates with every site's true occupancy.

    Updates ``stats`` and returns the display colour for the mean accuracy,
    or None when the cache knew about no site.
    """
    found = 0
    total_accuracy = 0.0
    for site in sites:
        hit = cache.occupancy(site, position, time)
        if hit.miss:
            stats.cache_misses += 1
            continue
        stats.cache_hits += 1
        accuracy = 1 - abs(site.occupancy - hit.occupancy) / site.capacity
        total_accuracy += accuracy
        found += 1
        stats.accuracy.append(accuracy)
        stats.hit_levels.append(hit.level)

    if found == 0:
        return None
    return accuracy_color(total_accuracy / found)