"""A multi-level cache of parking information exchanged between vehicles."""

from __future__ import annotations

import copy
from collections import deque
from dataclasses import dataclass, field
from typing import Protocol

from p2proute.resources import (
    AggregateInformation,
    AtomicInformation,
    CacheHit,
    Position,
    grid_key,
)

ENTRY_TTL = 500
"""Seconds after which a cached record is dropped."""

MAXIMUM_REPORT_COUNT = 20
"""Most records a single report carries."""

CACHE_LEVELS = 6
"""Number of aggregate levels."""

_NO_RELEVANCE = float(-(2**31))


class Site(Protocol):
    """A parking site as the cache sees it."""

    id: int
    position: Position
    capacity: int


def _expired(time: float, too: float) -> bool:
    return time - too > ENTRY_TTL


@dataclass
class ResourceReport:
    """A broadcast message carrying site records and aggregates."""

    atomics: list[AtomicInformation] = field(default_factory=list)
    aggregates: list[AggregateInformation] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.atomics) + len(self.aggregates)


@dataclass
class AggregateLevel:
    """The aggregates of one cache level, keyed by grid cell."""

    aggregates: dict[str, AggregateInformation] = field(default_factory=dict)

    def update(self, aggregate: AggregateInformation) -> None:
        """Store a copy of ``aggregate``, replacing any with the same key."""
        self.aggregates[aggregate.key()] = copy.copy(aggregate)

    def cleanup(self, time: float) -> None:
        """Drop aggregates older than the time-to-live."""
        self.aggregates = {
            key: aggregate
            for key, aggregate in self.aggregates.items()
            if not _expired(time, aggregate.too)
        }

    def _ordered(self) -> list[AggregateInformation]:
        return [self.aggregates[key] for key in sorted(self.aggregates)]


class Cache:
    """Site records plus grid aggregates at several levels of coarseness."""

    def __init__(self) -> None:
        self._levels = [AggregateLevel() for _ in range(CACHE_LEVELS)]
        self._atomics: dict[int, AtomicInformation] = {}

    @property
    def levels(self) -> tuple[AggregateLevel, ...]:
        return tuple(self._levels)

    @property
    def atomics(self) -> dict[int, AtomicInformation]:
        return dict(self._atomics)

    def update(self, report: ResourceReport) -> None:
        """Merge a received report into the cache."""
        for info in report.atomics:
            self._atomics[info.id] = copy.copy(info)
        for info in report.aggregates:
            if not 0 <= info.level < CACHE_LEVELS:
                raise IndexError(f"aggregate level {info.level} out of range")
            self._levels[info.level].update(info)

    def get_report(self, position: Position, time: float) -> ResourceReport:
        """The most relevant records for a vehicle at ``position``."""
        self._cleanup(time)
        self._update_aggregates()

        atomics = [self._atomics[key] for key in sorted(self._atomics)]
        aggregates = [a for level in self._levels for a in level._ordered()]
        for info in (*atomics, *aggregates):
            info.save_relevance(position, time)
        atomics.sort(key=lambda info: info.last_relevance, reverse=True)
        aggregates.sort(key=lambda info: info.last_relevance, reverse=True)

        report = ResourceReport()
        pending_atomics = deque(atomics)
        pending_aggregates = deque(aggregates)
        while len(report) < MAXIMUM_REPORT_COUNT and (pending_atomics or pending_aggregates):
            if pending_atomics and (
                not pending_aggregates
                or pending_atomics[0].last_relevance > pending_aggregates[0].last_relevance
            ):
                report.atomics.append(copy.copy(pending_atomics.popleft()))
            else:
                report.aggregates.append(copy.copy(pending_aggregates.popleft()))
        return report

    def _cleanup(self, time: float) -> None:
        self._atomics = {
            key: info for key, info in self._atomics.items() if not _expired(time, info.too)
        }
        for level in self._levels:
            level.cleanup(time)

    def _update_aggregates(self) -> None:
        bottom = self._levels[0].aggregates
        for site_id in sorted(self._atomics):
            atomic = self._atomics[site_id]
            key = grid_key(atomic.poo)
            existing = bottom.get(key)
            if existing is None or not existing.is_new:
                # Aggregates built on the bottom level are tagged as level 1.
                bottom[key] = AggregateInformation.from_position(atomic.poo, 1)
            bottom[key].add(atomic)

        for index in range(1, CACHE_LEVELS):
            previous = self._levels[index - 1]
            current = self._levels[index].aggregates
            for aggregate in previous._ordered():
                key = aggregate.key()
                existing = current.get(key)
                if existing is None or not existing.is_new:
                    current[key] = AggregateInformation.from_position(aggregate.poo, index)
                current[key].add(aggregate)
                aggregate.is_new = False

    def occupancy(self, site: Site, position: Position, time: float) -> CacheHit:
        """Estimate the occupancy of ``site`` from the most relevant cached record."""
        hit = CacheHit(miss=True)
        relevance = _NO_RELEVANCE

        atomic = self._atomics.get(site.id)
        if atomic is not None:
            relevance = atomic.relevance(position, time)
            hit = CacheHit(atomic.occupancy, 0)

        key = grid_key(site.position)
        for index, level in enumerate(self._levels):
            aggregate = level.aggregates.get(key)
            if aggregate is None:
                continue
            candidate = aggregate.relevance(position, time)
            if candidate > relevance:
                relevance = candidate
                hit = CacheHit(_estimate(site.capacity, aggregate), index)
        return hit


def _estimate(capacity: int, aggregate: AggregateInformation) -> int:
    if aggregate.capacity == 0:
        return 0
    return int(capacity * (aggregate.occupancy / aggregate.capacity))