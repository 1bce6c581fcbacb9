"""Roadside parking sites that publish their own occupancy."""

from __future__ import annotations

import random as _random
from dataclasses import dataclass, field

from p2proute.cache import ResourceReport
from p2proute.resources import AtomicInformation, Position

MIN_CAPACITY = 10
"""Smallest capacity a randomly created site gets."""

CAPACITY_SPREAD = 15
"""Number of distinct capacities a randomly created site can get."""

DRIFT_FACTOR = 0.1
"""Standard deviation of one occupancy change, as a share of capacity."""

BROADCAST_INTERVAL = 10.0
"""Seconds between two reports of a site."""


@dataclass(kw_only=True)
class ParkingSite:
    """A parking site with a fixed capacity and a changing occupancy.

    ``history`` keeps every occupancy value the site has had, oldest first.
    """

    id: int
    position: Position
    capacity: int
    occupancy: int = 0
    history: list[int] = field(default_factory=list)

    @classmethod
    def random(
        cls, site_id: int, position: Position, rng: _random.Random | None = None
    ) -> ParkingSite:
        """A site with a random capacity and a random starting occupancy."""
        rng = rng if rng is not None else _random.Random()
        capacity = MIN_CAPACITY + rng.randrange(CAPACITY_SPREAD)
        occupancy = rng.randrange(capacity + 1)
        return cls(
            id=site_id,
            position=position,
            capacity=capacity,
            occupancy=occupancy,
            history=[occupancy],
        )

    def drift(self, rng: _random.Random | None = None) -> int:
        """Change the occupancy by a normally distributed amount and return it.

        The new value is truncated to a whole number and then held between
        zero and the capacity.
        """
        rng = rng if rng is not None else _random.Random()
        changed = int(self.occupancy + rng.gauss(0, self.capacity * DRIFT_FACTOR))
        self.occupancy = max(0, min(self.capacity, changed))
        self.history.append(self.occupancy)
        return self.occupancy

    def report(self, time: float) -> ResourceReport:
        """A report carrying this site's current state, stamped with ``time``."""
        information = AtomicInformation(
            id=self.id,
            too=time,
            poo=self.position,
            capacity=self.capacity,
            occupancy=self.occupancy,
        )
        return ResourceReport(atomics=[information])