"""Admin dashboard snapshot with ordered refreshes.

Every refresh replaces the whole snapshot. Each refresh takes a generation
number before it reads the store, and a result is only installed when its
generation is newer than the installed one, so a slow, older read can never
overwrite a newer one that already landed.
"""

import itertools
import logging
from dataclasses import dataclass, field

from . import stats as aggregation
from .schemas import DashboardTotals, EventStat, Registration
from .store import RegistrationStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardSnapshot:
    registrations: list[Registration] = field(default_factory=list)
    stats: list[EventStat] = field(default_factory=list)
    totals: DashboardTotals = field(default_factory=DashboardTotals)
    generation: int = 0

    @classmethod
    def build(cls, registrations: list[Registration], generation: int) -> "DashboardSnapshot":
        event_stats = aggregation.aggregate(registrations)
        return cls(
            registrations=registrations,
            stats=event_stats,
            totals=aggregation.totals(registrations, event_stats),
            generation=generation,
        )

    def find_stat(self, event_id: str) -> EventStat | None:
        return next((s for s in self.stats if s.event_id == event_id), None)


class DashboardLoader:
    def __init__(self, store: RegistrationStore) -> None:
        self.store = store
        self._generations = itertools.count(1)
        self._snapshot = DashboardSnapshot()

    @property
    def snapshot(self) -> DashboardSnapshot:
        return self._snapshot

    async def refresh(self) -> DashboardSnapshot:
        """Read every registration and install the result if it is the newest.

        Raises:
            StoreError: the read failed; the installed snapshot is untouched.
        """
        generation = next(self._generations)
        registrations = await self.store.select_all()
        if generation > self._snapshot.generation:
            self._snapshot = DashboardSnapshot.build(registrations, generation)
        else:
            logger.debug(
                "Discarding stale dashboard read %d (installed %d)",
                generation, self._snapshot.generation,
            )
        return self._snapshot
