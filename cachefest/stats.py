"""Per-event participant counts and revenue for the admin dashboard."""

from typing import Iterable, Sequence

from . import catalog
from .schemas import DashboardTotals, EventStat, Registration


def aggregate(registrations: Iterable[Registration]) -> list[EventStat]:
    """Group every (registration, event) pair by event id.

    Stats come out in first-seen order. An event picked twice inside one
    registration counts twice, and events nobody picked are absent. The
    display name is the snapshot name seen first for that id.
    """
    by_id: dict[str, EventStat] = {}
    for registration in registrations:
        for event in registration.selected_events:
            stat = by_id.get(event.id)
            if stat is None:
                stat = by_id[event.id] = EventStat(event_id=event.id, event_name=event.name)
            stat.participant_count += 1
            stat.revenue += event.price
    return list(by_id.values())


def totals(registrations: Sequence[Registration], stats: Sequence[EventStat]) -> DashboardTotals:
    return DashboardTotals(
        participants=len(registrations),
        revenue=sum(r.total_amount for r in registrations),
        events=len(stats),
    )


def by_category(stats: Iterable[EventStat]) -> dict[str, list[EventStat]]:
    # ids that have left the catalog still show up, under "other"
    grouped: dict[str, list[EventStat]] = {"technical": [], "non_technical": [], "other": []}
    for stat in stats:
        grouped[catalog.category_of(stat.event_id) or "other"].append(stat)
    return grouped


def category_revenue(stats: Iterable[EventStat]) -> int:
    return sum(s.revenue for s in stats)
