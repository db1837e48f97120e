"""Fixed catalog of fest events.

The catalog is process-wide data. Registrations copy the entries they pick,
so editing a price here never changes totals that were already recorded.
"""

from typing import Literal, Optional

from .schemas import EventOption

Category = Literal["technical", "non_technical"]

TECHNICAL: tuple[EventOption, ...] = (
    EventOption(id="web-dev", name="Web Development Challenge", price=200),
    EventOption(id="poster", name="Poster Presentation", price=100),
    EventOption(id="tech-expo", name="Tech Expo", price=300),
    EventOption(id="pymaster", name="PyMaster Contest", price=150),
    EventOption(id="tech-quiz", name="Technical Quiz", price=100),
)

NON_TECHNICAL: tuple[EventOption, ...] = (
    EventOption(id="photography", name="Photography Contest", price=150),
    EventOption(id="free-fire", name="Free Fire Esports Championship", price=200),
    EventOption(id="drawing", name="Live Drawing", price=100),
    EventOption(id="bgmi", name="BGMI Esports Tournament", price=250),
    EventOption(id="meme-contest", name="Tech Meme Contest", price=50),
)

CATEGORY_LABELS: dict[str, str] = {
    "technical": "Technical Events",
    "non_technical": "Non-Technical Events",
}


def index_by_id(events) -> dict[str, EventOption]:
    by_id = {e.id: e for e in events}
    if len(by_id) != len(events):
        raise ValueError("duplicate event id in catalog")
    return by_id


_BY_ID: dict[str, EventOption] = index_by_id(TECHNICAL + NON_TECHNICAL)
_CATEGORY: dict[str, Category] = {
    **{e.id: "technical" for e in TECHNICAL},
    **{e.id: "non_technical" for e in NON_TECHNICAL},
}


def all_events() -> list[EventOption]:
    return list(TECHNICAL + NON_TECHNICAL)


def find_event(event_id: Optional[str]) -> Optional[EventOption]:
    if not event_id:
        return None
    return _BY_ID.get(event_id)


def category_of(event_id: str) -> Optional[Category]:
    return _CATEGORY.get(event_id)


def preselect(event_param: Optional[str]) -> list[EventOption]:
    """Events to pre-check for a ``?event=<id>`` link. Unknown ids are ignored."""
    event = find_event(event_param)
    return [event] if event else []
