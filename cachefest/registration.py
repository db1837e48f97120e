import logging

from . import catalog
from .errors import MissingFieldsError, NoEventsSelectedError, UnknownEventError
from .schemas import NewRegistration, Registration, RegistrationIn
from .store import RegistrationStore

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "email", "phone", "college")
TEXT_FIELDS = REQUIRED_FIELDS + ("roll_number", "section")


def build_registration(payload: RegistrationIn) -> NewRegistration:
    """Validate a submission and snapshot the chosen catalog entries.

    Raises:
        MissingFieldsError: a required field is blank after stripping.
        NoEventsSelectedError: no events were chosen.
        UnknownEventError: an event id is not in the catalog.
    """
    fields = {f: getattr(payload, f).strip() for f in TEXT_FIELDS}
    missing = [f for f in REQUIRED_FIELDS if not fields[f]]
    if missing:
        raise MissingFieldsError(missing)

    # each event at most once, in the order picked
    event_ids = list(dict.fromkeys(payload.selected_events))
    if not event_ids:
        raise NoEventsSelectedError()

    events = []
    for event_id in event_ids:
        event = catalog.find_event(event_id)
        if event is None:
            raise UnknownEventError(event_id)
        events.append(event)

    return NewRegistration(
        **fields,
        selected_events=events,
        total_amount=sum(e.price for e in events),
    )


async def submit_registration(store: RegistrationStore, payload: RegistrationIn) -> Registration:
    record = build_registration(payload)
    saved = await store.insert(record)
    logger.info(
        "Registration %s stored: %d event(s), total %d",
        saved.id, len(saved.selected_events), saved.total_amount,
    )
    return saved
