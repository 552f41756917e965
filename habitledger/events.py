"""Notification records — one per successful mutating operation.

Events are appended to the store's event log inside the same transaction as
the state change they describe, so a rolled-back operation leaves no event.
"""

import logging
from dataclasses import asdict, dataclass

from habitledger.store import Store

log = logging.getLogger(__name__)


class _Event:
    name = ""

    def payload(self) -> dict:
        return asdict(self)


@dataclass
class UsernameSet(_Event):
    principal: str
    username: str

    name = "UsernameSet"


@dataclass
class HabitCreated(_Event):
    owner: str
    habit_id: int
    title: str

    name = "HabitCreated"


@dataclass
class EntryLogged(_Event):
    habit_id: int
    timestamp: int
    message: str
    picture_uri: str

    name = "EntryLogged"


_EVENT_TYPES = {cls.name: cls for cls in (UsernameSet, HabitCreated, EntryLogged)}


def emit(store: Store, event: _Event) -> int:
    """Append an event to the log. Returns its event id."""
    payload = event.payload()
    event_id = store.append_event(event.name, payload)
    log.debug("Emitted %s #%d: %s", event.name, event_id, payload)
    return event_id


def recent_events(store: Store, name: str | None = None, since_id: int = 0) -> list:
    """Decode logged events (id > since_id) back into event objects, oldest first."""
    return [
        _EVENT_TYPES[row["name"]](**row["payload"])
        for row in store.events(name, since_id)
        if row["name"] in _EVENT_TYPES
    ]
