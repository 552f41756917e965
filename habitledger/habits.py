"""Habit ledger — creates habits and indexes them per owner.

Habit ids come from one global counter that holds the last id handed out.
Ids start at 1 and are never reused, so the counter is also the number of
habits ever created.
"""

import logging

from habitledger.events import HabitCreated, emit
from habitledger.identity import check_caller
from habitledger.models import Habit
from habitledger.store import Store

log = logging.getLogger(__name__)

COUNTERS = "counters"
LAST_HABIT_ID = "last_habit_id"
HABITS = "habits"                   # habit_id -> Habit
HABIT_COUNT = "habit_count"         # principal -> number of habits owned
OWNER_HABITS = "owner_habits"       # (principal, index) -> habit_id
LOG_COUNT = "log_count"             # habit_id -> number of entries


def create_habit(store: Store, caller: str, title: str, description: str = "") -> int:
    """Create a new habit owned by caller. Returns habit id."""
    check_caller(caller)

    with store.transaction():
        habit_id = store.increment(COUNTERS, LAST_HABIT_ID)
        habit = Habit(
            id=habit_id,
            owner=caller,
            title=title,
            description=description,
            created_at=store.now(),
        )
        save_habit(store, habit)
        store.append(HABIT_COUNT, OWNER_HABITS, caller, habit_id)
        store.put(LOG_COUNT, habit_id, 0)
        emit(store, HabitCreated(owner=caller, habit_id=habit_id, title=title))

    log.info("Habit #%d %r created for %s", habit_id, title, caller)
    return habit_id


def get_habit(store: Store, habit_id: int) -> Habit | None:
    data = store.get(HABITS, habit_id)
    return Habit.from_dict(data) if data else None


def save_habit(store: Store, habit: Habit) -> None:
    store.put(HABITS, habit.id, habit.to_dict())


def total_habit_count(store: Store) -> int:
    return store.get(COUNTERS, LAST_HABIT_ID, 0)
