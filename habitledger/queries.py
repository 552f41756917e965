"""Read-only views over identities, habits and entries.

Nothing here writes to the store or raises on missing keys: unknown
principals and habits read as empty lists, zeros or None.
"""

from habitledger.config import DEFAULT_PAGE_SIZE
from habitledger.habits import HABIT_COUNT, LOG_COUNT, OWNER_HABITS, get_habit
from habitledger.models import Entry, Habit
from habitledger.store import Store
from habitledger.streaks import ENTRIES, LONGEST_STREAK, TOTAL_LOGS, LogWindow, log_window


def habit_ids_of(store: Store, principal: str) -> list[int]:
    """Ids of principal's habits in creation order."""
    if not principal:
        return []
    return store.items(HABIT_COUNT, OWNER_HABITS, principal)


def habits_of(store: Store, principal: str) -> list[Habit]:
    return [get_habit(store, habit_id) for habit_id in habit_ids_of(store, principal)]


def logs_of(store: Store, habit_id: int, start: int = 0,
            count: int = DEFAULT_PAGE_SIZE) -> list[Entry]:
    """Page through a habit's entries.

    `start` is a 0-based offset: logs_of(h, 0, 10) returns the first ten
    entries (stored at indexes 1..10). Never returns more than `count`.
    """
    total = log_count_of(store, habit_id)
    start = max(start, 0)
    if start >= total or count <= 0:
        return []
    end = min(start + count, total)
    return [Entry.from_dict(e) for e in store.items(LOG_COUNT, ENTRIES, habit_id, start + 1, end)]


def streak_of(store: Store, habit_id: int) -> int:
    habit = get_habit(store, habit_id)
    return habit.streak_count if habit else 0


def longest_streak_of(store: Store, principal: str) -> int:
    return store.get(LONGEST_STREAK, principal, 0) if principal else 0


def log_count_of(store: Store, habit_id: int) -> int:
    return store.get(LOG_COUNT, habit_id, 0)


def total_logs_of(store: Store, principal: str) -> int:
    return store.get(TOTAL_LOGS, principal, 0) if principal else 0


def habit_count_of(store: Store, principal: str) -> int:
    return store.get(HABIT_COUNT, principal, 0) if principal else 0


def log_window_of(store: Store, habit_id: int, now: int | None = None) -> LogWindow | None:
    """When habit_id can next be logged. None for an unknown habit."""
    habit = get_habit(store, habit_id)
    if habit is None:
        return None
    return log_window(habit, store.now() if now is None else now)


def habits_overview(store: Store, principal: str, now: int | None = None) -> list[dict]:
    """Return principal's habits with streak and logging status.

    Each item: {id, title, description, streak, total_logs, last_log_at,
    can_log_now, streak_lapsed}
    """
    now = store.now() if now is None else now
    result = []
    for habit in habits_of(store, principal):
        window = log_window(habit, now)
        result.append({
            "id": habit.id,
            "title": habit.title,
            "description": habit.description,
            "streak": habit.streak_count,
            "total_logs": habit.total_log_count,
            "last_log_at": habit.last_log_at or None,
            "can_log_now": window.can_log,
            # Next log would restart the streak at 1
            "streak_lapsed": window.resets_at is not None and now >= window.resets_at,
        })
    return result
