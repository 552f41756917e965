"""Streak engine — validates and records log entries.

Per habit the state is (last_log_at, streak_count):

  never logged            -> any log starts the streak at 1
  logged at t, streak s   -> log before t + LOG_WINDOW    rejected (TooSoon)
                             log before t + GRACE_WINDOW  streak s + 1
                             log at/after t + GRACE_WINDOW streak back to 1

There is no upper bound on `now`: a clock far in the future simply resets.
"""

import logging
from dataclasses import dataclass

from habitledger.config import GRACE_WINDOW_SECONDS, LOG_WINDOW_SECONDS, LONGEST_STREAK_FROM_PRIOR
from habitledger.errors import HabitNotFound, NotOwner, TooSoon
from habitledger.events import EntryLogged, emit
from habitledger.habits import LOG_COUNT, get_habit, save_habit
from habitledger.identity import check_caller
from habitledger.models import Entry, Habit
from habitledger.store import Store

log = logging.getLogger(__name__)

ENTRIES = "entries"                 # (habit_id, index) -> Entry
TOTAL_LOGS = "total_logs"           # principal -> entries across all owned habits
LONGEST_STREAK = "longest_streak"   # principal -> longest streak credited


@dataclass
class LogWindow:
    """When a habit can next be logged, and when its streak lapses."""
    opens_at: int               # first timestamp a log is accepted
    resets_at: int | None       # logs at/after this restart the streak; None if never logged
    can_log: bool


def next_streak(prior_streak: int, last_log_at: int, now: int) -> int:
    """Streak after a log at `now`. Assumes the log window has already passed."""
    if last_log_at == 0:
        return 1
    if now < last_log_at + GRACE_WINDOW_SECONDS:
        return prior_streak + 1
    return 1


def log_entry(store: Store, caller: str, habit_id: int,
              message: str, picture_uri: str = "") -> int:
    """Record a log entry for caller's habit. Returns the new streak."""
    check_caller(caller)

    with store.transaction():
        habit = get_habit(store, habit_id)
        if habit is None:
            raise HabitNotFound(habit_id)
        if habit.owner != caller:
            log.warning("Rejected log on habit #%d by %s: not owner", habit_id, caller)
            raise NotOwner(habit_id, caller)

        now = store.now()
        if habit.is_logged and now < habit.last_log_at + LOG_WINDOW_SECONDS:
            log.warning("Rejected log on habit #%d: too soon", habit_id)
            raise TooSoon(habit_id, now, habit.last_log_at + LOG_WINDOW_SECONDS)

        prior_streak = habit.streak_count
        streak = next_streak(prior_streak, habit.last_log_at, now)

        store.append(LOG_COUNT, ENTRIES, habit_id,
                     Entry(message=message, timestamp=now, picture_uri=picture_uri).to_dict())
        habit.last_log_at = now
        habit.streak_count = streak
        habit.total_log_count += 1
        save_habit(store, habit)
        store.increment(TOTAL_LOGS, caller)

        # With LONGEST_STREAK_FROM_PRIOR a reset still credits prior_streak + 1
        candidate = prior_streak + 1 if LONGEST_STREAK_FROM_PRIOR else streak
        if candidate > store.get(LONGEST_STREAK, caller, 0):
            store.put(LONGEST_STREAK, caller, candidate)

        emit(store, EntryLogged(habit_id=habit_id, timestamp=now,
                                message=message, picture_uri=picture_uri))

    log.info("Habit #%d logged by %s: streak %d -> %d", habit_id, caller, prior_streak, streak)
    return streak


def log_window(habit: Habit, now: int) -> LogWindow:
    if not habit.is_logged:
        return LogWindow(opens_at=habit.created_at, resets_at=None, can_log=True)
    opens_at = habit.last_log_at + LOG_WINDOW_SECONDS
    return LogWindow(
        opens_at=opens_at,
        resets_at=habit.last_log_at + GRACE_WINDOW_SECONDS,
        can_log=now >= opens_at,
    )
