"""habitledger — append-only habit tracking with daily streaks.

Usage:
    from habitledger import Store, register_username, create_habit, log_entry, logs_of
    store = Store("data/habits.db")
    register_username(store, "0xabc", "alice")
    habit_id = create_habit(store, "0xabc", "Run", "5k before breakfast")
    streak = log_entry(store, "0xabc", habit_id, "done", "ipfs://...")
    entries = logs_of(store, habit_id, 0, 10)
"""

from habitledger.errors import (
    HabitNotFound,
    InvalidCaller,
    InvalidUsername,
    LedgerError,
    NotOwner,
    TooSoon,
    UsernameAlreadySet,
    UsernameTaken,
)
from habitledger.events import EntryLogged, HabitCreated, UsernameSet, recent_events
from habitledger.habits import create_habit, get_habit, total_habit_count
from habitledger.identity import principal_of, register_username, username_of
from habitledger.models import Entry, Habit
from habitledger.queries import (
    habit_count_of,
    habit_ids_of,
    habits_of,
    habits_overview,
    log_count_of,
    log_window_of,
    logs_of,
    longest_streak_of,
    streak_of,
    total_logs_of,
)
from habitledger.store import Store
from habitledger.streaks import LogWindow, log_entry, next_streak

__all__ = [
    "Store",
    "Habit",
    "Entry",
    "LogWindow",
    "register_username",
    "username_of",
    "principal_of",
    "create_habit",
    "get_habit",
    "total_habit_count",
    "log_entry",
    "next_streak",
    "habit_ids_of",
    "habits_of",
    "logs_of",
    "streak_of",
    "longest_streak_of",
    "log_count_of",
    "total_logs_of",
    "habit_count_of",
    "log_window_of",
    "habits_overview",
    "recent_events",
    "UsernameSet",
    "HabitCreated",
    "EntryLogged",
    "LedgerError",
    "InvalidCaller",
    "InvalidUsername",
    "UsernameAlreadySet",
    "UsernameTaken",
    "HabitNotFound",
    "NotOwner",
    "TooSoon",
]
