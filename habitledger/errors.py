"""Ledger errors — every rejected mutation raises one of these.

All of them are raised before anything is written, so a caught LedgerError
always means the store is unchanged.
"""


class LedgerError(Exception):
    """Base class for rejected ledger operations."""


class InvalidCaller(LedgerError):
    def __init__(self, caller=None):
        self.caller = caller
        super().__init__(f"Invalid caller: {caller!r}")


class InvalidUsername(LedgerError):
    def __init__(self, name=None):
        self.name = name
        super().__init__(f"Invalid username: {name!r}")


class UsernameAlreadySet(LedgerError):
    def __init__(self, caller: str, current: str):
        self.caller = caller
        self.current = current
        super().__init__(f"{caller} already registered as {current!r}")


class UsernameTaken(LedgerError):
    def __init__(self, name: str, owner: str):
        self.name = name
        self.owner = owner
        super().__init__(f"Username {name!r} is already taken")


class HabitNotFound(LedgerError):
    def __init__(self, habit_id: int):
        self.habit_id = habit_id
        super().__init__(f"Habit #{habit_id} not found")


class NotOwner(LedgerError):
    def __init__(self, habit_id: int, caller: str):
        self.habit_id = habit_id
        self.caller = caller
        super().__init__(f"{caller} does not own habit #{habit_id}")


class TooSoon(LedgerError):
    """Raised when a habit is logged again inside its log window.

    `retry_at` is the first timestamp at which the log would be accepted.
    """

    def __init__(self, habit_id: int, now: int, retry_at: int):
        self.habit_id = habit_id
        self.now = now
        self.retry_at = retry_at
        super().__init__(
            f"Habit #{habit_id} logged too soon: wait {retry_at - now}s (until {retry_at})"
        )
