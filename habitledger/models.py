"""Ledger records — habits and their log entries."""

from dataclasses import asdict, dataclass


@dataclass
class Habit:
    """A habit owned by one principal.

    Only last_log_at, streak_count and total_log_count change after creation,
    and only through a successful log.
    """
    id: int
    owner: str
    title: str
    description: str = ""
    created_at: int = 0
    last_log_at: int = 0        # 0 = never logged
    streak_count: int = 0
    total_log_count: int = 0

    @property
    def is_logged(self) -> bool:
        return self.last_log_at != 0

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Habit":
        return cls(**data)


@dataclass
class Entry:
    """One log entry of a habit. Never edited once written."""
    message: str
    timestamp: int
    picture_uri: str = ""

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Entry":
        return cls(**data)
