"""Tests for the streak engine."""

import pytest

import habitledger.streaks as streaks_module
from habitledger.errors import HabitNotFound, InvalidCaller, NotOwner, TooSoon
from habitledger.events import EntryLogged, recent_events
from habitledger.habits import create_habit, get_habit
from habitledger.queries import log_count_of, longest_streak_of, streak_of, total_logs_of
from habitledger.streaks import log_entry, next_streak

DAY = 86400
TWO_DAY = 172800


@pytest.fixture
def habit_id(store):
    return create_habit(store, "0xa", "Run")


def _logged_at(store, clock, habit_id, t0, streak):
    """Drive habit_id to `streak` with its last log at t0."""
    clock.now = t0 - (streak - 1) * DAY
    for _ in range(streak):
        log_entry(store, "0xa", habit_id, "log")
        clock.now += DAY
    clock.now = t0
    assert streak_of(store, habit_id) == streak


class TestNextStreak:
    def test_never_logged(self):
        assert next_streak(0, 0, 123) == 1

    def test_inside_grace(self):
        assert next_streak(4, 1000, 1000 + TWO_DAY - 1) == 5

    def test_after_grace(self):
        assert next_streak(4, 1000, 1000 + TWO_DAY) == 1


class TestTransitions:
    @pytest.mark.parametrize("now", [1, 1000, 10**10])
    def test_first_log_is_one(self, store, clock, habit_id, now):
        clock.now = now
        assert log_entry(store, "0xa", habit_id, "first") == 1
        assert streak_of(store, habit_id) == 1

    def test_one_second_short_of_a_day(self, store, clock, habit_id):
        _logged_at(store, clock, habit_id, 50_000_000, 3)
        clock.now = 50_000_000 + DAY - 1
        with pytest.raises(TooSoon) as exc:
            log_entry(store, "0xa", habit_id, "again")
        assert exc.value.retry_at == 50_000_000 + DAY
        assert streak_of(store, habit_id) == 3
        assert log_count_of(store, habit_id) == 3

    def test_exactly_one_day(self, store, clock, habit_id):
        _logged_at(store, clock, habit_id, 50_000_000, 3)
        clock.now = 50_000_000 + DAY
        assert log_entry(store, "0xa", habit_id, "on time") == 4

    def test_last_second_of_grace(self, store, clock, habit_id):
        _logged_at(store, clock, habit_id, 50_000_000, 3)
        clock.now = 50_000_000 + TWO_DAY - 1
        assert log_entry(store, "0xa", habit_id, "just made it") == 4

    @pytest.mark.parametrize("gap", [TWO_DAY, TWO_DAY + 1, 30 * DAY])
    def test_missed_grace_resets_to_one(self, store, clock, habit_id, gap):
        _logged_at(store, clock, habit_id, 50_000_000, 3)
        clock.now = 50_000_000 + gap
        assert log_entry(store, "0xa", habit_id, "back") == 1
        assert streak_of(store, habit_id) == 1

    def test_clock_behind_last_log_is_too_soon(self, store, clock, habit_id):
        clock.now = 5000
        log_entry(store, "0xa", habit_id, "first")
        clock.now = 4000
        with pytest.raises(TooSoon):
            log_entry(store, "0xa", habit_id, "time travel")

    def test_scenario(self, store, clock, habit_id):
        clock.now = 1000
        assert log_entry(store, "0xa", habit_id, "day 1") == 1
        clock.now = 1000 + DAY
        assert log_entry(store, "0xa", habit_id, "day 2") == 2
        clock.now = 1000 + DAY + 1
        with pytest.raises(TooSoon):
            log_entry(store, "0xa", habit_id, "too eager")
        clock.now = 1000 + DAY + TWO_DAY
        assert log_entry(store, "0xa", habit_id, "after a break") == 1

        habit = get_habit(store, habit_id)
        assert habit.total_log_count == 3
        assert habit.last_log_at == 1000 + DAY + TWO_DAY
        assert streak_of(store, habit_id) == 1


class TestRecording:
    def test_entry_and_counters(self, store, clock, habit_id):
        clock.now = 2000
        log_entry(store, "0xa", habit_id, "ran 5k", "ipfs://pic")
        habit = get_habit(store, habit_id)
        assert habit.last_log_at == 2000
        assert habit.total_log_count == 1
        assert log_count_of(store, habit_id) == 1
        assert total_logs_of(store, "0xa") == 1
        assert store.get(streaks_module.ENTRIES, (habit_id, 1)) == {
            "message": "ran 5k", "timestamp": 2000, "picture_uri": "ipfs://pic",
        }

    def test_emits_event(self, store, clock, habit_id):
        clock.now = 2000
        log_entry(store, "0xa", habit_id, "ran 5k", "ipfs://pic")
        events = recent_events(store, "EntryLogged")
        assert events == [EntryLogged(habit_id=habit_id, timestamp=2000,
                                      message="ran 5k", picture_uri="ipfs://pic")]

    def test_total_logs_sum_over_habits(self, store, clock, habit_id):
        other = create_habit(store, "0xa", "Read")
        for _ in range(3):
            log_entry(store, "0xa", habit_id, "run")
            log_entry(store, "0xa", other, "read")
            clock.now += DAY
        assert total_logs_of(store, "0xa") == log_count_of(store, habit_id) + log_count_of(store, other) == 6


class TestRejections:
    @pytest.mark.parametrize("caller", ["", None])
    def test_sentinel_caller(self, store, habit_id, caller):
        with pytest.raises(InvalidCaller):
            log_entry(store, caller, habit_id, "x")

    def test_unknown_habit(self, store):
        with pytest.raises(HabitNotFound):
            log_entry(store, "0xa", 99, "x")

    def test_string_id_is_not_the_int_habit(self, store, habit_id):
        with pytest.raises(HabitNotFound):
            log_entry(store, "0xa", str(habit_id), "x")
        assert log_count_of(store, habit_id) == 0
        assert recent_events(store, "EntryLogged") == []

    def test_not_owner(self, store, habit_id):
        with pytest.raises(NotOwner):
            log_entry(store, "0xb", habit_id, "x")
        assert log_count_of(store, habit_id) == 0
        assert total_logs_of(store, "0xb") == 0

    def test_rejection_changes_nothing(self, store, clock, habit_id):
        log_entry(store, "0xa", habit_id, "first")
        before = (get_habit(store, habit_id), store.events())
        with pytest.raises(TooSoon):
            log_entry(store, "0xa", habit_id, "second")
        assert (get_habit(store, habit_id), store.events()) == before
        assert total_logs_of(store, "0xa") == 1


class TestLongestStreak:
    def _run_then_miss(self, store, clock, habit_id):
        for _ in range(3):
            log_entry(store, "0xa", habit_id, "log")
            clock.now += DAY
        clock.now += TWO_DAY
        log_entry(store, "0xa", habit_id, "after a miss")

    def test_tracks_run(self, store, clock, habit_id):
        for expected in (1, 2, 3):
            log_entry(store, "0xa", habit_id, "log")
            assert longest_streak_of(store, "0xa") == expected
            clock.now += DAY

    def test_reset_credits_prior_plus_one(self, store, clock, habit_id):
        self._run_then_miss(store, clock, habit_id)
        assert streak_of(store, habit_id) == 1
        assert longest_streak_of(store, "0xa") == 4

    def test_reset_uses_stored_streak_when_disabled(self, store, clock, habit_id, monkeypatch):
        monkeypatch.setattr(streaks_module, "LONGEST_STREAK_FROM_PRIOR", False)
        self._run_then_miss(store, clock, habit_id)
        assert streak_of(store, habit_id) == 1
        assert longest_streak_of(store, "0xa") == 3

    def test_never_decreases(self, store, clock, habit_id):
        other = create_habit(store, "0xa", "Read")
        for _ in range(3):
            log_entry(store, "0xa", habit_id, "log")
            clock.now += DAY
        log_entry(store, "0xa", other, "one")
        assert longest_streak_of(store, "0xa") == 3

    def test_per_principal(self, store, habit_id):
        log_entry(store, "0xa", habit_id, "log")
        assert longest_streak_of(store, "0xb") == 0
