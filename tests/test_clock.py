from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from outreach.core import clock


def test_next_timestamp_is_now_when_previous_is_older() -> None:
    previous = datetime(2020, 1, 1, tzinfo=timezone.utc)

    assert clock.next_timestamp(previous) > previous


def test_next_timestamp_moves_past_a_previous_value_in_the_future(monkeypatch: pytest.MonkeyPatch) -> None:
    frozen = datetime(2026, 10, 19, 8, 0, tzinfo=timezone.utc)
    monkeypatch.setattr(clock, "utcnow", lambda: frozen)

    assert clock.next_timestamp(frozen) == frozen + timedelta(microseconds=1)
    # Naive values read back from SQLite are treated as UTC.
    assert clock.next_timestamp(frozen.replace(tzinfo=None)) == frozen + timedelta(microseconds=1)


def test_next_timestamp_without_previous_is_now(monkeypatch: pytest.MonkeyPatch) -> None:
    frozen = datetime(2026, 10, 19, 8, 0, tzinfo=timezone.utc)
    monkeypatch.setattr(clock, "utcnow", lambda: frozen)

    assert clock.next_timestamp(None) == frozen
    assert clock.today() == frozen.date()
