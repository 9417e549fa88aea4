"""Pytest configuration and fixtures for lendhive tests."""

from datetime import date, timedelta

import pytest

from lendhive import IdSequence, LibraryRegistry


class FakeClock:
    """A clock the test moves by hand."""

    def __init__(self, today: date) -> None:
        self.today = today

    def __call__(self) -> date:
        return self.today

    def advance(self, days: int) -> None:
        self.today += timedelta(days=days)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(date(2024, 3, 1))


@pytest.fixture
def registry(clock: FakeClock) -> LibraryRegistry:
    """A fresh registry with its own catalog id sequence."""
    return LibraryRegistry(clock=clock, item_ids=IdSequence(1_000_000_000_001))
