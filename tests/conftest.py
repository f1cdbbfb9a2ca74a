"""Shared fixtures: a controllable clock, a store and a temporary store file."""

from datetime import datetime, timedelta, timezone

import pytest

from liftlog.core.config import Settings
from liftlog.core.enums import MuscleGroup
from liftlog.schemas import Exercise
from liftlog.services.store import WorkoutStore

T0 = datetime(2026, 3, 2, 18, 0, tzinfo=timezone.utc)


class FakeClock:
    """Returns T0 and advances by ``step`` on every call."""

    def __init__(self, start: datetime = T0, step: timedelta = timedelta(minutes=1)):
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = current + self.step
        return current


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def bench_press():
    return Exercise(name="Bench Press", muscle_group=MuscleGroup.CHEST)


@pytest.fixture
def squat():
    return Exercise(name="Squat", muscle_group=MuscleGroup.LEGS)


@pytest.fixture
def store(clock, bench_press, squat):
    return WorkoutStore(exercises=[bench_press, squat], clock=clock)


@pytest.fixture
def settings(tmp_path):
    return Settings(data_dir=tmp_path, persist_in_background=False, _env_file=None)
