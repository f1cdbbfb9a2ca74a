"""Progress analytics over exercise snapshots: chart series, bests, PR flags."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from pydantic import BaseModel

from liftlog.core.enums import MuscleGroup, PRType
from liftlog.schemas import Exercise


class ProgressPoint(BaseModel):
    date: datetime
    weight: float
    reps: int
    volume: float


class PersonalBests(BaseModel):
    best_weight: float | None = None
    best_volume: float | None = None
    set_count: int = 0


def progress_series(exercise: Exercise) -> list[ProgressPoint]:
    """History in chronological order, one point per set (weight and volume charts)."""
    ordered = sorted(exercise.history, key=lambda s: s.date)
    return [
        ProgressPoint(date=s.date, weight=s.weight, reps=s.reps, volume=s.volume)
        for s in ordered
    ]


def personal_bests(exercise: Exercise) -> PersonalBests:
    if not exercise.history:
        return PersonalBests()
    return PersonalBests(
        best_weight=max(s.weight for s in exercise.history),
        best_volume=max(s.volume for s in exercise.history),
        set_count=len(exercise.history),
    )


def detect_pr(exercise: Exercise, weight: float, reps: int) -> tuple[bool, PRType | None]:
    """
    Compare a candidate set to the exercise's all-time bests.
    Returns (is_pr, pr_type). Call before logging: history is the previous best.
    A first-ever set is not a PR.
    """
    bests = personal_bests(exercise)
    if bests.set_count == 0:
        return False, None
    if float(weight) > float(bests.best_weight):
        return True, PRType.WEIGHT
    if float(weight) * int(reps) > float(bests.best_volume):
        return True, PRType.VOLUME
    return False, None


def group_by_muscle(exercises: Iterable[Exercise]) -> list[tuple[MuscleGroup, list[Exercise]]]:
    """Catalog grouped in enum order; groups without exercises are left out."""
    exercises = list(exercises)
    grouped = []
    for group in MuscleGroup:
        members = [e for e in exercises if e.muscle_group == group]
        if members:
            grouped.append((group, members))
    return grouped


def format_weight(weight: float | None, unit: str = "kg") -> str:
    if weight is None:
        return "-"
    return f"{weight:.1f} {unit}"
