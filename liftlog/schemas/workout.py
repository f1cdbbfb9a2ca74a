"""Session schemas: WorkoutExercise, ActiveWorkout, LoggedWorkout."""

from datetime import timedelta

from pydantic import Field

from liftlog.schemas.base import Entity, Timestamp, utc_now
from liftlog.schemas.exercise import Exercise, WorkoutSet


class WorkoutExercise(Entity):
    """An exercise inside a session.

    ``exercise`` is a point-in-time copy of the catalog entry, re-synced after
    every logged set. ``sets`` holds only the sets logged in this session.
    """

    exercise: Exercise
    sets: tuple[WorkoutSet, ...] = ()


class ActiveWorkout(Entity):
    """The session in progress (at most one per store)."""

    started_at: Timestamp = Field(default_factory=utc_now)
    exercises: tuple[WorkoutExercise, ...] = ()

    def find_entry(self, workout_exercise_id) -> WorkoutExercise | None:
        return next((we for we in self.exercises if we.id == workout_exercise_id), None)


class LoggedWorkout(Entity):
    """A finished session, kept in history."""

    started_at: Timestamp
    ended_at: Timestamp
    exercises: tuple[WorkoutExercise, ...] = ()

    @property
    def duration(self) -> timedelta:
        return self.ended_at - self.started_at

    @property
    def total_sets(self) -> int:
        return sum(len(we.sets) for we in self.exercises)
