"""Entity schemas - frozen pydantic models shared by the store and persistence."""

from liftlog.schemas.exercise import Exercise, WorkoutSet
from liftlog.schemas.state import PersistedState, StoreState
from liftlog.schemas.workout import ActiveWorkout, LoggedWorkout, WorkoutExercise

__all__ = [
    "ActiveWorkout",
    "Exercise",
    "LoggedWorkout",
    "PersistedState",
    "StoreState",
    "WorkoutExercise",
    "WorkoutSet",
]
