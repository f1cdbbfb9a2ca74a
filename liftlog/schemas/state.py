"""Full store snapshot, as observed by subscribers and written to disk."""

from pydantic import Field

from liftlog.core.constants import SCHEMA_VERSION
from liftlog.schemas.base import SchemaModel
from liftlog.schemas.exercise import Exercise
from liftlog.schemas.workout import ActiveWorkout, LoggedWorkout


class StoreState(SchemaModel):
    exercises: tuple[Exercise, ...] = ()
    history: tuple[LoggedWorkout, ...] = ()
    active_workout: ActiveWorkout | None = None


class PersistedState(StoreState):
    """On-disk document: the store state plus a schema version."""

    schema_version: int = Field(default=SCHEMA_VERSION, ge=1)

    @classmethod
    def from_state(cls, state: StoreState) -> "PersistedState":
        return cls(
            exercises=state.exercises,
            history=state.history,
            active_workout=state.active_workout,
        )

    def to_state(self) -> StoreState:
        return StoreState(
            exercises=self.exercises,
            history=self.history,
            active_workout=self.active_workout,
        )
