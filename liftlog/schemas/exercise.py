"""WorkoutSet and Exercise schemas."""

from pydantic import Field

from liftlog.core.enums import MuscleGroup
from liftlog.schemas.base import Entity, Timestamp, utc_now


class WorkoutSet(Entity):
    """One completed set. Never mutated, only appended or removed."""

    date: Timestamp = Field(default_factory=utc_now)
    weight: float
    reps: int

    @property
    def volume(self) -> float:
        return self.weight * self.reps


class Exercise(Entity):
    """Catalog exercise with its full set history (insertion order)."""

    name: str
    muscle_group: MuscleGroup
    history: tuple[WorkoutSet, ...] = ()

    @property
    def latest_set(self) -> WorkoutSet | None:
        """Set with the newest date; the earliest-inserted one wins a tie."""
        if not self.history:
            return None
        return max(self.history, key=lambda s: s.date)
