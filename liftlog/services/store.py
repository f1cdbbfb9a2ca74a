"""WorkoutStore - single owner of catalog, active session and history.

Every operation builds a complete new ``StoreState`` from the current one and
commits it in one step, then notifies subscribers. Operations that target a
missing id resolve to a silent no-op and do not notify.
"""

from __future__ import annotations

import logging
import uuid
from collections import deque
from collections.abc import Callable, Iterable
from datetime import datetime

from liftlog.core.enums import MuscleGroup
from liftlog.schemas import (
    ActiveWorkout,
    Exercise,
    LoggedWorkout,
    StoreState,
    WorkoutExercise,
    WorkoutSet,
)
from liftlog.schemas.base import as_aware, utc_now

logger = logging.getLogger(__name__)

Subscriber = Callable[[StoreState], None]
Clock = Callable[[], datetime]


class WorkoutStore:
    """Explicit state container; pass it to whatever needs to read or mutate."""

    def __init__(
        self,
        exercises: Iterable[Exercise] = (),
        history: Iterable[LoggedWorkout] = (),
        active_workout: ActiveWorkout | None = None,
        *,
        clock: Clock | None = None,
    ):
        self._state = StoreState(
            exercises=tuple(exercises),
            history=tuple(history),
            active_workout=active_workout,
        )
        self._clock = clock or utc_now
        self._subscribers: list[Subscriber] = []
        self._pending: deque[StoreState] = deque()
        self._notifying = False

    @classmethod
    def from_state(cls, state: StoreState, *, clock: Clock | None = None) -> WorkoutStore:
        return cls(state.exercises, state.history, state.active_workout, clock=clock)

    # ── Observed state ───────────────────────────────────────────────────

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def exercises(self) -> tuple[Exercise, ...]:
        return self._state.exercises

    @property
    def history(self) -> tuple[LoggedWorkout, ...]:
        return self._state.history

    @property
    def active_workout(self) -> ActiveWorkout | None:
        return self._state.active_workout

    def get_exercise(self, exercise_id: uuid.UUID) -> Exercise | None:
        return next((e for e in self._state.exercises if e.id == exercise_id), None)

    def get_logged_workout(self, workout_id: uuid.UUID) -> LoggedWorkout | None:
        return next((w for w in self._state.history if w.id == workout_id), None)

    def latest_weight(self, exercise: Exercise) -> float | None:
        latest = exercise.latest_set
        return latest.weight if latest is not None else None

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback for every applied change. Returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    # ── Session lifecycle ────────────────────────────────────────────────

    def start_workout(self) -> ActiveWorkout:
        """Start a session. An existing session is kept as is and returned."""
        current = self._state.active_workout
        if current is not None:
            logger.warning("start_workout ignored: session %s already active", current.id)
            return current
        active = ActiveWorkout(started_at=self._now())
        self._commit(active_workout=active)
        logger.debug("Started workout %s", active.id)
        return active

    def end_workout(self) -> LoggedWorkout | None:
        """Close the session; sessions with at least one exercise go to history."""
        active = self._state.active_workout
        if active is None:
            return None
        if not active.exercises:
            self._commit(active_workout=None)
            logger.debug("Discarded empty workout %s", active.id)
            return None
        ended_at = max(self._now(), active.started_at)
        finished = LoggedWorkout(
            started_at=active.started_at,
            ended_at=ended_at,
            exercises=active.exercises,
        )
        self._commit(active_workout=None, history=(finished, *self._state.history))
        logger.info(
            "Logged workout %s (%d exercises, %d sets)",
            finished.id,
            len(finished.exercises),
            finished.total_sets,
        )
        return finished

    def add_exercise_to_workout(self, exercise: Exercise) -> WorkoutExercise:
        """Add an exercise to the session, starting one if needed. Dedup by exercise id."""
        active = self._state.active_workout or ActiveWorkout(started_at=self._now())
        existing = next((we for we in active.exercises if we.exercise.id == exercise.id), None)
        if existing is not None:
            return existing
        snapshot = self.get_exercise(exercise.id) or exercise
        entry = WorkoutExercise(exercise=snapshot)
        self._commit(active_workout=active.model_copy(update={"exercises": (*active.exercises, entry)}))
        return entry

    def remove_exercise_from_active(self, workout_exercise_id: uuid.UUID) -> bool:
        """Drop an entry from the session; an emptied session is discarded."""
        active = self._state.active_workout
        if active is None or active.find_entry(workout_exercise_id) is None:
            return False
        remaining = tuple(we for we in active.exercises if we.id != workout_exercise_id)
        if remaining:
            self._commit(active_workout=active.model_copy(update={"exercises": remaining}))
        else:
            self._commit(active_workout=None)
            logger.debug("Workout %s discarded after removing its last exercise", active.id)
        return True

    # ── Sets ─────────────────────────────────────────────────────────────

    def add_set(self, workout_exercise_id: uuid.UUID, weight: float, reps: int) -> WorkoutSet | None:
        """Log a set in the session and mirror it into the catalog history.

        Ranges are not checked here (the picker caps weight and reps).
        """
        active = self._state.active_workout
        if active is None:
            return None
        entry = active.find_entry(workout_exercise_id)
        if entry is None:
            return None

        new_set = WorkoutSet(date=self._now(), weight=weight, reps=reps)
        exercises = self._state.exercises
        embedded = entry.exercise
        catalog_entry = self.get_exercise(entry.exercise.id)
        if catalog_entry is not None:
            embedded = catalog_entry.model_copy(update={"history": (*catalog_entry.history, new_set)})
            exercises = tuple(embedded if e.id == embedded.id else e for e in exercises)

        updated_entry = entry.model_copy(update={"exercise": embedded, "sets": (*entry.sets, new_set)})
        self._commit(
            exercises=exercises,
            active_workout=_replace_entry(active, updated_entry),
        )
        return new_set

    def delete_set(self, workout_exercise_id: uuid.UUID, set_id: uuid.UUID) -> bool:
        """Remove a set from the session only; the catalog history keeps it."""
        active = self._state.active_workout
        if active is None:
            return False
        entry = active.find_entry(workout_exercise_id)
        if entry is None or not any(s.id == set_id for s in entry.sets):
            return False
        updated_entry = entry.model_copy(update={"sets": tuple(s for s in entry.sets if s.id != set_id)})
        self._commit(active_workout=_replace_entry(active, updated_entry))
        return True

    # ── Catalog ──────────────────────────────────────────────────────────

    def add_new_exercise(self, name: str, muscle_group: MuscleGroup) -> Exercise:
        """Append a new catalog exercise. Callers validate (trim, non-empty) the name."""
        exercise = Exercise(name=name, muscle_group=MuscleGroup(muscle_group))
        self._commit(exercises=(*self._state.exercises, exercise))
        return exercise

    def delete_exercise(self, exercise_id: uuid.UUID) -> bool:
        """Remove from the catalog. Session and history snapshots are not touched."""
        if self.get_exercise(exercise_id) is None:
            return False
        self._commit(exercises=tuple(e for e in self._state.exercises if e.id != exercise_id))
        return True

    # ── History ──────────────────────────────────────────────────────────

    def delete_logged_workout(self, workout_id: uuid.UUID) -> bool:
        if self.get_logged_workout(workout_id) is None:
            return False
        self._commit(history=tuple(w for w in self._state.history if w.id != workout_id))
        return True

    def delete_exercise_from_logged(self, workout_id: uuid.UUID, exercise_id: uuid.UUID) -> bool:
        """Remove a WorkoutExercise (by its own id) from a logged workout."""
        workout = self.get_logged_workout(workout_id)
        if workout is None or not any(we.id == exercise_id for we in workout.exercises):
            return False
        updated = workout.model_copy(
            update={"exercises": tuple(we for we in workout.exercises if we.id != exercise_id)}
        )
        self._commit(history=tuple(updated if w.id == workout_id else w for w in self._state.history))
        return True

    # ── Internals ────────────────────────────────────────────────────────

    def _now(self) -> datetime:
        return as_aware(self._clock())

    def _commit(self, **changes) -> None:
        self._state = self._state.model_copy(update=changes)
        self._pending.append(self._state)
        self._notify()

    def _notify(self) -> None:
        # A subscriber that mutates the store queues its state; it is delivered
        # after the current round so every subscriber sees states in commit order.
        if self._notifying:
            return
        self._notifying = True
        try:
            while self._pending:
                state = self._pending.popleft()
                for callback in list(self._subscribers):
                    try:
                        callback(state)
                    except Exception:
                        logger.exception("Store subscriber %r failed", callback)
        finally:
            self._notifying = False


def _replace_entry(active: ActiveWorkout, entry: WorkoutExercise) -> ActiveWorkout:
    return active.model_copy(
        update={"exercises": tuple(entry if we.id == entry.id else we for we in active.exercises)}
    )
