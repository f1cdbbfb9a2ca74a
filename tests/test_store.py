import uuid

import pytest

from liftlog.core.constants import REPS_DISPLAY_MAX, WEIGHT_DISPLAY_MAX
from liftlog.core.enums import MuscleGroup
from liftlog.services.store import WorkoutStore


@pytest.fixture
def events(store):
    seen = []
    store.subscribe(seen.append)
    return seen


# --- session lifecycle ---

def test_start_workout_creates_empty_session(store, clock, events):
    active = store.start_workout()
    assert store.active_workout is active
    assert active.exercises == ()
    assert active.started_at.tzinfo is not None
    assert len(events) == 1
    assert events[0].active_workout is active


def test_start_workout_keeps_existing_session(store, bench_press):
    store.start_workout()
    entry = store.add_exercise_to_workout(bench_press)
    store.add_set(entry.id, 60.0, 8)
    before = store.active_workout

    again = store.start_workout()

    assert again is before
    assert store.active_workout is before
    assert len(store.active_workout.exercises[0].sets) == 1


def test_end_workout_without_session_is_noop(store, events):
    assert store.end_workout() is None
    assert store.history == ()
    assert events == []


def test_end_empty_workout_discards_it(store, events):
    store.start_workout()
    assert store.end_workout() is None
    assert store.active_workout is None
    assert store.history == ()
    assert len(events) == 2


def test_end_workout_prepends_logged_workout(store, bench_press, squat):
    store.add_exercise_to_workout(bench_press)
    first = store.end_workout()
    store.add_exercise_to_workout(squat)
    second = store.end_workout()

    assert store.history == (second, first)
    assert second.ended_at >= second.started_at
    assert second.duration == second.ended_at - second.started_at
    assert store.active_workout is None


# --- exercises in the session ---

def test_add_exercise_starts_session_when_needed(store, bench_press, events):
    entry = store.add_exercise_to_workout(bench_press)
    assert store.active_workout is not None
    assert store.active_workout.exercises == (entry,)
    assert entry.exercise.id == bench_press.id
    assert entry.sets == ()
    assert len(events) == 1


def test_add_same_exercise_twice_keeps_one_entry(store, bench_press, events):
    first = store.add_exercise_to_workout(bench_press)
    second = store.add_exercise_to_workout(bench_press)
    assert second is first
    assert len(store.active_workout.exercises) == 1
    assert len(events) == 1


def test_add_exercise_snapshots_current_catalog_copy(store, bench_press):
    store.start_workout()
    entry = store.add_exercise_to_workout(bench_press)
    store.add_set(entry.id, 60.0, 8)
    store.end_workout()

    # caller still holds the stale pre-set object
    fresh = store.add_exercise_to_workout(bench_press)
    assert len(fresh.exercise.history) == 1


def test_remove_exercise_from_active(store, bench_press, squat):
    bench = store.add_exercise_to_workout(bench_press)
    sq = store.add_exercise_to_workout(squat)
    assert store.remove_exercise_from_active(bench.id) is True
    assert store.active_workout.exercises == (sq,)


def test_removing_sole_exercise_discards_session(store, bench_press):
    entry = store.add_exercise_to_workout(bench_press)
    assert store.remove_exercise_from_active(entry.id) is True
    assert store.active_workout is None
    assert store.history == ()


def test_remove_unknown_entry_is_noop(store, bench_press, events):
    assert store.remove_exercise_from_active(uuid.uuid4()) is False
    store.add_exercise_to_workout(bench_press)
    assert store.remove_exercise_from_active(uuid.uuid4()) is False
    assert len(events) == 1


# --- sets ---

def test_bench_press_scenario(store, bench_press):
    store.start_workout()
    entry = store.add_exercise_to_workout(bench_press)
    store.add_set(entry.id, weight=60.0, reps=8)
    store.add_set(entry.id, weight=62.5, reps=6)
    logged = store.end_workout()

    assert len(store.history) == 1
    assert store.history[0] is logged
    assert len(logged.exercises) == 1
    assert len(logged.exercises[0].sets) == 2

    catalog = store.get_exercise(bench_press.id)
    assert catalog.name == "Bench Press"
    assert len(catalog.history) == 2
    assert catalog.latest_set.weight == 62.5
    assert store.latest_weight(catalog) == 62.5


def test_add_set_mirrors_into_catalog_and_refreshes_snapshot(store, bench_press):
    entry = store.add_exercise_to_workout(bench_press)
    new_set = store.add_set(entry.id, 70.0, 5)

    active_entry = store.active_workout.exercises[0]
    assert active_entry.sets == (new_set,)
    assert active_entry.exercise.latest_set is new_set
    assert store.get_exercise(bench_press.id).history == (new_set,)
    # the original object handed out earlier is unchanged
    assert bench_press.history == ()
    assert entry.sets == ()


def test_add_set_without_session_or_unknown_entry(store, bench_press, events):
    assert store.add_set(uuid.uuid4(), 50.0, 5) is None
    store.add_exercise_to_workout(bench_press)
    assert store.add_set(uuid.uuid4(), 50.0, 5) is None
    assert store.get_exercise(bench_press.id).history == ()
    assert len(events) == 1


def test_add_set_for_exercise_deleted_from_catalog(store, bench_press):
    entry = store.add_exercise_to_workout(bench_press)
    store.delete_exercise(bench_press.id)
    new_set = store.add_set(entry.id, 40.0, 10)
    assert store.active_workout.exercises[0].sets == (new_set,)
    assert store.get_exercise(bench_press.id) is None


def test_add_set_does_not_clamp_values(store, bench_press):
    entry = store.add_exercise_to_workout(bench_press)
    s = store.add_set(entry.id, WEIGHT_DISPLAY_MAX + 150, REPS_DISPLAY_MAX * 3)
    assert (s.weight, s.reps) == (400.0, 90)


def test_delete_set_removes_from_session_only(store, bench_press):
    entry = store.add_exercise_to_workout(bench_press)
    s1 = store.add_set(entry.id, 60.0, 8)
    s2 = store.add_set(entry.id, 62.5, 6)

    assert store.delete_set(entry.id, s1.id) is True
    assert store.active_workout.exercises[0].sets == (s2,)
    assert store.get_exercise(bench_press.id).history == (s1, s2)


def test_delete_set_not_found(store, bench_press, events):
    assert store.delete_set(uuid.uuid4(), uuid.uuid4()) is False
    entry = store.add_exercise_to_workout(bench_press)
    assert store.delete_set(entry.id, uuid.uuid4()) is False
    assert len(events) == 1


# --- catalog ---

def test_add_new_exercise(store):
    ex = store.add_new_exercise("Overhead Press", MuscleGroup.SHOULDERS)
    assert store.exercises[-1] is ex
    assert ex.history == ()
    assert ex.muscle_group is MuscleGroup.SHOULDERS


def test_add_new_exercise_accepts_raw_group_value(store):
    ex = store.add_new_exercise("Burpee", "fullBody")
    assert ex.muscle_group is MuscleGroup.FULL_BODY


def test_delete_exercise_keeps_history_snapshots(store, bench_press):
    entry = store.add_exercise_to_workout(bench_press)
    store.add_set(entry.id, 60.0, 8)
    logged = store.end_workout()
    snapshot = logged.exercises[0].exercise.model_dump()

    assert store.delete_exercise(bench_press.id) is True
    assert store.get_exercise(bench_press.id) is None
    assert store.history[0].exercises[0].exercise.model_dump() == snapshot


def test_delete_exercise_keeps_active_snapshot(store, bench_press):
    store.add_exercise_to_workout(bench_press)
    store.delete_exercise(bench_press.id)
    assert store.active_workout.exercises[0].exercise.name == "Bench Press"


def test_delete_unknown_exercise(store, events):
    assert store.delete_exercise(uuid.uuid4()) is False
    assert len(store.exercises) == 2
    assert events == []


# --- history ---

def _log_one(store, exercise):
    entry = store.add_exercise_to_workout(exercise)
    store.add_set(entry.id, 50.0, 5)
    return store.end_workout()


def test_delete_logged_workout(store, bench_press, squat):
    first = _log_one(store, bench_press)
    second = _log_one(store, squat)
    assert store.delete_logged_workout(first.id) is True
    assert store.history == (second,)
    assert store.delete_logged_workout(first.id) is False


def test_delete_exercise_from_logged(store, bench_press, squat):
    store.add_exercise_to_workout(bench_press)
    sq = store.add_exercise_to_workout(squat)
    logged = store.end_workout()
    bench_entry = logged.exercises[0]

    assert store.delete_exercise_from_logged(logged.id, bench_entry.id) is True
    assert [we.id for we in store.history[0].exercises] == [sq.id]
    # the object returned earlier is a snapshot and stays whole
    assert len(logged.exercises) == 2


def test_delete_exercise_from_logged_not_found(store, bench_press, events):
    logged = _log_one(store, bench_press)
    count = len(events)
    assert store.delete_exercise_from_logged(uuid.uuid4(), logged.exercises[0].id) is False
    assert store.delete_exercise_from_logged(logged.id, uuid.uuid4()) is False
    assert len(events) == count


# --- subscriptions ---

def test_unsubscribe_stops_notifications(store):
    seen = []
    unsubscribe = store.subscribe(seen.append)
    store.start_workout()
    unsubscribe()
    store.end_workout()
    assert len(seen) == 1


def test_failing_subscriber_does_not_break_store(store, bench_press, caplog):
    seen = []

    def boom(state):
        raise RuntimeError("render failed")

    store.subscribe(boom)
    store.subscribe(seen.append)
    entry = store.add_exercise_to_workout(bench_press)

    assert store.active_workout.exercises == (entry,)
    assert len(seen) == 1
    assert "subscriber" in caplog.text


def test_store_from_state_round_trip(store, bench_press, clock):
    _log_one(store, bench_press)
    clone = WorkoutStore.from_state(store.state, clock=clock)
    assert clone.state == store.state
    assert clone.history[0].id == store.history[0].id


def test_subscriber_mutating_store_keeps_delivery_order(store, bench_press):
    seen = []

    def auto_add(state):
        active = state.active_workout
        if active is not None and not active.exercises:
            store.add_exercise_to_workout(bench_press)

    store.subscribe(auto_add)
    store.subscribe(seen.append)
    store.start_workout()

    assert len(store.active_workout.exercises) == 1
    assert seen[-1] is store.state
    assert [len(s.active_workout.exercises) for s in seen] == [0, 1]
