"""Store factory and lifespan."""

from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from liftlog.core.config import Settings, get_settings
from liftlog.core.constants import WRITER_FLUSH_TIMEOUT_SECONDS
from liftlog.core.log import configure_logging
from liftlog.schemas import Exercise, StoreState
from liftlog.services.persistence import JsonFileGateway, SnapshotWriter
from liftlog.services.store import Clock, WorkoutStore


def create_store(
    settings: Settings | None = None,
    *,
    seed_exercises: Iterable[Exercise] = (),
    clock: Clock | None = None,
) -> tuple[WorkoutStore, SnapshotWriter]:
    """Load the persisted state (or the seed catalog) and persist every later change."""
    settings = settings or get_settings()
    gateway = JsonFileGateway(settings.store_path)
    state = gateway.load() or StoreState(exercises=tuple(seed_exercises))
    store = WorkoutStore.from_state(state, clock=clock)
    writer = SnapshotWriter(gateway, background=settings.persist_in_background)
    store.subscribe(writer)
    return store, writer


@contextmanager
def store_session(
    settings: Settings | None = None,
    *,
    seed_exercises: Iterable[Exercise] = (),
    clock: Clock | None = None,
) -> Iterator[WorkoutStore]:
    """Startup: configure logging and load; shutdown: flush pending writes."""
    settings = settings or get_settings()
    configure_logging(settings)
    store, writer = create_store(settings, seed_exercises=seed_exercises, clock=clock)
    try:
        yield store
    finally:
        writer.flush(WRITER_FLUSH_TIMEOUT_SECONDS)
        writer.close(WRITER_FLUSH_TIMEOUT_SECONDS)
