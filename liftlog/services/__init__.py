"""Services: the workout store, its persistence gateway and progress analytics."""

from liftlog.services.persistence import JsonFileGateway, PersistenceError, SnapshotWriter
from liftlog.services.store import WorkoutStore

__all__ = ["JsonFileGateway", "PersistenceError", "SnapshotWriter", "WorkoutStore"]
