"""Persistence gateway: the store state as one JSON document on local disk.

Writes are atomic (temp file + rename in the same directory) so a crash mid-write
leaves the previous snapshot intact. Reads never raise: any failure means
"start from the seed state".
"""

from __future__ import annotations

import logging
import math
import os
import tempfile
import threading
from pathlib import Path

from pydantic import ValidationError

from liftlog.core.constants import SCHEMA_VERSION
from liftlog.schemas import PersistedState, StoreState

logger = logging.getLogger(__name__)


class PersistenceError(Exception):
    """Snapshot could not be encoded, decoded, written or read."""


def encode_state(state: StoreState) -> bytes:
    bad = _non_finite_sets(state)
    if bad:
        raise PersistenceError(f"Cannot encode store state: non-finite weight in set(s) {bad}")
    try:
        document = PersistedState.from_state(state)
        return document.model_dump_json(by_alias=True, indent=2).encode("utf-8")
    except (ValidationError, ValueError, TypeError) as e:
        raise PersistenceError(f"Cannot encode store state: {e}") from e


def _non_finite_sets(state: StoreState) -> list[str]:
    """Ids of sets whose weight JSON cannot represent (NaN, inf)."""
    sets = [s for e in state.exercises for s in e.history]
    workouts = [*state.history, *([state.active_workout] if state.active_workout else [])]
    for workout in workouts:
        for we in workout.exercises:
            sets.extend(we.sets)
            sets.extend(we.exercise.history)
    return sorted({str(s.id) for s in sets if not math.isfinite(s.weight)})


def decode_state(data: bytes | str) -> StoreState:
    try:
        document = PersistedState.model_validate_json(data)
    except ValidationError as e:
        raise PersistenceError(f"Malformed store document: {e.error_count()} error(s)") from e
    if document.schema_version > SCHEMA_VERSION:
        raise PersistenceError(
            f"Unsupported schema version {document.schema_version} (max {SCHEMA_VERSION})"
        )
    return document.to_state()


class JsonFileGateway:
    """Reads and writes the state document at a fixed path."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> StoreState | None:
        """Return the persisted state, or None when missing or unreadable."""
        try:
            data = self.path.read_bytes()
        except FileNotFoundError:
            logger.info("No store file at %s; starting fresh", self.path)
            return None
        except OSError as e:
            logger.warning("Cannot read store file %s: %s", self.path, e)
            return None
        try:
            state = decode_state(data)
        except PersistenceError as e:
            logger.warning("Ignoring store file %s: %s", self.path, e)
            return None
        logger.info(
            "Loaded %d exercises, %d logged workouts from %s",
            len(state.exercises),
            len(state.history),
            self.path,
        )
        return state

    def save(self, state: StoreState) -> None:
        """Atomically replace the store file with ``state``."""
        payload = encode_state(state)
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "wb",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(payload)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as e:
            raise PersistenceError(f"Cannot write store file {self.path}: {e}") from e
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass


class SnapshotWriter:
    """Writes submitted states through a gateway, newest-wins.

    In background mode a single worker thread drains a one-slot mailbox: rapid
    submissions coalesce into one write of the latest state, and an older
    state is never written after a newer one. Failures are logged only.
    """

    def __init__(self, gateway: JsonFileGateway, *, background: bool = True):
        self.gateway = gateway
        self.background = background
        self.failures = 0
        self._cond = threading.Condition()
        self._pending: StoreState | None = None
        self._submitted = 0
        self._written = 0
        self._closed = False
        self._worker: threading.Thread | None = None
        if background:
            self._worker = threading.Thread(target=self._run, name="liftlog-writer", daemon=True)
            self._worker.start()

    def __call__(self, state: StoreState) -> None:
        self.submit(state)

    def submit(self, state: StoreState) -> None:
        if not self.background:
            self._write(state)
            return
        with self._cond:
            if self._closed:
                logger.warning("Snapshot submitted after writer closed; writing inline")
            else:
                self._pending = state
                self._submitted += 1
                self._cond.notify_all()
                return
        self._write(state)

    def flush(self, timeout: float | None = None) -> bool:
        """Block until everything submitted so far is written. False on timeout."""
        if not self.background:
            return True
        with self._cond:
            target = self._submitted
            return self._cond.wait_for(lambda: self._written >= target, timeout=timeout)

    def close(self, timeout: float | None = None) -> None:
        if self._worker is None:
            return
        with self._cond:
            self._closed = True
            self._cond.notify_all()
        self._worker.join(timeout)
        self._worker = None

    def _run(self) -> None:
        while True:
            with self._cond:
                self._cond.wait_for(lambda: self._pending is not None or self._closed)
                if self._pending is None:
                    return
                state, self._pending = self._pending, None
                sequence = self._submitted
            self._write(state)
            with self._cond:
                self._written = sequence
                self._cond.notify_all()

    def _write(self, state: StoreState) -> None:
        try:
            self.gateway.save(state)
        except PersistenceError:
            self.failures += 1
            logger.exception("Persisting store state failed")
        except Exception:
            self.failures += 1
            logger.exception("Unexpected error while persisting store state")
