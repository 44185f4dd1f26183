# local_careers/store.py
from __future__ import annotations

import json
import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Union

from pydantic import ValidationError

from local_careers.errors import StoreError
from local_careers.models import Job, Snapshot, Source

logger = logging.getLogger(__name__)

_LOCKS: Dict[Path, threading.RLock] = {}
_LOCKS_GUARD = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    with _LOCKS_GUARD:
        lock = _LOCKS.get(path)
        if lock is None:
            lock = _LOCKS[path] = threading.RLock()
        return lock


def atomic_write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    tmp.replace(path)


class JsonSnapshotStore:
    """
    Owns the persisted snapshot (all jobs + all sources) in one JSON file.

    Every write replaces the whole document. Mutations must go through
    ``transaction()`` so two read-modify-write cycles never overlap; stores
    pointing at the same file share one lock.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser().resolve()
        self._lock = _lock_for(self.path)

    def load(self) -> Snapshot:
        with self._lock:
            if not self.path.exists():
                empty = Snapshot()
                self.save(empty)
                logger.info("Created empty snapshot at %s", self.path)
                return empty

            try:
                data = json.loads(self.path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as e:
                raise StoreError(f"Could not read snapshot {self.path}: {e}") from e

            if not isinstance(data, dict):
                raise StoreError(f"Snapshot must be a JSON object: {self.path}")

            try:
                return Snapshot.model_validate(data)
            except ValidationError as e:
                raise StoreError(f"Snapshot {self.path} is not valid: {e}") from e

    def save(self, snapshot: Snapshot) -> None:
        with self._lock:
            atomic_write_json(self.path, snapshot.to_json_dict())

    @contextmanager
    def transaction(self) -> Iterator["SnapshotTransaction"]:
        """
        Hold the writer lock across load -> mutate -> save.
        Nothing is written if the body raises.
        """
        with self._lock:
            tx = SnapshotTransaction(self.load())
            yield tx
            self.save(tx.snapshot)

    def jobs(self) -> List[Job]:
        return [j.to_public() for j in self.load().jobs]

    def sources(self) -> List[Source]:
        return list(self.load().sources)


class SnapshotTransaction:
    def __init__(self, snapshot: Snapshot):
        self.snapshot = snapshot
