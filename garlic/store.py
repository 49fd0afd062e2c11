"""File-backed record store shared by the session and image libraries.

A RecordStore holds an ordered list of pydantic records, each with an `id`
UUID field, mirrored to exactly one JSON file:

    [ {"ID": "...", ...}, {"ID": "...", ...} ]

The file is read once at construction and rewritten in full on every
mutation. Writes go to a sibling ".tmp" file which then replaces the store
file, so a failed write leaves the previous content on disk. The in-memory
list may already hold the attempted change in that case; callers should
re-read before retrying.

One lock per store serialises mutations and the file rewrite. Reads take the
same lock and hand out deep copies, so a caller never sees a record halfway
through an update and can't change stored state without calling update().
There is no cross-process locking.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Callable, Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel, TypeAdapter, ValidationError

from garlic.errors import IdentifierNotAllowed, InvalidIdentifier, NotFound, StoreError
from garlic.instructions import NIL_ID, new_id

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def parse_id(value: str | UUID) -> UUID:
    """Parse a record identifier. Raises InvalidIdentifier if malformed."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError as e:
        raise InvalidIdentifier(f"invalid identifier: {value!r}") from e


class RecordStore(Generic[T]):
    """CRUD collection of `model` records persisted to `path`.

    Args:
        path:      JSON file backing the store. Created empty if missing.
        model:     Record type. Must have an `id: UUID` field.
        normalize: Optional pure function applied to records on load and on
                   create/update, e.g. to fill in nested identifiers.
    """

    def __init__(
        self,
        path: Path,
        model: type[T],
        normalize: Callable[[T], T] | None = None,
    ) -> None:
        self._path = Path(path)
        self._model = model
        self._normalize = normalize or (lambda record: record)
        self._adapter = TypeAdapter(list[model])
        self._lock = threading.RLock()

        loaded = self._load()
        self._records: list[T] = [self._normalize(r) for r in loaded]
        if self._records != loaded:
            logger.info(f"Assigned missing identifiers in {self._path}")
            self.dump()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> list[T]:
        if not self._path.exists():
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.touch()
            return []
        text = self._path.read_text()
        if not text.strip():
            return []
        try:
            return self._adapter.validate_json(text)
        except ValidationError as e:
            raise StoreError(f"can't decode {self._model.__name__} records from {self._path}: {e}") from e

    def _index(self, uid: UUID) -> int:
        for i, record in enumerate(self._records):
            if record.id == uid:
                return i
        raise NotFound(f"{self._model.__name__} {uid} not found")

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list(self) -> list[T]:
        with self._lock:
            return [r.model_copy(deep=True) for r in self._records]

    def get(self, id: str | UUID) -> T:
        uid = parse_id(id)
        with self._lock:
            return self._records[self._index(uid)].model_copy(deep=True)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(self, record: T) -> T:
        """Store a new record under a fresh identifier. Returns the stored copy."""
        if record.id != NIL_ID:
            raise IdentifierNotAllowed(
                f"failed to create {self._model.__name__}: ID is assigned by the store"
            )
        stored = self._normalize(record.model_copy(update={"id": new_id()}, deep=True))
        with self._lock:
            self._records.append(stored)
            self.dump()
        return stored.model_copy(deep=True)

    def update(self, record: T) -> T:
        """Replace the record with the same identifier. Returns the stored copy."""
        stored = self._normalize(record.model_copy(deep=True))
        with self._lock:
            self._records[self._index(stored.id)] = stored
            self.dump()
        return stored.model_copy(deep=True)

    def delete(self, id: str | UUID, before_remove: Callable[[T], None] | None = None) -> None:
        """Remove a record.

        before_remove, if given, is called with the record while the lock is
        held; if it raises, the store is left untouched.
        """
        uid = parse_id(id)
        with self._lock:
            i = self._index(uid)
            if before_remove is not None:
                before_remove(self._records[i].model_copy(deep=True))
            del self._records[i]
            self.dump()

    def dump(self) -> None:
        """Rewrite the whole store file from memory."""
        with self._lock:
            data = self._adapter.dump_json(self._records, by_alias=True, indent=2)
            tmp = self._path.with_name(self._path.name + ".tmp")
            tmp.write_bytes(data)
            tmp.replace(self._path)
            logger.debug("dump path=%s records=%d", self._path, len(self._records))
