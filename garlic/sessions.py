"""Sessions: authored scripts of dialogue with the robot.

A Session is a named list of SessionItems. Each item is a list of
SayAndMoveActions; the first is the main prompt (usually a question) and the
rest are short follow-up answers, shown to the operator as a row of buttons.

Authored sessions live in a RecordStore. Before they can be played they are
assembled: identifiers are filled in, audio file names are resolved against
the audio directory (<audio>/<session name>/<file>), and moves are matched by
name against the scanned move library.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Iterator
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from garlic.errors import MissingAsset, NotFound
from garlic.instructions import NIL_ID, SayAndMoveAction, new_id
from garlic.moves import MoveLibrary
from garlic.store import RecordStore, parse_id

logger = logging.getLogger(__name__)


class SessionItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: UUID = Field(default=NIL_ID, alias="ID")
    actions: list[SayAndMoveAction] = Field(default_factory=list, alias="Actions")

    @field_validator("actions", mode="before")
    @classmethod
    def _drop_nulls(cls, value: Any) -> Any:
        if value is None:
            return []
        return [a for a in value if a is not None]


class Session(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: UUID = Field(default=NIL_ID, alias="ID")
    name: str = Field(alias="Name", min_length=1)
    description: str = Field(default="", alias="Description")
    items: list[SessionItem] = Field(default_factory=list, alias="Items")

    @field_validator("items", mode="before")
    @classmethod
    def _null_items(cls, value: Any) -> Any:
        return [] if value is None else value


def _identified(session: Session) -> Iterator[BaseModel]:
    yield session
    for item in session.items:
        yield item
        for action in item.actions:
            yield action
            yield action.say_item
            yield action.move_item


def assign_ids(session: Session) -> Session:
    """Return a copy of session with every nil identifier replaced.

    Identifiers that are already set are kept. The input is not modified.
    """
    session = session.model_copy(deep=True)
    for node in _identified(session):
        if node.id == NIL_ID:
            node.id = new_id()
    return session


def assemble_sessions(
    sessions: list[Session], say_dir: Path, moves: MoveLibrary
) -> list[Session]:
    """Prepare authored sessions for playback.

    Raises MissingAsset if any referenced audio file does not exist; nothing
    is returned in that case. A move found in the library is replaced by a
    copy of the library entry carrying the authored delay. A move that isn't
    found is kept as authored and left for the robot to resolve by name.
    """
    say_dir = Path(say_dir)
    assembled = []
    for session in sessions:
        session = assign_ids(session)
        for item in session.items:
            for action in item.actions:
                if action.say_item.file_path:
                    path = say_dir / session.name / action.say_item.file_path
                    if not path.exists():
                        raise MissingAsset(
                            f"audio file {path} of session {session.name!r} does not exist"
                        )
                    action.say_item.file_path = str(path)

                if action.move_item.name:
                    library_move = moves.get_by_name(action.move_item.name)
                    if library_move is not None:
                        library_move.delay = action.move_item.delay
                        action.move_item = library_move
        assembled.append(session)
    return assembled


class SessionLibrary:
    """Authored sessions plus their assembled, ready-to-play form.

    CRUD goes to the store (authored form, relative audio file names). Every
    change first assembles the whole library as it would be afterwards; only
    if that succeeds is the store written and the assembled view replaced.
    A failed change leaves both untouched.
    """

    def __init__(self, store: RecordStore[Session], moves: MoveLibrary, say_dir: Path) -> None:
        self.store = store
        self.moves = moves
        self.say_dir = Path(say_dir)
        self._lock = threading.Lock()
        self._sessions = assemble_sessions(store.list(), self.say_dir, moves)

    @classmethod
    def open(cls, path: Path, moves: MoveLibrary, say_dir: Path) -> SessionLibrary:
        return cls(RecordStore(path, Session, normalize=assign_ids), moves, say_dir)

    def _assemble(self, sessions: list[Session]) -> list[Session]:
        return assemble_sessions(sessions, self.say_dir, self.moves)

    def sessions(self) -> list[Session]:
        """Assembled sessions, in store order."""
        return [s.model_copy(deep=True) for s in self._sessions]

    def get(self, id: str | UUID) -> Session:
        """Assembled session by id. Raises InvalidIdentifier or NotFound."""
        uid = parse_id(id)
        session = next((s for s in self._sessions if s.id == uid), None)
        if session is None:
            raise NotFound(f"Session {uid} not found")
        return session.model_copy(deep=True)

    def get_instruction(self, id: str | UUID) -> SayAndMoveAction | None:
        """Find a say-and-move action anywhere in the library, or None."""
        uid = parse_id(id)
        for session in self._sessions:
            for item in session.items:
                for action in item.actions:
                    if action.id == uid:
                        return action.model_copy(deep=True)
        return None

    def create(self, session: Session) -> Session:
        # Nested ids are fixed up front so the stored and assembled copies agree.
        prepared = assign_ids(session)
        prepared.id = session.id
        with self._lock:
            assembled = self._assemble(self.store.list() + [prepared])
            created = self.store.create(prepared)
            assembled[-1].id = created.id
            self._sessions = assembled
        logger.info(f"Created session {created.name!r} ({created.id})")
        return created

    def update(self, session: Session) -> Session:
        prepared = assign_ids(session)
        with self._lock:
            candidate = [prepared if s.id == prepared.id else s for s in self.store.list()]
            assembled = self._assemble(candidate)
            updated = self.store.update(prepared)
            self._sessions = assembled
        logger.info(f"Updated session {updated.name!r} ({updated.id})")
        return updated

    def delete(self, id: str | UUID) -> None:
        with self._lock:
            uid = self.store.get(id).id
            assembled = self._assemble([s for s in self.store.list() if s.id != uid])
            self.store.delete(uid)
            self._sessions = assembled
        logger.info(f"Deleted session {uid}")
