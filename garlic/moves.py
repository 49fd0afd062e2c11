"""Library of ready-made robot motions scanned from disk.

Layout of the moves directory:

    moves/
      <group>/
        <name>.qianim

Only files exactly one level down are picked up. Each becomes a MoveAction
named after its basename and grouped by its parent directory. Sessions refer
to moves by name; see sessions.assemble_sessions().
"""

from __future__ import annotations

import logging
from pathlib import Path
from uuid import UUID

from garlic.errors import NotFound
from garlic.instructions import MoveAction, new_id
from garlic.store import parse_id

logger = logging.getLogger(__name__)

MOVE_SUFFIX = ".qianim"


def collect_moves(data_dir: Path) -> list[MoveAction]:
    """Scan data_dir for motion files. Returns [] if the directory is missing."""
    data_dir = Path(data_dir)
    if not data_dir.is_dir():
        logger.warning(f"Moves directory {data_dir} does not exist")
        return []
    moves = [
        MoveAction(
            id=new_id(),
            file_path=str(path),
            group=path.parent.name,
            name=path.stem,
        )
        for path in sorted(data_dir.glob(f"*/*{MOVE_SUFFIX}"))
    ]
    logger.info(f"Collected {len(moves)} moves from {data_dir}")
    return moves


class MoveLibrary:
    """Read-only catalogue of scanned moves."""

    def __init__(self, moves: list[MoveAction] | None = None) -> None:
        self._moves = list(moves or [])

    @classmethod
    def scan(cls, data_dir: Path) -> MoveLibrary:
        return cls(collect_moves(data_dir))

    def list(self) -> list[MoveAction]:
        return [m.model_copy() for m in self._moves]

    def get(self, id: str | UUID) -> MoveAction:
        uid = parse_id(id)
        for move in self._moves:
            if move.id == uid:
                return move.model_copy()
        raise NotFound(f"move {uid} not found")

    def get_by_name(self, name: str) -> MoveAction | None:
        """Return a copy of the first move with this name, or None."""
        for move in self._moves:
            if move.name == name:
                return move.model_copy()
        return None

    def groups(self) -> list[str]:
        return sorted({m.group for m in self._moves})

    def by_group(self) -> dict[str, list[MoveAction]]:
        grouped: dict[str, list[MoveAction]] = {g: [] for g in self.groups()}
        for move in self._moves:
            grouped[move.group].append(move.model_copy())
        return grouped

    def __len__(self) -> int:
        return len(self._moves)
