"""Robot instructions: the units of action sent to the robot.

Three kinds exist:

    SpeakAction      : say a phrase. The audio is played by a local speaker,
                       so the robot only ever receives a placeholder.
    MoveAction       : play a motion, either from a .qianim file on this
                       server or by name from the robot's own library.
    SayAndMoveAction : a pairing of the two, authored in sessions. It is
                       never sent on its own; the dispatcher unpacks it.

Models serialise with the field names used in the session store file
("ID", "Phrase", "FilePath", ...). Delays are stored as integer nanoseconds.
"""

from __future__ import annotations

import os
from datetime import timedelta
from enum import Enum
from pathlib import Path
from typing import Any, ClassVar, Union
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from garlic.errors import AssetUnavailable

NIL_ID = UUID(int=0)


class Command(str, Enum):
    SAY = "say"
    MOVE = "move"
    SAY_AND_MOVE = "sayAndMove"


def new_id() -> UUID:
    return uuid4()


def is_random_id(value: Any) -> bool:
    """True for a well-formed version 4 UUID (the nil UUID is not one)."""
    try:
        uid = value if isinstance(value, UUID) else UUID(str(value))
    except ValueError:
        return False
    return uid.version == 4


def _base(path: str) -> str:
    """Last element of a slash-separated path, "." for an empty one."""
    if not path:
        return "."
    stripped = path.rstrip("/")
    if not stripped:
        return "/"
    return os.path.basename(stripped)


def is_nil(instruction: Instruction | None) -> bool:
    return instruction is None


class _Action(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    command: ClassVar[Command]

    id: UUID = Field(default=NIL_ID, alias="ID")

    def content(self) -> bytes:
        return b""

    def delay_millis(self) -> int:
        return 0

    def wire_name(self) -> str:
        return ""

    def is_valid(self) -> bool:
        return is_random_id(self.id)


class SpeakAction(_Action):
    command: ClassVar[Command] = Command.SAY

    phrase: str = Field(default="", alias="Phrase")
    file_path: str = Field(default="", alias="FilePath")

    def content(self) -> bytes:
        # Audio is played locally, the robot only gets a placeholder.
        return _base(self.phrase).encode()

    def is_valid(self) -> bool:
        return super().is_valid() and bool(self.phrase)

    def __str__(self) -> str:
        return f"say {self.phrase} from {self.file_path}"


class MoveAction(_Action):
    command: ClassVar[Command] = Command.MOVE

    name: str = Field(default="", alias="Name")
    file_path: str = Field(default="", alias="FilePath")
    delay: int = Field(default=0, alias="Delay")  # nanoseconds
    group: str = Field(default="", alias="Group")

    @field_validator("delay", mode="before")
    @classmethod
    def _delay_from_timedelta(cls, value: Any) -> Any:
        if isinstance(value, timedelta):
            return (value // timedelta(microseconds=1)) * 1000
        return value

    def content(self) -> bytes:
        """Read the motion file. Raises AssetUnavailable if it can't be read."""
        if not self.file_path:
            raise AssetUnavailable(f"move {self.name!r} has no file path")
        try:
            return Path(self.file_path).read_bytes()
        except OSError as e:
            raise AssetUnavailable(
                f"can't read move {self.name!r} from {self.file_path}: {e}"
            ) from e

    def delay_millis(self) -> int:
        return self.delay // 1_000_000

    def wire_name(self) -> str:
        return self.name

    def is_valid(self) -> bool:
        return super().is_valid() and bool(self.file_path)

    def __str__(self) -> str:
        return f"move {self.name} from {self.file_path}"


class SayAndMoveAction(_Action):
    """A phrase and the motion accompanying it.

    Sessions are built out of these. The composite itself carries no content;
    send_instruction() transmits only the move component.
    """

    command: ClassVar[Command] = Command.SAY_AND_MOVE

    say_item: SpeakAction = Field(default_factory=SpeakAction, alias="SayItem")
    move_item: MoveAction = Field(default_factory=MoveAction, alias="MoveItem")

    @field_validator("say_item", "move_item", mode="before")
    @classmethod
    def _null_component(cls, value: Any) -> Any:
        # Older session files store a missing component as null.
        return {} if value is None else value

    def wire_name(self) -> str:
        return self.move_item.name

    def is_valid(self) -> bool:
        return is_random_id(self.id) and bool(self.say_item.phrase)

    def __str__(self) -> str:
        return f"say {self.say_item.phrase!r} and move {self.move_item.name!r}"


Instruction = Union[SpeakAction, MoveAction, SayAndMoveAction]
