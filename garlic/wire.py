"""Wire format of messages sent to the robot over the WebSocket.

    {"command": "say" | "move" | "sayAndMove",
     "name": str,
     "content": str,
     "delay": int}            # milliseconds

Content is raw file bytes carried as text. Motion files are XML, so they
decode cleanly; anything that isn't valid UTF-8 has the offending bytes
replaced with U+FFFD.
"""

from __future__ import annotations

from pydantic import BaseModel

from garlic.instructions import Command, Instruction, SayAndMoveAction


class WireMessage(BaseModel):
    command: Command
    name: str
    content: str
    delay: int

    def to_json(self) -> str:
        return self.model_dump_json()


def encode(instruction: Instruction, content: bytes | None = None) -> WireMessage:
    """Build the wire message for a single (non-composite) instruction.

    If content is None it is resolved with instruction.content(), which may
    raise AssetUnavailable.
    """
    if isinstance(instruction, SayAndMoveAction):
        raise TypeError("a say-and-move action is never encoded as one message")
    if content is None:
        content = instruction.content()
    return WireMessage(
        command=instruction.command,
        name=instruction.wire_name(),
        content=content.decode("utf-8", errors="replace"),
        delay=instruction.delay_millis(),
    )
