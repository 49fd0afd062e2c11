"""Sending instructions to the robot.

The robot opens a WebSocket to the server; whoever holds it passes the
handle to send_instruction() on every call. Anything with an awaitable
send_text(str) works, which includes starlette's WebSocket.

Sends are fire-and-forget: one write per call, no retries, no queue. Callers
sharing a connection must serialise their sends themselves.
"""

from __future__ import annotations

import logging
from typing import Protocol

from garlic.errors import AssetUnavailable, NoConnection, UnresolvableInstruction
from garlic.instructions import Instruction, SayAndMoveAction
from garlic.wire import WireMessage, encode

logger = logging.getLogger(__name__)


class Connection(Protocol):
    async def send_text(self, data: str) -> None: ...


def _resolve(instruction: Instruction) -> WireMessage:
    """Encode with content, falling back to a name-only message.

    The robot keeps its own copies of motions, so a move whose file is
    missing can still be played if it has a name.
    """
    try:
        return encode(instruction)
    except AssetUnavailable as e:
        if not instruction.wire_name():
            raise UnresolvableInstruction(
                f"can't get content of {instruction} and name is missing: {e}"
            ) from e
        logger.warning(f"Sending {instruction.wire_name()!r} by name only: {e}")
        return encode(instruction, content=b"")


async def send_instruction(
    instruction: Instruction, connection: Connection | None
) -> WireMessage:
    """Send one instruction over the robot connection. Returns the message sent.

    A SayAndMoveAction sends only its move: the phrase is played through a
    speaker attached to this machine, not by the robot.
    """
    if connection is None:
        raise NoConnection("robot connection is not open, the robot must initiate it first")

    if isinstance(instruction, SayAndMoveAction):
        message = _resolve(instruction.move_item)
    else:
        message = _resolve(instruction)

    logger.debug(
        "send command=%s name=%s content_len=%d delay=%d",
        message.command.value, message.name, len(message.content), message.delay,
    )
    await connection.send_text(message.to_json())
    return message
