"""Holder of the robot's WebSocket connection.

The robot connects to /api/ws when its app starts. Only one connection is
kept: a new one replaces the old. Routes read `RobotLink.connection` and pass
it to send_instruction(); None means the robot isn't connected.
"""

import asyncio
import logging

from fastapi import WebSocket

from garlic.dispatch import send_instruction
from garlic.instructions import Instruction
from garlic.wire import WireMessage

logger = logging.getLogger(__name__)


class RobotLink:
    def __init__(self) -> None:
        self.connection: WebSocket | None = None
        # Sends on one socket must not interleave.
        self._send_lock = asyncio.Lock()

    @property
    def connected(self) -> bool:
        return self.connection is not None

    def attach(self, websocket: WebSocket) -> None:
        if self.connection is not None:
            logger.warning("Robot reconnected, replacing previous connection")
        self.connection = websocket

    def detach(self, websocket: WebSocket) -> None:
        if self.connection is websocket:
            self.connection = None

    async def send(self, instruction: Instruction) -> WireMessage:
        async with self._send_lock:
            return await send_instruction(instruction, self.connection)
