"""Robot connection and instruction sending endpoints.

The robot's app opens the WebSocket at /api/ws and keeps it open. The
operator's UI then triggers sends over plain HTTP.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect

from backend.robot import RobotLink
from garlic.errors import InvalidIdentifier, NoConnection, NotFound, UnresolvableInstruction
from garlic.instructions import Instruction, SpeakAction, is_nil, new_id
from garlic.moves import MoveLibrary
from garlic.sessions import SessionLibrary
from garlic.store import parse_id

from .deps import get_moves, get_robot, get_sessions
from .models import RobotStatus, SayBody, SendResult

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/ws")
async def robot_socket(websocket: WebSocket):
    """Persistent connection opened by the robot."""
    robot: RobotLink = websocket.app.state.robot
    robot.attach(websocket)
    try:
        await websocket.accept()
        logger.info("Robot connected")
        while True:
            # The robot doesn't send anything meaningful; keep reading to notice disconnects.
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.info("Robot disconnected")
    finally:
        robot.detach(websocket)


@router.get("/robot")
async def robot_status(robot: RobotLink = Depends(get_robot)) -> RobotStatus:
    """Whether the robot is currently connected."""
    return RobotStatus(connected=robot.connected)


async def _send(robot: RobotLink, instruction: Instruction) -> SendResult:
    try:
        message = await robot.send(instruction)
    except NoConnection as e:
        raise HTTPException(409, str(e))
    except UnresolvableInstruction as e:
        raise HTTPException(422, str(e))
    return SendResult(command=message.command.value, name=message.name, delay=message.delay)


@router.post("/instructions/{instruction_id}/send")
async def send_session_instruction(
    instruction_id: str,
    sessions: SessionLibrary = Depends(get_sessions),
    robot: RobotLink = Depends(get_robot),
) -> SendResult:
    """Send a say-and-move action from a session."""
    try:
        action = sessions.get_instruction(parse_id(instruction_id))
    except InvalidIdentifier as e:
        raise HTTPException(400, str(e))
    if is_nil(action):
        raise HTTPException(404, "Instruction not found")
    return await _send(robot, action)


@router.post("/moves/{move_id}/send")
async def send_move(
    move_id: str,
    moves: MoveLibrary = Depends(get_moves),
    robot: RobotLink = Depends(get_robot),
) -> SendResult:
    """Send a move straight from the library."""
    try:
        move = moves.get(move_id)
    except InvalidIdentifier as e:
        raise HTTPException(400, str(e))
    except NotFound:
        raise HTTPException(404, "Move not found")
    return await _send(robot, move)


@router.post("/say")
async def say(body: SayBody, robot: RobotLink = Depends(get_robot)) -> SendResult:
    """Send an ad hoc phrase."""
    return await _send(robot, SpeakAction(id=new_id(), phrase=body.phrase))
