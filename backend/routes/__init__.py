"""FastAPI API endpoints under /api.

Endpoint groups: health, sessions, images, moves, robot (WebSocket +
instruction sending). Libraries are reached through app.state; see deps.py.
"""

from fastapi import APIRouter

from .health import router as health_router
from .images import router as images_router
from .moves import router as moves_router
from .robot import router as robot_router
from .sessions import router as sessions_router

router = APIRouter()
router.include_router(health_router)
router.include_router(sessions_router)
router.include_router(images_router)
router.include_router(moves_router)
router.include_router(robot_router)
