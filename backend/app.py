import logging
from pathlib import Path

from fastapi import FastAPI

from backend.config import Settings
from backend.robot import RobotLink
from backend.routes import router
from garlic.images import ImageLibrary
from garlic.moves import MoveLibrary
from garlic.sessions import SessionLibrary

logger = logging.getLogger(__name__)


def create_app(data_dir: Path | None = None, settings: Settings | None = None) -> FastAPI:
    """Build the app with its libraries.

    Loading fails (MissingAsset, StoreError) if a store file can't be decoded
    or a session refers to audio that isn't on disk.
    """
    settings = settings or Settings.from_env(data_dir)
    settings.data_dir.mkdir(parents=True, exist_ok=True)

    moves = MoveLibrary.scan(settings.moves_dir)

    app = FastAPI(title="Garlic")
    app.state.settings = settings
    app.state.moves = moves
    app.state.sessions = SessionLibrary.open(settings.sessions_file, moves, settings.audio_dir)
    app.state.images = ImageLibrary.open(settings.images_file, settings.upload_dir)
    app.state.robot = RobotLink()
    app.include_router(router, prefix="/api")

    logger.info(f"Serving data from {settings.data_dir}")
    return app
