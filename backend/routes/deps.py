"""Accessors for the libraries held on app.state (set up by create_app)."""

from fastapi import Request

from backend.robot import RobotLink
from garlic.images import ImageLibrary
from garlic.moves import MoveLibrary
from garlic.sessions import SessionLibrary


def get_sessions(request: Request) -> SessionLibrary:
    return request.app.state.sessions


def get_images(request: Request) -> ImageLibrary:
    return request.app.state.images


def get_moves(request: Request) -> MoveLibrary:
    return request.app.state.moves


def get_robot(request: Request) -> RobotLink:
    return request.app.state.robot
