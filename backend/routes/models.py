"""Pydantic request/response models for API endpoints.

Sessions and images are sent and received in their stored form
(garlic.sessions.Session, garlic.images.Image).
"""

from pydantic import BaseModel, Field


class SayBody(BaseModel):
    phrase: str = Field(min_length=1)


class SendResult(BaseModel):
    command: str
    name: str
    delay: int


class RobotStatus(BaseModel):
    connected: bool
