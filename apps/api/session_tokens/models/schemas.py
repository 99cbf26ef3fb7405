from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


class Role(str, Enum):
    """Permission level of a token holder, serialized lowercase."""

    SUBSCRIBER = "subscriber"
    PUBLISHER = "publisher"
    MODERATOR = "moderator"


class MediaMode(str, Enum):
    ROUTED = "ROUTED"
    RELAYED = "RELAYED"


class ArchiveMode(str, Enum):
    MANUAL = "MANUAL"
    ALWAYS = "ALWAYS"


class TokenFormat(str, Enum):
    JWT = "jwt"
    T1 = "t1"


class SessionTokenRequest(BaseModel):
    role: Role = Role.PUBLISHER
    expire_time: float = Field(default=0, ge=0, description="Seconds since the UNIX epoch, 0 for the default lifetime")
    data: str | None = None
    initial_layout_class_list: list[str] | None = None
    format: TokenFormat = TokenFormat.JWT


class SessionTokenResponse(BaseModel):
    token: str
    session_id: str
    format: TokenFormat
    role: Role


class HealthResponse(BaseModel):
    status: str = "ok"
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
