"""Chat message schemas (REST history and WebSocket frames)."""

from datetime import datetime
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from hiring_portal.schemas.user import UserView
from hiring_portal.utils.validators import require_text


class MessageView(BaseModel):
    """A message with `senderId` hydrated into the sender's user view."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    project_id: str = Field(..., alias="projectId")
    sender: Optional[UserView] = Field(None, alias="senderId")
    body: str
    timestamp: datetime

    def to_frame(self) -> dict:
        return {"event": "newMessage", "data": self.model_dump(mode="json", by_alias=True)}


class ChatFrame(BaseModel):
    """Inbound WebSocket frame: {"event": ..., "data": ...}."""

    event: str
    data: Any = None


class JoinProjectEvent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    project_id: str = Field(..., alias="projectId", min_length=1)


class SendMessageEvent(BaseModel):
    """sendMessage payload; `message` is accepted as an alias of `body`."""

    model_config = ConfigDict(populate_by_name=True)

    project_id: str = Field(..., alias="projectId", min_length=1)
    sender_id: str = Field(..., alias="senderId", min_length=1)
    body: str = Field(..., validation_alias=AliasChoices("body", "message"))

    @field_validator("body")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return require_text(v)
