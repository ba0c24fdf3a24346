from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ChatRole = Literal["user", "model"]


class ChatTurn(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    role: ChatRole
    text: str
    created_at: datetime = Field(default_factory=datetime.now, alias="createdAt")


class HistoryTurn(BaseModel):
    """Turn as sent to the model: role and text only."""

    role: ChatRole
    text: str
