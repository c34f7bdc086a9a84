import time
from datetime import datetime
from enum import Enum
from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class Intent(str, Enum):
    WEATHER = "weather"
    MARKET_PRICE = "market_price"
    CROP_PLANNING = "crop_planning"
    SOIL_HEALTH = "soil_health"
    PEST_DISEASE = "pest_disease"
    FERTILIZER = "fertilizer"
    UNKNOWN = "unknown"


class Role(str, Enum):
    BOT = "bot"
    USER = "user"


def _time_based_id(role: Role) -> str:
    return f"{role.value}-{time.time_ns() // 1_000_000}"


class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    role: Role
    content: str
    ts: float = Field(default_factory=lambda: datetime.now().timestamp())

    @classmethod
    def create(cls, role: Role, content: str) -> "Message":
        return cls(id=_time_based_id(role), role=role, content=content)


class ChatSession(BaseModel):
    id: str = Field(default_factory=lambda: uuid4().hex)
    messages: List[Message] = Field(default_factory=list)
    busy: bool = Field(
        default=False, description="True while a chat turn is being answered."
    )
    ts: float = Field(default_factory=lambda: datetime.now().timestamp())


class SendMessageRequest(BaseModel):
    text: str


class ChatTurnResponse(BaseModel):
    intent: Intent
    user_message: Message
    bot_message: Message


class QuickAction(BaseModel):
    id: str
    label: str
    prompt: str


class GeneralChatRequest(BaseModel):
    """WebSocket `general_chat` payload; a missing chat_id starts a new session."""

    chat_id: Optional[str] = None
    text: str = ""
