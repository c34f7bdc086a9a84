import logging
from datetime import datetime
from typing import Dict, List, Optional

from fastapi import HTTPException, status

from kisan_saathi.core.config import settings
from kisan_saathi.models.chat_session import ChatSession, Message

logger = logging.getLogger(__name__)

# Conversations live only for the lifetime of the process.
_sessions: Dict[str, ChatSession] = {}


def _last_activity(chat_session: ChatSession) -> float:
    if chat_session.messages:
        return max(chat_session.ts, chat_session.messages[-1].ts)
    return chat_session.ts


def prune_chat_sessions(now: Optional[float] = None) -> int:
    """
    Drops idle sessions and enforces the session limit.

    A session is idle once its last message is older than
    CHAT_SESSION_TTL_SECONDS. If the store is still at CHAT_SESSION_LIMIT,
    the least recently active sessions are evicted to make room for one more.
    Sessions with a turn in flight are never removed. Returns how many
    sessions were dropped.
    """
    if now is None:
        now = datetime.now().timestamp()

    idle = [
        chat_id
        for chat_id, chat_session in _sessions.items()
        if not chat_session.busy
        and now - _last_activity(chat_session) > settings.CHAT_SESSION_TTL_SECONDS
    ]
    for chat_id in idle:
        del _sessions[chat_id]

    overflow = len(_sessions) - settings.CHAT_SESSION_LIMIT + 1
    evicted: List[str] = []
    if overflow > 0:
        candidates = sorted(
            (s for s in _sessions.values() if not s.busy), key=_last_activity
        )
        evicted = [s.id for s in candidates[:overflow]]
        for chat_id in evicted:
            del _sessions[chat_id]

    dropped = len(idle) + len(evicted)
    if dropped:
        logger.info("Dropped %d chat sessions (%d idle)", dropped, len(idle))
    return dropped


async def get_chat_session_from_id(chat_id: str) -> ChatSession:
    chat_session = _sessions.get(chat_id)
    if chat_session is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"ChatSession {chat_id} not found",
        )
    return chat_session


async def save_chat_session(chat: ChatSession) -> ChatSession:
    if chat.id not in _sessions:
        prune_chat_sessions()
    _sessions[chat.id] = chat
    return chat


async def get_messages_from_chat_session_id(
    chat_id: str, ts: Optional[float] = None, limit: Optional[int] = None
) -> List[Message]:
    chat_session = await get_chat_session_from_id(chat_id)
    messages = [m for m in chat_session.messages if ts is None or m.ts > ts]
    if limit:
        messages = messages[:limit]
    return messages


async def save_message(chat_id: str, message: Message) -> Message:
    chat_session = await get_chat_session_from_id(chat_id)
    chat_session.messages.append(message)
    return message


async def delete_chat_session(chat_id: str) -> bool:
    if _sessions.pop(chat_id, None) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"ChatSession {chat_id} not found.",
        )
    return True


def clear_chat_sessions() -> None:
    _sessions.clear()
