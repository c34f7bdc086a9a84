import asyncio
import logging
from typing import Optional

from fastapi import HTTPException, status

from kisan_saathi.collections.chat_session import (
    get_chat_session_from_id,
    save_chat_session,
    save_message,
)
from kisan_saathi.core.config import settings
from kisan_saathi.models.chat_session import (
    ChatSession,
    ChatTurnResponse,
    Message,
    Role,
)
from kisan_saathi.services.intent import WELCOME_MESSAGE, classify, respond

logger = logging.getLogger(__name__)


async def create_chat_session() -> ChatSession:
    """Starts a conversation seeded with the welcome message."""
    chat = ChatSession()
    chat.messages.append(
        Message(id="welcome", role=Role.BOT, content=WELCOME_MESSAGE)
    )
    return await save_chat_session(chat)


async def chat_turn(
    chat_id: str, text: str, delay: Optional[float] = None
) -> ChatTurnResponse:
    """
    Runs one user/bot exchange.

    The user message is appended first, then after a fixed cosmetic delay the
    canned reply is appended. Only one turn per session may be outstanding;
    a second message sent meanwhile is rejected with 409.
    """
    if not text or not text.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Message text must not be empty",
        )

    chat_session = await get_chat_session_from_id(chat_id)
    if chat_session.busy:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A reply to the previous message is still pending",
        )

    chat_session.busy = True
    try:
        user_message = await save_message(
            chat_id, Message.create(role=Role.USER, content=text)
        )

        await asyncio.sleep(
            settings.CHAT_RESPONSE_DELAY_SECONDS if delay is None else delay
        )

        intent = classify(text)
        bot_message = await save_message(
            chat_id, Message.create(role=Role.BOT, content=respond(text))
        )
        logger.info("Chat %s answered as %s", chat_id, intent.value)
    finally:
        chat_session.busy = False

    return ChatTurnResponse(
        intent=intent, user_message=user_message, bot_message=bot_message
    )
