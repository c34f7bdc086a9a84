from typing import List, Optional

from fastapi import APIRouter, Query, status

from kisan_saathi.collections.chat_session import (
    delete_chat_session,
    get_chat_session_from_id,
    get_messages_from_chat_session_id,
)
from kisan_saathi.models.chat_session import (
    ChatSession,
    ChatTurnResponse,
    Message,
    QuickAction,
    SendMessageRequest,
)
from kisan_saathi.services.chat import chat_turn, create_chat_session
from kisan_saathi.services.intent import QUICK_ACTIONS

router = APIRouter(prefix="/chats", tags=["Chat"])


@router.post("/", response_model=ChatSession, status_code=status.HTTP_201_CREATED)
async def create_chat():
    """
    Creates a new chat session seeded with the welcome message.
    """
    return await create_chat_session()


@router.get("/quick-actions", response_model=List[QuickAction])
async def get_quick_actions():
    """Prompts offered as one-tap shortcuts."""
    return QUICK_ACTIONS


@router.get("/{chat_id}", response_model=ChatSession)
async def get_chat_session(chat_id: str):
    return await get_chat_session_from_id(chat_id)


@router.get("/{chat_id}/messages", response_model=List[Message])
async def get_chat_messages(
    chat_id: str,
    timestamp: Optional[float] = Query(
        default=None,
        description="Filter messages sent after this timestamp (Unix seconds)",
    ),
    limit: Optional[int] = Query(
        default=None, description="Limit the number of messages returned", ge=1, le=100
    ),
):
    """
    Get the conversation history in display order.
    """
    return await get_messages_from_chat_session_id(chat_id, ts=timestamp, limit=limit)


@router.post("/{chat_id}/messages", response_model=ChatTurnResponse)
async def send_chat_message(chat_id: str, request: SendMessageRequest):
    """
    Sends a user message and returns it together with the bot's reply.
    """
    return await chat_turn(chat_id, request.text)


@router.delete("/{chat_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_chat(chat_id: str):
    await delete_chat_session(chat_id)
    return
