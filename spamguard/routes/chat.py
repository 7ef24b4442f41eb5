"""Chat routes for the web interface."""

from typing import AsyncIterator

from fastapi import APIRouter, Depends, HTTPException, Path, Request, status
from fastapi.responses import StreamingResponse
from pydantic import ValidationError

from ..config import Settings, get_settings
from ..logging_config import get_logger
from ..models.chat import ChatHistoryClearResponse, ChatHistoryResponse, ChatRequest
from ..prediction_client import PredictionClient, get_prediction_client
from ..services.auth import AuthenticatedUser, get_current_user
from ..services.conversation import ConversationMemory, get_conversation_memory
from ..streaming import StreamingRelay, StreamSink
from ..utils.responses import SSE_HEADERS, error_response

logger = get_logger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("")
async def stream_chat_message(
    request: Request,
    user: AuthenticatedUser = Depends(get_current_user),
    memory: ConversationMemory = Depends(get_conversation_memory),
    predictor: PredictionClient = Depends(get_prediction_client),
    settings: Settings = Depends(get_settings),
):
    """Classify a chat message and stream the result as server-sent events."""

    try:
        try:
            chat_request = ChatRequest.model_validate(await request.json())
        except (ValueError, ValidationError) as e:
            logger.error(f"Invalid chat request body from user {user.id}: {e}")
            return error_response("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)

        logger.info(
            f"🌐 WEB API: Message for chat {chat_request.chat_id} from {user.id} "
            f"({len(chat_request.messages)} prior messages)"
        )

        sink = StreamSink()
        relay = StreamingRelay(
            store=memory,
            predictor=predictor,
            token_delay=settings.token_delay_seconds,
        )

        async def event_stream() -> AsyncIterator[str]:
            relay.start(chat_request.chat_id, chat_request.new_message, sink, user.id)
            async for chunk in sink:
                yield chunk

        return StreamingResponse(
            event_stream(),
            media_type="text/event-stream",
            headers=SSE_HEADERS,
        )

    except Exception as e:
        logger.error(f"Error starting chat stream: {e}", exc_info=True)
        return error_response("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)


@router.get("/{chat_id}/messages", response_model=ChatHistoryResponse)
async def get_chat_messages(
    chat_id: str = Path(..., min_length=1),
    user: AuthenticatedUser = Depends(get_current_user),
    memory: ConversationMemory = Depends(get_conversation_memory),
) -> ChatHistoryResponse:
    """Get persisted messages of a chat."""

    try:
        messages = await memory.get_chat_messages(chat_id, user.id, limit=100)
        return ChatHistoryResponse(messages=messages)

    except Exception as e:
        logger.error(f"Error getting chat history: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.delete("/{chat_id}/messages", response_model=ChatHistoryClearResponse)
async def clear_chat_messages(
    chat_id: str = Path(..., min_length=1),
    user: AuthenticatedUser = Depends(get_current_user),
    memory: ConversationMemory = Depends(get_conversation_memory),
) -> ChatHistoryClearResponse:
    """Clear persisted messages of a chat."""

    try:
        await memory.clear_chat(chat_id, user.id)
        return ChatHistoryClearResponse()

    except Exception as e:
        logger.error(f"Error clearing chat history: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


__all__ = ["router"]
