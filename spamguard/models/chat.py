"""Chat and conversation models."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """A single persisted chat message."""
    chat_id: Optional[str] = None
    role: str  # "user", "assistant"
    content: str
    timestamp: Optional[str] = None


class ChatRequest(BaseModel):
    """Inbound chat turn posted by the web client."""

    model_config = ConfigDict(populate_by_name=True)

    messages: List[Dict[str, Any]] = Field(default_factory=list)
    new_message: str = Field(alias="newMessage", min_length=1)
    chat_id: str = Field(alias="chatId", min_length=1)


class ChatHistoryResponse(BaseModel):
    """Response containing chat history."""
    messages: List[ChatMessage]


class ChatHistoryClearResponse(BaseModel):
    """Response for clearing chat history."""
    ok: bool = True
    message: str = "Chat history cleared successfully"
