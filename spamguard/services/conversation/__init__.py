"""Conversation persistence services."""

from .memory import ConversationMemory, get_conversation_memory

__all__ = ["ConversationMemory", "get_conversation_memory"]
