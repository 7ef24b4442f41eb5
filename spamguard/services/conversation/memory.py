"""Chat message persistence using Supabase."""

from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, List, Optional

from ...models.chat import ChatMessage
from ...services.supabase_client import MESSAGES_TABLE, get_supabase_client
from ...logging_config import get_logger

logger = get_logger(__name__)


class ConversationMemory:
    """Appends and reads chat messages stored in Supabase."""

    def __init__(self, client: Optional[Any] = None):
        self.client = client if client is not None else get_supabase_client()

    async def append_message(self, chat_id: str, role: str, content: str, user_id: str) -> None:
        """Append one message to a chat owned by ``user_id``."""

        if not self.client:
            logger.warning("Cannot record message: Supabase client not available")
            return

        try:
            data = {
                "chat_id": chat_id,
                "user_id": user_id,
                "role": role,
                "content": content,
                "created_at": datetime.now(timezone.utc).isoformat(),
            }

            self.client.table(MESSAGES_TABLE).insert(data).execute()
            logger.debug(f"Recorded {role} message for chat {chat_id}")

        except Exception as e:
            logger.error(f"Failed to record {role} message for chat {chat_id}: {e}")

    async def get_chat_messages(self, chat_id: str, user_id: str, limit: int = 100) -> List[ChatMessage]:
        """Get messages of a chat owned by ``user_id``, oldest first."""

        if not self.client:
            logger.warning("Cannot get history: Supabase client not available")
            return []

        try:
            result = (
                self.client
                .table(MESSAGES_TABLE)
                .select('*')
                .eq('chat_id', chat_id)
                .eq('user_id', user_id)
                .order('created_at', desc=False)
                .limit(limit)
                .execute()
            )

            messages = [
                ChatMessage(
                    chat_id=row['chat_id'],
                    role=row['role'],
                    content=row['content'],
                    timestamp=row.get('created_at'),
                )
                for row in result.data
            ]

            logger.debug(f"Retrieved {len(messages)} messages for chat {chat_id}")
            return messages

        except Exception as e:
            logger.error(f"Failed to get messages for chat {chat_id}: {e}")
            return []

    async def clear_chat(self, chat_id: str, user_id: str) -> None:
        """Delete every message of a chat owned by ``user_id``."""

        if not self.client:
            logger.warning("Cannot clear chat: Supabase client not available")
            return

        try:
            (
                self.client
                .table(MESSAGES_TABLE)
                .delete()
                .eq('chat_id', chat_id)
                .eq('user_id', user_id)
                .execute()
            )

            logger.info(f"Cleared messages for chat {chat_id}")

        except Exception as e:
            logger.error(f"Failed to clear chat {chat_id}: {e}")


@lru_cache(maxsize=1)
def get_conversation_memory() -> ConversationMemory:
    """Get the global conversation memory instance."""
    return ConversationMemory()
