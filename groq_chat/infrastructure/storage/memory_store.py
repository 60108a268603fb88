from typing import List, Tuple

from groq_chat.domain.conversation import ConversationStore
from groq_chat.domain.exceptions import BusinessError
from groq_chat.domain.models import ChatMessage


class InMemoryConversationStore(ConversationStore):
    """按会话顺序保存消息的内存存储，不落盘。"""

    def __init__(self, initial: Tuple[ChatMessage, ...] | List[ChatMessage] = ()):
        self._messages: List[ChatMessage] = list(initial)

    def append(self, message: ChatMessage) -> None:
        self._messages.append(message)

    def replace_tail(self, message: ChatMessage) -> None:
        """替换最后一条消息。"""
        if not self._messages:
            raise BusinessError(code="STORE_EMPTY", message="No message to replace")
        self._messages[-1] = message

    def clear(self) -> None:
        self._messages.clear()

    def messages(self) -> Tuple[ChatMessage, ...]:
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)
