from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

from .models import ChatMessage


@dataclass(frozen=True)
class ConversationState:
    """编排器对外暴露的只读快照，视图层只读不写。"""

    messages: Tuple[ChatMessage, ...]
    is_loading: bool
    error: Optional[str]
    language: str
    model: str


class ConversationStore(Protocol):
    def append(self, message: ChatMessage) -> None:
        ...

    def replace_tail(self, message: ChatMessage) -> None:
        ...

    def clear(self) -> None:
        ...

    def messages(self) -> Tuple[ChatMessage, ...]:
        ...

    def __len__(self) -> int:
        ...
