"""对话编排器。

把一次用户意图（文字 / 图片说明 / 语音转写）转换为：
乐观地追加用户消息 → 用完整历史调用补全客户端 → 追加助手回复或记录错误。

状态机：Idle → Sending → Idle（成功）/ Idle + error（失败）。
失败不会回滚已追加的用户消息，会话记录始终反映用户发过的内容。
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union
from uuid import uuid4
import logging
import threading
import time

from groq_chat.agents.completion_client import CompletionClient, CompletionOptions
from groq_chat.domain.conversation import ConversationState, ConversationStore
from groq_chat.domain.exceptions import BusinessError
from groq_chat.domain.models import ChatMessage
from groq_chat.infrastructure.logging.logger import logger
from groq_chat.infrastructure.storage.memory_store import InMemoryConversationStore
from groq_chat.prompts import DEFAULT_LANGUAGE
from groq_chat.providers.registry import DEFAULT_MODEL, is_known_model


IMAGE_WITH_DESCRIPTION = "[Image with description]: {description}"
IMAGE_WITHOUT_DESCRIPTION = "[Image without description]"
VOICE_INPUT = "[Voice input]: {transcript}"


@dataclass
class OrchestratorConfig:
    language: str = DEFAULT_LANGUAGE
    model: str = DEFAULT_MODEL
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None


class ChatOrchestrator:
    def __init__(
        self,
        completion_client: CompletionClient,
        store: Optional[ConversationStore] = None,
        config: Optional[OrchestratorConfig] = None,
    ):
        self._client = completion_client
        self._store = store if store is not None else InMemoryConversationStore()
        self._config = config or OrchestratorConfig()
        self._language = self._config.language
        self._model = self._config.model
        self._is_loading = False
        self._error: Optional[str] = None
        # 同一时刻只允许一个请求在途；重叠的发送直接被拒绝
        self._in_flight = threading.Lock()

    # ---- 只读状态 ----

    @property
    def state(self) -> ConversationState:
        return ConversationState(
            messages=self._store.messages(),
            is_loading=self._is_loading,
            error=self._error,
            language=self._language,
            model=self._model,
        )

    @property
    def messages(self):
        return self._store.messages()

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def language(self) -> str:
        return self._language

    @property
    def model(self) -> str:
        return self._model

    # ---- 用户意图 ----

    def send_text(self, text: str) -> bool:
        """发送一条文字消息；空白输入直接忽略。

        Returns:
            成功追加助手回复时返回 True。
        """
        if not text or not text.strip():
            return False
        return self._send(text, intent="text", fallback_error="Failed to send message")

    def send_image_caption(self, image_data: Union[bytes, str, None], description: str = "") -> bool:
        """发送图片：只把文字占位内容作为用户消息，图片数据本身不会发给端点。"""
        description = description or ""
        if description.strip():
            content = IMAGE_WITH_DESCRIPTION.format(description=description)
        else:
            content = IMAGE_WITHOUT_DESCRIPTION
        return self._send(
            content,
            intent="image",
            fallback_error="Failed to process image",
            image_bytes=len(image_data) if image_data else 0,
        )

    def send_audio_transcript(self, transcript: str) -> bool:
        if not transcript or not transcript.strip():
            return False
        return self._send(
            VOICE_INPUT.format(transcript=transcript),
            intent="audio",
            fallback_error="Failed to process audio",
        )

    def clear(self) -> None:
        """清空消息与错误，语言和模型保持不变。"""
        self._store.clear()
        self._error = None

    def set_language(self, code: str) -> None:
        self._language = code

    def set_model(self, model_id: str) -> None:
        if not is_known_model(model_id):
            self._log(logging.WARNING, "Selected unregistered model", {}, model=model_id)
        self._model = model_id

    # ---- 内部实现 ----

    def _send(self, content: str, intent: str, fallback_error: str, **fields: Any) -> bool:
        log_ctx: Dict[str, Any] = {"trace_id": f"tr-{uuid4().hex}", "intent": intent}
        if not self._in_flight.acquire(blocking=False):
            self._log(logging.WARNING, "Rejected send while a request is in flight", log_ctx)
            return False

        start_time = time.time()
        try:
            self._error = None
            self._is_loading = True
            self._store.append(ChatMessage(role="user", content=content))
            # 选项在发送时读取，之后的 set_language/set_model 只影响下一次请求
            options = CompletionOptions(
                model=self._model,
                language=self._language,
                temperature=self._config.temperature,
                max_tokens=self._config.max_tokens,
            )
            self._log(
                logging.INFO,
                "Calling completion endpoint",
                log_ctx,
                model=options.model,
                language=options.language,
                message_count=len(self._store),
                **fields,
            )
            try:
                reply = self._client.complete(self._store.messages(), options)
            except BusinessError as e:
                self._error = e.message or fallback_error
                self._log(logging.ERROR, "Completion failed", log_ctx, code=e.code, error=self._error)
                return False
            self._store.append(reply)
            self._log(
                logging.INFO,
                "Completed chat step",
                log_ctx,
                elapsed_seconds=round(time.time() - start_time, 2),
            )
            return True
        finally:
            self._is_loading = False
            self._in_flight.release()

    @staticmethod
    def _log(level: int, message: str, log_ctx: Dict[str, Any], **fields: Any) -> None:
        payload = dict(log_ctx)
        payload.update(fields)
        logger.log(level, message, extra={"extra": payload})
