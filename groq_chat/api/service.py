"""对外 API 服务模块。

负责把配置、Provider、补全客户端、编排器与采集端口组装在一起，
并提供简化的函数接口供上层界面调用。
"""

from typing import Any, Dict, List, Optional

from groq_chat.agents.chat_orchestrator import ChatOrchestrator, OrchestratorConfig
from groq_chat.agents.completion_client import CompletionClient
from groq_chat.agents.ports import ImageSource, TranscriptionSource
from groq_chat.api.status import ApiKeyStatus, ConnectionStatus, check_api_key, verify_connection
from groq_chat.config.settings import settings as default_settings
from groq_chat.domain.conversation import ConversationState
from groq_chat.domain.exceptions import ConfigurationError
from groq_chat.infrastructure.logging.logger import logger
from groq_chat.providers.base import ProviderClient
from groq_chat.providers.groq_client import GroqClient


class ChatService:
    """一次会话界面所需的全部能力。

    每个发送入口都会先做密钥检查，密钥缺失或格式错误时不会发出任何请求。

    采集端口由外层注入；未注入时对应的发送入口会抛出 ConfigurationError。
    """

    def __init__(
        self,
        cfg=default_settings,
        provider_client: Optional[ProviderClient] = None,
        transcription_source: Optional[TranscriptionSource] = None,
        image_source: Optional[ImageSource] = None,
    ):
        self._settings = cfg
        self._provider = provider_client or GroqClient(cfg)
        self._transcription_source = transcription_source
        self._image_source = image_source
        self.orchestrator = ChatOrchestrator(
            completion_client=CompletionClient(self._provider),
            config=OrchestratorConfig(
                language=getattr(cfg, "default_language", None) or "en",
                model=getattr(cfg, "default_model", None) or "llama3-70b-8192",
                temperature=getattr(cfg, "default_temperature", None),
                max_tokens=getattr(cfg, "default_max_tokens", None),
            ),
        )

    def key_status(self) -> ApiKeyStatus:
        return check_api_key(getattr(self._settings, "groq_api_key", None))

    def ensure_ready(self) -> None:
        """密钥缺失或格式错误时阻断聊天界面。"""
        status = self.key_status()
        if not status.is_available:
            logger.error("API key check failed", extra={"extra": {"code": status.code}})
            raise ConfigurationError(code=status.code or "INVALID_API_KEY", message=status.message)

    def connection_status(self) -> ConnectionStatus:
        """先做本地密钥检查，通过后再探测端点。"""
        status = self.key_status()
        if not status.is_available:
            return ConnectionStatus(success=False, message=status.message)
        return verify_connection(self._provider)

    def send_text(self, text: str) -> ConversationState:
        self.ensure_ready()
        self.orchestrator.send_text(text)
        return self.orchestrator.state

    def send_from_transcription(self) -> ConversationState:
        self.ensure_ready()
        if self._transcription_source is None:
            raise ConfigurationError(code="NO_TRANSCRIPTION_SOURCE", message="Speech input is not available")
        transcript = self._transcription_source.transcribe()
        self.orchestrator.send_audio_transcript(transcript)
        return self.orchestrator.state

    def send_from_image(self) -> ConversationState:
        self.ensure_ready()
        if self._image_source is None:
            raise ConfigurationError(code="NO_IMAGE_SOURCE", message="Image capture is not available")
        image = self._image_source.capture()
        self.orchestrator.send_image_caption(image.data, image.description)
        return self.orchestrator.state


_service: Optional[ChatService] = None


def get_default_service() -> ChatService:
    """获取默认的 ChatService 实例（单例）。"""
    global _service
    if _service is None:
        _service = ChatService()
    return _service


def run_chat(user_input: str) -> Dict[str, Any]:
    """发送一条文字消息并返回会话快照。

    Raises:
        ConfigurationError: 密钥缺失或格式错误。
    """
    try:
        state = get_default_service().send_text(user_input)
    except Exception as e:
        logger.error(f"Chat failed: {e}", extra={"extra": {"error": str(e)}})
        raise
    return state_to_dict(state)


def state_to_dict(state: ConversationState) -> Dict[str, Any]:
    messages: List[Dict[str, str]] = [{"role": m.role, "content": m.content} for m in state.messages]
    return {
        "messages": messages,
        "is_loading": state.is_loading,
        "error": state.error,
        "language": state.language,
        "model": state.model,
    }
