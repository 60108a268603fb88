"""对话补全客户端。

在 Provider 之上负责“请求构造”这一层：

1. 若历史中没有 system 消息，则按语言注入系统提示词（只影响请求，不写回存储）。
2. 补齐 temperature / max_tokens 默认值。
3. 调用 Provider，返回第一个候选回答。

Provider 抛出的 BusinessError 原样向上传递，由编排层统一转换为错误文本。
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from groq_chat.domain.exceptions import EmptyResponseError
from groq_chat.domain.models import ChatMessage, ChatRequest, ChatResult
from groq_chat.infrastructure.logging.logger import logger
from groq_chat.prompts import DEFAULT_LANGUAGE, get_system_prompt
from groq_chat.providers.base import ProviderClient
from groq_chat.providers.groq_client import NO_RESPONSE_ERROR
from groq_chat.providers.registry import DEFAULT_MODEL, is_known_model


DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 4096


@dataclass
class CompletionOptions:
    """单次补全的选项，None 表示使用默认值。"""

    model: str = DEFAULT_MODEL
    language: str = DEFAULT_LANGUAGE
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None


class CompletionClient:
    def __init__(self, provider_client: ProviderClient):
        self._provider_client = provider_client

    def build_request(self, history: Sequence[ChatMessage], options: CompletionOptions) -> ChatRequest:
        """构造请求；不修改传入的 history。"""

        messages: List[ChatMessage] = list(history)
        if not any(m.role == "system" for m in messages):
            messages.insert(0, ChatMessage(role="system", content=get_system_prompt(options.language)))
        return ChatRequest(
            model=options.model,
            messages=messages,
            temperature=DEFAULT_TEMPERATURE if options.temperature is None else options.temperature,
            max_tokens=DEFAULT_MAX_TOKENS if options.max_tokens is None else options.max_tokens,
        )

    def complete(self, history: Sequence[ChatMessage], options: Optional[CompletionOptions] = None) -> ChatMessage:
        """发送完整历史并返回第一个候选回答。

        Raises:
            ConfigurationError: 未配置 API 密钥（发请求前）。
            NetworkError / ApiError: 网络失败或端点返回错误。
            EmptyResponseError: 响应中没有任何 choice。
        """

        options = options or CompletionOptions()
        if not is_known_model(options.model):
            # 端点才是模型是否有效的权威，本地只记录
            logger.warning("Unknown model id, passing through", extra={"extra": {"model": options.model}})
        req = self.build_request(history, options)
        result: ChatResult = self._provider_client.chat(req)
        if not result.choices:
            raise EmptyResponseError(code="NO_RESPONSE", message=NO_RESPONSE_ERROR)
        if result.usage:
            logger.info(
                "Token usage",
                extra={"extra": {
                    "model": req.model,
                    "prompt_tokens": result.usage.prompt_tokens,
                    "completion_tokens": result.usage.completion_tokens,
                    "total_tokens": result.usage.total_tokens,
                }},
            )
        return result.choices[0].message
