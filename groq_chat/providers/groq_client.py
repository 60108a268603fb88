"""Groq Provider 适配器。

Groq 提供 OpenAI 兼容接口：
- 对话: POST {base_url}/chat/completions
- 模型列表: GET {base_url}/models（仅用于连通性/密钥探测）
- 认证: Authorization: Bearer <api_key>

本模块负责把统一的 ChatRequest 转成请求 JSON，调用 HTTP 接口，
处理网络/API 异常，并把响应解析为 ChatResult。
不做重试、缓存或限流。
"""

from typing import Any, Dict, List

import httpx

from groq_chat.domain.exceptions import (
    ApiError,
    ConfigurationError,
    EmptyResponseError,
    NetworkError,
    RateLimitError,
)
from groq_chat.domain.models import ChatChoice, ChatMessage, ChatRequest, ChatResult, ChatUsage
from groq_chat.providers.registry import GROQ_CONFIG


DEFAULT_CHAT_ERROR = "Failed to get response from Groq API"
DEFAULT_MODELS_ERROR = "Failed to connect to Groq API. Please check your API key."
NO_RESPONSE_ERROR = "No response from the assistant"


class GroqClient:
    """Groq 提供方客户端实现。

    凭据通过构造时传入的 settings 对象提供，便于测试时替换。
    """

    name = "groq"

    def __init__(self, settings):
        self._settings = settings

    @property
    def base_url(self) -> str:
        return (getattr(self._settings, "groq_base_url", None) or GROQ_CONFIG.base_url).rstrip("/")

    def chat(self, req: ChatRequest) -> ChatResult:
        """执行一次非流式对话调用。"""

        self._require_api_key()
        payload = self._build_payload(req)
        try:
            with httpx.Client(timeout=self._settings.http_timeout, trust_env=False) as client:
                resp = client.post(
                    f"{self.base_url}/chat/completions",
                    json=payload,
                    headers=self._headers(json_body=True),
                )
        except httpx.RequestError as e:
            raise NetworkError(code="NETWORK_ERROR", message=str(e) or type(e).__name__)
        self._raise_for_status(resp, DEFAULT_CHAT_ERROR)
        try:
            data = resp.json()
        except ValueError:
            raise EmptyResponseError(code="NO_RESPONSE", message=NO_RESPONSE_ERROR, http_status=resp.status_code)
        if not isinstance(data, dict):
            raise EmptyResponseError(code="NO_RESPONSE", message=NO_RESPONSE_ERROR, http_status=resp.status_code)
        return self._parse_response(data, req)

    def list_models(self) -> List[Dict[str, Any]]:
        """调用 GET /models，返回原始模型描述列表。"""

        self._require_api_key()
        try:
            with httpx.Client(timeout=self._settings.http_timeout, trust_env=False) as client:
                resp = client.get(f"{self.base_url}/models", headers=self._headers())
        except httpx.RequestError as e:
            raise NetworkError(code="NETWORK_ERROR", message=str(e) or type(e).__name__)
        self._raise_for_status(resp, DEFAULT_MODELS_ERROR)
        try:
            data = resp.json()
        except ValueError:
            raise EmptyResponseError(code="NO_RESPONSE", message=DEFAULT_MODELS_ERROR, http_status=resp.status_code)
        models = data.get("data") if isinstance(data, dict) else None
        return [m for m in (models or []) if isinstance(m, dict)]

    # ---- 辅助方法 ----

    def _require_api_key(self) -> None:
        if not getattr(self._settings, "groq_api_key", None):
            raise ConfigurationError(
                code="MISSING_API_KEY",
                message="Groq API key is missing. Please add GROQ_API_KEY to your environment variables.",
            )

    def _headers(self, json_body: bool = False) -> Dict[str, str]:
        headers = {"Authorization": f"Bearer {self._settings.groq_api_key}"}
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    def _build_payload(self, req: ChatRequest) -> dict:
        return {
            "model": req.model,
            "messages": [{"role": m.role, "content": m.content} for m in req.messages],
            "temperature": req.temperature,
            "max_tokens": req.max_tokens,
        }

    def _raise_for_status(self, resp, default_message: str) -> None:
        # 只有 2xx 算成功；httpx 默认不跟随重定向，3xx 也按端点错误处理
        if 200 <= resp.status_code < 300:
            return
        message = self._extract_error_message(resp, default_message)
        if resp.status_code == 429:
            raise RateLimitError(code="RATE_LIMIT", message=message, http_status=429)
        raise ApiError(code="API_ERROR", message=message, http_status=resp.status_code)

    @staticmethod
    def _extract_error_message(resp, default_message: str) -> str:
        """尽力从 {"error": {"message": ...}} 中取出错误信息。"""

        try:
            body = resp.json()
        except ValueError:
            return default_message
        if not isinstance(body, dict):
            return default_message
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        return default_message

    def _parse_response(self, data: dict, req: ChatRequest) -> ChatResult:
        """解析响应；形状不对的 choice/usage 直接跳过，没有可用 choice 时由上层报“无响应”。"""

        choices: list[ChatChoice] = []
        raw_choices = data.get("choices")
        if not isinstance(raw_choices, list):
            raw_choices = []
        for i, ch in enumerate(raw_choices):
            if not isinstance(ch, dict):
                continue
            msg = ch.get("message")
            if not isinstance(msg, dict):
                continue
            content = msg.get("content")
            cm = ChatMessage(
                role=msg.get("role") or "assistant",
                content=content if isinstance(content, str) else "",
            )
            index = ch.get("index")
            choices.append(
                ChatChoice(
                    index=index if isinstance(index, int) else i,
                    message=cm,
                    finish_reason=ch.get("finish_reason"),
                )
            )
        usage_raw = data.get("usage")
        usage = None
        if isinstance(usage_raw, dict) and usage_raw:
            usage = ChatUsage(
                prompt_tokens=usage_raw.get("prompt_tokens", 0),
                completion_tokens=usage_raw.get("completion_tokens", 0),
                total_tokens=usage_raw.get("total_tokens", 0),
            )
        return ChatResult(model=req.model, choices=choices, usage=usage, raw=data)
