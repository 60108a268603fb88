"""API 密钥检查与连通性探测。

check_api_key 只做本地检查（是否存在、前缀是否正确），不发请求；
verify_connection 通过 GET /models 验证密钥，结果只用于向使用者展示，
任何失败都转换为 ConnectionStatus 而不是抛出。
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from groq_chat.domain.exceptions import BusinessError
from groq_chat.providers.base import ProviderClient
from groq_chat.providers.registry import GROQ_CONFIG


@dataclass
class ApiKeyStatus:
    is_available: bool
    message: str
    code: Optional[str] = None


@dataclass
class ConnectionStatus:
    success: bool
    message: str
    models: List[Dict[str, Any]] = field(default_factory=list)


def check_api_key(api_key: Optional[str]) -> ApiKeyStatus:
    if not api_key:
        return ApiKeyStatus(
            is_available=False,
            code="MISSING_API_KEY",
            message="Groq API key is missing. Please add GROQ_API_KEY to your .env file.",
        )
    if not api_key.startswith(GROQ_CONFIG.key_prefix):
        return ApiKeyStatus(
            is_available=False,
            code="INVALID_API_KEY",
            message=f'Groq API key has an invalid format. It should start with "{GROQ_CONFIG.key_prefix}".',
        )
    return ApiKeyStatus(is_available=True, message="Groq API key is available and has the correct format.")


def verify_connection(provider_client: ProviderClient) -> ConnectionStatus:
    try:
        models = provider_client.list_models()
    except BusinessError as e:
        message = e.message
        if e.code == "NETWORK_ERROR":
            message = f"Error testing Groq API connection: {e.message}"
        return ConnectionStatus(success=False, message=message)
    return ConnectionStatus(
        success=True,
        message=f"Successfully connected to Groq API. Available models: {len(models)}",
        models=models,
    )


def summarize_models(model_ids: Sequence[str], limit: int = 5) -> List[str]:
    """返回前 limit 个模型 ID，其余折叠为 "...and N more"。"""

    shown = list(model_ids[:limit])
    remaining = len(model_ids) - len(shown)
    if remaining > 0:
        shown.append(f"...and {remaining} more")
    return shown
