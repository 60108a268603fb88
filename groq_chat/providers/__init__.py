"""LLM Provider 集成层。

该包下的模块负责：
- 定义 Provider 抽象接口 (base)。
- 维护模型注册表与端点配置 (registry)。
- 提供具体实现 (groq_client)。
"""

from typing import Optional

from groq_chat.config.settings import settings
from groq_chat.domain.exceptions import ConfigurationError
from groq_chat.providers.base import ProviderClient
from groq_chat.providers.groq_client import GroqClient


def create_provider(name: Optional[str] = None) -> ProviderClient:
    """根据名称创建 Provider 实例，目前只有 groq。"""

    provider_name = (name or "groq").lower()
    if provider_name != "groq":
        raise ConfigurationError(code="UNKNOWN_PROVIDER", message=f"Unknown provider: {name!r}")
    return GroqClient(settings)
