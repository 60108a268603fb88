"""Provider 抽象接口。

上层编排代码不直接依赖具体厂商的 HTTP 调用，而是依赖此协议：

- 每个厂商实现一个 ProviderClient（如 GroqClient）。
- 负责：将 ChatRequest 转成具体 API 请求，并把响应 JSON 解析为 ChatResult。
"""

from typing import Any, Dict, List, Protocol

from groq_chat.domain.models import ChatRequest, ChatResult


class ProviderClient(Protocol):
    """LLM Provider 客户端协议。

    - name: Provider 名称，用于日志。
    - chat(req): 执行一次非流式对话调用。
    - list_models(): 返回端点上可用的模型描述，用于连通性探测。
    """

    name: str

    def chat(self, req: ChatRequest) -> ChatResult:
        ...

    def list_models(self) -> List[Dict[str, Any]]:
        ...
