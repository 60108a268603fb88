"""统一的对话与结果数据模型。

本模块定义了客户端内部共享的标准数据结构：

- ChatMessage: 一条对话消息（system/user/assistant）。
- ChatRequest: 发给底层 Provider 的完整请求。
- ChatResult: 从 Provider 响应解析出的统一结果。

Provider 适配器（如 GroqClient）只依赖这些模型，
并负责在 API JSON 和这些模型之间做转换。
"""

from dataclasses import dataclass
from typing import Literal, Optional, List


# 消息角色类型（与 OpenAI 兼容接口的 role 字段对应）
Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class ChatMessage:
    """一条对话消息，既可用于请求，也可用于响应。

    消息一旦追加到会话中就不再修改，因此定义为 frozen。
    """

    role: Role
    content: str


@dataclass
class ChatRequest:
    """一次完整的聊天请求。

    messages 已经包含系统提示词；Provider 只做 JSON 转换，不再改写历史。
    """

    model: str  # 厂商模型 ID，如 "llama3-70b-8192"，未知 ID 原样透传
    messages: List[ChatMessage]
    temperature: float = 0.7
    max_tokens: int = 4096


@dataclass
class ChatUsage:
    """Provider 返回的 token 统计信息。"""

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


@dataclass
class ChatChoice:
    """单个候选回答（本项目只消费 index=0 的一条）。"""

    index: int
    message: ChatMessage
    finish_reason: Optional[str] = None


@dataclass
class ChatResult:
    """一次对话调用的解析结果。

    - model: 请求时使用的模型 ID。
    - choices: 候选回答，可能为空（由上层判定为“无响应”）。
    - usage: 可选的 token 使用统计。
    - raw: 原始响应 JSON，用于调试。
    """

    model: str
    choices: List[ChatChoice]
    usage: Optional[ChatUsage] = None
    raw: Optional[dict] = None


@dataclass(frozen=True)
class ModelDescriptor:
    """静态模型注册表中的一项。"""

    id: str
    display_name: str
    context_window_tokens: int
    description: str
