"""Groq Chat 顶层包。

该包提供多语言聊天客户端的核心实现，
包括配置加载、领域模型、Provider 适配、补全客户端、
对话编排器以及密钥检查等能力。
"""

from groq_chat.agents.chat_orchestrator import ChatOrchestrator
from groq_chat.agents.completion_client import CompletionClient, CompletionOptions

__all__ = ["ChatOrchestrator", "CompletionClient", "CompletionOptions"]
