"""Provider 与模型配置。

模型注册表是一张固定查找表：运行时不会新增或删除条目。
选择器展示的名称、上下文长度与说明都从这里读取。

注意：注册表只用于展示与提示，未登记的模型 ID 不会在本地被拒绝，
而是原样发给端点，由端点判断是否有效。
"""

from dataclasses import dataclass
from typing import List, Mapping, Optional

from groq_chat.domain.models import ModelDescriptor


@dataclass
class ProviderConfig:
    """某个 Provider 的整体配置。"""

    name: str
    base_url: str
    key_prefix: str
    models: Mapping[str, ModelDescriptor]


LLAMA3_8K = "llama3-70b-8192"
LLAMA3_INSTRUCT = "llama3-70b-8192-instruct"
MIXTRAL = "mixtral-8x7b-32768"
GEMMA = "gemma-7b-it"

MODELS: Mapping[str, ModelDescriptor] = {
    LLAMA3_8K: ModelDescriptor(
        id=LLAMA3_8K,
        display_name="Llama 3 (70B)",
        context_window_tokens=8192,
        description="Meta's flagship large language model with 70B parameters",
    ),
    LLAMA3_INSTRUCT: ModelDescriptor(
        id=LLAMA3_INSTRUCT,
        display_name="Llama 3 Instruct (70B)",
        context_window_tokens=8192,
        description="Instruction-tuned version of Llama 3 optimized for following instructions",
    ),
    MIXTRAL: ModelDescriptor(
        id=MIXTRAL,
        display_name="Mixtral (8x7B)",
        context_window_tokens=32768,
        description="Mixture of Experts model with a large 32k context window",
    ),
    GEMMA: ModelDescriptor(
        id=GEMMA,
        display_name="Gemma (7B)",
        context_window_tokens=8192,
        description="Lightweight and efficient model from Google",
    ),
}

DEFAULT_MODEL = LLAMA3_8K

GROQ_CONFIG = ProviderConfig(
    name="groq",
    base_url="https://api.groq.com/openai/v1",
    key_prefix="gsk_",
    models=MODELS,
)


def get_model_descriptor(model_id: str) -> Optional[ModelDescriptor]:
    return MODELS.get(model_id)


def is_known_model(model_id: str) -> bool:
    return model_id in MODELS


def list_models() -> List[ModelDescriptor]:
    """按注册顺序返回全部模型，供选择器展示。"""

    return list(MODELS.values())


def display_name(model_id: str) -> str:
    """返回模型展示名；未知 ID 时退回默认模型的名称。"""

    descriptor = MODELS.get(model_id) or MODELS[DEFAULT_MODEL]
    return descriptor.display_name
