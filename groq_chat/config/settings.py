"""配置管理模块。

支持从环境变量、.env 以及 config.yaml 加载配置。
API 密钥只在这里读取一次，之后显式传给 Provider 客户端，
调用时不会再去读进程环境。
"""

import os
import warnings
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_config_from_yaml() -> Dict[str, Any]:
    """从 config.yaml 加载配置（若存在）。"""
    candidates = []
    explicit = os.getenv("GROQ_CHAT_CONFIG_FILE")
    if explicit:
        candidates.append(Path(explicit).expanduser())
    candidates.extend([
        Path.cwd() / "config.yaml",
        Path(__file__).resolve().parents[2] / "config.yaml",
    ])

    seen: set[Path] = set()
    for path in candidates:
        if not path or path in seen:
            continue
        seen.add(path)
        try:
            if path.exists():
                data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
                if isinstance(data, dict):
                    return data
                warnings.warn(f"Config file {path} is not a mapping, ignored")
        except (OSError, yaml.YAMLError) as exc:
            warnings.warn(f"Failed to read config file {path}: {exc}")
    return {}


class Settings(BaseSettings):
    """运行配置（使用 Pydantic）。"""

    # ---- Groq 凭据与端点 ----
    groq_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("groq_api_key", "vite_groq_api_key"),
        description="Groq API 密钥，通常以 gsk_ 开头",
    )
    groq_base_url: str = Field(
        default="https://api.groq.com/openai/v1",
        description="Groq OpenAI 兼容接口的基础URL",
    )

    # ---- 对话默认值 ----
    default_language: str = Field(default="en", description="默认回复语言代码")
    default_model: str = Field(default="llama3-70b-8192", description="默认模型 ID")
    default_temperature: float = Field(default=0.7, ge=0.0, le=2.0, description="生成温度")
    default_max_tokens: int = Field(default=4096, ge=1, description="单次回复的 token 上限")

    http_timeout: float = Field(default=30.0, ge=1.0, description="HTTP 超时时间（秒）")
    log_dir: str = Field(default="logs", description="日志目录")
    log_file: str = Field(default="chat.log", description="日志文件名（位于 log_dir 下）")
    log_level: str = Field(default="INFO", description="日志级别，如 INFO、DEBUG")
    log_redact_content: bool = Field(default=False, description="是否脱敏日志内容")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @staticmethod
    def _config_source() -> Dict[str, Any]:
        return _load_config_from_yaml()

    @field_validator("groq_api_key")
    @classmethod
    def strip_api_key(cls, v: Optional[str]) -> Optional[str]:
        # 空字符串视为未配置，格式校验交给 api.status
        if v is None:
            return None
        v = v.strip()
        return v or None

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.strip().upper()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            cls._config_source,
            file_secret_settings,
        )


settings = Settings()
