import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from groq_chat.config.settings import settings

LOGGER_NAME = "groq_chat"


class JsonFormatter(logging.Formatter):
    """一行一个 JSON；结构化字段放在 record.extra 中。"""

    def __init__(self, redact_content: bool = False):
        super().__init__()
        self._redact_content = redact_content

    def format(self, record: logging.LogRecord) -> str:
        msg = record.getMessage()
        if self._redact_content:
            msg = (msg or "")[:64]
        payload = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "name": record.name,
            "msg": msg,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def build_file_handler(cfg=settings) -> logging.FileHandler:
    log_dir = Path(cfg.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    fh = logging.FileHandler(log_dir / cfg.log_file, encoding="utf-8")
    fh.setLevel(cfg.log_level)
    fh.setFormatter(JsonFormatter(redact_content=cfg.log_redact_content))
    return fh


def setup_logger(cfg=settings) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(cfg.log_level)
    # 重复调用时不要叠加 handler
    if not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        logger.addHandler(build_file_handler(cfg))
    return logger


logger = setup_logger()
