import sys
import json
import logging
from contextvars import ContextVar
from typing import Any, Optional, Dict

from pydantic import BaseModel

from app.core.config import settings

_correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


class LogConfig(BaseModel):
    service: str = settings.SERVICE_NAME
    level: str = settings.LOG_LEVEL


config = LogConfig()


def set_correlation_id(value: Optional[str]):
    return _correlation_id.set(value)


def reset_correlation_id(token) -> None:
    _correlation_id.reset(token)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log: Dict[str, Any] = {
            "level": record.levelname,
            "message": record.getMessage(),
            "file": record.filename,
            "line": record.lineno,
            "service": config.service,
        }

        cid = _correlation_id.get()
        if cid:
            log["correlation_id"] = cid

        if hasattr(record, "extra") and isinstance(record.extra, dict):
            log.update(record.extra)

        if record.exc_info:
            log["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(log, ensure_ascii=False, default=str)


class Logger:
    _instance = None

    def __init__(self):
        if Logger._instance is None:
            logger = logging.getLogger(config.service)
            logger.setLevel(config.level)

            if not logger.handlers:
                handler = logging.StreamHandler(sys.stdout)
                handler.setFormatter(JsonFormatter())
                logger.addHandler(handler)

            logger.propagate = False
            Logger._instance = logger

    @staticmethod
    def get_logger() -> logging.Logger:
        if Logger._instance is None:
            Logger()
        return Logger._instance
