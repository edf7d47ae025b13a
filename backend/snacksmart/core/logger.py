import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from snacksmart.core.config import get_settings

_CONFIGURED_LOGGERS: set[str] = set()


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a configured logger that logs to stdout.

    Level and format come from settings (LOG_LEVEL, LOG_JSON).
    Idempotent per logger name to avoid duplicate handlers.
    """
    logger_name = name or "snacksmart"
    logger = logging.getLogger(logger_name)

    if logger_name in _CONFIGURED_LOGGERS:
        return logger

    settings = get_settings()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logger.setLevel(level)

    handler = logging.StreamHandler(stream=sys.stdout)
    if settings.log_json:
        # Keep the JSON body clean; only prefix the level
        fmt = "%(levelname)s:     %(message)s"
    else:
        fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    handler.setFormatter(logging.Formatter(fmt))

    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False

    _CONFIGURED_LOGGERS.add(logger_name)
    return logger


class Logger:
    """Light wrapper that supports structured key=value or JSON logs."""

    def __init__(self, name: Optional[str] = None):
        self._name = name or "snacksmart"
        self._log = get_logger(self._name)
        self._json = get_settings().log_json

    def _emit(self, level: int, msg: str, exc_info: bool = False, **kv):
        if self._json:
            payload = {
                "ts": datetime.now(timezone.utc).isoformat(),
                "event": msg,
            }
            if kv:
                payload.update(kv)
            self._log.log(level, json.dumps(payload, ensure_ascii=False, default=str), exc_info=exc_info)
        elif kv:
            kv_str = " ".join(f"{k}={v}" for k, v in kv.items())
            self._log.log(level, f"{msg} | {kv_str}", exc_info=exc_info)
        else:
            self._log.log(level, msg, exc_info=exc_info)

    def info(self, msg: str, **kv):
        self._emit(logging.INFO, msg, **kv)

    def warn(self, msg: str, **kv):
        self._emit(logging.WARNING, msg, **kv)

    def error(self, msg: str, **kv):
        self._emit(logging.ERROR, msg, **kv)

    def exception(self, msg: str, **kv):
        self._emit(logging.ERROR, msg, exc_info=True, **kv)

    def debug(self, msg: str, **kv):
        self._emit(logging.DEBUG, msg, **kv)
