"""
Structured logging.

Every log line is a JSON object with the same queryable fields:
ts, level, module, action, msg, plus any context passed as kwargs.

USAGE
=====
from src.utils.logging import log, get_logger, configure_logging

logger = get_logger()
log.info(logger, "sbc", "parse_start", "Parsing SBC upload",
         filename=filename, pages=len(pages))

log.warning(logger, "llm.invoker", "attempt_failed", "Attempt failed",
            attempt=2, temperature=0.7, error=str(e))

ACTION NAMING
=============
  *_start    : beginning of an operation
  *_done     : successful completion
  *_failed   : error/failure
  *_retry    : about to retry with different parameters
  *_fallback : falling back to a backup model or default payload
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Optional


def _timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


class StructuredFormatter(logging.Formatter):
    """JSON formatter. Set pretty=True for human-readable development output."""

    def __init__(self, pretty: bool = False):
        super().__init__()
        self.pretty = pretty

    def format(self, record: logging.LogRecord) -> str:
        msg = record.getMessage()

        if getattr(record, "_structured", False):
            data = {
                "ts": _timestamp(),
                "level": record.levelname,
                "module": record._module,
                "action": record._action,
                "msg": msg,
            }
            for key, value in record._extra.items():
                if value is not None:
                    data[key] = value
        else:
            # Third-party log (uvicorn, httpx, ...)
            data = {
                "ts": _timestamp(),
                "level": record.levelname,
                "module": record.name,
                "action": "log",
                "msg": msg,
            }

        if record.exc_info:
            data["exc"] = self.formatException(record.exc_info)

        if self.pretty:
            return self._pretty(data)
        return json.dumps(data, default=str, separators=(",", ":"))

    def _pretty(self, data: dict) -> str:
        ts = data["ts"][11:23]  # HH:MM:SS.mmm
        lvl = data["level"][0]
        mod = data["module"].upper()[:12].ljust(12)

        skip = {"ts", "level", "module", "action", "msg"}
        ctx = " ".join(f"{k}={v}" for k, v in data.items() if k not in skip)

        line = f"{ts} {lvl} [{mod}] {data['action']}: {data['msg']}"
        return line + (f" | {ctx}" if ctx else "")


class StructuredLogger:
    """
    Centralized structured logging.

    All methods take a stdlib logger, a module name, an action name, a
    message, and arbitrary context fields. None-valued fields are dropped.
    """

    def _log(
        self,
        logger: logging.Logger,
        level: int,
        module: str,
        action: str,
        msg: str,
        **kwargs,
    ) -> None:
        extra = {
            "_structured": True,
            "_module": module,
            "_action": action,
            "_extra": {k: v for k, v in kwargs.items() if v is not None},
        }
        logger.log(level, msg, extra=extra)

    def info(self, logger: logging.Logger, module: str, action: str, msg: str, **kwargs) -> None:
        self._log(logger, logging.INFO, module, action, msg, **kwargs)

    def warning(self, logger: logging.Logger, module: str, action: str, msg: str, **kwargs) -> None:
        self._log(logger, logging.WARNING, module, action, msg, **kwargs)

    def error(
        self,
        logger: logging.Logger,
        module: str,
        action: str,
        msg: str,
        error: Optional[str] = None,
        error_type: Optional[str] = None,
        **kwargs,
    ) -> None:
        self._log(
            logger, logging.ERROR, module, action, msg,
            error=error, error_type=error_type, **kwargs,
        )

    def debug(self, logger: logging.Logger, module: str, action: str, msg: str, **kwargs) -> None:
        self._log(logger, logging.DEBUG, module, action, msg, **kwargs)


# Singleton instance, import this everywhere
log = StructuredLogger()

_app_logger: Optional[logging.Logger] = None


def get_logger() -> logging.Logger:
    """Shared application logger."""
    global _app_logger
    if _app_logger is None:
        _app_logger = logging.getLogger("sbc-copilot")
    return _app_logger


def configure_logging() -> None:
    """Configure the root logger with the structured formatter. Call once at startup.

    Reads from environment:
      LOG_FORMAT: "json" (default) or "pretty" (for development)
      LOG_LEVEL: "INFO" (default), "DEBUG", "WARNING", "ERROR"
    """
    pretty = os.environ.get("LOG_FORMAT", "json") == "pretty"
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter(pretty=pretty))

    logging.basicConfig(level=level, handlers=[handler], force=True)

    # LangChain is extremely chatty at DEBUG
    for name in ("langchain", "langchain_core", "langchain_openai", "openai"):
        logging.getLogger(name).setLevel(logging.WARNING)

    # HTTP clients
    for name in ("httpx", "httpcore", "urllib3"):
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
