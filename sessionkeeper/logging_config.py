"""
Custom logging configuration to keep bearer tokens out of log output
"""

import logging
import logging.config
import re
from typing import Any, Dict, Optional

# Three base64url segments, the first starting like a JSON object
TOKEN_PATTERN = re.compile(r"eyJ[A-Za-z0-9_-]*\.[A-Za-z0-9_-]*\.[A-Za-z0-9_-]*")


class TokenRedactionFilter(logging.Filter):
    """Filter to mask bearer tokens in log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Replace anything token-shaped in the rendered message."""
        message = record.getMessage()
        if TOKEN_PATTERN.search(message):
            record.msg = TOKEN_PATTERN.sub("[REDACTED]", message)
            record.args = None
        return True  # Never drop records, only rewrite them


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """Get logging configuration with token redaction."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "token_redaction_filter": {
                "()": TokenRedactionFilter
            }
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
                "filters": ["token_redaction_filter"]
            }
        },
        "loggers": {
            "sessionkeeper": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            }
        },
        "root": {
            "level": "WARNING",
            "handlers": ["default"]
        }
    }


def configure_logging(level: Optional[str] = None) -> None:
    """Apply the logging configuration (level defaults to LOG_LEVEL from the environment)."""
    if level is None:
        from .config.provider import EnvConfigProvider
        level = EnvConfigProvider().get_logging_config().level
    logging.config.dictConfig(get_logging_config(level))
