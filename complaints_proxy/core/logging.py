"""
EEU Complaints Proxy - Logging setup.

``create_app`` calls ``configure_logging(settings.log_level)`` for every app
it builds. The stdout handler is installed on the root logger only once;
the level is applied on every call, so the most recently built app decides
it.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Loggers that would otherwise print a line per proxied request.
_CHATTY_LOGGERS = ("httpx", "httpcore", "uvicorn.access")

_handler: Optional[logging.Handler] = None


def resolve_level(name: Optional[str]) -> int:
    """Map a level name such as ``"debug"`` to its ``logging`` constant; unknown names mean INFO."""
    level = logging.getLevelName((name or "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: str = "INFO") -> None:
    global _handler

    root = logging.getLogger()
    root.setLevel(resolve_level(level))

    # uvicorn may already have installed its own handlers.
    if _handler is None and not root.handlers:
        _handler = logging.StreamHandler(sys.stdout)
        _handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))
        root.addHandler(_handler)

    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def excerpt(text: Optional[str], limit: int) -> str:
    """Return at most ``limit`` characters of ``text`` for logs and error bodies."""
    if not text:
        return ""
    return text[:limit]
