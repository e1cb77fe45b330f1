from __future__ import annotations

import json
import logging
import os
import sys
import time
import uuid
from typing import Any, Dict, Optional

LOGGER_NAME = "txsigner"
HANDLER_NAME = "txsigner-stderr"

_REDACT_MARKERS = ("PRIVATE_KEY", "SECRET", "PASSWORD", "TOKEN")


def now_ms() -> int:
    return int(time.time() * 1000)


def get_logger() -> logging.Logger:
    """
    JSON-lines logger on stderr. stdout is reserved for the signed transaction.

    TXSIGNER_LOG_LEVEL applies while the logger has no explicit level of its own.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if not any(h.get_name() == HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.propagate = False
    if logger.level == logging.NOTSET:
        level = (os.getenv("TXSIGNER_LOG_LEVEL") or "warning").strip().upper()
        logger.setLevel(getattr(logging, level, logging.WARNING))
    return logger


def build_log_context(*, tool: str, request_id: Optional[str] = None, **extra: Any) -> Dict[str, Any]:
    ctx: Dict[str, Any] = {
        "service": (os.getenv("TXSIGNER_SERVICE_NAME") or "txsigner").strip(),
        "tool": tool,
        "request_id": request_id or uuid.uuid4().hex[:12],
    }
    ctx.update(extra)
    return ctx


def _redact(data: Dict[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for k, v in data.items():
        if any(m in str(k).upper() for m in _REDACT_MARKERS):
            out[k] = "***REDACTED***"
        else:
            out[k] = v
    return out


def log_event(
    event: str,
    *,
    ctx: Dict[str, Any],
    data: Optional[Dict[str, Any]] = None,
    level: int = logging.INFO,
) -> None:
    logger = get_logger()
    if not logger.isEnabledFor(level):
        return
    payload = {"ts_ms": now_ms(), "event": event, **ctx, "data": _redact(data or {})}
    logger.log(level, json.dumps(payload, sort_keys=True, default=str))
