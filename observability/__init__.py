from .logging import build_log_context, get_logger, log_event, now_ms

__all__ = ["build_log_context", "get_logger", "log_event", "now_ms"]
