"""Runtime - ambient services used by the monads (structured logging)."""

from .logging import BoundLogger, configure_logging, get_logger, log_context, reset_logging

__all__ = ["BoundLogger", "configure_logging", "get_logger", "log_context", "reset_logging"]
