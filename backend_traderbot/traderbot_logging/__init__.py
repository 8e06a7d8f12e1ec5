"""
Structured logging for Backend TraderBot.

JSON logs with timestamp, event_type and keyword context.
Use get_logger() in all modules for aggregation-friendly output.
"""

from backend_traderbot.traderbot_logging.logger import bind_wallet, configure_structlog, get_logger

__all__ = ["bind_wallet", "configure_structlog", "get_logger"]
