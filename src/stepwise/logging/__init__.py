"""stepwise logging — structlog setup and levels for the stepwise loggers."""

from stepwise.logging.structlog_adapter import LIBRARY_LOGGERS, StructlogAdapter

__all__ = ["LIBRARY_LOGGERS", "StructlogAdapter"]
