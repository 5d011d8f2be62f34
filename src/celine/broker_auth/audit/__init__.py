"""Decision logging package."""

from .logger import DecisionLogger, configure_logging, resolve_log_level

__all__ = [
    "DecisionLogger",
    "configure_logging",
    "resolve_log_level",
]
