"""
Core package: config, errors, logging.
"""

from run_history.core.config import config, Config
from run_history.core.errors import (
    ConfigurationError,
    EmptyGroupError,
    RunHistoryError,
    SummaryPathError,
    WorkflowResolutionError,
)
from run_history.core.logging_config import setup_logging, JsonFormatter

__all__ = [
    "config",
    "Config",
    "ConfigurationError",
    "EmptyGroupError",
    "RunHistoryError",
    "SummaryPathError",
    "WorkflowResolutionError",
    "setup_logging",
    "JsonFormatter",
]
