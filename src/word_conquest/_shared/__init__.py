# Area: Shared
"""
Shared utilities used by the map, the quiz engine and the store.

This package contains:
- Cooperative timer queue (Scheduler)
- Logging configuration
- Terminal rendering for the CLI
"""

from .scheduler import Scheduler, TimerHandle
from .logging_config import (
    setup_logging,
    log_engine_error,
    enable_quiet_mode,
    disable_quiet_mode,
    is_quiet_mode_enabled,
)

__all__ = [
    "Scheduler",
    "TimerHandle",
    "setup_logging",
    "log_engine_error",
    "enable_quiet_mode",
    "disable_quiet_mode",
    "is_quiet_mode_enabled",
]
