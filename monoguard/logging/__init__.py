from __future__ import annotations

from monoguard.logging.logger import CallInfo, init_logging, logger

__all__ = ["CallInfo", "init_logging", "logger"]
