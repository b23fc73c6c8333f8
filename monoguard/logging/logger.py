from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Any, Dict

from monoguard import __version__
from monoguard.cache import resolve_cache_path
from monoguard.constants import LOG_FILE_NAME, TOOL_NAME

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(TOOL_NAME)
logger.setLevel(logging.INFO)


def init_logging(project_root: Path) -> None:
    if any(isinstance(handler, JsonLinesLoggingHandler) for handler in logger.handlers):
        return
    logger.addHandler(JsonLinesLoggingHandler(project_root))


@dataclass
class CallInfo:
    function: str
    parameters: Dict[str, Any] = field(default_factory=dict)


class JsonLinesLoggingHandler(logging.Handler):
    def __init__(self, project_root: Path):
        super().__init__()
        self.file_path = resolve_cache_path(project_root) / LOG_FILE_NAME

    def emit(self, record: logging.LogRecord) -> None:
        try:
            log_entry = self.format(record)
            with open(self.file_path, "a") as f:
                json.dump(
                    {
                        "version": __version__,
                        "call_info": asdict(getattr(record, "data"))
                        if hasattr(record, "data")
                        else {},
                        "level": record.levelname,
                        "timestamp": record.created,
                        "log_entry": log_entry,
                    },
                    f,
                )
                f.write("\n")
        except Exception:
            self.handleError(record)
