from __future__ import annotations

TOOL_NAME: str = "monoguard"
CONFIG_FILE_NAME: str = TOOL_NAME
CACHE_DIR_NAME: str = f".{TOOL_NAME}"
LOG_FILE_NAME: str = f"{TOOL_NAME}.log"
IGNORE_DIRECTIVE: str = f"{TOOL_NAME}-ignore"
WILDCARD_TAG: str = "*"
INDEX_FILE_NAME: str = "index"
DEFAULT_ROOT_PREFIXES = ["apps", "libs"]
DEFAULT_SOURCE_EXTENSIONS = [".ts", ".tsx", ".js", ".jsx"]
DEFAULT_EXCLUDE_PATHS = ["node_modules", "dist", "tmp", "**/*.d.ts"]

__all__ = [
    "TOOL_NAME",
    "CONFIG_FILE_NAME",
    "CACHE_DIR_NAME",
    "LOG_FILE_NAME",
    "IGNORE_DIRECTIVE",
    "WILDCARD_TAG",
    "INDEX_FILE_NAME",
    "DEFAULT_ROOT_PREFIXES",
    "DEFAULT_SOURCE_EXTENSIONS",
    "DEFAULT_EXCLUDE_PATHS",
]
