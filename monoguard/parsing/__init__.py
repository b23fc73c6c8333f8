from __future__ import annotations

from monoguard.parsing.config import (
    build_project_graph,
    parse_workspace_config,
)
from monoguard.parsing.dependencies import build_dependency_map
from monoguard.parsing.imports import get_file_imports, parse_imports

__all__ = [
    "build_project_graph",
    "parse_workspace_config",
    "build_dependency_map",
    "get_file_imports",
    "parse_imports",
]
