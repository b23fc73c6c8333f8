from __future__ import annotations

from monoguard.filesystem.project import (
    build_project_config_path,
    find_project_config_root,
    get_project_config_path,
    get_yaml_project_config_path,
    has_project_config,
)
from monoguard.filesystem.service import (
    is_relative,
    read_file,
    remove_ext,
    resolve_relative_import,
    to_posix,
    walk,
    walk_source_files,
)

__all__ = [
    "build_project_config_path",
    "find_project_config_root",
    "get_project_config_path",
    "get_yaml_project_config_path",
    "has_project_config",
    "is_relative",
    "read_file",
    "remove_ext",
    "resolve_relative_import",
    "to_posix",
    "walk",
    "walk_source_files",
]
