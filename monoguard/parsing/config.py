from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

import tomli
import yaml
from pydantic import ValidationError

from monoguard import filesystem as fs
from monoguard.constants import CONFIG_FILE_NAME
from monoguard.core import ProjectGraph, ProjectNode, WorkspaceConfig
from monoguard.errors import MonoguardParseError, MonoguardSetupError
from monoguard.logging import logger

if TYPE_CHECKING:
    from pathlib import Path


def read_toml_file(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomli.load(f)


def read_yaml_file(path: Path) -> dict[str, Any]:
    with open(path, "r") as f:
        result = yaml.safe_load(f)
    if not result or not isinstance(result, dict):
        raise ValueError(f"Empty or invalid workspace config file: {path}")
    return result


def build_workspace_config(data: dict[str, Any], source: Path) -> WorkspaceConfig:
    try:
        return WorkspaceConfig(**data)
    except ValidationError as e:
        raise MonoguardParseError(f"Invalid workspace config in {source}:\n{e}") from e


def parse_workspace_config(
    root: Path,
    *,
    file_name: str = CONFIG_FILE_NAME,
) -> Optional[WorkspaceConfig]:
    """
    Read the workspace config from 'root', preferring TOML over YAML.

    Returns None when no config file exists.
    """
    file_path = fs.get_project_config_path(root, file_name=file_name)
    if file_path:
        try:
            data = read_toml_file(file_path)
        except tomli.TOMLDecodeError as e:
            raise MonoguardParseError(f"Failed to parse {file_path}: {e}") from e
        return build_workspace_config(data, file_path)

    file_path = fs.get_yaml_project_config_path(root, file_name=file_name)
    if file_path:
        try:
            data = read_yaml_file(file_path)
        except (yaml.YAMLError, ValueError) as e:
            raise MonoguardParseError(f"Failed to parse {file_path}: {e}") from e
        return build_workspace_config(data, file_path)

    return None


def collect_project_files(
    workspace_root: Path, project_root: str, config: WorkspaceConfig
) -> frozenset[str]:
    project_dir = workspace_root / project_root
    if not project_dir.is_dir():
        raise MonoguardSetupError(
            f"Project root '{project_root}' is not a directory in {workspace_root}"
        )
    return frozenset(
        fs.to_posix((project_dir / file_path).relative_to(workspace_root))
        for file_path in fs.walk_source_files(
            project_dir,
            extensions=config.source_extensions,
            workspace_root=workspace_root,
            exclude_paths=config.exclude,
        )
    )


def build_project_graph(workspace_root: Path, config: WorkspaceConfig) -> ProjectGraph:
    projects: list[ProjectNode] = []
    for project_config in config.projects:
        files = collect_project_files(workspace_root, project_config.root, config)
        logger.debug(
            "Discovered %d source files for project '%s'", len(files), project_config.name
        )
        projects.append(
            ProjectNode(
                name=project_config.name,
                type=project_config.type,
                tags=frozenset(project_config.tags),
                files=files,
                root=project_config.root.strip("/"),
            )
        )
    return ProjectGraph(projects)
