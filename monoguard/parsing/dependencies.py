from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from monoguard import filesystem as fs
from monoguard.core import Dependency, DependencyMap, DependencyType
from monoguard.logging import logger
from monoguard.parsing.imports import parse_imports, parse_lazy_references

if TYPE_CHECKING:
    from pathlib import Path

    from monoguard.core import ProjectGraph, ProjectNode


def resolve_target_project(
    projects: ProjectGraph, npm_scope: str, source_file: str, module_path: str
) -> Optional[ProjectNode]:
    if module_path.startswith(f"@{npm_scope}/"):
        return projects.find_by_import(module_path, npm_scope)
    if fs.is_relative(module_path):
        return projects.find_by_file_or_index(
            fs.resolve_relative_import(source_file, module_path)
        )
    return None


def collect_file_dependencies(
    content: str, file_path: str, projects: ProjectGraph, npm_scope: str
) -> list[Dependency]:
    """
    Static edges come from import declarations, lazy edges from
    'loadChildren' strings and dynamic import() calls.
    """
    dependencies: list[Dependency] = []
    for project_import in parse_imports(
        content, file_path, respect_ignore_directives=False
    ):
        target = resolve_target_project(
            projects, npm_scope, file_path, project_import.module_path
        )
        if target is not None:
            dependencies.append(Dependency(target.name, DependencyType.STATIC))
    for reference in parse_lazy_references(content):
        target = resolve_target_project(
            projects, npm_scope, file_path, reference.module_path
        )
        if target is not None:
            dependencies.append(Dependency(target.name, DependencyType.LAZY))
    return dependencies


def build_dependency_map(
    workspace_root: Path, projects: ProjectGraph, npm_scope: str
) -> DependencyMap:
    dependency_map: DependencyMap = {}
    for project in projects:
        edges: list[Dependency] = []
        seen: set[Dependency] = set()
        for file_path in sorted(project.files):
            try:
                content = fs.read_file(workspace_root / file_path)
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Skipping unreadable file '%s': %s", file_path, e)
                continue
            for dependency in collect_file_dependencies(
                content, file_path, projects, npm_scope
            ):
                # Self edges are dropped
                if dependency.project_name == project.name or dependency in seen:
                    continue
                seen.add(dependency)
                edges.append(dependency)
        dependency_map[project.name] = edges
    return dependency_map
