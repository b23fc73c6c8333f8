from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional

from monoguard.constants import INDEX_FILE_NAME
from monoguard.filesystem.service import remove_ext


class ProjectType(str, Enum):
    APPLICATION = "application"
    LIBRARY = "library"


class DependencyType(str, Enum):
    STATIC = "static"
    LAZY = "lazy"


@dataclass(frozen=True)
class ProjectNode:
    """
    A single workspace unit.

    'files' holds workspace-relative paths, extensions included.
    """

    name: str
    type: ProjectType = ProjectType.LIBRARY
    tags: frozenset[str] = field(default_factory=frozenset)
    files: frozenset[str] = field(default_factory=frozenset)
    root: str = ""

    @property
    def is_application(self) -> bool:
        return self.type == ProjectType.APPLICATION


@dataclass(frozen=True)
class Dependency:
    project_name: str
    type: DependencyType = DependencyType.STATIC


DependencyMap = Dict[str, List[Dependency]]


class ProjectGraph:
    """
    The ordered, read-only set of projects in a workspace.

    Projects are sorted once by descending name length, so that lookups which
    iterate in order prefer the most specific name ('shared-ui' over 'shared').
    Import-based lookups depend on this order; file-based lookups only use it
    to break ties when two projects list the same file.
    """

    def __init__(self, projects: Iterable[ProjectNode] = ()):
        self._projects: tuple[ProjectNode, ...] = tuple(
            sorted(projects, key=lambda project: len(project.name), reverse=True)
        )
        self._by_name: dict[str, ProjectNode] = {}
        self._by_file: dict[str, ProjectNode] = {}
        for project in self._projects:
            self._by_name.setdefault(project.name, project)
            for file_path in project.files:
                self._by_file.setdefault(remove_ext(file_path), project)

    def __iter__(self) -> Iterator[ProjectNode]:
        return iter(self._projects)

    def __len__(self) -> int:
        return len(self._projects)

    def get(self, name: str) -> Optional[ProjectNode]:
        return self._by_name.get(name)

    def find_by_file(self, file_path: str) -> Optional[ProjectNode]:
        # Import specifiers usually omit the extension ('./foo.service'),
        # so the verbatim path is tried before the extension-stripped one
        project = self._by_file.get(file_path)
        if project is None:
            project = self._by_file.get(remove_ext(file_path))
        return project

    def find_by_file_or_index(self, file_path: str) -> Optional[ProjectNode]:
        project = self.find_by_file(file_path)
        if project is None:
            project = self.find_by_file(f"{file_path}/{INDEX_FILE_NAME}")
        return project

    def find_by_import(self, import_path: str, npm_scope: str) -> Optional[ProjectNode]:
        unscoped_import = import_path[len(npm_scope) + 2 :]
        return next(
            (
                project
                for project in self._projects
                if unscoped_import == project.name
                or unscoped_import.startswith(f"{project.name}/")
            ),
            None,
        )
