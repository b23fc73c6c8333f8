from monoguard.core.project import (
    Dependency,
    DependencyMap,
    DependencyType,
    ProjectGraph,
    ProjectNode,
    ProjectType,
)
from monoguard.core.imports import ImportInfo, Span
from monoguard.core.config import (
    BoundaryRules,
    DepConstraint,
    ProjectConfig,
    WorkspaceConfig,
)

__all__ = [
    "Dependency",
    "DependencyMap",
    "DependencyType",
    "ProjectGraph",
    "ProjectNode",
    "ProjectType",
    "BoundaryRules",
    "DepConstraint",
    "ProjectConfig",
    "WorkspaceConfig",
    "ImportInfo",
    "Span",
]
