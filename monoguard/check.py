from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional

from monoguard import filesystem as fs
from monoguard.constants import DEFAULT_ROOT_PREFIXES, WILDCARD_TAG
from monoguard.core import (
    BoundaryRules,
    DepConstraint,
    DependencyMap,
    DependencyType,
    ImportInfo,
    ProjectGraph,
    ProjectNode,
    Span,
)
from monoguard.logging import logger
from monoguard.parsing import (
    build_dependency_map,
    build_project_graph,
    get_file_imports,
)

if TYPE_CHECKING:
    from pathlib import Path

    from monoguard.core import WorkspaceConfig


class RejectionKind(str, Enum):
    CROSS_PROJECT_RELATIVE_IMPORT = "CrossProjectRelativeImport"
    CIRCULAR_DEPENDENCY = "CircularDependency"
    IMPORT_OF_APPLICATION = "ImportOfApplication"
    DEEP_IMPORT = "DeepImport"
    EAGER_IMPORT_OF_LAZY_MODULE = "EagerImportOfLazyModule"
    UNTAGGED_PROJECT_CONSTRAINT_VIOLATION = "UntaggedProjectConstraintViolation"
    TAG_CONSTRAINT_VIOLATION = "TagConstraintViolation"


class ImportKind(Enum):
    WHITELISTED = "whitelisted"
    RELATIVE = "relative"
    ABSOLUTE = "absolute"
    SCOPED = "scoped"
    EXTERNAL = "external"


@dataclass(frozen=True)
class ErrorInfo:
    kind: RejectionKind
    message: str
    span: Span = Span(0, 0)


@dataclass(frozen=True)
class CheckResult:
    ok: bool
    error_info: Optional[ErrorInfo] = None

    @classmethod
    def success(cls) -> CheckResult:
        return cls(ok=True)

    @classmethod
    def fail(cls, kind: RejectionKind, message: str, span: Span) -> CheckResult:
        return cls(ok=False, error_info=ErrorInfo(kind=kind, message=message, span=span))


@dataclass(frozen=True)
class BoundaryContext:
    """
    Everything needed to judge an import, built once per lint run.

    Instances are read-only and may be shared across threads.
    """

    npm_scope: str
    projects: ProjectGraph
    dependencies: DependencyMap = field(default_factory=dict)
    rules: BoundaryRules = field(default_factory=BoundaryRules)
    root_prefixes: tuple[str, ...] = tuple(DEFAULT_ROOT_PREFIXES)

    @property
    def scope_prefix(self) -> str:
        return f"@{self.npm_scope}/"

    @classmethod
    def from_workspace(
        cls, workspace_root: Path, config: WorkspaceConfig
    ) -> BoundaryContext:
        projects = build_project_graph(workspace_root, config)
        dependencies = build_dependency_map(workspace_root, projects, config.npm_scope)
        return cls(
            npm_scope=config.npm_scope,
            projects=projects,
            dependencies=dependencies,
            rules=config.rules,
            root_prefixes=tuple(config.root_prefixes),
        )


@dataclass
class BoundaryError:
    file_path: str
    line_number: int
    import_mod_path: str
    error_info: ErrorInfo


def classify_import(context: BoundaryContext, import_path: str) -> ImportKind:
    if import_path in context.rules.allow:
        return ImportKind.WHITELISTED
    if fs.is_relative(import_path):
        return ImportKind.RELATIVE
    if any(
        import_path.startswith(f"{prefix}/") or import_path.startswith(f"/{prefix}/")
        for prefix in context.root_prefixes
    ):
        return ImportKind.ABSOLUTE
    if import_path.startswith(context.scope_prefix):
        return ImportKind.SCOPED
    return ImportKind.EXTERNAL


def resolve_import_target_file(import_info: ImportInfo, kind: ImportKind) -> str:
    if kind == ImportKind.RELATIVE:
        return fs.resolve_relative_import(
            import_info.containing_file, import_info.module_path
        )
    return import_info.module_path.lstrip("/")


def is_circular(
    dependencies: DependencyMap, source_project: ProjectNode, target_project: ProjectNode
) -> bool:
    # Only direct edges recorded for the target are considered
    return any(
        dependency.project_name == source_project.name
        for dependency in dependencies.get(target_project.name, [])
    )


def is_lazy_only_reachable(
    dependencies: DependencyMap,
    source_project_name: str,
    target_project_name: str,
    visited: frozenset[str] = frozenset(),
) -> bool:
    """
    True when some chain of lazy edges leads from source to target.

    Static edges are never followed, and an existing static path does not
    change the answer.
    """
    if source_project_name in visited:
        return False
    for dependency in dependencies.get(source_project_name, []):
        if dependency.type != DependencyType.LAZY:
            continue
        if dependency.project_name == target_project_name:
            return True
        if is_lazy_only_reachable(
            dependencies,
            dependency.project_name,
            target_project_name,
            visited | {source_project_name},
        ):
            return True
    return False


def has_tag(project: ProjectNode, tag: str) -> bool:
    return tag == WILDCARD_TAG or tag in project.tags


def has_none_of_these_tags(project: ProjectNode, tags: list[str]) -> bool:
    return not any(has_tag(project, tag) for tag in tags)


def find_constraint_for(
    dep_constraints: list[DepConstraint], project: ProjectNode
) -> Optional[DepConstraint]:
    return next(
        (
            constraint
            for constraint in dep_constraints
            if has_tag(project, constraint.source_tag)
        ),
        None,
    )


def check_constraints(
    context: BoundaryContext,
    source_project: ProjectNode,
    target_project: ProjectNode,
    span: Span,
) -> CheckResult:
    dep_constraints = context.rules.dep_constraints
    if not dep_constraints:
        return CheckResult.success()

    constraint = find_constraint_for(dep_constraints, source_project)
    # When no constraint matches, force the user to provision one
    if constraint is None:
        return CheckResult.fail(
            RejectionKind.UNTAGGED_PROJECT_CONSTRAINT_VIOLATION,
            "A project without tags cannot depend on any libraries",
            span,
        )

    if has_none_of_these_tags(target_project, constraint.only_depend_on_libs_with_tags):
        allowed_tags = ", ".join(
            f'"{tag}"' for tag in constraint.only_depend_on_libs_with_tags
        )
        return CheckResult.fail(
            RejectionKind.TAG_CONSTRAINT_VIOLATION,
            f'A project tagged with "{constraint.source_tag}" '
            f"can only depend on libs tagged with {allowed_tags}",
            span,
        )
    return CheckResult.success()


def check_path_import(
    context: BoundaryContext, import_info: ImportInfo, kind: ImportKind
) -> CheckResult:
    target_file = resolve_import_target_file(import_info, kind)
    source_project = context.projects.find_by_file(import_info.containing_file)
    target_project = context.projects.find_by_file_or_index(target_file)

    # Unresolved projects are allowed: there is nothing to judge against
    if source_project is None or target_project is None:
        return CheckResult.success()

    if source_project != target_project:
        return CheckResult.fail(
            RejectionKind.CROSS_PROJECT_RELATIVE_IMPORT,
            f"library imports must start with {context.scope_prefix}",
            import_info.span,
        )
    return CheckResult.success()


def check_scoped_import(context: BoundaryContext, import_info: ImportInfo) -> CheckResult:
    import_path = import_info.module_path
    span = import_info.span
    source_project = context.projects.find_by_file(import_info.containing_file)
    target_project = context.projects.find_by_import(import_path, context.npm_scope)

    # Unresolved projects are allowed: there is nothing to judge against
    if source_project is None or target_project is None:
        return CheckResult.success()

    # Circularity is tested before the same-project shortcut
    if is_circular(context.dependencies, source_project, target_project):
        return CheckResult.fail(
            RejectionKind.CIRCULAR_DEPENDENCY,
            f'Circular dependency between "{source_project.name}" '
            f'and "{target_project.name}" detected',
            span,
        )

    if source_project == target_project:
        return CheckResult.success()

    if target_project.is_application:
        return CheckResult.fail(
            RejectionKind.IMPORT_OF_APPLICATION, "imports of apps are forbidden", span
        )

    if import_path != f"{context.scope_prefix}{target_project.name}":
        return CheckResult.fail(
            RejectionKind.DEEP_IMPORT, "deep imports into libraries are forbidden", span
        )

    if is_lazy_only_reachable(
        context.dependencies, source_project.name, target_project.name
    ):
        return CheckResult.fail(
            RejectionKind.EAGER_IMPORT_OF_LAZY_MODULE,
            "imports of lazy-loaded libraries are forbidden",
            span,
        )

    return check_constraints(context, source_project, target_project, span)


def check_import(context: BoundaryContext, import_info: ImportInfo) -> CheckResult:
    """
    Decide whether a single import is allowed.

    Checks run in a fixed order and the first failure is reported.
    """
    kind = classify_import(context, import_info.module_path)
    if kind in (ImportKind.RELATIVE, ImportKind.ABSOLUTE):
        return check_path_import(context, import_info, kind)
    if kind == ImportKind.SCOPED:
        return check_scoped_import(context, import_info)
    # Whitelisted and external imports are never checked
    return CheckResult.success()


def check_file(
    context: BoundaryContext, workspace_root: Path, file_path: str
) -> list[BoundaryError]:
    try:
        imports = get_file_imports(workspace_root, file_path)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Skipping unreadable file '%s': %s", file_path, e)
        return []

    errors: list[BoundaryError] = []
    for import_info in imports:
        check_result = check_import(context, import_info)
        if check_result.ok or check_result.error_info is None:
            continue
        errors.append(
            BoundaryError(
                file_path=file_path,
                line_number=import_info.line_number,
                import_mod_path=import_info.module_path,
                error_info=check_result.error_info,
            )
        )
    return errors


def check(
    workspace_root: Path,
    workspace_config: WorkspaceConfig,
    context: Optional[BoundaryContext] = None,
) -> list[BoundaryError]:
    if context is None:
        context = BoundaryContext.from_workspace(workspace_root, workspace_config)

    file_paths = sorted(
        {file_path for project in context.projects for file_path in project.files}
    )
    logger.debug(
        "Checking %d files across %d projects", len(file_paths), len(context.projects)
    )
    errors: list[BoundaryError] = []
    for file_path in file_paths:
        errors.extend(check_file(context, workspace_root, file_path))
    return errors


__all__ = [
    "BoundaryContext",
    "BoundaryError",
    "CheckResult",
    "ErrorInfo",
    "ImportKind",
    "RejectionKind",
    "check",
    "check_import",
]
