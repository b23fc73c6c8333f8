from __future__ import annotations

from copy import copy
from typing import List

from pydantic import BaseModel, ConfigDict, Field, model_validator

from monoguard.constants import (
    DEFAULT_EXCLUDE_PATHS,
    DEFAULT_ROOT_PREFIXES,
    DEFAULT_SOURCE_EXTENSIONS,
)
from monoguard.core.project import ProjectType


class Config(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class DepConstraint(Config):
    """
    Tag-based policy: projects tagged with 'source_tag' may only depend on
    libraries carrying at least one of 'only_depend_on_libs_with_tags'.
    """

    source_tag: str = Field(alias="sourceTag")
    only_depend_on_libs_with_tags: List[str] = Field(
        default_factory=list, alias="onlyDependOnLibsWithTags"
    )


class BoundaryRules(Config):
    """
    Options for the module boundary rule.

    'allow' lists import specifiers which are never checked.
    'dep_constraints' are evaluated in declared order, first match wins.
    """

    allow: List[str] = Field(default_factory=list)
    dep_constraints: List[DepConstraint] = Field(
        default_factory=list, alias="depConstraints"
    )


class ProjectConfig(Config):
    """
    Configuration for a single project (application or library) in the workspace.
    """

    name: str
    root: str
    type: ProjectType = ProjectType.LIBRARY
    tags: List[str] = Field(default_factory=list)


class WorkspaceConfig(Config):
    """
    Central configuration object for a workspace using monoguard.

    Declares the projects, the package scope used for internal imports,
    and the boundary rules.
    """

    npm_scope: str = Field(alias="npmScope")
    projects: List[ProjectConfig] = Field(default_factory=list)
    rules: BoundaryRules = Field(default_factory=BoundaryRules)
    root_prefixes: List[str] = Field(
        default_factory=lambda: copy(DEFAULT_ROOT_PREFIXES), alias="rootPrefixes"
    )
    source_extensions: List[str] = Field(
        default_factory=lambda: copy(DEFAULT_SOURCE_EXTENSIONS),
        alias="sourceExtensions",
    )
    exclude: List[str] = Field(default_factory=lambda: copy(DEFAULT_EXCLUDE_PATHS))
    disable_logging: bool = False

    @model_validator(mode="after")
    def check_unique_project_names(self) -> "WorkspaceConfig":
        seen: set[str] = set()
        for project in self.projects:
            if project.name in seen:
                raise ValueError(f"Duplicate project name: '{project.name}'")
            seen.add(project.name)
        return self
