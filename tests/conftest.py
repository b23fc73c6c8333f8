from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from monoguard.check import BoundaryContext
from monoguard.core import (
    BoundaryRules,
    DependencyMap,
    ProjectGraph,
    ProjectNode,
    ProjectType,
)

WORKSPACE_CONFIG = """
npm_scope = "acme"

[rules]
allow = ["@acme/lib1/testing"]

[[rules.dep_constraints]]
source_tag = "scope:feature"
only_depend_on_libs_with_tags = ["scope:shared"]

[[rules.dep_constraints]]
source_tag = "scope:app"
only_depend_on_libs_with_tags = ["*"]

[[projects]]
name = "app1"
root = "apps/app1"
type = "application"
tags = ["scope:app"]

[[projects]]
name = "lib1"
root = "libs/lib1"
tags = ["scope:shared"]

[[projects]]
name = "lib2"
root = "libs/lib2"
tags = ["scope:feature"]
"""


@pytest.fixture
def project_graph() -> ProjectGraph:
    return ProjectGraph(
        [
            ProjectNode(
                name="app1",
                type=ProjectType.APPLICATION,
                files=frozenset({"apps/app1/src/main.ts", "apps/app1/src/app.module.ts"}),
                root="apps/app1",
            ),
            ProjectNode(
                name="lib1",
                tags=frozenset({"scope:shared"}),
                files=frozenset(
                    {
                        "libs/lib1/src/index.ts",
                        "libs/lib1/src/lib/util.ts",
                        "libs/lib1/src/lib/lib1.service.ts",
                    }
                ),
                root="libs/lib1",
            ),
            ProjectNode(
                name="lib2",
                tags=frozenset({"scope:feature"}),
                files=frozenset({"libs/lib2/src/index.ts", "libs/lib2/src/lib/feature.tsx"}),
                root="libs/lib2",
            ),
        ]
    )


@pytest.fixture
def make_context(project_graph) -> Callable[..., BoundaryContext]:
    def _make_context(
        dependencies: DependencyMap | None = None,
        rules: BoundaryRules | None = None,
        projects: ProjectGraph | None = None,
    ) -> BoundaryContext:
        return BoundaryContext(
            npm_scope="acme",
            projects=projects or project_graph,
            dependencies=dependencies or {},
            rules=rules or BoundaryRules(),
        )

    return _make_context


@pytest.fixture
def write_workspace(tmp_path) -> Callable[[dict[str, str]], Path]:
    def _write_workspace(files: dict[str, str]) -> Path:
        for rel_path, content in files.items():
            path = tmp_path / rel_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        return tmp_path

    return _write_workspace


@pytest.fixture
def example_workspace(write_workspace) -> Path:
    return write_workspace(
        {
            "monoguard.toml": WORKSPACE_CONFIG,
            "apps/app1/src/main.ts": (
                "import { Lib1 } from '@acme/lib1';\n"
                "import { Feature } from '@acme/lib2';\n"
                "import { enableProdMode } from '@angular/core';\n"
            ),
            "libs/lib1/src/index.ts": "export * from './lib/util';\n",
            "libs/lib1/src/lib/util.ts": "export const util = 1;\n",
            "libs/lib2/src/index.ts": (
                "import { util } from '@acme/lib1';\n"
                "export const feature = util;\n"
            ),
        }
    )
