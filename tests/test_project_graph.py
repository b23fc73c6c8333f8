from __future__ import annotations

import pytest

from monoguard.core import ProjectGraph, ProjectNode


@pytest.fixture
def nested_graph() -> ProjectGraph:
    return ProjectGraph(
        [
            ProjectNode(name="shared", files=frozenset({"libs/shared/src/index.ts"})),
            ProjectNode(name="shared/ui", files=frozenset({"libs/shared/ui/src/index.ts"})),
            ProjectNode(
                name="shared/ui/buttons",
                files=frozenset({"libs/shared/ui/buttons/src/index.ts"}),
            ),
        ]
    )


def test_projects_sorted_by_descending_name_length(nested_graph):
    assert [project.name for project in nested_graph] == [
        "shared/ui/buttons",
        "shared/ui",
        "shared",
    ]


def test_empty_graph():
    graph = ProjectGraph()
    assert list(graph) == []
    assert graph.find_by_file("libs/lib1/src/index.ts") is None
    assert graph.find_by_import("@acme/lib1", "acme") is None


@pytest.mark.parametrize(
    "import_path,expected_name",
    [
        ("@acme/shared", "shared"),
        ("@acme/shared/utils", "shared"),
        ("@acme/shared/ui", "shared/ui"),
        ("@acme/shared/ui/src/lib/button", "shared/ui"),
        ("@acme/shared/ui/buttons", "shared/ui/buttons"),
        ("@acme/sharedx", None),
        ("@acme/other", None),
    ],
)
def test_find_by_import_prefers_longest_name(nested_graph, import_path, expected_name):
    project = nested_graph.find_by_import(import_path, "acme")
    assert (project.name if project else None) == expected_name


@pytest.mark.parametrize(
    "file_path,expected_name",
    [
        ("libs/shared/src/index.ts", "shared"),
        ("libs/shared/src/index", "shared"),
        ("libs/shared/src/index.js", "shared"),
        ("libs/shared/ui/src/index.tsx", "shared/ui"),
        ("libs/shared/src/other.ts", None),
        ("libs/shared/src", None),
    ],
)
def test_find_by_file(nested_graph, file_path, expected_name):
    project = nested_graph.find_by_file(file_path)
    assert (project.name if project else None) == expected_name


def test_find_by_file_or_index(nested_graph):
    assert nested_graph.find_by_file("libs/shared/ui/src") is None
    project = nested_graph.find_by_file_or_index("libs/shared/ui/src")
    assert project is not None
    assert project.name == "shared/ui"


def test_find_by_file_keeps_dotted_basenames():
    graph = ProjectGraph(
        [
            ProjectNode(name="lib1", files=frozenset({"libs/lib1/src/lib1.service.ts"})),
            ProjectNode(name="lib2", files=frozenset({"libs/lib1/src/lib1.ts"})),
        ]
    )
    assert graph.find_by_file("libs/lib1/src/lib1.service").name == "lib1"
    assert graph.find_by_file("libs/lib1/src/lib1").name == "lib2"


def test_file_resolution_ignores_project_names():
    # 'lib' owns a file under the directory of the longer-named project
    graph = ProjectGraph(
        [
            ProjectNode(name="lib", files=frozenset({"libs/lib-long/src/stray.ts"})),
            ProjectNode(name="lib-long", files=frozenset({"libs/lib-long/src/index.ts"})),
        ]
    )
    assert graph.find_by_file("libs/lib-long/src/stray.ts").name == "lib"


def test_get_by_name(nested_graph):
    assert nested_graph.get("shared/ui").name == "shared/ui"
    assert nested_graph.get("missing") is None
    assert len(nested_graph) == 3
