from __future__ import annotations

from typing import TYPE_CHECKING

from monoguard.core import DependencyType

if TYPE_CHECKING:
    from pathlib import Path

    import pydot  # type: ignore

    from monoguard.core import Dependency, DependencyMap, ProjectGraph


def known_dependencies(
    projects: ProjectGraph, dependencies: DependencyMap, project_name: str
) -> list[Dependency]:
    # Edges from or to names outside the project graph are not drawn
    if projects.get(project_name) is None:
        return []
    return [
        dependency
        for dependency in dependencies.get(project_name, [])
        if projects.get(dependency.project_name) is not None
    ]


def generate_dependency_graph_dot_string(
    projects: ProjectGraph, dependencies: DependencyMap
) -> str:
    # Local import because networkx takes about ~100ms to load
    import networkx as nx

    graph = nx.DiGraph()  # type: ignore

    for project in sorted(projects, key=lambda project: project.name):
        graph.add_node(project.name)  # type: ignore

    for project_name in sorted(dependencies):
        for dependency in known_dependencies(projects, dependencies, project_name):
            if dependency.type == DependencyType.LAZY:
                graph.add_edge(project_name, dependency.project_name, style="dashed")  # type: ignore
            elif not graph.has_edge(project_name, dependency.project_name):  # type: ignore
                graph.add_edge(project_name, dependency.project_name)  # type: ignore

    pydot_graph: pydot.Dot = nx.nx_pydot.to_pydot(graph)  # type: ignore
    return str(pydot_graph.to_string())  # type: ignore


def generate_dependency_graph_mermaid_string(
    projects: ProjectGraph, dependencies: DependencyMap
) -> str:
    edges: list[str] = []
    isolated: list[str] = []
    LINE_ARROW = "-->"
    DOTTED_ARROW = "-.->"
    for project in sorted(projects, key=lambda project: project.name):
        project_dependencies = known_dependencies(projects, dependencies, project.name)
        for dependency in project_dependencies:
            arrow = DOTTED_ARROW if dependency.type == DependencyType.LAZY else LINE_ARROW
            edges.append(f"    {project.name} {arrow} {dependency.project_name}")
        if not project_dependencies:
            isolated.append(f"    {project.name}")

    return "graph TD\n" + "\n".join(edges) + "\n" + "\n".join(isolated)


def generate_dependency_graph_dot_file(
    projects: ProjectGraph, dependencies: DependencyMap, output_filepath: Path
) -> None:
    output_filepath.write_text(
        generate_dependency_graph_dot_string(projects, dependencies)
    )


def generate_dependency_graph_mermaid(
    projects: ProjectGraph, dependencies: DependencyMap, output_filepath: Path
) -> None:
    output_filepath.write_text(
        generate_dependency_graph_mermaid_string(projects, dependencies)
    )


__all__ = [
    "generate_dependency_graph_dot_file",
    "generate_dependency_graph_mermaid",
    "generate_dependency_graph_dot_string",
    "generate_dependency_graph_mermaid_string",
]
