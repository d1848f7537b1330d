"""Node and edge hand-off for diagram renderers."""

from __future__ import annotations

from dataclasses import asdict, dataclass

from planner.analysis_cache import AnalysisResult
from planner.dependency_graph import DependencyGraph
from planner.order_analyzer import topological_layers


@dataclass
class DiagramNode:
    """A task as seen by a renderer."""

    id: str
    label: str
    role: str  # minimal | maximal | isolated | inner
    layer: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class DiagramEdge:
    id: str
    source: str
    target: str

    def to_dict(self) -> dict:
        return asdict(self)


def node_role(task: str, result: AnalysisResult) -> str:
    is_minimal = task in result.minimal
    is_maximal = task in result.maximal
    if is_minimal and is_maximal:
        return "isolated"
    if is_minimal:
        return "minimal"
    if is_maximal:
        return "maximal"
    return "inner"


def build_diagram(
    graph: DependencyGraph, result: AnalysisResult
) -> tuple[list[DiagramNode], list[DiagramEdge]]:
    """Pair the live graph with a cached result.

    Roles come from ``result``, so a stale result yields stale roles; layers
    are always computed from ``graph``.
    """
    layer_of: dict[str, int] = {}
    for index, layer in enumerate(topological_layers(graph)):
        for task in layer:
            layer_of[task] = index

    nodes = [
        DiagramNode(id=task, label=task, role=node_role(task, result), layer=layer_of[task])
        for task in graph.tasks
    ]
    edges = [
        DiagramEdge(id=f"{rel.source}-{rel.target}", source=rel.source, target=rel.target)
        for rel in graph.relations
    ]
    return nodes, edges
