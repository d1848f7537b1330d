"""Partial-order analysis over a dependency graph snapshot."""

from __future__ import annotations

from collections import deque

from planner.dependency_graph import DependencyGraph, Relation

EMPTY_NOTATION = "{}"


class GraphInconsistencyError(RuntimeError):
    """Raised when a graph that should be acyclic cannot be fully ordered."""


def minimal_tasks(graph: DependencyGraph) -> list[str]:
    """Tasks with no incoming relation, in insertion order."""
    targets = {rel.target for rel in graph.relations}
    return [task for task in graph.tasks if task not in targets]


def maximal_tasks(graph: DependencyGraph) -> list[str]:
    """Tasks with no outgoing relation, in insertion order."""
    sources = {rel.source for rel in graph.relations}
    return [task for task in graph.tasks if task not in sources]


def _adjacency(graph: DependencyGraph) -> tuple[dict[str, list[str]], dict[str, int]]:
    successors: dict[str, list[str]] = {task: [] for task in graph.tasks}
    in_degree: dict[str, int] = {task: 0 for task in graph.tasks}
    for rel in graph.relations:
        successors[rel.source].append(rel.target)
        in_degree[rel.target] += 1
    return successors, in_degree


def topological_order(graph: DependencyGraph) -> list[str]:
    """Kahn's algorithm with a FIFO queue seeded in task insertion order.

    Successors are released in relation insertion order, so the result is
    fully determined by the graph's construction history.
    """
    successors, in_degree = _adjacency(graph)
    queue = deque(task for task in graph.tasks if in_degree[task] == 0)
    order: list[str] = []
    while queue:
        current = queue.popleft()
        order.append(current)
        for neighbor in successors[current]:
            in_degree[neighbor] -= 1
            if in_degree[neighbor] == 0:
                queue.append(neighbor)

    if len(order) != len(graph.tasks):
        ordered = set(order)
        unordered = [task for task in graph.tasks if task not in ordered]
        raise GraphInconsistencyError(
            f"Topological order covers {len(order)} of {len(graph.tasks)} tasks; "
            f"unordered: {unordered}"
        )
    return order


def topological_layers(graph: DependencyGraph) -> list[list[str]]:
    """Group tasks into levels; every task sits one level below its deepest predecessor.

    Tasks within a level keep insertion order.
    """
    successors, in_degree = _adjacency(graph)
    layer = [task for task in graph.tasks if in_degree[task] == 0]
    layers: list[list[str]] = []
    placed = 0
    while layer:
        layers.append(layer)
        placed += len(layer)
        released: set[str] = set()
        for task in layer:
            for neighbor in successors[task]:
                in_degree[neighbor] -= 1
                if in_degree[neighbor] == 0:
                    released.add(neighbor)
        layer = [task for task in graph.tasks if task in released]

    if placed != len(graph.tasks):
        raise GraphInconsistencyError(
            f"Layering placed {placed} of {len(graph.tasks)} tasks"
        )
    return layers


def relation_notation(relations: tuple[Relation, ...] | list[Relation]) -> str:
    """Render relations as an explicit set of ordered pairs, e.g. ``{(A, B)}``."""
    if not relations:
        return EMPTY_NOTATION
    return "{" + ", ".join(str(rel) for rel in relations) + "}"
