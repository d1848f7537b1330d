"""Longest dependency chain discovery."""

from __future__ import annotations

import logging

from planner.dependency_graph import DependencyGraph
from planner.order_analyzer import minimal_tasks

logger = logging.getLogger("taskorder.analysis")

DEFAULT_MAX_CHAINS = 5


def find_chains(graph: DependencyGraph, limit: int = DEFAULT_MAX_CHAINS) -> list[list[str]]:
    """Return up to ``limit`` of the longest maximal chains, longest first.

    Paths start at each minimal task and extend along outgoing relations to
    successors not already on the path. A path is recorded once it cannot be
    extended further, so prefixes of a longer chain are not reported on their
    own. Identical sequences are reported once; equal-length chains keep
    discovery order.
    """
    if limit < 1:
        raise ValueError(f"Chain limit must be positive, got {limit}")

    successors: dict[str, list[str]] = {task: [] for task in graph.tasks}
    for rel in graph.relations:
        successors[rel.source].append(rel.target)

    candidates: list[list[str]] = []
    for start in minimal_tasks(graph):
        # Each frame is a path plus the index of the next successor to try.
        stack: list[tuple[list[str], int]] = [([start], 0)]
        while stack:
            path, index = stack.pop()
            node = path[-1]
            open_successors = [succ for succ in successors[node] if succ not in path]
            if not open_successors:
                if len(path) >= 2:
                    candidates.append(path)
                continue
            if index < len(open_successors):
                stack.append((path, index + 1))
                stack.append(([*path, open_successors[index]], 0))

    seen: set[tuple[str, ...]] = set()
    unique: list[list[str]] = []
    for chain in candidates:
        key = tuple(chain)
        if key not in seen:
            seen.add(key)
            unique.append(chain)

    unique.sort(key=len, reverse=True)
    logger.debug("Found %d distinct chains; keeping %d", len(unique), min(limit, len(unique)))
    return unique[:limit]
