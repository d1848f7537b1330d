"""Cached partial-order analysis snapshot."""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field

from planner.chain_enumerator import DEFAULT_MAX_CHAINS, find_chains
from planner.dependency_graph import DependencyGraph
from planner.order_analyzer import (
    EMPTY_NOTATION,
    maximal_tasks,
    minimal_tasks,
    relation_notation,
    topological_order,
)

logger = logging.getLogger("taskorder.analysis")


class AnalysisResult(BaseModel):
    """Immutable analysis snapshot, valid as of the recompute that built it."""

    model_config = ConfigDict(frozen=True)

    minimal: tuple[str, ...] = Field(default_factory=tuple)
    maximal: tuple[str, ...] = Field(default_factory=tuple)
    topological_order: tuple[str, ...] = Field(default_factory=tuple)
    chains: tuple[tuple[str, ...], ...] = Field(default_factory=tuple)
    notation: str = EMPTY_NOTATION


class AnalysisCache:
    """Holds the last analysis result; callers must call ``recompute`` after mutating."""

    def __init__(self, max_chains: int = DEFAULT_MAX_CHAINS) -> None:
        if max_chains < 1:
            raise ValueError(f"max_chains must be a positive integer, got {max_chains}")
        self.max_chains = max_chains
        self.result = AnalysisResult()

    def recompute(self, graph: DependencyGraph) -> AnalysisResult:
        """Rebuild the snapshot from ``graph`` and store it."""
        if not graph.tasks:
            self.result = AnalysisResult()
        else:
            chains = find_chains(graph, limit=self.max_chains)
            self.result = AnalysisResult(
                minimal=tuple(minimal_tasks(graph)),
                maximal=tuple(maximal_tasks(graph)),
                topological_order=tuple(topological_order(graph)),
                chains=tuple(tuple(chain) for chain in chains),
                notation=relation_notation(graph.relations),
            )
        logger.info(
            "Recomputed analysis: %d tasks, %d relations, %d chains",
            len(graph.tasks),
            len(graph.relations),
            len(self.result.chains),
        )
        return self.result

    def has_chain_of_size(self, size: int) -> bool:
        """True if any cached chain has exactly ``size`` tasks."""
        if size < 1:
            raise ValueError(f"Chain size must be a positive integer, got {size}")
        return any(len(chain) == size for chain in self.result.chains)

    def reset(self) -> None:
        self.result = AnalysisResult()
