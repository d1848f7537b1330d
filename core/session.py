"""Editing session: one owned graph, its cached analysis, and change events.

Mutations never recompute on their own. After a batch of edits the caller
invokes :meth:`GraphSession.recompute`; until then ``result`` is the previous
snapshot and ``is_stale`` is True.
"""

from __future__ import annotations

import logging
import random
from typing import Any

from core.event_bus import ANALYSIS_RECOMPUTED, GRAPH_MUTATED, EventBus
from planner.analysis_cache import AnalysisCache, AnalysisResult
from planner.chain_enumerator import DEFAULT_MAX_CHAINS
from planner.dependency_graph import DependencyGraph, MutationOutcome
from planner.diagram_view import DiagramEdge, DiagramNode, build_diagram
from planner.models import GraphSnapshot
from planner.random_generator import RandomGraphGenerator

logger = logging.getLogger("taskorder.session")


class GraphSession:
    """Owns a DependencyGraph and an AnalysisCache for a single editor."""

    def __init__(
        self,
        config: dict[str, Any] | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.config = config or {}
        max_chains = int(self.config.get("analysis", {}).get("max_chains", DEFAULT_MAX_CHAINS))
        self.graph = DependencyGraph()
        self.cache = AnalysisCache(max_chains=max_chains)
        self.events = event_bus or EventBus()
        self._stale = False

    @classmethod
    def from_snapshot(
        cls, snapshot: GraphSnapshot, config: dict[str, Any] | None = None
    ) -> GraphSession:
        session = cls(config=config)
        session.load(snapshot)
        return session

    # ── reads ────────────────────────────────────────────────────────

    @property
    def tasks(self) -> tuple[str, ...]:
        return self.graph.tasks

    @property
    def relations(self) -> tuple[tuple[str, str], ...]:
        return tuple((rel.source, rel.target) for rel in self.graph.relations)

    @property
    def result(self) -> AnalysisResult:
        """Last recomputed snapshot; may be stale, see ``is_stale``."""
        return self.cache.result

    @property
    def is_stale(self) -> bool:
        return self._stale

    def has_chain_of_size(self, size: int) -> bool:
        return self.cache.has_chain_of_size(size)

    def would_create_cycle(self, source: str, target: str) -> bool:
        return self.graph.would_create_cycle(source, target)

    def snapshot(self) -> GraphSnapshot:
        return GraphSnapshot.from_graph(self.graph)

    def diagram(self) -> tuple[list[DiagramNode], list[DiagramEdge]]:
        return build_diagram(self.graph, self.cache.result)

    # ── mutations ────────────────────────────────────────────────────

    def add_task(self, name: str) -> MutationOutcome:
        return self._record("add_task", self.graph.add_task(name))

    def remove_task(self, name: str) -> MutationOutcome:
        return self._record("remove_task", self.graph.remove_task(name))

    def add_dependency(self, source: str, target: str) -> MutationOutcome:
        return self._record("add_dependency", self.graph.add_dependency(source, target))

    def remove_dependency(self, source: str, target: str) -> MutationOutcome:
        return self._record("remove_dependency", self.graph.remove_dependency(source, target))

    def clear_all(self) -> None:
        """Empty the graph and the cached result together."""
        self.graph.clear()
        self.cache.reset()
        self._stale = False
        self.events.emit(GRAPH_MUTATED, {"operation": "clear_all", "outcome": MutationOutcome.APPLIED})

    def load(self, snapshot: GraphSnapshot) -> list[MutationOutcome]:
        """Bulk-replace the graph from a snapshot."""
        outcomes = snapshot.load_into(self.graph)
        self._record("replace", MutationOutcome.APPLIED)
        return outcomes

    def generate_random(self, rng: random.Random | None = None) -> list[MutationOutcome]:
        """Bulk-replace the graph with a random DAG."""
        generator = RandomGraphGenerator.from_config(self.config, rng=rng)
        outcomes = generator.populate(self.graph)
        self._record("generate_random", MutationOutcome.APPLIED)
        return outcomes

    # ── analysis ─────────────────────────────────────────────────────

    def recompute(self) -> AnalysisResult:
        result = self.cache.recompute(self.graph)
        self._stale = False
        self.events.emit(ANALYSIS_RECOMPUTED, {"result": result})
        return result

    def _record(self, operation: str, outcome: MutationOutcome) -> MutationOutcome:
        if outcome.applied:
            self._stale = True
        else:
            logger.debug("Session %s returned %s", operation, outcome.value)
        self.events.emit(GRAPH_MUTATED, {"operation": operation, "outcome": outcome})
        return outcome
