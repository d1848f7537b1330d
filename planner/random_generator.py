"""Random dependency graph generation for demos and exploration."""

from __future__ import annotations

import logging
import random
from typing import Any

from planner.dependency_graph import DependencyGraph, MutationOutcome

logger = logging.getLogger("taskorder.generator")

DEFAULT_TASK_POOL: tuple[str, ...] = (
    "Analysis",
    "Design",
    "Development",
    "Testing",
    "Deploy",
    "Documentation",
    "Review",
    "Planning",
    "Research",
    "Implementation",
    "Validation",
    "Optimization",
    "Integration",
    "Configuration",
    "Maintenance",
)


class RandomGraphGenerator:
    """Builds random DAGs by sampling tasks and candidate relations.

    Candidates go through ``DependencyGraph.add_dependency``, so self-loops,
    duplicates and cycle-closing pairs are dropped by the graph itself.
    """

    def __init__(
        self,
        task_pool: list[str] | tuple[str, ...] | None = None,
        min_tasks: int = 5,
        max_tasks: int = 10,
        rng: random.Random | None = None,
    ) -> None:
        pool = [name.strip() for name in (task_pool or DEFAULT_TASK_POOL) if name.strip()]
        pool = list(dict.fromkeys(pool))
        if min_tasks < 2 or max_tasks < min_tasks:
            raise ValueError(f"Invalid task range: {min_tasks}..{max_tasks}")
        if len(pool) < min_tasks:
            raise ValueError(
                f"Task pool has {len(pool)} names; at least {min_tasks} required"
            )
        self.task_pool = pool
        self.min_tasks = min_tasks
        self.max_tasks = min(max_tasks, len(pool))
        self.rng = rng or random.Random()

    @classmethod
    def from_config(cls, config: dict[str, Any], rng: random.Random | None = None) -> RandomGraphGenerator:
        cfg = config.get("generator", {}) or {}
        return cls(
            task_pool=cfg.get("task_pool"),
            min_tasks=int(cfg.get("min_tasks", 5)),
            max_tasks=int(cfg.get("max_tasks", 10)),
            rng=rng,
        )

    def sample(self) -> tuple[list[str], list[tuple[str, str]]]:
        """Pick task names and between 1 and n-1 candidate relations."""
        count = self.rng.randint(self.min_tasks, self.max_tasks)
        tasks = self.rng.sample(self.task_pool, count)
        candidates = [
            (self.rng.choice(tasks), self.rng.choice(tasks))
            for _ in range(self.rng.randint(1, count - 1))
        ]
        return tasks, candidates

    def populate(self, graph: DependencyGraph) -> list[MutationOutcome]:
        """Replace ``graph`` contents with a freshly sampled DAG."""
        tasks, candidates = self.sample()
        outcomes = graph.replace(tasks, candidates)
        accepted = sum(1 for outcome in outcomes if outcome.applied)
        logger.info(
            "Generated %d tasks; kept %d of %d candidate relations",
            len(tasks),
            accepted,
            len(candidates),
        )
        return outcomes
