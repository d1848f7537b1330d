"""Task dependency graph with acyclicity enforced on every mutation."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger("taskorder.graph")


class MutationOutcome(str, Enum):
    """Result tag returned by every graph mutation."""

    APPLIED = "applied"
    REJECTED_EMPTY_NAME = "rejected_empty_name"
    REJECTED_DUPLICATE_TASK = "rejected_duplicate_task"
    REJECTED_SELF_LOOP = "rejected_self_loop"
    REJECTED_DUPLICATE_EDGE = "rejected_duplicate_edge"
    REJECTED_UNKNOWN_TASK = "rejected_unknown_task"
    REJECTED_WOULD_CREATE_CYCLE = "rejected_would_create_cycle"
    REJECTED_UNKNOWN_REMOVAL = "rejected_unknown_removal"

    @property
    def applied(self) -> bool:
        return self is MutationOutcome.APPLIED


@dataclass(frozen=True)
class Relation:
    """Ordered precedence pair: ``source`` must complete before ``target``."""

    source: str
    target: str

    def __str__(self) -> str:
        return f"({self.source}, {self.target})"


def _normalize(name: str) -> str:
    return (name or "").strip()


class DependencyGraph:
    """Ordered tasks plus ordered precedence relations forming a DAG.

    Rejected mutations leave the graph untouched and report why through
    the returned :class:`MutationOutcome`. Nothing here recomputes derived
    analysis; callers do that explicitly.
    """

    def __init__(self) -> None:
        self._tasks: list[str] = []
        self._relations: list[Relation] = []

    # ── reads ────────────────────────────────────────────────────────

    @property
    def tasks(self) -> tuple[str, ...]:
        return tuple(self._tasks)

    @property
    def relations(self) -> tuple[Relation, ...]:
        return tuple(self._relations)

    def has_task(self, name: str) -> bool:
        return _normalize(name) in self._tasks

    def has_dependency(self, source: str, target: str) -> bool:
        return Relation(_normalize(source), _normalize(target)) in self._relations

    def successors(self, name: str) -> list[str]:
        """Direct successors in the order their relations were added."""
        name = _normalize(name)
        return [rel.target for rel in self._relations if rel.source == name]

    def predecessors(self, name: str) -> list[str]:
        name = _normalize(name)
        return [rel.source for rel in self._relations if rel.target == name]

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has_task(name)

    # ── task mutations ───────────────────────────────────────────────

    def add_task(self, name: str) -> MutationOutcome:
        """Append a task; empty or already-known names are no-ops."""
        normalized = _normalize(name)
        if not normalized:
            return self._reject("add_task", MutationOutcome.REJECTED_EMPTY_NAME, name)
        if normalized in self._tasks:
            return self._reject("add_task", MutationOutcome.REJECTED_DUPLICATE_TASK, normalized)
        self._tasks.append(normalized)
        return MutationOutcome.APPLIED

    def remove_task(self, name: str) -> MutationOutcome:
        """Remove a task and every relation that mentions it."""
        normalized = _normalize(name)
        if normalized not in self._tasks:
            return self._reject("remove_task", MutationOutcome.REJECTED_UNKNOWN_REMOVAL, normalized)
        self._tasks.remove(normalized)
        self._relations = [
            rel
            for rel in self._relations
            if rel.source != normalized and rel.target != normalized
        ]
        return MutationOutcome.APPLIED

    # ── relation mutations ───────────────────────────────────────────

    def add_dependency(self, source: str, target: str) -> MutationOutcome:
        """Append ``source -> target`` unless it breaks a graph invariant."""
        source, target = _normalize(source), _normalize(target)
        detail = f"{source} -> {target}"
        if source == target:
            return self._reject("add_dependency", MutationOutcome.REJECTED_SELF_LOOP, detail)
        if source not in self._tasks or target not in self._tasks:
            return self._reject("add_dependency", MutationOutcome.REJECTED_UNKNOWN_TASK, detail)
        relation = Relation(source, target)
        if relation in self._relations:
            return self._reject("add_dependency", MutationOutcome.REJECTED_DUPLICATE_EDGE, detail)
        if self.would_create_cycle(source, target):
            return self._reject(
                "add_dependency", MutationOutcome.REJECTED_WOULD_CREATE_CYCLE, detail
            )
        self._relations.append(relation)
        return MutationOutcome.APPLIED

    def remove_dependency(self, source: str, target: str) -> MutationOutcome:
        relation = Relation(_normalize(source), _normalize(target))
        if relation not in self._relations:
            return self._reject(
                "remove_dependency",
                MutationOutcome.REJECTED_UNKNOWN_REMOVAL,
                f"{relation.source} -> {relation.target}",
            )
        self._relations.remove(relation)
        return MutationOutcome.APPLIED

    def would_create_cycle(self, source: str, target: str) -> bool:
        """Return True if adding ``source -> target`` would close a cycle.

        Runs an iterative depth-first search over the current relations plus
        the candidate, starting from every node that appears in that edge set,
        so disconnected components are all covered.
        """
        candidate = [*self._relations, Relation(_normalize(source), _normalize(target))]
        children: dict[str, list[str]] = {}
        for rel in candidate:
            children.setdefault(rel.source, []).append(rel.target)
            children.setdefault(rel.target, [])

        explored: set[str] = set()
        on_stack: set[str] = set()
        for start in children:
            if start in explored:
                continue
            stack: list[tuple[str, Iterator[str]]] = [(start, iter(children[start]))]
            on_stack.add(start)
            while stack:
                node, pending = stack[-1]
                child = next(pending, None)
                if child is None:
                    stack.pop()
                    on_stack.discard(node)
                    explored.add(node)
                    continue
                if child in on_stack:
                    return True
                if child not in explored:
                    on_stack.add(child)
                    stack.append((child, iter(children[child])))
        return False

    # ── bulk operations ──────────────────────────────────────────────

    def clear(self) -> None:
        self._tasks.clear()
        self._relations.clear()

    def replace(
        self,
        tasks: Iterable[str],
        relations: Iterable[tuple[str, str] | Relation],
    ) -> list[MutationOutcome]:
        """Swap in a new task/relation set through the normal mutation path.

        Returns the outcome of each relation in input order; rejected
        relations are dropped exactly as ``add_dependency`` would drop them.
        """
        self.clear()
        for name in tasks:
            self.add_task(name)
        outcomes: list[MutationOutcome] = []
        for rel in relations:
            source, target = (rel.source, rel.target) if isinstance(rel, Relation) else rel
            outcomes.append(self.add_dependency(source, target))
        return outcomes

    @staticmethod
    def _reject(operation: str, outcome: MutationOutcome, detail: str) -> MutationOutcome:
        logger.debug("%s rejected (%s): %r", operation, outcome.value, detail)
        return outcome
