"""Serializable graph models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from planner.dependency_graph import DependencyGraph, MutationOutcome, Relation


class RelationModel(BaseModel):
    """One precedence pair; accepts ``from``/``to`` or ``source``/``target`` keys."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    source: str = Field(alias="from")
    target: str = Field(alias="to")


class GraphSnapshot(BaseModel):
    """Plain list-of-tasks plus list-of-pairs form of a dependency graph."""

    tasks: list[str] = Field(default_factory=list)
    relations: list[RelationModel] = Field(default_factory=list)

    @classmethod
    def from_graph(cls, graph: DependencyGraph) -> GraphSnapshot:
        return cls(
            tasks=list(graph.tasks),
            relations=[
                RelationModel(source=rel.source, target=rel.target)
                for rel in graph.relations
            ],
        )

    def load_into(self, graph: DependencyGraph) -> list[MutationOutcome]:
        """Replace the contents of ``graph``; returns per-relation outcomes."""
        return graph.replace(
            self.tasks,
            [Relation(rel.source, rel.target) for rel in self.relations],
        )

    def to_graph(self) -> DependencyGraph:
        graph = DependencyGraph()
        self.load_into(graph)
        return graph

    def to_payload(self) -> dict[str, object]:
        return self.model_dump(by_alias=True)
