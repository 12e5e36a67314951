"""Top-K graph neighbours of a document."""

from __future__ import annotations

from typing import List

from .types import GraphEdge, KnowledgeGraph


def strongest_edges(graph: KnowledgeGraph, document_id: str, limit: int) -> List[GraphEdge]:
    """Return up to ``limit`` edges touching ``document_id``, heaviest first."""

    if limit <= 0:
        return []
    touching = [edge for edge in graph.edges if edge.touches(document_id)]
    touching.sort(key=lambda edge: edge.weight, reverse=True)
    return touching[:limit]


def recommended_ids(graph: KnowledgeGraph, document_id: str, limit: int) -> List[str]:
    """Return the ids of the documents most related to ``document_id``."""

    return [edge.other_end(document_id) for edge in strongest_edges(graph, document_id, limit)]
