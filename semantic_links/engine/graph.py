"""Knowledge graph construction: nodes, scored edges and type clusters."""

from __future__ import annotations

import logging
import time
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Sequence, Tuple

from .concepts import ConceptExtractor
from .config import EngineConfig
from .scoring import GRAPH_EDGE_THRESHOLD, score_pair
from .types import (
    Document,
    DocumentCluster,
    GraphAnalytics,
    GraphEdge,
    GraphNode,
    KnowledgeGraph,
)

logger = logging.getLogger(__name__)

STRONG_CONNECTION_WEIGHT = 0.7
MIN_CLUSTER_SIZE = 2
MAX_CENTRAL_CONCEPTS = 5


def build_node(document: Document, extractor: ConceptExtractor) -> GraphNode:
    return GraphNode(
        id=document.id,
        title=document.title,
        type=document.type,
        tags=tuple(document.tags),
        word_count=document.words,
        concepts=extractor.extract(document.content),
        created_at=document.created_at,
        updated_at=document.updated_at,
    )


def build_nodes(documents: Sequence[Document], extractor: ConceptExtractor) -> List[GraphNode]:
    return [build_node(document, extractor) for document in documents]


def _score_rows(nodes: Sequence[GraphNode], start: int, stop: int) -> List[GraphEdge]:
    edges: List[GraphEdge] = []
    for i in range(start, stop):
        for j in range(i + 1, len(nodes)):
            edge = score_pair(nodes[i], nodes[j])
            if edge.weight > GRAPH_EDGE_THRESHOLD:
                edges.append(edge)
    return edges


def _row_ranges(count: int, parts: int) -> List[Tuple[int, int]]:
    """Split rows of the pair triangle into contiguous, similarly sized ranges."""

    total_pairs = count * (count - 1) // 2
    target = total_pairs / max(parts, 1)
    ranges: List[Tuple[int, int]] = []
    start = 0
    accumulated = 0
    for row in range(count):
        accumulated += count - row - 1
        if accumulated >= target and len(ranges) < parts - 1:
            ranges.append((start, row + 1))
            start = row + 1
            accumulated = 0
    if start < count:
        ranges.append((start, count))
    return ranges


def build_edges(
    nodes: Sequence[GraphNode],
    *,
    workers: int = 1,
    parallel_min_pairs: int = 5000,
) -> List[GraphEdge]:
    """Score every unordered node pair and keep edges above the threshold.

    Edges come back sorted by weight, heaviest first; equal weights keep
    pair order. Large corpora are scored across a thread pool, which does
    not change the result.
    """

    pair_count = len(nodes) * (len(nodes) - 1) // 2
    if workers > 1 and pair_count >= parallel_min_pairs:
        ranges = _row_ranges(len(nodes), workers)
        with ThreadPoolExecutor(max_workers=len(ranges)) as executor:
            chunks = list(executor.map(lambda bounds: _score_rows(nodes, *bounds), ranges))
        edges = [edge for chunk in chunks for edge in chunk]
    else:
        edges = _score_rows(nodes, 0, len(nodes))

    return sorted(edges, key=lambda edge: edge.weight, reverse=True)


def identify_clusters(nodes: Sequence[GraphNode]) -> List[DocumentCluster]:
    """Group nodes by type; every group with two or more members is a cluster."""

    groups: Dict[str, List[GraphNode]] = {}
    for node in nodes:
        groups.setdefault(node.type.value, []).append(node)

    clusters: List[DocumentCluster] = []
    for type_name, members in groups.items():
        if len(members) < MIN_CLUSTER_SIZE:
            continue
        # Concepts are already unique per node, so a count is a member count.
        counts: Counter[str] = Counter()
        for member in members:
            counts.update(member.concepts)
        central = [concept for concept, count in counts.most_common() if count >= MIN_CLUSTER_SIZE]
        clusters.append(
            DocumentCluster(
                id=f"cluster-{type_name}",
                name=f"{type_name.capitalize()} Documents",
                document_ids=tuple(member.id for member in members),
                central_concepts=tuple(central[:MAX_CENTRAL_CONCEPTS]),
                type=members[0].type,
            )
        )
    return clusters


def build_graph(
    documents: Sequence[Document],
    extractor: ConceptExtractor,
    config: EngineConfig,
) -> KnowledgeGraph:
    """Build the knowledge graph for a snapshot of a user's documents."""

    started = time.perf_counter()
    nodes = build_nodes(documents, extractor)
    edges = build_edges(
        nodes,
        workers=config.get_int("graph_workers"),
        parallel_min_pairs=config.get_int("parallel_min_pairs"),
    )
    clusters = identify_clusters(nodes)
    logger.debug(
        "Built knowledge graph: %d nodes, %d edges, %d clusters in %.3fs",
        len(nodes),
        len(edges),
        len(clusters),
        time.perf_counter() - started,
    )
    return KnowledgeGraph(nodes=nodes, edges=edges, clusters=clusters)


def connection_count(graph: KnowledgeGraph, document_id: str) -> int:
    return sum(1 for edge in graph.edges if edge.touches(document_id))


def graph_analytics(graph: KnowledgeGraph, top_concepts: int = 10) -> GraphAnalytics:
    """Return summary statistics for ``graph``."""

    by_type: Counter[str] = Counter(node.type.value for node in graph.nodes)
    concept_counts: Counter[str] = Counter()
    for node in graph.nodes:
        concept_counts.update(node.concepts)
    return GraphAnalytics(
        total_documents=len(graph.nodes),
        total_connections=len(graph.edges),
        clusters=len(graph.clusters),
        average_connections=len(graph.edges) / max(len(graph.nodes), 1),
        strong_connections=sum(1 for edge in graph.edges if edge.weight > STRONG_CONNECTION_WEIGHT),
        documents_by_type=dict(by_type),
        top_concepts=concept_counts.most_common(top_concepts),
    )
