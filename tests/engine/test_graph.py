"""Knowledge graph, cluster and analytics tests."""

from __future__ import annotations

import pytest

from semantic_links.engine import graph
from semantic_links.engine.scoring import GRAPH_EDGE_THRESHOLD

from .conftest import make_document, make_node


def _corpus():
    return [
        make_document("a", "Trial Notes", "Notes on hypothesis and methodology.", type="research", tags=["clinical"]),
        make_document("b", "Trial Design", "The hypothesis and the methodology.", type="research", tags=["clinical"]),
        make_document("c", "Rollout", "Deployment of the server cluster.", type="engineering", age_days=60),
    ]


def test_graph_keeps_only_edges_above_threshold(extractor, engine_config):
    knowledge_graph = graph.build_graph(_corpus(), extractor, engine_config)

    assert [node.id for node in knowledge_graph.nodes] == ["a", "b", "c"]
    assert len(knowledge_graph.edges) == 1
    edge = knowledge_graph.edges[0]
    assert (edge.source, edge.target) == ("a", "b")
    assert edge.weight == 1.0
    assert all(item.weight > GRAPH_EDGE_THRESHOLD for item in knowledge_graph.edges)


def test_edges_are_sorted_by_weight_descending():
    nodes = [
        make_node("a", ("alpha",), type="research", age_days=60),
        make_node("b", ("alpha", "beta"), type="meeting", age_days=60),
        make_node("c", ("alpha", "beta"), type="meeting", age_days=60),
    ]

    edges = graph.build_edges(nodes)

    assert [(edge.source, edge.target) for edge in edges] == [("b", "c"), ("a", "b"), ("a", "c")]
    weights = [edge.weight for edge in edges]
    assert weights == sorted(weights, reverse=True)


def test_parallel_scoring_matches_serial_scoring():
    words = ["alpha", "bravo", "charlie", "delta", "echo", "foxtrot"]
    nodes = [
        make_node(
            f"n{index}",
            (words[index % 6], words[(index * 5) % 6]),
            type=["research", "meeting", "general"][index % 3],
            tags=[words[index % 4]],
            age_days=index * 3,
        )
        for index in range(40)
    ]

    serial = graph.build_edges(nodes, workers=1)
    parallel = graph.build_edges(nodes, workers=4, parallel_min_pairs=1)

    assert serial
    assert parallel == serial


@pytest.mark.parametrize("count, parts", [(1, 4), (2, 4), (10, 3), (57, 8)])
def test_row_ranges_cover_every_row_once(count, parts):
    ranges = graph._row_ranges(count, parts)

    assert ranges[0][0] == 0
    assert ranges[-1][1] == count
    assert all(previous[1] == current[0] for previous, current in zip(ranges, ranges[1:]))
    assert len(ranges) <= parts


def test_clusters_group_by_type_with_central_concepts(extractor, engine_config):
    knowledge_graph = graph.build_graph(_corpus(), extractor, engine_config)

    assert len(knowledge_graph.clusters) == 1
    cluster = knowledge_graph.clusters[0]
    assert cluster.id == "cluster-research"
    assert cluster.name == "Research Documents"
    assert cluster.document_ids == ("a", "b")
    assert cluster.central_concepts == ("hypothesis", "methodology")


def test_cluster_without_shared_concepts_is_still_emitted(extractor, engine_config):
    documents = [
        make_document(str(index), word.title(), f"{word.title()}.", age_days=60 * index)
        for index, word in enumerate(["alpha", "bravo", "charlie", "delta", "echo"])
    ]

    knowledge_graph = graph.build_graph(documents, extractor, engine_config)

    assert [cluster.id for cluster in knowledge_graph.clusters] == ["cluster-general"]
    assert knowledge_graph.clusters[0].name == "General Documents"
    assert knowledge_graph.clusters[0].central_concepts == ()
    assert len(knowledge_graph.clusters[0].document_ids) == 5
    # Same-typed documents still connect through the type bonus.
    assert all(edge.shared_concepts == () for edge in knowledge_graph.edges)
    assert all(edge.weight == pytest.approx(0.2) for edge in knowledge_graph.edges)


def test_single_member_types_form_no_cluster():
    nodes = [make_node("a", ("alpha",), type="research"), make_node("b", ("alpha",), type="meeting")]

    assert graph.identify_clusters(nodes) == []


def test_empty_corpus_builds_empty_graph(extractor, engine_config):
    knowledge_graph = graph.build_graph([], extractor, engine_config)

    assert knowledge_graph.nodes == []
    assert knowledge_graph.edges == []
    assert knowledge_graph.clusters == []


def test_graph_analytics_summarises_graph(extractor, engine_config):
    knowledge_graph = graph.build_graph(_corpus(), extractor, engine_config)

    analytics = graph.graph_analytics(knowledge_graph)

    assert analytics.total_documents == 3
    assert analytics.total_connections == 1
    assert analytics.clusters == 1
    assert analytics.strong_connections == 1
    assert analytics.average_connections == pytest.approx(1 / 3)
    assert analytics.documents_by_type == {"research": 2, "engineering": 1}
    assert analytics.top_concepts[:2] == [("hypothesis", 2), ("methodology", 2)]
    assert graph.connection_count(knowledge_graph, "a") == 1
    assert graph.connection_count(knowledge_graph, "c") == 0
