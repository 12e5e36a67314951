"""Recommendation tests."""

from __future__ import annotations

from semantic_links.engine import recommend
from semantic_links.engine.graph import build_edges
from semantic_links.engine.types import KnowledgeGraph

from .conftest import make_node


def _graph():
    nodes = [
        make_node("a", ("alpha", "beta"), type="research"),
        make_node("b", ("alpha", "beta"), type="research"),
        make_node("c", ("alpha",), type="meeting", age_days=60),
        make_node("d", ("zulu",), type="engineering", age_days=120),
    ]
    return KnowledgeGraph(nodes=nodes, edges=build_edges(nodes))


def test_recommendations_are_strongest_neighbours_first():
    assert recommend.recommended_ids(_graph(), "a", 5) == ["b", "c"]
    assert recommend.recommended_ids(_graph(), "c", 5) == ["a", "b"]


def test_recommendations_respect_limit():
    assert recommend.recommended_ids(_graph(), "a", 1) == ["b"]
    assert recommend.recommended_ids(_graph(), "a", 0) == []


def test_isolated_or_unknown_documents_have_no_recommendations():
    assert recommend.recommended_ids(_graph(), "d", 5) == []
    assert recommend.recommended_ids(_graph(), "missing", 5) == []
