"""Engine coordinator and configuration tests."""

from __future__ import annotations

from semantic_links.engine.config import DEFAULTS, load_config
from semantic_links.engine.index import LinkingEngine

from .conftest import make_document


def test_load_config_merges_yaml_over_defaults(tmp_path):
    path = tmp_path / "links.yaml"
    path.write_text("suggestion_limit: 2\ngraph_workers: 1\n", encoding="utf-8")

    config = load_config(path)

    assert config.get_int("suggestion_limit") == 2
    assert config.get_int("graph_workers") == 1
    assert config.get_int("max_concepts") == DEFAULTS["max_concepts"]


def test_missing_config_file_uses_defaults(tmp_path):
    assert load_config(tmp_path / "absent.yaml").raw == DEFAULTS
    assert load_config("").raw == DEFAULTS


def test_engine_limits_come_from_config(engine_config):
    engine_config.raw["search_limit"] = 1
    engine_config.raw["browse_limit"] = 2
    engine = LinkingEngine.from_config(engine_config)
    documents = [make_document("1", "Log A", ""), make_document("2", "Log B", ""), make_document("3", "Plan", "")]

    assert [item.id for item in engine.search_for_linking("log", documents)] == ["1"]
    assert [item.id for item in engine.search_for_linking("", documents)] == ["1", "2"]


def test_engine_recommendations_and_links(engine):
    documents = [
        make_document("a", "Trial Notes", "Notes on hypothesis and methodology. See [[Trial Design]].", type="research"),
        make_document("b", "Trial Design", "The hypothesis and the methodology.", type="research"),
    ]

    graph = engine.knowledge_graph(documents)

    assert engine.recommendation_ids(graph, "a") == ["b"]
    assert engine.connection_count(graph, "b") == 1
    assert engine.analytics(graph).total_documents == 2
    assert engine.linked_document_ids(documents[0].content, documents) == ["b"]
    assert [item.document_id for item in engine.backlinks(documents[1], documents)] == ["a"]
    assert engine.validate_wiki_link("trial design", documents)
