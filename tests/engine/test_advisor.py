"""Live linking advisor tests."""

from __future__ import annotations

from semantic_links.engine import advisor
from semantic_links.engine.types import DocumentType

from .conftest import NOW, make_document


def _corpus():
    return [
        make_document("current", "Draft", "Unrelated stored version.", type="research", tags=["oncology"]),
        make_document("d1", "Trial Notes", "Notes on hypothesis and methodology.", type="research"),
        make_document("d2", "Rollout", "Deployment of the server cluster.", type="engineering", age_days=60),
        make_document("d3", "Oncology Board", "Oncology. Board decisions.", type="meeting", tags=["oncology"], age_days=60),
    ]


def test_related_documents_are_scored_against_in_progress_text(extractor):
    suggestions = advisor.find_related(
        "Our hypothesis and methodology.",
        "current",
        _corpus(),
        extractor,
        document_type=DocumentType.RESEARCH,
        now=NOW,
    )

    assert [item.document_id for item in suggestions] == ["d1"]
    suggestion = suggestions[0]
    assert suggestion.relevance_score == 1.0
    assert suggestion.matched_concepts == ("hypothesis", "methodology")
    assert suggestion.context_snippet == "Notes on hypothesis and methodology."
    assert suggestion.reason == (
        "Shares concepts: hypothesis, methodology • Related terms: hypothesis, methodology"
    )


def test_current_document_is_never_suggested(extractor):
    documents = _corpus()
    suggestions = advisor.find_related(documents[0].content, "current", documents, extractor, now=NOW)

    assert all(item.document_id != "current" for item in suggestions)


def test_stored_tags_and_type_of_current_document_are_used(extractor):
    suggestions = advisor.find_related("Nothing shared.", "current", _corpus(), extractor, now=NOW)

    # Type and tag overlap alone stay at or below the threshold.
    assert suggestions == []

    suggestions = advisor.find_related("Oncology. Review.", "current", _corpus(), extractor, now=NOW)
    assert [item.document_id for item in suggestions] == ["d3"]
    assert suggestions[0].reason == "Shares concepts: oncology • Common tags: oncology"


def test_selection_suggestions_require_text(extractor):
    assert advisor.suggest_for_selection("   ", "current", _corpus(), extractor) == []


def test_selection_suggestions_are_capped(extractor):
    documents = [
        make_document(f"d{index}", f"Trial {index}", "Notes on hypothesis and methodology.", type="research")
        for index in range(5)
    ]

    suggestions = advisor.suggest_for_selection(
        "hypothesis and methodology", "other", documents, extractor, limit=3, now=NOW
    )

    assert [item.document_id for item in suggestions] == ["d0", "d1", "d2"]


def test_writing_analysis_combines_heuristics_and_related_documents(engine, engine_config):
    analysis = engine.writing_analysis(
        "Our hypothesis and methodology.",
        "current",
        DocumentType.RESEARCH,
        _corpus(),
        now=NOW,
    )

    assert [item.document_id for item in analysis.related_documents] == ["d1"]
    assert analysis.professional_terms == ["hypothesis", "methodology"]
    assert analysis.key_topics == ["hypothesis", "methodology"]
    kinds = [item.kind for item in analysis.suggestions]
    assert kinds[0] == "quality"
    assert "link" in kinds
    priorities = [item.priority for item in analysis.suggestions]
    order = {"high": 3, "medium": 2, "low": 1}
    assert priorities == sorted(priorities, key=order.get, reverse=True)
    assert len(analysis.suggestions) <= engine_config.get_int("writing_suggestions_limit")
