"""Writing analysis heuristics tests."""

from __future__ import annotations

import pytest

from semantic_links.engine import analysis
from semantic_links.engine.types import DocumentType, LinkSuggestion


def test_quality_score_rewards_structure_and_connectives():
    content = "# Heading\n- item\n1. step\nHowever, therefore we continue."

    assert analysis.quality_score("") == 50
    assert analysis.quality_score(content) == 76


def test_quality_score_is_bounded():
    long_text = ("analysis however therefore furthermore consequently " * 500) + "# - 1."

    assert 0 <= analysis.quality_score(long_text) <= 100


def test_completeness_counts_expected_sections():
    research = "Introduction. Methodology. Results. Conclusion. References."

    assert analysis.completeness_score(research, DocumentType.RESEARCH) == 100
    assert analysis.completeness_score("", DocumentType.GENERAL) == 0


def test_readability_defaults_and_bounds():
    assert analysis.readability_score("") == 50.0
    assert analysis.readability_score("The cat sat.") == 100.0
    assert 0.0 <= analysis.readability_score("Hypothesis methodology epistemology.") <= 100.0


def test_count_syllables():
    assert analysis.count_syllables("hello") == 2
    assert analysis.count_syllables("the") == 1
    assert analysis.count_syllables("rhythm") == 1


def test_structure_analysis():
    structure = analysis.analyze_structure("# Title\n\n- one\n- two\n\nIn summary, done.")

    assert structure.has_headings
    assert structure.has_list
    assert structure.has_conclusion
    assert structure.paragraph_count == 3


@pytest.mark.parametrize(
    "text, expected",
    [
        ("An excellent and successful result", "positive"),
        ("The rollout failed with a problem", "negative"),
        ("Plain text", "neutral"),
    ],
)
def test_sentiment(text, expected):
    assert analysis.sentiment(text) == expected


def test_missing_sections_per_type():
    assert analysis.missing_sections("Agenda for today", DocumentType.MEETING) == ["action items", "next steps"]
    assert analysis.missing_sections("anything", DocumentType.GENERAL) == []


def test_writing_suggestions_are_sorted_by_priority():
    content = "bad draft"
    result = analysis.ContentAnalysis(
        quality_score=analysis.quality_score(content),
        completeness_score=analysis.completeness_score(content, DocumentType.GENERAL),
        professional_terms=[],
        key_topics=[],
        sentiment="negative",
        readability_score=analysis.readability_score(content),
        structure=analysis.analyze_structure(content),
    )
    related = [
        LinkSuggestion("d1", "Draft", DocumentType.GENERAL, (), 0.5, "", "Related content"),
    ]

    suggestions = analysis.writing_suggestions(content, result, DocumentType.GENERAL, related)

    assert [(item.kind, item.priority) for item in suggestions] == [("quality", "high"), ("link", "low")]
    assert suggestions[1].message == "Found 1 related documents you could reference"
