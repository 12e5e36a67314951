"""Heuristic writing analysis for the document being edited.

Scores are cheap, deterministic approximations: a 0-100 quality score
driven by length, structure and professional connectives, a completeness
score based on the sections expected for the document type, and a
simplified Flesch reading-ease score.
"""

from __future__ import annotations

import re
from typing import Dict, List, Sequence, Tuple

from .concepts import ConceptExtractor
from .types import (
    ContentAnalysis,
    DocumentType,
    LinkSuggestion,
    StructureAnalysis,
    WritingSuggestion,
)
from .vocabulary import match_terms

_HEADING_RE = re.compile(r"^#+\s", re.MULTILINE)
_LIST_RE = re.compile(r"^\s*(?:[-*+]|\d+\.)\s", re.MULTILINE)
_NUMBERED_RE = re.compile(r"\d+\.")
_CONCLUSION_RE = re.compile(r"conclusion|summary|final|closing", re.IGNORECASE)
_PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n")
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")

_PROFESSIONAL_INDICATORS = (
    "however", "therefore", "furthermore", "consequently", "nevertheless",
    "analysis", "methodology", "implementation", "evaluation", "assessment",
)
_POSITIVE_WORDS = ("good", "excellent", "successful", "effective", "positive", "improved", "better")
_NEGATIVE_WORDS = ("bad", "failed", "unsuccessful", "negative", "worse", "declined", "problem")

_REQUIRED_SECTIONS: Dict[DocumentType, Tuple[str, ...]] = {
    DocumentType.RESEARCH: ("introduction", "methodology", "results", "conclusion", "references"),
    DocumentType.ENGINEERING: ("overview", "requirements", "architecture", "implementation", "testing"),
    DocumentType.HEALTHCARE: ("assessment", "diagnosis", "treatment", "follow-up", "documentation"),
    DocumentType.MEETING: ("agenda", "discussion", "action items", "next steps"),
    DocumentType.GENERAL: ("introduction", "main content", "conclusion"),
}

_SECTION_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "introduction": ("introduction", "overview", "background", "context"),
    "methodology": ("methodology", "method", "approach", "procedure"),
    "results": ("results", "findings", "outcomes", "data"),
    "conclusion": ("conclusion", "summary", "final", "closing"),
    "references": ("references", "bibliography", "sources", "citations"),
    "overview": ("overview", "summary", "introduction", "scope"),
    "requirements": ("requirements", "specifications", "needs", "criteria"),
    "architecture": ("architecture", "design", "structure", "framework"),
    "implementation": ("implementation", "development", "coding", "build"),
    "testing": ("testing", "verification", "validation", "qa"),
    "assessment": ("assessment", "evaluation", "examination", "review"),
    "diagnosis": ("diagnosis", "findings", "condition", "analysis"),
    "treatment": ("treatment", "therapy", "intervention", "care"),
    "follow-up": ("follow-up", "monitoring", "tracking", "progress"),
    "documentation": ("documentation", "records", "notes", "reporting"),
    "agenda": ("agenda", "topics", "schedule", "items"),
    "discussion": ("discussion", "talked", "covered", "reviewed"),
    "action items": ("action", "todo", "tasks", "assignments"),
    "next steps": ("next", "following", "upcoming", "future"),
    "main content": ("content", "main", "body", "details"),
}

# Sections whose literal heading is expected in finished documents.
_EXPECTED_HEADINGS: Dict[DocumentType, Tuple[str, ...]] = {
    DocumentType.RESEARCH: ("methodology", "results", "conclusion", "references"),
    DocumentType.ENGINEERING: ("requirements", "architecture", "implementation"),
    DocumentType.HEALTHCARE: ("assessment", "diagnosis", "treatment plan"),
    DocumentType.MEETING: ("action items", "next steps"),
}

_PRIORITY_ORDER = {"high": 3, "medium": 2, "low": 1}


def word_count(content: str) -> int:
    return len(content.split())


def quality_score(content: str) -> int:
    score = 50
    words = word_count(content)
    if words > 100:
        score += 10
    if words > 500:
        score += 15
    if words > 1000:
        score += 10
    if words > 2000:
        score -= 5

    if "#" in content:
        score += 10
    if _NUMBERED_RE.search(content):
        score += 5
    if "- " in content:
        score += 5

    lowered = content.lower()
    professional = sum(1 for term in _PROFESSIONAL_INDICATORS if term in lowered)
    score += min(professional * 3, 15)
    return min(100, max(0, score))


def completeness_score(content: str, document_type: DocumentType) -> int:
    sections = _REQUIRED_SECTIONS[document_type]
    lowered = content.lower()
    found = sum(
        1
        for section in sections
        if any(keyword in lowered for keyword in _SECTION_KEYWORDS.get(section, (section,)))
    )
    return round(found / len(sections) * 100)


def count_syllables(word: str) -> int:
    count = 0
    previous_vowel = False
    lowered = word.lower()
    for char in lowered:
        is_vowel = char in "aeiouy"
        if is_vowel and not previous_vowel:
            count += 1
        previous_vowel = is_vowel
    if lowered.endswith("e"):
        count -= 1
    return max(1, count)


def readability_score(content: str) -> float:
    """Simplified Flesch reading ease, clamped to 0-100; 50 for empty text."""

    sentences = [sentence for sentence in _SENTENCE_SPLIT_RE.split(content) if sentence.strip()]
    words = content.split()
    if not sentences or not words:
        return 50.0
    syllables = sum(count_syllables(word) for word in words)
    average_sentence = len(words) / len(sentences)
    average_syllables = syllables / len(words)
    flesch = 206.835 - 1.015 * average_sentence - 84.6 * average_syllables
    return max(0.0, min(100.0, flesch))


def analyze_structure(content: str) -> StructureAnalysis:
    paragraphs = [part for part in _PARAGRAPH_SPLIT_RE.split(content) if part.strip()]
    return StructureAnalysis(
        has_headings=bool(_HEADING_RE.search(content)),
        has_list=bool(_LIST_RE.search(content)),
        has_conclusion=bool(_CONCLUSION_RE.search(content)),
        paragraph_count=len(paragraphs),
    )


def sentiment(content: str) -> str:
    lowered = content.lower()
    positive = sum(1 for word in _POSITIVE_WORDS if word in lowered)
    negative = sum(1 for word in _NEGATIVE_WORDS if word in lowered)
    if positive > negative:
        return "positive"
    if negative > positive:
        return "negative"
    return "neutral"


def missing_sections(content: str, document_type: DocumentType) -> List[str]:
    lowered = content.lower()
    return [
        section for section in _EXPECTED_HEADINGS.get(document_type, ()) if section not in lowered
    ]


def analyze_content(
    content: str,
    document_type: DocumentType,
    extractor: ConceptExtractor,
    key_topics_limit: int = 8,
) -> ContentAnalysis:
    """Return the heuristic analysis of ``content`` for its document type."""

    return ContentAnalysis(
        quality_score=quality_score(content),
        completeness_score=completeness_score(content, document_type),
        professional_terms=match_terms(content, document_type),
        key_topics=extractor.key_topics(content, key_topics_limit),
        sentiment=sentiment(content),
        readability_score=readability_score(content),
        structure=analyze_structure(content),
    )


def writing_suggestions(
    content: str,
    analysis: ContentAnalysis,
    document_type: DocumentType,
    related: Sequence[LinkSuggestion],
) -> List[WritingSuggestion]:
    """Return improvement hints, most urgent first."""

    words = word_count(content)
    suggestions: List[WritingSuggestion] = []

    if analysis.quality_score < 60:
        suggestions.append(
            WritingSuggestion("quality", "Consider adding more structure with headings and sections", "high")
        )
    if analysis.readability_score < 40:
        suggestions.append(
            WritingSuggestion(
                "content",
                "Try using shorter sentences and simpler language for better readability",
                "medium",
            )
        )
    if not analysis.structure.has_headings and words > 200:
        suggestions.append(
            WritingSuggestion("structure", "Add headings to break up your content into logical sections", "high")
        )
    if analysis.completeness_score < 70:
        missing = missing_sections(content, document_type)
        if missing:
            suggestions.append(WritingSuggestion("content", f"Consider adding: {', '.join(missing)}", "medium"))
    if related:
        suggestions.append(
            WritingSuggestion("link", f"Found {len(related)} related documents you could reference", "low")
        )
    if len(analysis.professional_terms) < 3 and words > 100:
        suggestions.append(WritingSuggestion("quality", "Consider using more domain-specific terminology", "low"))

    suggestions.sort(key=lambda item: _PRIORITY_ORDER[item.priority], reverse=True)
    return suggestions
