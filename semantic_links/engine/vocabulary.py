"""Fixed per-category vocabularies, keyword counting and type classification."""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Sequence, Tuple

from .text import plain_text, whole_word_pattern
from .types import Category, DocumentType

# Keywords that signal a category when classifying free text.
_RESEARCH_SIGNALS = (
    "research", "study", "hypothesis", "methodology", "analysis", "results",
    "abstract", "introduction", "literature", "conclusion", "references",
    "experiment", "data", "findings", "survey", "participants", "statistical",
)
_ENGINEERING_SIGNALS = (
    "code", "function", "class", "api", "database", "server", "client",
    "architecture", "implementation", "technical", "specification", "requirements",
    "bug", "feature", "deployment", "testing", "framework", "library",
)
_HEALTHCARE_SIGNALS = (
    "patient", "clinical", "medical", "diagnosis", "treatment", "protocol",
    "symptoms", "medication", "therapy", "hospital", "doctor", "nurse",
    "health", "care", "procedure", "examination", "assessment",
)
_MEETING_SIGNALS = (
    "meeting", "agenda", "attendees", "action items", "discussion", "notes",
    "decisions", "follow-up", "next steps", "participants", "minutes",
)

# Professional terms matched while a document of the category is edited.
_RESEARCH_TERMS = (
    "hypothesis", "methodology", "analysis", "results", "conclusion",
    "literature", "study", "findings", "data", "experiment", "theory",
    "research", "investigation", "empirical", "quantitative", "qualitative",
)
_ENGINEERING_TERMS = (
    "architecture", "system", "implementation", "design", "algorithm",
    "performance", "optimization", "scalability", "api", "database",
    "deployment", "infrastructure", "testing", "integration",
)
_HEALTHCARE_TERMS = (
    "patient", "diagnosis", "treatment", "clinical", "medical",
    "therapy", "symptoms", "assessment", "protocol", "medication",
    "prognosis", "care", "intervention", "outcome",
)
_MEETING_TERMS = (
    "agenda", "action", "decision", "discussion", "follow-up",
    "attendees", "minutes", "consensus", "objectives", "deliverable",
)


def signal_keywords(category: Category) -> Tuple[str, ...]:
    """Return the classification keywords for ``category``."""

    if category is Category.RESEARCH:
        return _RESEARCH_SIGNALS
    if category is Category.ENGINEERING:
        return _ENGINEERING_SIGNALS
    if category is Category.HEALTHCARE:
        return _HEALTHCARE_SIGNALS
    if category is Category.MEETING:
        return _MEETING_SIGNALS
    raise ValueError(f"Unknown category: {category!r}")


def domain_terms(category: Category) -> Tuple[str, ...]:
    """Return the professional vocabulary for ``category``."""

    if category is Category.RESEARCH:
        return _RESEARCH_TERMS
    if category is Category.ENGINEERING:
        return _ENGINEERING_TERMS
    if category is Category.HEALTHCARE:
        return _HEALTHCARE_TERMS
    if category is Category.MEETING:
        return _MEETING_TERMS
    raise ValueError(f"Unknown category: {category!r}")


def category_for(document_type: DocumentType) -> Category | None:
    """Return the vocabulary-bearing category of a document type, if any."""

    if document_type is DocumentType.GENERAL:
        return None
    return Category(document_type.value)


_PATTERNS: Dict[str, re.Pattern[str]] = {
    keyword: whole_word_pattern(keyword)
    for category in Category
    for keyword in signal_keywords(category) + domain_terms(category)
}


def _pattern(keyword: str) -> re.Pattern[str]:
    return _PATTERNS.get(keyword) or whole_word_pattern(keyword)


def count_keywords(text: str, vocabulary: Iterable[str]) -> int:
    """Sum whole-word, case-insensitive occurrences of every keyword."""

    if not text:
        return 0
    return sum(len(_pattern(keyword).findall(text)) for keyword in vocabulary)


def match_terms(text: str, document_type: DocumentType | Category) -> List[str]:
    """Return the domain terms of ``document_type`` present in ``text``.

    Terms are returned in vocabulary order. ``general`` has no vocabulary.
    """

    if isinstance(document_type, DocumentType):
        category = category_for(document_type)
    else:
        category = document_type
    if category is None or not text:
        return []
    return [term for term in domain_terms(category) if _pattern(term).search(text)]


def category_scores(text: str) -> List[Tuple[Category, int]]:
    """Score ``text`` against every category, in tie-break order."""

    source = plain_text(text)
    return [(category, count_keywords(source, signal_keywords(category))) for category in Category]


def classify(text: str) -> DocumentType:
    """Return the best matching document type for ``text``.

    The highest score wins and ties go to the earliest category in
    ``Category`` order. All-zero scores or a four-way tie yield ``general``.
    """

    scores = category_scores(text)
    values: Sequence[int] = [score for _, score in scores]
    best = max(values)
    if best == 0 or values.count(best) == len(values):
        return DocumentType.GENERAL
    for category, score in scores:
        if score == best:
            return category.document_type
    return DocumentType.GENERAL
