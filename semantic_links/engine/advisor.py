"""Link suggestions for text that is still being written.

Unlike the graph path, nothing here is cached or shared between calls: the
in-progress text is not stored yet, so every call re-scores it against the
other documents from scratch.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence

from .analysis import analyze_content, writing_suggestions
from .concepts import ConceptExtractor
from .config import EngineConfig
from .graph import build_node
from .scoring import LIVE_SUGGESTION_THRESHOLD, TextSignals, score_live, score_reason
from .text import context_snippet
from .types import Document, DocumentType, LinkSuggestion, WritingAnalysis
from .vocabulary import match_terms


def _find(document_id: str, documents: Sequence[Document]) -> Optional[Document]:
    for document in documents:
        if document.id == document_id:
            return document
    return None


def text_signals(
    text: str,
    extractor: ConceptExtractor,
    *,
    document_type: Optional[DocumentType] = None,
    tags: Iterable[str] = (),
    now: Optional[datetime] = None,
) -> TextSignals:
    """Extract concepts and, for typed documents, domain terms from ``text``."""

    terms = tuple(match_terms(text, document_type)) if document_type is not None else ()
    return TextSignals(
        text=text,
        concepts=extractor.extract(text),
        terms=terms,
        tags=tuple(tags),
        type=document_type,
        observed_at=now or datetime.now(timezone.utc),
    )


def rank_documents(
    signals: TextSignals,
    documents: Sequence[Document],
    extractor: ConceptExtractor,
    *,
    exclude_id: Optional[str] = None,
    matched_limit: int = 5,
) -> List[LinkSuggestion]:
    """Score ``signals`` against every document other than ``exclude_id``."""

    suggestions: List[LinkSuggestion] = []
    for document in documents:
        if document.id == exclude_id:
            continue
        node = build_node(document, extractor)
        result = score_live(signals, node, match_terms(document.content, document.type))
        if result.score <= LIVE_SUGGESTION_THRESHOLD:
            continue
        first_match = result.matched[0] if result.matched else None
        suggestions.append(
            LinkSuggestion(
                document_id=document.id,
                title=document.title,
                type=document.type,
                matched_concepts=result.matched[:matched_limit],
                relevance_score=result.score,
                context_snippet=context_snippet(document.content, first_match),
                reason=score_reason(result.shared_concepts, result.shared_terms, result.shared_tags),
            )
        )
    suggestions.sort(key=lambda item: item.relevance_score, reverse=True)
    return suggestions


def find_related(
    text: str,
    document_id: str,
    documents: Sequence[Document],
    extractor: ConceptExtractor,
    *,
    document_type: Optional[DocumentType] = None,
    limit: int = 5,
    matched_limit: int = 5,
    now: Optional[datetime] = None,
) -> List[LinkSuggestion]:
    """Return the documents most related to in-progress ``text``.

    The stored version of ``document_id`` supplies tags and, when
    ``document_type`` is omitted, the type; it is never suggested itself.
    """

    current = _find(document_id, documents)
    if document_type is None and current is not None:
        document_type = current.type
    signals = text_signals(
        text,
        extractor,
        document_type=document_type,
        tags=current.tags if current is not None else (),
        now=now,
    )
    ranked = rank_documents(
        signals,
        documents,
        extractor,
        exclude_id=document_id,
        matched_limit=matched_limit,
    )
    return ranked[:limit]


def suggest_for_selection(
    selected_text: str,
    document_id: str,
    documents: Sequence[Document],
    extractor: ConceptExtractor,
    *,
    limit: int = 3,
    now: Optional[datetime] = None,
) -> List[LinkSuggestion]:
    """Return link targets for a span the user selected in the editor."""

    if not selected_text or not selected_text.strip():
        return []
    return find_related(selected_text, document_id, documents, extractor, limit=limit, now=now)


def analyze_writing(
    text: str,
    document_id: str,
    document_type: DocumentType,
    documents: Sequence[Document],
    extractor: ConceptExtractor,
    config: EngineConfig,
    *,
    now: Optional[datetime] = None,
) -> WritingAnalysis:
    """Combine writing-quality heuristics with related-document suggestions."""

    related = find_related(
        text,
        document_id,
        documents,
        extractor,
        document_type=document_type,
        limit=config.get_int("suggestion_limit"),
        matched_limit=config.get_int("matched_concepts_limit"),
        now=now,
    )
    analysis = analyze_content(text, document_type, extractor, config.get_int("key_topics_limit"))
    suggestions = writing_suggestions(text, analysis, document_type, related)
    return WritingAnalysis(
        quality_score=analysis.quality_score,
        suggestions=suggestions[: config.get_int("writing_suggestions_limit")],
        related_documents=related,
        professional_terms=analysis.professional_terms,
        key_topics=analysis.key_topics,
        readability_score=analysis.readability_score,
    )
