"""Pairwise relevance scoring shared by the graph and live-typing paths."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Sequence, Tuple

from .text import whole_word_pattern
from .types import ConceptSet, ConnectionType, DocumentType, GraphEdge, GraphNode

CONCEPT_WEIGHT = 0.4
TAG_WEIGHT = 0.3
TYPE_WEIGHT = 0.2
RECENCY_WEIGHT = 0.1

# Edges at or below these scores are discarded. The live path is stricter
# so that suggestions shown while typing stay precise.
GRAPH_EDGE_THRESHOLD = 0.1
LIVE_SUGGESTION_THRESHOLD = 0.3

_SECONDS_PER_DAY = 24 * 60 * 60


@dataclass(frozen=True)
class TextSignals:
    """Signals extracted from text that has not been saved yet."""

    text: str
    concepts: ConceptSet
    terms: Tuple[str, ...]
    tags: Tuple[str, ...]
    type: Optional[DocumentType]
    observed_at: datetime


@dataclass(frozen=True)
class LiveScore:
    score: float
    shared_concepts: Tuple[str, ...]
    shared_terms: Tuple[str, ...]
    shared_tags: Tuple[str, ...]

    @property
    def matched(self) -> Tuple[str, ...]:
        return _dedupe(self.shared_concepts + self.shared_terms)


def _clamp(value: float, minimum: float = 0.0, maximum: float = 1.0) -> float:
    return max(min(value, maximum), minimum)


def _dedupe(items: Iterable[str]) -> Tuple[str, ...]:
    seen: list[str] = []
    for item in items:
        if item not in seen:
            seen.append(item)
    return tuple(seen)


def shared_items(first: Sequence[str], second: Sequence[str]) -> Tuple[str, ...]:
    """Items of ``first`` also present in ``second``, case-insensitively."""

    lookup = {item.casefold() for item in second}
    shared: list[str] = []
    for item in first:
        key = item.casefold()
        if key in lookup:
            shared.append(item)
            lookup.discard(key)
    return tuple(shared)


def temporal_weight(first: datetime, second: datetime) -> float:
    """Return the recency weight for two update timestamps."""

    days = abs((first - second).total_seconds()) / _SECONDS_PER_DAY
    if days < 1:
        return 0.8
    if days < 7:
        return 0.5
    if days < 30:
        return 0.2
    return 0.0


def combine(
    shared_concepts: int,
    shared_tags: int,
    same_type: bool,
    recency: float,
) -> float:
    """Return the bounded weight for the given overlap counts."""

    concept_score = shared_concepts * CONCEPT_WEIGHT
    tag_score = shared_tags * TAG_WEIGHT
    type_score = TYPE_WEIGHT if same_type else 0.0
    recency_score = recency * RECENCY_WEIGHT
    return _clamp(concept_score + tag_score + type_score + recency_score)


def connection_type(
    shared_concepts: Sequence[str],
    shared_tags: Sequence[str],
    same_type: bool,
) -> ConnectionType:
    """Label a connection by its dominant signal; never affects the weight."""

    if len(shared_tags) > len(shared_concepts):
        return ConnectionType.TAG
    if same_type and not shared_concepts:
        return ConnectionType.CONTENT
    return ConnectionType.CONCEPT


def score_reason(
    shared_concepts: Sequence[str],
    shared_terms: Sequence[str] = (),
    shared_tags: Sequence[str] = (),
) -> str:
    """Return a human-friendly summary of why two documents relate."""

    fragments = []
    if shared_concepts:
        fragments.append(f"Shares concepts: {', '.join(shared_concepts[:3])}")
    if shared_terms:
        fragments.append(f"Related terms: {', '.join(shared_terms[:2])}")
    if shared_tags:
        fragments.append(f"Common tags: {', '.join(shared_tags[:2])}")
    return " • ".join(fragments) or "Related content"


def score_pair(first: GraphNode, second: GraphNode) -> GraphEdge:
    """Score two graph nodes. The weight does not depend on argument order."""

    concepts = shared_items(first.concepts, second.concepts)
    tags = shared_items(first.tags, second.tags)
    same_type = first.type == second.type
    weight = combine(
        len(concepts),
        len(tags),
        same_type,
        temporal_weight(first.updated_at, second.updated_at),
    )
    return GraphEdge(
        source=first.id,
        target=second.id,
        weight=weight,
        shared_concepts=concepts,
        shared_tags=tags,
        connection_type=connection_type(concepts, tags, same_type),
        reason=score_reason(concepts, (), tags),
    )


def _tags_in_text(tags: Sequence[str], text: str) -> Tuple[str, ...]:
    return tuple(tag for tag in tags if tag.strip() and whole_word_pattern(tag).search(text))


def score_live(
    signals: TextSignals,
    candidate: GraphNode,
    candidate_terms: Sequence[str],
) -> LiveScore:
    """Score in-progress text against one stored document.

    Concepts are matched against concepts and domain terms against domain
    terms; both overlaps then count as shared concepts. A candidate tag is
    shared when it is mentioned in the text or carried by the text's own tags.
    """

    concepts = shared_items(signals.concepts, candidate.concepts)
    terms = shared_items(signals.terms, candidate_terms)
    mentioned = set(_tags_in_text(candidate.tags, signals.text))
    own = {tag.casefold() for tag in signals.tags}
    tags = tuple(tag for tag in candidate.tags if tag in mentioned or tag.casefold() in own)
    overlap = _dedupe(concepts + terms)
    same_type = signals.type is not None and signals.type == candidate.type
    score = combine(
        len(overlap),
        len(tags),
        same_type,
        temporal_weight(signals.observed_at, candidate.updated_at),
    )
    return LiveScore(score=score, shared_concepts=concepts, shared_terms=terms, shared_tags=tags)
