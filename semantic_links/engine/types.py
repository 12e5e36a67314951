"""Typed data structures used by the semantic linking engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple

ConceptSet = Tuple[str, ...]


class DocumentType(str, Enum):
    """Document categories known to the editor."""

    RESEARCH = "research"
    ENGINEERING = "engineering"
    HEALTHCARE = "healthcare"
    MEETING = "meeting"
    GENERAL = "general"

    @classmethod
    def parse(cls, value: object) -> "DocumentType":
        """Return the member for ``value``, falling back to ``GENERAL``."""

        if isinstance(value, DocumentType):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.GENERAL


class Category(str, Enum):
    """Document types that carry a fixed vocabulary, in tie-break order."""

    RESEARCH = "research"
    ENGINEERING = "engineering"
    HEALTHCARE = "healthcare"
    MEETING = "meeting"

    @property
    def document_type(self) -> DocumentType:
        return DocumentType(self.value)


class ConnectionType(str, Enum):
    CONCEPT = "concept"
    TAG = "tag"
    CONTENT = "content"
    TEMPORAL = "temporal"


@dataclass(frozen=True)
class Document:
    """Read-only view of a stored document."""

    id: str
    title: str
    type: DocumentType
    content: str
    tags: Tuple[str, ...]
    created_at: datetime
    updated_at: datetime
    word_count: Optional[int] = None

    @property
    def words(self) -> int:
        if self.word_count is not None:
            return self.word_count
        return len(self.content.split())

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "title": self.title,
            "type": self.type.value,
            "content": self.content,
            "tags": list(self.tags),
            "wordCount": self.words,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }


@dataclass(frozen=True)
class GraphNode:
    """One document in a knowledge graph snapshot."""

    id: str
    title: str
    type: DocumentType
    tags: Tuple[str, ...]
    word_count: int
    concepts: ConceptSet
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "title": self.title,
            "type": self.type.value,
            "tags": list(self.tags),
            "wordCount": self.word_count,
            "concepts": list(self.concepts),
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }


@dataclass(frozen=True)
class GraphEdge:
    """Scored relationship between an unordered pair of documents."""

    source: str
    target: str
    weight: float
    shared_concepts: Tuple[str, ...]
    shared_tags: Tuple[str, ...]
    connection_type: ConnectionType
    reason: str = ""

    def other_end(self, document_id: str) -> str:
        return self.target if self.source == document_id else self.source

    def touches(self, document_id: str) -> bool:
        return document_id in (self.source, self.target)

    def to_dict(self) -> Dict[str, object]:
        return {
            "source": self.source,
            "target": self.target,
            "weight": self.weight,
            "sharedConcepts": list(self.shared_concepts),
            "sharedTags": list(self.shared_tags),
            "connectionType": self.connection_type.value,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class DocumentCluster:
    """Same-typed documents annotated with their most frequent concepts."""

    id: str
    name: str
    document_ids: Tuple[str, ...]
    central_concepts: Tuple[str, ...]
    type: DocumentType

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "documents": list(self.document_ids),
            "centralConcepts": list(self.central_concepts),
            "type": self.type.value,
        }


@dataclass(frozen=True)
class KnowledgeGraph:
    nodes: List[GraphNode] = field(default_factory=list)
    edges: List[GraphEdge] = field(default_factory=list)
    clusters: List[DocumentCluster] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
            "clusters": [cluster.to_dict() for cluster in self.clusters],
        }


@dataclass(frozen=True)
class GraphAnalytics:
    """Summary statistics for a knowledge graph."""

    total_documents: int
    total_connections: int
    clusters: int
    average_connections: float
    strong_connections: int
    documents_by_type: Dict[str, int]
    top_concepts: List[Tuple[str, int]]

    def to_dict(self) -> Dict[str, object]:
        return {
            "totalDocuments": self.total_documents,
            "totalConnections": self.total_connections,
            "clusters": self.clusters,
            "averageConnections": self.average_connections,
            "strongConnections": self.strong_connections,
            "documentsByType": dict(self.documents_by_type),
            "topConcepts": [
                {"concept": concept, "count": count} for concept, count in self.top_concepts
            ],
        }


@dataclass(frozen=True)
class LinkSuggestion:
    """Document suggested as a link target for in-progress text."""

    document_id: str
    title: str
    type: DocumentType
    matched_concepts: Tuple[str, ...]
    relevance_score: float
    context_snippet: str
    reason: str

    def to_dict(self) -> Dict[str, object]:
        return {
            "documentId": self.document_id,
            "title": self.title,
            "type": self.type.value,
            "matchedConcepts": list(self.matched_concepts),
            "relevanceScore": self.relevance_score,
            "context": self.context_snippet,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class WikiLink:
    """A ``[[Title]]`` or ``[[Title|Display]]`` span in document content."""

    target_title: str
    display_text: Optional[str]
    start: int
    end: int


@dataclass(frozen=True)
class ResolvedWikiLink:
    link: WikiLink
    document_id: Optional[str]

    @property
    def matched(self) -> bool:
        return self.document_id is not None

    def to_dict(self) -> Dict[str, object]:
        return {
            "title": self.link.target_title,
            "displayText": self.link.display_text,
            "position": {"start": self.link.start, "end": self.link.end},
            "documentId": self.document_id,
            "matched": self.matched,
        }


@dataclass(frozen=True)
class Backlink:
    """A document that links to the inspected document by title."""

    document_id: str
    document_title: str
    document_type: DocumentType
    excerpt: str
    link_count: int

    def to_dict(self) -> Dict[str, object]:
        return {
            "documentId": self.document_id,
            "documentTitle": self.document_title,
            "documentType": self.document_type.value,
            "excerpt": self.excerpt,
            "linkCount": self.link_count,
        }


@dataclass(frozen=True)
class StructureAnalysis:
    has_headings: bool
    has_list: bool
    has_conclusion: bool
    paragraph_count: int


@dataclass(frozen=True)
class ContentAnalysis:
    """Heuristic quality assessment of a piece of writing."""

    quality_score: int
    completeness_score: int
    professional_terms: List[str]
    key_topics: List[str]
    sentiment: str
    readability_score: float
    structure: StructureAnalysis


@dataclass(frozen=True)
class WritingSuggestion:
    kind: str
    message: str
    priority: str

    def to_dict(self) -> Dict[str, object]:
        return {"type": self.kind, "message": self.message, "priority": self.priority}


@dataclass(frozen=True)
class WritingAnalysis:
    """Result of analysing the text currently being edited."""

    quality_score: int
    suggestions: List[WritingSuggestion]
    related_documents: List[LinkSuggestion]
    professional_terms: List[str]
    key_topics: List[str]
    readability_score: float

    def to_dict(self) -> Dict[str, object]:
        return {
            "qualityScore": self.quality_score,
            "suggestions": [item.to_dict() for item in self.suggestions],
            "relatedDocuments": [item.to_dict() for item in self.related_documents],
            "professionalTerms": list(self.professional_terms),
            "keyTopics": list(self.key_topics),
            "readabilityScore": self.readability_score,
        }
