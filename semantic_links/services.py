"""Linking operations bound to a document repository.

:class:`LinkingService` is what the views talk to. Each call fetches the
user's documents once, hands the snapshot to the stateless engine and
returns plain engine types. A failure to fetch documents is raised as
:class:`~semantic_links.engine.errors.DocumentLoadError` so callers can
tell "couldn't load" apart from "nothing found"; the only side effect,
storing resolved wiki-link ids, never fails the request.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from .engine.errors import DocumentLoadError
from .engine.index import LinkingEngine
from .engine.types import (
    Backlink,
    Document,
    DocumentType,
    GraphAnalytics,
    KnowledgeGraph,
    LinkSuggestion,
    ResolvedWikiLink,
    WritingAnalysis,
)
from .repository import DocumentRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentDetails:
    """A document together with its place in the knowledge graph."""

    document: Document
    recommendations: List[Document]
    connections: int

    def to_dict(self) -> Dict[str, object]:
        return {
            "document": self.document.to_dict(),
            "recommendations": [item.to_dict() for item in self.recommendations],
            "connections": self.connections,
        }


class LinkingService:
    """Semantic linking for one repository of user documents."""

    def __init__(self, repository: DocumentRepository, engine: LinkingEngine) -> None:
        self.repository = repository
        self.engine = engine

    def _documents(self, user_id: object, operation: str) -> List[Document]:
        try:
            return list(self.repository.list_documents(user_id))
        except Exception as exc:
            raise DocumentLoadError(user_id, operation) from exc

    def _document(self, user_id: object, document_id: str, operation: str) -> Optional[Document]:
        try:
            return self.repository.get_document(user_id, document_id)
        except Exception as exc:
            raise DocumentLoadError(user_id, operation) from exc

    def _resolve(
        self,
        user_id: object,
        ids: List[str],
        documents: List[Document],
        operation: str,
    ) -> List[Document]:
        by_id = {document.id: document for document in documents}
        resolved: List[Document] = []
        for document_id in ids:
            document = by_id.get(document_id)
            if document is None:
                document = self._document(user_id, document_id, operation)
            if document is not None:
                resolved.append(document)
        return resolved

    def build_knowledge_graph(self, user_id: object) -> KnowledgeGraph:
        documents = self._documents(user_id, "build_knowledge_graph")
        return self.engine.knowledge_graph(documents)

    def graph_analytics(self, user_id: object) -> GraphAnalytics:
        return self.engine.analytics(self.build_knowledge_graph(user_id))

    def get_recommendations(self, user_id: object, document_id: str, limit: int = 5) -> List[Document]:
        """Return up to ``limit`` documents most related to ``document_id``.

        An id that is not among the user's documents yields an empty list.
        """

        operation = "get_recommendations"
        documents = self._documents(user_id, operation)
        if not any(document.id == document_id for document in documents):
            return []
        graph = self.engine.knowledge_graph(documents)
        ids = self.engine.recommendation_ids(graph, document_id, limit)
        return self._resolve(user_id, ids, documents, operation)

    def node_details(self, user_id: object, document_id: str, limit: int = 5) -> Optional[DocumentDetails]:
        operation = "node_details"
        documents = self._documents(user_id, operation)
        document = next((item for item in documents if item.id == document_id), None)
        if document is None:
            return None
        graph = self.engine.knowledge_graph(documents)
        ids = self.engine.recommendation_ids(graph, document_id, limit)
        return DocumentDetails(
            document=document,
            recommendations=self._resolve(user_id, ids, documents, operation),
            connections=self.engine.connection_count(graph, document_id),
        )

    def find_backlinks(self, user_id: object, document_id: str) -> List[Backlink]:
        documents = self._documents(user_id, "find_backlinks")
        target = next((item for item in documents if item.id == document_id), None)
        if target is None:
            return []
        return self.engine.backlinks(target, documents)

    def analyze_writing_context(
        self,
        user_id: object,
        text: str,
        document_id: str,
        document_type: Optional[DocumentType] = None,
    ) -> WritingAnalysis:
        documents = self._documents(user_id, "analyze_writing_context")
        return self.engine.writing_analysis(text, document_id, document_type, documents)

    def suggest_links_for_selection(
        self,
        user_id: object,
        selected_text: str,
        document_id: str,
    ) -> List[LinkSuggestion]:
        if not selected_text or not selected_text.strip():
            return []
        documents = self._documents(user_id, "suggest_links_for_selection")
        return self.engine.selection_suggestions(selected_text, document_id, documents)

    def validate_wiki_link(self, user_id: object, title: str) -> bool:
        documents = self._documents(user_id, "validate_wiki_link")
        return self.engine.validate_wiki_link(title, documents)

    def resolve_wiki_links(self, user_id: object, content: str) -> List[ResolvedWikiLink]:
        documents = self._documents(user_id, "resolve_wiki_links")
        return self.engine.resolve_wiki_links(content, documents)

    def search_for_linking(self, user_id: object, query: str) -> List[Document]:
        documents = self._documents(user_id, "search_for_linking")
        return self.engine.search_for_linking(query, documents)

    def update_document_links(self, user_id: object, document_id: str, content: str) -> List[str]:
        """Resolve the wiki links in ``content`` and store them on the document.

        The resolved ids are returned even when storing them fails.
        """

        documents = self._documents(user_id, "update_document_links")
        linked_ids = self.engine.linked_document_ids(content, documents)
        try:
            self.repository.update_document_links(user_id, document_id, linked_ids)
        except Exception:
            logger.exception("Failed to store links for document %s", document_id)
        else:
            logger.debug("Stored %d links for document %s", len(linked_ids), document_id)
        return linked_ids

