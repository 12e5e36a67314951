"""Coordinator for the semantic linking engine.

Every operation takes the document snapshot it works on as an argument;
the engine itself holds only immutable configuration and the shared,
stateless concept extractor.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence

from . import advisor as advisor_module
from . import graph as graph_module
from . import recommend as recommend_module
from . import vocabulary as vocabulary_module
from . import wikilinks as wikilinks_module
from .concepts import ConceptExtractor, NounTagger
from .config import EngineConfig, load_config
from .types import (
    Backlink,
    Document,
    DocumentType,
    GraphAnalytics,
    KnowledgeGraph,
    LinkSuggestion,
    ResolvedWikiLink,
    WritingAnalysis,
)


@dataclass(frozen=True)
class LinkingEngine:
    """Shared entry point for the batch, live and wiki-link paths."""

    config: EngineConfig
    extractor: ConceptExtractor

    @classmethod
    def from_config(
        cls,
        config: EngineConfig | None = None,
        tagger: NounTagger | None = None,
    ) -> "LinkingEngine":
        engine_config = config or load_config(None)
        return cls(config=engine_config, extractor=ConceptExtractor.from_config(engine_config, tagger))

    def knowledge_graph(self, documents: Sequence[Document]) -> KnowledgeGraph:
        return graph_module.build_graph(documents, self.extractor, self.config)

    def analytics(self, graph: KnowledgeGraph) -> GraphAnalytics:
        return graph_module.graph_analytics(graph)

    def connection_count(self, graph: KnowledgeGraph, document_id: str) -> int:
        return graph_module.connection_count(graph, document_id)

    def recommendation_ids(
        self,
        graph: KnowledgeGraph,
        document_id: str,
        limit: int | None = None,
    ) -> List[str]:
        """Return ids of the documents most strongly connected to ``document_id``."""

        count = self.config.get_int("recommendation_limit") if limit is None else limit
        return recommend_module.recommended_ids(graph, document_id, count)

    def selection_suggestions(
        self,
        selected_text: str,
        document_id: str,
        documents: Sequence[Document],
        *,
        now: Optional[datetime] = None,
    ) -> List[LinkSuggestion]:
        return advisor_module.suggest_for_selection(
            selected_text,
            document_id,
            documents,
            self.extractor,
            limit=self.config.get_int("selection_limit"),
            now=now,
        )

    def classify(self, text: str) -> DocumentType:
        return vocabulary_module.classify(text)

    def writing_analysis(
        self,
        text: str,
        document_id: str,
        document_type: DocumentType | None,
        documents: Sequence[Document],
        *,
        now: Optional[datetime] = None,
    ) -> WritingAnalysis:
        """Analyse ``text``; an omitted type is inferred from the text itself."""

        if document_type is None:
            document_type = self.classify(text)
        return advisor_module.analyze_writing(
            text,
            document_id,
            document_type,
            documents,
            self.extractor,
            self.config,
            now=now,
        )

    def backlinks(self, target: Document, documents: Sequence[Document]) -> List[Backlink]:
        return wikilinks_module.find_backlinks(target, documents, self.config.get_int("excerpt_window"))

    def resolve_wiki_links(self, content: str, documents: Sequence[Document]) -> List[ResolvedWikiLink]:
        links = wikilinks_module.extract_wiki_links(content)
        return wikilinks_module.resolve_links(links, documents)

    def linked_document_ids(self, content: str, documents: Sequence[Document]) -> List[str]:
        return wikilinks_module.resolved_link_ids(content, documents)

    def validate_wiki_link(self, title: str, documents: Sequence[Document]) -> bool:
        return wikilinks_module.validate_wiki_link(title, documents)

    def search_for_linking(self, query: str, documents: Sequence[Document]) -> List[Document]:
        return wikilinks_module.search_for_linking(
            query,
            documents,
            self.config.get_int("search_limit"),
            self.config.get_int("browse_limit"),
        )
