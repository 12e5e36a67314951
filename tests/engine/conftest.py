"""Shared fixtures for engine tests."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Iterable

import pytest

from semantic_links.engine.concepts import ConceptExtractor, NltkNounTagger, ensure_tagger_data
from semantic_links.engine.config import load_config
from semantic_links.engine.index import LinkingEngine
from semantic_links.engine.types import ConceptSet, Document, DocumentType, GraphNode

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


# Deterministic stand-in for the NLTK tagger so extraction results do not
# depend on installed model data.
_TOKEN_RE = re.compile(r"[A-Za-z][A-Za-z0-9'\-]*[A-Za-z0-9]|[A-Za-z]|\d+(?:\.\d+)?|[^\w\s]")

_FUNCTION_WORDS = {
    "a", "about", "after", "again", "all", "also", "an", "and", "any", "are", "as",
    "at", "be", "because", "been", "before", "being", "between", "both", "but", "by",
    "can", "could", "did", "do", "does", "down", "during", "each", "either", "every",
    "for", "from", "further", "had", "has", "have", "he", "her", "here", "his", "how",
    "i", "if", "in", "into", "is", "it", "its", "just", "may", "me", "might", "more",
    "most", "must", "my", "neither", "no", "nor", "not", "of", "off", "on", "once",
    "only", "or", "other", "our", "out", "over", "own", "per", "same", "shall", "she",
    "should", "so", "some", "such", "than", "that", "the", "their", "them", "then",
    "there", "these", "they", "this", "those", "through", "to", "too", "under", "until",
    "up", "upon", "us", "very", "via", "was", "we", "were", "what", "when", "where",
    "whether", "which", "while", "who", "whom", "whose", "why", "will", "with", "within",
    "without", "would", "yet", "you", "your",
}

_COMMON_VERBS = {
    "add", "adds", "allow", "allows", "become", "becomes", "believe", "came", "come",
    "comes", "consider", "covers", "describe", "describes", "discuss", "discusses",
    "explain", "explains", "find", "finds", "found", "gave", "get", "gets", "give",
    "gives", "go", "goes", "got", "help", "helps", "include", "includes", "keep",
    "keeps", "know", "knows", "let", "lets", "look", "looks", "made", "make", "makes",
    "mean", "means", "provide", "provides", "reduce", "reduces", "require", "requires",
    "run", "runs", "said", "say", "says", "see", "seem", "seems", "show", "shows",
    "suggest", "suggests", "take", "takes", "tell", "think", "thinks", "took", "try",
    "use", "uses", "want", "wants", "went", "work", "works",
}

_NOUN_EXCEPTIONS = {
    "bed", "building", "engineering", "finding", "heading", "meeting", "need", "planning",
    "reading", "seed", "speed", "testing", "thing", "training", "understanding", "wedding",
}


class RuleTagger:
    """Word-list tagger: function words, common verbs and suffixes, else nouns."""

    def tag(self, text):
        return [(token, self._tag_token(token)) for token in _TOKEN_RE.findall(text)]

    def _tag_token(self, token):
        if not token[:1].isalpha():
            return "CD" if token[:1].isdigit() else "."
        lowered = token.lower()
        if lowered in _FUNCTION_WORDS:
            return "IN"
        if lowered in _COMMON_VERBS:
            return "VB"
        if token[0].isupper():
            return "NNP"
        if lowered in _NOUN_EXCEPTIONS:
            return "NN"
        if len(lowered) > 4 and lowered.endswith("ly"):
            return "RB"
        if len(lowered) > 5 and lowered.endswith(("ing", "ed")):
            return "VBG" if lowered.endswith("ing") else "VBD"
        if len(lowered) > 5 and lowered.endswith(("ous", "ful", "ive", "able", "ible", "less", "ical")):
            return "JJ"
        return "NNS" if lowered.endswith("s") and not lowered.endswith("ss") else "NN"


@pytest.fixture()
def engine_config():
    """Provide a mutable copy of the default engine configuration."""

    return load_config(None)


@pytest.fixture()
def extractor():
    return ConceptExtractor(RuleTagger())


@pytest.fixture()
def engine(engine_config):
    return LinkingEngine.from_config(engine_config, RuleTagger())


@pytest.fixture(scope="session")
def nltk_tagger():
    """The real NLTK tagger; downloads its data or skips when that fails."""

    if not ensure_tagger_data(download=True):
        pytest.skip("NLTK tagger data is not available")
    return NltkNounTagger()


def make_document(
    id: str,
    title: str,
    content: str,
    *,
    type: str = "general",
    tags: Iterable[str] | None = None,
    age_days: float = 0,
) -> Document:
    updated = NOW - timedelta(days=age_days)
    return Document(
        id=id,
        title=title,
        type=DocumentType(type),
        content=content,
        tags=tuple(tags or ()),
        created_at=updated,
        updated_at=updated,
    )


def make_node(
    id: str,
    concepts: ConceptSet = (),
    *,
    type: str = "general",
    tags: Iterable[str] | None = None,
    age_days: float = 0,
) -> GraphNode:
    updated = NOW - timedelta(days=age_days)
    return GraphNode(
        id=id,
        title=id.title(),
        type=DocumentType(type),
        tags=tuple(tags or ()),
        word_count=0,
        concepts=tuple(concepts),
        created_at=updated,
        updated_at=updated,
    )
