"""Concept extraction: noun phrases and capitalized terms from free text."""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Protocol, Tuple

import nltk

from .config import EngineConfig
from .text import plain_text
from .types import ConceptSet

logger = logging.getLogger(__name__)

TaggedToken = Tuple[str, str]

# Multi-word capitalized sequences on a single line, e.g. "Acme Prime Lens".
_CAPITALIZED_RE = re.compile(r"\b[A-Z][a-zA-Z]+(?:[ \t]+[A-Z][a-zA-Z]+)+\b")

_MIN_CONCEPT_LENGTH = 3
_MAX_CONCEPT_LENGTH = 25
_MAX_PHRASE_WORDS = 3

# (resource path, download id) pairs needed by word_tokenize and pos_tag.
NLTK_RESOURCES = (
    ("tokenizers/punkt_tab", "punkt_tab"),
    ("taggers/averaged_perceptron_tagger_eng", "averaged_perceptron_tagger_eng"),
)


class NounTagger(Protocol):
    """Tokenizes text and assigns Penn Treebank part-of-speech tags."""

    def tag(self, text: str) -> List[TaggedToken]:
        ...


class NltkNounTagger:
    """Tagger backed by :func:`nltk.word_tokenize` and :func:`nltk.pos_tag`.

    Needs the ``punkt_tab`` and ``averaged_perceptron_tagger_eng`` data
    packages; see :func:`ensure_tagger_data`.
    """

    def tag(self, text: str) -> List[TaggedToken]:
        return [(word, tag) for word, tag in nltk.pos_tag(nltk.word_tokenize(text))]


def missing_tagger_data() -> List[str]:
    """Return the download ids of NLTK data packages that are not installed."""

    missing: List[str] = []
    for path, package in NLTK_RESOURCES:
        try:
            nltk.data.find(path)
        except LookupError:
            missing.append(package)
    return missing


def ensure_tagger_data(download: bool = False) -> bool:
    """Check the NLTK data once, optionally downloading what is missing.

    Returns ``True`` when every package is available. Missing data is
    logged; extraction then degrades to empty concept sets.
    """

    missing = missing_tagger_data()
    if missing and download:
        for package in missing:
            logger.info("Downloading NLTK data package %s", package)
            nltk.download(package, quiet=True)
        missing = missing_tagger_data()
    if missing:
        logger.error(
            "NLTK data missing (%s); concept extraction will return no concepts. "
            "Install with: python -m nltk.downloader %s",
            ", ".join(missing),
            " ".join(missing),
        )
        return False
    return True


def _chunk_noun_phrases(tagged: Iterable[TaggedToken]) -> List[str]:
    phrases: List[str] = []
    run: List[str] = []

    def flush() -> None:
        if len(run) <= _MAX_PHRASE_WORDS:
            phrases.append(" ".join(run))
        else:
            phrases.extend(run)
        run.clear()

    for word, tag in tagged:
        if tag.startswith("NN") and word[:1].isalpha():
            run.append(word)
            continue
        if run:
            flush()
    if run:
        flush()
    return phrases


def _dedupe_lower(items: Iterable[str], limit: int) -> ConceptSet:
    seen: List[str] = []
    for item in items:
        lowered = " ".join(item.lower().split())
        if lowered and lowered not in seen:
            seen.append(lowered)
            if len(seen) >= limit:
                break
    return tuple(seen)


class ConceptExtractor:
    """Turns document text into a normalized, bounded concept set.

    Instances hold no per-call state; build one at start-up and share it.
    """

    def __init__(
        self,
        tagger: NounTagger | None = None,
        *,
        max_concepts: int = 25,
        max_tagged: int = 15,
        max_capitalized: int = 10,
    ) -> None:
        self.tagger = tagger or NltkNounTagger()
        self.max_concepts = max_concepts
        self.max_tagged = max_tagged
        self.max_capitalized = max_capitalized

    @classmethod
    def from_config(cls, config: EngineConfig, tagger: NounTagger | None = None) -> "ConceptExtractor":
        return cls(
            tagger,
            max_concepts=config.get_int("max_concepts"),
            max_tagged=config.get_int("max_tagged_concepts"),
            max_capitalized=config.get_int("max_capitalized_concepts"),
        )

    def _noun_phrases(self, source: str) -> List[str] | None:
        try:
            tagged = self.tagger.tag(source)
        except (LookupError, ValueError, IndexError) as exc:
            logger.warning("Noun tagging failed, skipping concept extraction: %s", exc)
            return None
        return [
            phrase
            for phrase in _chunk_noun_phrases(tagged)
            if _MIN_CONCEPT_LENGTH < len(phrase) < _MAX_CONCEPT_LENGTH
        ]

    def noun_phrases(self, text: str) -> List[str]:
        """Return tagged noun phrases within the concept length bounds."""

        source = plain_text(text)
        if not source.strip():
            return []
        return self._noun_phrases(source) or []

    def extract(self, text: str) -> ConceptSet:
        """Return the concept set for ``text``.

        Empty text, or text the tagger cannot handle, yields ``()``.
        """

        source = plain_text(text or "")
        if not source.strip():
            return ()
        phrases = self._noun_phrases(source)
        if phrases is None:
            return ()
        capitalized = [match.group(0) for match in _CAPITALIZED_RE.finditer(source)]
        candidates = phrases[: self.max_tagged] + capitalized[: self.max_capitalized]
        return _dedupe_lower(candidates, self.max_concepts)

    def key_topics(self, text: str, limit: int = 8) -> List[str]:
        """Return the first distinct noun phrases, original casing kept."""

        topics: List[str] = []
        for phrase in self.noun_phrases(text):
            if phrase not in topics:
                topics.append(phrase)
            if len(topics) >= limit:
                break
        return topics
