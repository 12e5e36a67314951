"""Explicit ``[[Title]]`` links: parsing, resolution and backlinks."""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Sequence

from .text import excerpt_around
from .types import Backlink, Document, ResolvedWikiLink, WikiLink

# [[Title]] or [[Title|Display Text]]
WIKI_LINK_RE = re.compile(r"\[\[([^\]|]+)(?:\|([^\]]+))?\]\]")


def _title_key(title: str) -> str:
    return title.strip().lower()


def extract_wiki_links(content: str) -> List[WikiLink]:
    """Return every wiki-link in ``content`` with its character offsets."""

    if not content:
        return []
    links: List[WikiLink] = []
    for match in WIKI_LINK_RE.finditer(content):
        display = match.group(2)
        links.append(
            WikiLink(
                target_title=match.group(1).strip(),
                display_text=display.strip() if display is not None else None,
                start=match.start(),
                end=match.end(),
            )
        )
    return links


def title_index(documents: Sequence[Document]) -> Dict[str, Document]:
    """Map lower-cased titles to documents; the first of duplicate titles wins."""

    index: Dict[str, Document] = {}
    for document in documents:
        index.setdefault(_title_key(document.title), document)
    return index


def find_by_title(title: str, documents: Sequence[Document]) -> Optional[Document]:
    return title_index(documents).get(_title_key(title))


def resolve_links(links: Sequence[WikiLink], documents: Sequence[Document]) -> List[ResolvedWikiLink]:
    """Match each link to a document by case-insensitive title.

    Unmatched links are returned as broken rather than raising.
    """

    index = title_index(documents)
    resolved = []
    for link in links:
        document = index.get(_title_key(link.target_title))
        resolved.append(ResolvedWikiLink(link=link, document_id=document.id if document else None))
    return resolved


def resolved_link_ids(content: str, documents: Sequence[Document]) -> List[str]:
    """Return the distinct ids of documents linked from ``content``."""

    ids: List[str] = []
    for item in resolve_links(extract_wiki_links(content), documents):
        if item.document_id is not None and item.document_id not in ids:
            ids.append(item.document_id)
    return ids


def validate_wiki_link(title: str, documents: Sequence[Document]) -> bool:
    return bool(title and title.strip()) and find_by_title(title, documents) is not None


def find_backlinks(
    target: Document,
    documents: Sequence[Document],
    window: int = 100,
) -> List[Backlink]:
    """Return one backlink per other document that links to ``target``."""

    key = _title_key(target.title)
    backlinks: List[Backlink] = []
    for document in documents:
        if document.id == target.id:
            continue
        matching = [
            link for link in extract_wiki_links(document.content) if _title_key(link.target_title) == key
        ]
        if not matching:
            continue
        backlinks.append(
            Backlink(
                document_id=document.id,
                document_title=document.title,
                document_type=document.type,
                excerpt=excerpt_around(document.content, matching[0].start, window),
                link_count=len(matching),
            )
        )
    return backlinks


def search_for_linking(
    query: str,
    documents: Sequence[Document],
    limit: int = 10,
    browse_limit: int = 50,
) -> List[Document]:
    """Return documents whose title contains ``query``, case-insensitively.

    An empty query lists the first ``browse_limit`` documents instead.
    """

    if not query or not query.strip():
        return list(documents[:browse_limit])
    needle = query.strip().lower()
    return [document for document in documents if needle in document.title.lower()][:limit]
