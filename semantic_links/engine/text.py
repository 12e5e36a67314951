"""Shared text utilities for the semantic linking engine."""

from __future__ import annotations

import re
from typing import Optional

from bs4 import BeautifulSoup

_MARKUP_RE = re.compile(r"<\s*/?\s*[A-Za-z!][^>]*>")

# Word boundary regex template used when compiling matchers for keywords
WORD_BOUNDARY = r"(?<![A-Za-z0-9_]){term}(?![A-Za-z0-9_])"


def plain_text(content: str) -> str:
    """Return ``content`` with any HTML markup removed."""

    if not content:
        return ""
    if not _MARKUP_RE.search(content):
        return content
    soup = BeautifulSoup(content, "html.parser")
    return soup.get_text(" ")


def whole_word_pattern(term: str) -> re.Pattern[str]:
    """Compile a case-insensitive, whole-word matcher for ``term``."""

    escaped = r"\s+".join(re.escape(part) for part in term.split())
    return re.compile(WORD_BOUNDARY.format(term=escaped), flags=re.IGNORECASE)


def excerpt_around(content: str, position: int, window: int = 100) -> str:
    """Return ``window`` characters either side of ``position`` with ellipses."""

    start = max(0, position - window)
    end = min(len(content), position + window)
    excerpt = content[start:end].strip()
    if start > 0:
        excerpt = "..." + excerpt
    if end < len(content):
        excerpt = excerpt + "..."
    return excerpt


def context_snippet(content: str, keyword: Optional[str], before: int = 50, after: int = 100) -> str:
    """Return a snippet of ``content`` surrounding the first ``keyword`` hit.

    Falls back to the opening 150 characters when the keyword is missing.
    """

    if keyword:
        index = content.lower().find(keyword.lower())
    else:
        index = -1
    if index == -1:
        if len(content) <= before + after:
            return content
        return content[: before + after] + "..."

    start = max(0, index - before)
    end = min(len(content), index + len(keyword or "") + after)
    snippet = content[start:end]
    if start > 0:
        snippet = "..." + snippet
    if end < len(content):
        snippet = snippet + "..."
    return snippet
