"""Database models for the semantic_links app.

Documents belong to a single user. Their title doubles as the wiki-link key
within that user's corpus and ``linked_documents`` caches the ids that the
document's ``[[Title]]`` links resolved to on its last save.
"""

from __future__ import annotations

from datetime import timezone as dt_timezone

from django.conf import settings
from django.db import models
from django.utils import timezone

from .engine.types import Document as EngineDocument
from .engine.types import DocumentType as EngineDocumentType


class Document(models.Model):
    """A user's free-text document."""

    class Type(models.TextChoices):
        RESEARCH = 'research', 'Research'
        ENGINEERING = 'engineering', 'Engineering'
        HEALTHCARE = 'healthcare', 'Healthcare'
        MEETING = 'meeting', 'Meeting'
        GENERAL = 'general', 'General'

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='documents',
    )
    title = models.CharField(max_length=300, db_index=True)
    type = models.CharField(max_length=20, choices=Type.choices, default=Type.GENERAL)
    content = models.TextField(blank=True)
    tags = models.JSONField(default=list, blank=True)
    linked_documents = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-updated_at', '-pk']

    def __str__(self) -> str:  # pragma: no cover - convenience display
        return self.title

    def clean_tags(self) -> tuple[str, ...]:
        """Return stripped, de-duplicated tags in their stored order."""

        cleaned: list[str] = []
        for tag in self.tags or []:
            value = str(tag).strip()
            if value and value not in cleaned:
                cleaned.append(value)
        return tuple(cleaned)

    def to_engine(self) -> EngineDocument:
        """Return the read-only engine view of this row."""

        return EngineDocument(
            id=str(self.pk),
            title=self.title,
            type=EngineDocumentType.parse(self.type),
            content=self.content or '',
            tags=self.clean_tags(),
            created_at=_aware(self.created_at),
            updated_at=_aware(self.updated_at),
        )


def _aware(value):
    if value is None:
        return timezone.now()
    if timezone.is_naive(value):
        return timezone.make_aware(value, dt_timezone.utc)
    return value
