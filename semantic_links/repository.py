"""Document access consumed by the linking service.

The engine never queries storage itself. A :class:`DocumentRepository`
hands it complete snapshots of a user's corpus, which must never be
paginated: a partial list would silently drop graph edges.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, Sequence

from django.db import DatabaseError

from . import models
from .engine.errors import RepositoryError
from .engine.types import Document


class DocumentRepository(Protocol):
    """Storage capability the linking service depends on."""

    def list_documents(self, user_id: object) -> List[Document]:
        ...

    def get_document(self, user_id: object, document_id: str) -> Optional[Document]:
        ...

    def update_document_links(self, user_id: object, document_id: str, linked_ids: Sequence[str]) -> None:
        ...


def _parse_pk(document_id: str) -> Optional[int]:
    try:
        return int(document_id)
    except (TypeError, ValueError):
        return None


class DjangoDocumentRepository:
    """Repository backed by :class:`semantic_links.models.Document`."""

    def list_documents(self, user_id: object) -> List[Document]:
        try:
            rows = list(models.Document.objects.filter(owner_id=user_id))
        except DatabaseError as exc:
            raise RepositoryError(f'Could not list documents for user {user_id}') from exc
        return [row.to_engine() for row in rows]

    def get_document(self, user_id: object, document_id: str) -> Optional[Document]:
        pk = _parse_pk(document_id)
        if pk is None:
            return None
        try:
            row = models.Document.objects.filter(owner_id=user_id, pk=pk).first()
        except DatabaseError as exc:
            raise RepositoryError(f'Could not load document {document_id}') from exc
        return row.to_engine() if row is not None else None

    def update_document_links(self, user_id: object, document_id: str, linked_ids: Sequence[str]) -> None:
        pk = _parse_pk(document_id)
        if pk is None:
            raise RepositoryError(f'Invalid document id: {document_id!r}')
        try:
            # ``update`` leaves ``updated_at`` untouched; links are derived data.
            updated = models.Document.objects.filter(owner_id=user_id, pk=pk).update(
                linked_documents=list(linked_ids),
            )
        except DatabaseError as exc:
            raise RepositoryError(f'Could not store links for document {document_id}') from exc
        if not updated:
            raise RepositoryError(f'Document {document_id} does not exist')
