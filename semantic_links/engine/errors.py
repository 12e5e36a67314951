"""Exceptions raised by the semantic linking engine and its adapters."""

from __future__ import annotations


class LinkingError(Exception):
    """Base class for semantic linking failures."""


class RepositoryError(LinkingError):
    """Raised by a document repository when it cannot serve a request."""


class DocumentLoadError(LinkingError):
    """The documents needed for an operation could not be loaded.

    Distinguishes "couldn't load documents" from "no documents", which is a
    valid, empty result.
    """

    def __init__(self, user_id: object, operation: str) -> None:
        super().__init__(f"Could not load documents for user {user_id} during {operation}")
        self.user_id = user_id
        self.operation = operation
