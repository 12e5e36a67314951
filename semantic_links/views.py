"""JSON views for the semantic_links app.

Every response uses the envelope ``{"success": ..., "data": ..., "message": ...}``
on success and ``{"success": false, "error": ...}`` on failure. Views stay
thin: they validate input with the app's forms, call
:class:`~semantic_links.services.LinkingService` and serialise the result.
"""

from __future__ import annotations

import json
import logging
from functools import wraps
from typing import Any, Callable, Dict, Optional

from django.apps import apps
from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_GET, require_POST

from .engine.errors import DocumentLoadError
from .forms import (
    DocumentLinksForm,
    LinkSearchForm,
    LinkSelectionForm,
    RecommendationQueryForm,
    WikiLinkValidationForm,
    WritingContextForm,
)
from .repository import DjangoDocumentRepository
from .services import LinkingService

logger = logging.getLogger(__name__)


def _ok(data: Any, message: Optional[str] = None) -> JsonResponse:
    payload: Dict[str, Any] = {'success': True, 'data': data}
    if message:
        payload['message'] = message
    return JsonResponse(payload)


def _error(error: str, status: int) -> JsonResponse:
    return JsonResponse({'success': False, 'error': error}, status=status)


def _form_error(form) -> JsonResponse:
    messages = [message for errors in form.errors.values() for message in errors]
    return _error(messages[0] if messages else 'Invalid request', 400)


def _unavailable(exc: DocumentLoadError, error: str) -> JsonResponse:
    logger.exception('%s: %s', error, exc)
    return _error(error, 503)


def _payload(request: HttpRequest) -> Optional[Dict[str, Any]]:
    """Return the request body as a dict, or ``None`` when it is not valid JSON."""

    if request.content_type != 'application/json':
        return request.POST.dict()
    try:
        data = json.loads(request.body or b'{}')
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def api_login_required(view: Callable[..., JsonResponse]) -> Callable[..., JsonResponse]:
    """Reject anonymous requests with a 401 JSON error instead of a redirect."""

    @wraps(view)
    def wrapper(request: HttpRequest, *args, **kwargs) -> JsonResponse:
        if not request.user.is_authenticated:
            return _error('Authentication required', 401)
        return view(request, *args, **kwargs)

    return wrapper


def get_linking_service() -> LinkingService:
    engine = apps.get_app_config('semantic_links').engine
    return LinkingService(DjangoDocumentRepository(), engine)


@require_GET
@api_login_required
def knowledge_graph(request: HttpRequest) -> JsonResponse:
    """Return the full knowledge graph of the signed-in user's documents."""

    try:
        graph = get_linking_service().build_knowledge_graph(request.user.pk)
    except DocumentLoadError as exc:
        return _unavailable(exc, 'Failed to build knowledge graph')
    return _ok(graph.to_dict())


@require_GET
@api_login_required
def graph_analytics(request: HttpRequest) -> JsonResponse:
    try:
        analytics = get_linking_service().graph_analytics(request.user.pk)
    except DocumentLoadError as exc:
        return _unavailable(exc, 'Failed to compute graph analytics')
    return _ok(analytics.to_dict())


@require_GET
@api_login_required
def recommendations(request: HttpRequest, document_id: str) -> JsonResponse:
    form = RecommendationQueryForm(request.GET)
    if not form.is_valid():
        return _form_error(form)
    try:
        documents = get_linking_service().get_recommendations(
            request.user.pk, document_id, form.cleaned_data['limit']
        )
    except DocumentLoadError as exc:
        return _unavailable(exc, 'Failed to get recommendations')
    return _ok(
        [document.to_dict() for document in documents],
        f'Found {len(documents)} recommended documents',
    )


@require_GET
@api_login_required
def document_details(request: HttpRequest, document_id: str) -> JsonResponse:
    """Return a document with its recommendations and connection count."""

    form = RecommendationQueryForm(request.GET)
    if not form.is_valid():
        return _form_error(form)
    try:
        details = get_linking_service().node_details(request.user.pk, document_id, form.cleaned_data['limit'])
    except DocumentLoadError as exc:
        return _unavailable(exc, 'Failed to get document details')
    if details is None:
        return _error('Document not found', 404)
    return _ok(details.to_dict())


@require_GET
@api_login_required
def backlinks(request: HttpRequest, document_id: str) -> JsonResponse:
    try:
        found = get_linking_service().find_backlinks(request.user.pk, document_id)
    except DocumentLoadError as exc:
        return _unavailable(exc, 'Failed to find backlinks')
    return _ok([backlink.to_dict() for backlink in found], f'Found {len(found)} backlinks')


@require_POST
@api_login_required
def update_links(request: HttpRequest, document_id: str) -> JsonResponse:
    """Resolve the wiki links in the posted content and store them."""

    payload = _payload(request)
    if payload is None:
        return _error('Invalid JSON body', 400)
    form = DocumentLinksForm(payload)
    if not form.is_valid():
        return _form_error(form)
    service = get_linking_service()
    content = form.cleaned_data['content']
    try:
        linked_ids = service.update_document_links(request.user.pk, document_id, content)
        resolved = service.resolve_wiki_links(request.user.pk, content)
    except DocumentLoadError as exc:
        return _unavailable(exc, 'Failed to update document links')
    return _ok(
        {
            'linkedDocuments': linked_ids,
            'links': [link.to_dict() for link in resolved],
        },
        f'Updated {len(linked_ids)} document links',
    )


@require_GET
@api_login_required
def search_for_linking(request: HttpRequest) -> JsonResponse:
    form = LinkSearchForm(request.GET)
    if not form.is_valid():
        return _form_error(form)
    try:
        documents = get_linking_service().search_for_linking(request.user.pk, form.cleaned_data['q'])
    except DocumentLoadError as exc:
        return _unavailable(exc, 'Failed to search documents')
    return _ok(
        [
            {'id': document.id, 'title': document.title, 'type': document.type.value}
            for document in documents
        ]
    )


@require_GET
@api_login_required
def validate_link(request: HttpRequest) -> JsonResponse:
    form = WikiLinkValidationForm(request.GET)
    if not form.is_valid():
        return _form_error(form)
    title = form.cleaned_data['title']
    try:
        valid = get_linking_service().validate_wiki_link(request.user.pk, title)
    except DocumentLoadError as exc:
        return _unavailable(exc, 'Failed to validate link')
    return _ok({'title': title, 'valid': valid})


@require_POST
@api_login_required
def analyze_writing(request: HttpRequest) -> JsonResponse:
    """Analyse in-progress text and suggest related documents."""

    payload = _payload(request)
    if payload is None:
        return _error('Invalid JSON body', 400)
    form = WritingContextForm(payload)
    if not form.is_valid():
        return _form_error(form)
    try:
        analysis = get_linking_service().analyze_writing_context(
            request.user.pk,
            form.cleaned_data['content'],
            form.cleaned_data['document_id'],
            form.cleaned_data['document_type'],
        )
    except DocumentLoadError as exc:
        return _unavailable(exc, 'Failed to analyze writing context')
    return _ok(analysis.to_dict())


@require_POST
@api_login_required
def suggest_links(request: HttpRequest) -> JsonResponse:
    payload = _payload(request)
    if payload is None:
        return _error('Invalid JSON body', 400)
    form = LinkSelectionForm(payload)
    if not form.is_valid():
        return _form_error(form)
    try:
        suggestions = get_linking_service().suggest_links_for_selection(
            request.user.pk,
            form.cleaned_data['selected_text'],
            form.cleaned_data['document_id'],
        )
    except DocumentLoadError as exc:
        return _unavailable(exc, 'Failed to suggest links')
    return _ok([suggestion.to_dict() for suggestion in suggestions])
