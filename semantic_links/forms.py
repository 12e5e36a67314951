"""Forms validating the JSON API payloads of the semantic_links app.

The views feed decoded JSON bodies (or query strings) into these forms, so
validation errors surface as 400 responses with the form's messages.
"""

from __future__ import annotations

from typing import Optional

from django import forms

from .engine.types import DocumentType

_DOCUMENT_TYPE_CHOICES = [(member.value, member.value.title()) for member in DocumentType]


class RecommendationQueryForm(forms.Form):
    """Optional ``limit`` for the recommendation and details endpoints."""

    limit = forms.IntegerField(required=False, min_value=1, max_value=50)

    def clean_limit(self) -> int:
        return self.cleaned_data.get('limit') or 5


class LinkSearchForm(forms.Form):
    q = forms.CharField(required=False, max_length=300)


class WikiLinkValidationForm(forms.Form):
    title = forms.CharField(max_length=300, error_messages={'required': 'Title is required'})


class DocumentLinksForm(forms.Form):
    """Content whose ``[[Title]]`` links should be resolved and stored."""

    content = forms.CharField(required=False, strip=False)


class WritingContextForm(forms.Form):
    """In-progress text submitted by the editor for analysis."""

    content = forms.CharField(strip=False, error_messages={'required': 'Content is required'})
    document_id = forms.CharField(max_length=64)
    document_type = forms.ChoiceField(choices=_DOCUMENT_TYPE_CHOICES, required=False)

    def clean_document_type(self) -> Optional[DocumentType]:
        value = self.cleaned_data.get('document_type')
        return DocumentType.parse(value) if value else None


class LinkSelectionForm(forms.Form):
    selected_text = forms.CharField(error_messages={'required': 'Selected text is required'})
    document_id = forms.CharField(max_length=64)

