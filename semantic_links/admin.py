from django.contrib import admin

from .models import Document


@admin.register(Document)
class DocumentAdmin(admin.ModelAdmin):
    list_display = ('title', 'type', 'owner', 'updated_at')
    list_filter = ('type',)
    search_fields = ('title', 'content')
    readonly_fields = ('linked_documents', 'created_at', 'updated_at')
