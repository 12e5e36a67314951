"""Root URL configuration for the knowledge_editor project."""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include('semantic_links.urls')),
]
