"""URL configuration for the semantic_links app.

Routes are namespaced under ``app_name`` so the project can mount the API
at any prefix.
"""

from django.urls import path

from . import views

app_name = 'semantic_links'

urlpatterns = [
    path('graph/', views.knowledge_graph, name='graph'),
    path('graph/analytics/', views.graph_analytics, name='graph_analytics'),
    path('documents/<str:document_id>/recommendations/', views.recommendations, name='recommendations'),
    path('documents/<str:document_id>/details/', views.document_details, name='document_details'),
    path('documents/<str:document_id>/backlinks/', views.backlinks, name='backlinks'),
    path('documents/<str:document_id>/links/', views.update_links, name='update_links'),
    path('links/search/', views.search_for_linking, name='search_for_linking'),
    path('links/validate/', views.validate_link, name='validate_link'),
    path('writing/analyze/', views.analyze_writing, name='analyze_writing'),
    path('writing/suggest-links/', views.suggest_links, name='suggest_links'),
]
