import logging

from django.apps import AppConfig
from django.conf import settings


logger = logging.getLogger(__name__)


class SemanticLinksConfig(AppConfig):
    """Configuration for the semantic_links Django app.

    The linking engine is built once at start-up from ``SEMANTIC_LINKS_CONFIG``
    and shared by every request; it holds no mutable state. The NLTK data
    the tagger needs is checked here once, and downloaded when the
    ``download_tagger_data`` key is set.
    """

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'semantic_links'
    engine = None

    def ready(self) -> None:
        from .engine.concepts import ensure_tagger_data
        from .engine.config import load_config
        from .engine.index import LinkingEngine

        config = load_config(getattr(settings, 'SEMANTIC_LINKS_CONFIG', None))
        tagger_ready = ensure_tagger_data(download=bool(config.get('download_tagger_data')))
        self.engine = LinkingEngine.from_config(config)
        logger.debug('Semantic linking engine ready (tagger data available=%s)', tagger_ready)
