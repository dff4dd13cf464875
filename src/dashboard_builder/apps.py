import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class DashboardBuilderConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'dashboard_builder'
    verbose_name = 'Dashboard Builder'

    def ready(self):
        """
        Build the component registry and load data sources on startup.
        """
        from .core import get_registry
        from .data_sources import get_data_source_provider

        try:
            registry = get_registry()
            provider = get_data_source_provider()
            logger.info(
                f"Dashboard builder ready: {len(registry.list_types())} component types, "
                f"{len(provider.list_sources())} data sources"
            )
        except Exception as e:
            # Don't crash startup if the data sources fail to load, but log it
            logger.error(f"Failed to initialise dashboard builder: {e}")
