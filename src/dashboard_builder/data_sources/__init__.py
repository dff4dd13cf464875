"""
Data Sources Package

Named row sources consumed by the dashboard renderers.
"""

import logging

from django.utils.module_loading import import_string

from ..conf import api_settings
from .base import DataSourceDefinition, DataSourceProvider
from .static import DataSourceParser, StaticDataSourceProvider

logger = logging.getLogger(__name__)

__all__ = [
    'DataSourceDefinition',
    'DataSourceProvider',
    'DataSourceParser',
    'StaticDataSourceProvider',
    'get_data_source_provider',
    'reset_data_source_provider',
]


# Global provider instance
_provider = None


def get_data_source_provider() -> DataSourceProvider:
    """Get the configured data source provider."""
    global _provider
    if _provider is None:
        provider_class = import_string(api_settings.DATA_SOURCE_PROVIDER)
        _provider = provider_class()
        logger.info(f"Initialised data source provider: {_provider!r}")
    return _provider


def reset_data_source_provider():
    """Drop the cached provider so the next call rebuilds it from settings."""
    global _provider
    _provider = None
