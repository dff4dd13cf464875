"""
Services Package

Persistence backends for dashboards. The ORM backend lives in
``services.orm`` and needs the Django app registry loaded.
"""

from .base import DashboardRecord, DashboardRepository
from .api_client import DashboardApiClient

__all__ = [
    'DashboardRecord',
    'DashboardRepository',
    'DashboardApiClient',
]
