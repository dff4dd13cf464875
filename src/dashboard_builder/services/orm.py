"""
ORM Dashboard Repository

Persists dashboards through the Django ORM on behalf of one user.
"""

import logging
from typing import Any, Dict, List, Optional

from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction
from django.db.models import Q

from ..exceptions import DashboardNotFoundError, PersistenceError
from ..models import Dashboard
from .base import DashboardRecord, DashboardRepository

logger = logging.getLogger(__name__)


def to_record(dashboard: Dashboard) -> DashboardRecord:
    return DashboardRecord(
        id=str(dashboard.id),
        title=dashboard.title,
        description=dashboard.description,
        is_public=dashboard.is_public,
        layout=dashboard.layout,
        created_by=dashboard.created_by.get_username(),
        created_at=dashboard.created_at.isoformat() if dashboard.created_at else None,
        updated_at=dashboard.updated_at.isoformat() if dashboard.updated_at else None,
    )


class OrmDashboardRepository(DashboardRepository):
    """
    Reads see the user's own dashboards plus public ones; writes only touch
    dashboards the user created.
    """

    def __init__(self, user):
        self.user = user

    def _visible(self):
        return Dashboard.objects.filter(Q(created_by=self.user) | Q(is_public=True)).select_related('created_by')

    def _owned(self, dashboard_id: str) -> Dashboard:
        try:
            return Dashboard.objects.select_related('created_by').get(pk=dashboard_id, created_by=self.user)
        except (Dashboard.DoesNotExist, ValidationError, ValueError):
            raise DashboardNotFoundError(f"Dashboard {dashboard_id} not found")

    def create_dashboard(self, title: str, description: str, layout: Dict[str, Any], is_public: bool) -> str:
        try:
            with transaction.atomic():
                dashboard = Dashboard.objects.create(
                    created_by=self.user,
                    title=title,
                    description=description or '',
                    layout=layout,
                    is_public=is_public,
                )
        except DatabaseError as e:
            logger.exception("Failed to create dashboard")
            raise PersistenceError("Failed to create dashboard") from e

        logger.info(f"Created dashboard {dashboard.id} for {self.user}")
        return str(dashboard.id)

    def update_dashboard(
        self,
        dashboard_id: str,
        title: str,
        description: str,
        layout: Dict[str, Any],
        is_public: bool
    ) -> None:
        try:
            with transaction.atomic():
                dashboard = self._owned(dashboard_id)
                dashboard.title = title
                dashboard.description = description or ''
                dashboard.layout = layout
                dashboard.is_public = is_public
                dashboard.save(update_fields=['title', 'description', 'layout', 'is_public', 'updated_at'])
        except DatabaseError as e:
            logger.exception(f"Failed to update dashboard {dashboard_id}")
            raise PersistenceError("Failed to update dashboard") from e

        logger.info(f"Updated dashboard {dashboard_id}")

    def get_dashboard(self, dashboard_id: str) -> DashboardRecord:
        try:
            return to_record(self._visible().get(pk=dashboard_id))
        except (Dashboard.DoesNotExist, ValidationError, ValueError):
            raise DashboardNotFoundError(f"Dashboard {dashboard_id} not found")
        except DatabaseError as e:
            raise PersistenceError(f"Failed to load dashboard {dashboard_id}") from e

    def list_dashboards(self, search: Optional[str] = None) -> List[DashboardRecord]:
        queryset = self._visible()
        if search:
            queryset = queryset.filter(Q(title__icontains=search) | Q(description__icontains=search))
        try:
            return [to_record(dashboard) for dashboard in queryset]
        except DatabaseError as e:
            raise PersistenceError("Failed to list dashboards") from e

    def delete_dashboard(self, dashboard_id: str) -> None:
        try:
            with transaction.atomic():
                self._owned(dashboard_id).delete()
        except DatabaseError as e:
            logger.exception(f"Failed to delete dashboard {dashboard_id}")
            raise PersistenceError("Failed to delete dashboard") from e

        logger.info(f"Deleted dashboard {dashboard_id}")
