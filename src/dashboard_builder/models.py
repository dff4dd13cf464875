"""
Dashboard Models
"""

import uuid

from django.conf import settings
from django.db import models

from .components import empty_layout, parse_layout


class Dashboard(models.Model):
    """A user's dashboard. The whole canvas lives in the ``layout`` document."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='dashboards'
    )
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default='')
    is_public = models.BooleanField(default=False)

    # {"components": [...]}; order of the list is the render order
    layout = models.JSONField(default=empty_layout)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-updated_at']
        indexes = [
            models.Index(fields=['created_by', '-updated_at'], name='dashboard_owner_updated_idx'),
            models.Index(fields=['is_public', '-updated_at'], name='dashboard_public_updated_idx'),
        ]

    def __str__(self):
        return f"{self.title} ({self.created_by})"

    @property
    def components(self):
        return parse_layout(self.layout)
