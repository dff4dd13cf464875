import logging

from django.db.models import Q
from rest_framework import permissions, views, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from .core import get_registry, render_canvas
from .data_sources import get_data_source_provider
from .models import Dashboard
from .serializers import DashboardSerializer

logger = logging.getLogger(__name__)


class IsOwnerOrPublicReadOnly(permissions.BasePermission):
    """Public dashboards are readable by anyone signed in; only the owner may change one."""

    def has_object_permission(self, request, view, obj):
        if request.method in permissions.SAFE_METHODS:
            return obj.is_public or obj.created_by_id == request.user.pk
        return obj.created_by_id == request.user.pk


class DashboardViewSet(viewsets.ModelViewSet):
    serializer_class = DashboardSerializer
    permission_classes = [permissions.IsAuthenticated, IsOwnerOrPublicReadOnly]

    def get_queryset(self):
        queryset = Dashboard.objects.filter(
            Q(created_by=self.request.user) | Q(is_public=True)
        ).select_related('created_by')

        search = self.request.query_params.get('search')
        if search:
            queryset = queryset.filter(Q(title__icontains=search) | Q(description__icontains=search))
        return queryset

    def perform_create(self, serializer):
        dashboard = serializer.save(created_by=self.request.user)
        logger.info(f"Dashboard {dashboard.id} created by {self.request.user}")

    def perform_update(self, serializer):
        dashboard = serializer.save()
        logger.info(f"Dashboard {dashboard.id} updated by {self.request.user}")

    def perform_destroy(self, instance):
        logger.info(f"Dashboard {instance.id} deleted by {self.request.user}")
        instance.delete()

    @action(detail=True, methods=['get'], url_path='render')
    def render_layout(self, request, pk=None):
        dashboard = self.get_object()
        canvas = render_canvas(dashboard.components, get_registry(), get_data_source_provider())
        return Response({
            'success': True,
            'id': str(dashboard.id),
            'title': dashboard.title,
            'canvas': canvas,
        })


class ComponentTypesView(views.APIView):
    """Palette of component types and the data sources they can bind to."""
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        return Response({
            'success': True,
            'component_types': [spec.to_dict() for spec in get_registry().list_types()],
            'data_sources': [source.to_dict() for source in get_data_source_provider().list_sources()],
        })
