from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import ComponentTypesView, DashboardViewSet

router = DefaultRouter()
router.register(r'dashboards', DashboardViewSet, basename='dashboard')

urlpatterns = [
    path('', include(router.urls)),
    path('component-types/', ComponentTypesView.as_view(), name='component-types'),
]
