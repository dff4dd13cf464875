"""
Dashboard Serializers

DashboardSerializer is the single schema for a dashboard. The API uses it
for create and edit, and BuilderSession uses it to validate before saving.
"""

from rest_framework import serializers

from .components import parse_layout
from .models import Dashboard


class PositionSerializer(serializers.Serializer):
    x = serializers.FloatField()
    y = serializers.FloatField()
    width = serializers.FloatField(min_value=0)
    height = serializers.FloatField(min_value=0)


class ComponentSerializer(serializers.Serializer):
    """Envelope of one layout entry. The config itself is checked at render time."""

    id = serializers.CharField(max_length=100)
    type = serializers.CharField(max_length=50)
    title = serializers.CharField(max_length=255, allow_blank=True, trim_whitespace=False)
    config = serializers.DictField()
    position = PositionSerializer()


class LayoutSerializer(serializers.Serializer):
    components = ComponentSerializer(many=True)

    def validate_components(self, value):
        seen = set()
        for component in value:
            if component['id'] in seen:
                raise serializers.ValidationError(f"Duplicate component id: {component['id']}")
            seen.add(component['id'])
        return value


class DashboardSerializer(serializers.ModelSerializer):
    """Serializer for dashboards (list/detail/create/update)."""

    layout = serializers.JSONField(required=False)
    created_by = serializers.ReadOnlyField(source='created_by.username')
    component_count = serializers.SerializerMethodField()

    class Meta:
        model = Dashboard
        fields = [
            'id', 'title', 'description', 'is_public', 'layout',
            'component_count', 'created_by', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
        extra_kwargs = {
            'title': {
                'error_messages': {
                    'blank': 'Dashboard title is required.',
                    'required': 'Dashboard title is required.',
                }
            },
        }

    def get_component_count(self, obj):
        return len(parse_layout(obj.layout))

    def validate_layout(self, value):
        layout = LayoutSerializer(data=value)
        if not layout.is_valid():
            raise serializers.ValidationError(layout.errors)
        # Store the document as sent; validated_data would coerce numbers to floats
        return value
