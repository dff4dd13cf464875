"""
Tests for the dashboard serializer.
"""

from dashboard_builder.serializers import DashboardSerializer


def component(component_id="component-1", **overrides):
    data = {
        "id": component_id,
        "type": "text",
        "title": "Notes",
        "config": {"content": "Hello"},
        "position": {"x": 0, "y": 0, "width": 400, "height": 200},
    }
    data.update(overrides)
    return data


def test_valid_payload():
    serializer = DashboardSerializer(data={
        "title": "Board",
        "layout": {"components": [component()]},
    })
    assert serializer.is_valid(), serializer.errors
    assert serializer.validated_data["layout"] == {"components": [component()]}


def test_title_is_required():
    serializer = DashboardSerializer(data={"title": ""})
    assert not serializer.is_valid()
    assert serializer.errors["title"] == ["Dashboard title is required."]

    serializer = DashboardSerializer(data={})
    assert not serializer.is_valid()
    assert serializer.errors["title"] == ["Dashboard title is required."]


def test_layout_must_have_components():
    serializer = DashboardSerializer(data={"title": "Board", "layout": {"tiles": []}})
    assert not serializer.is_valid()
    assert "layout" in serializer.errors


def test_duplicate_component_ids_rejected():
    serializer = DashboardSerializer(data={
        "title": "Board",
        "layout": {"components": [component(), component()]},
    })
    assert not serializer.is_valid()
    assert "layout" in serializer.errors


def test_negative_size_rejected():
    bad = component(position={"x": 0, "y": 0, "width": -1, "height": 200})
    serializer = DashboardSerializer(data={"title": "Board", "layout": {"components": [bad]}})
    assert not serializer.is_valid()


def test_unknown_component_type_is_accepted():
    gauge = component(type="gauge", config={"needle": 1})
    serializer = DashboardSerializer(data={"title": "Board", "layout": {"components": [gauge]}})
    assert serializer.is_valid(), serializer.errors
