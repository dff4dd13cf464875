"""
Metric Renderer
"""

from typing import Any, Dict, Optional

from ..components import ComponentType, MetricConfig
from .base import BaseRenderer


def format_value(value) -> str:
    """Format a metric value for display (thousands separators for numbers)."""
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        if value.is_integer():
            return f"{int(value):,}"
        return f"{value:,.2f}"
    return str(value) if value not in (None, "") else "0"


def format_change(change) -> Optional[str]:
    """Signed percentage, or None when there is no change to show."""
    if not change:
        return None
    return f"{change:+g}%"


class MetricRenderer(BaseRenderer):
    component_type = ComponentType.METRIC

    def render(self, config: MetricConfig, data_sources) -> Dict[str, Any]:
        metric = config.metric
        return {
            "kind": "metric",
            "value": format_value(metric.value),
            "label": metric.label or "Metric Label",
            "change": format_change(metric.change),
            "tone": metric.change_type.value,
        }
