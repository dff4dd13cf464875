"""
Chart Renderer

Aggregates the rows of a data source by its category field and emits a
Chart.js configuration (type, data, options) for the frontend to draw.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from ..components import Aggregation, ChartConfig, ChartType, ComponentType
from .base import BaseRenderer

logger = logging.getLogger(__name__)

PALETTE = [
    (99, 102, 241),   # indigo
    (16, 185, 129),   # emerald
    (245, 158, 11),   # amber
    (239, 68, 68),    # red
    (59, 130, 246),   # blue
    (168, 85, 247),   # purple
    (20, 184, 166),   # teal
    (236, 72, 153),   # pink
]

AGGREGATION_LABELS = {
    Aggregation.COUNT: "Count",
    Aggregation.SUM: "Total",
    Aggregation.AVG: "Average",
    Aggregation.MIN: "Minimum",
    Aggregation.MAX: "Maximum",
}

UNCATEGORISED = "Unknown"


def _rgba(color: Tuple[int, int, int], alpha: float) -> str:
    return f"rgba({color[0]}, {color[1]}, {color[2]}, {alpha})"


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def aggregate_rows(
    rows: List[Dict[str, Any]],
    category_field: str,
    value_field: Optional[str],
    aggregation: Aggregation
) -> Tuple[List[str], List[float]]:
    """
    Group rows by ``category_field`` and aggregate each group.

    Groups keep the order in which their category first appears. Without a
    value field every aggregation degrades to a count; groups with no
    numeric values aggregate to 0.
    """
    groups: Dict[str, List[Dict[str, Any]]] = {}
    for row in rows:
        key = row.get(category_field)
        label = UNCATEGORISED if key is None or key == "" else str(key)
        groups.setdefault(label, []).append(row)

    labels = list(groups.keys())
    values = []
    for label in labels:
        group = groups[label]
        if aggregation == Aggregation.COUNT or not value_field:
            values.append(len(group))
            continue

        numbers = [n for n in (_as_number(row.get(value_field)) for row in group) if n is not None]
        if not numbers:
            values.append(0)
        elif aggregation == Aggregation.SUM:
            values.append(sum(numbers))
        elif aggregation == Aggregation.AVG:
            values.append(round(sum(numbers) / len(numbers), 2))
        elif aggregation == Aggregation.MIN:
            values.append(min(numbers))
        else:
            values.append(max(numbers))

    return labels, values


class ChartRenderer(BaseRenderer):
    component_type = ComponentType.CHART

    def render(self, config: ChartConfig, data_sources) -> Dict[str, Any]:
        rows = data_sources.get_rows(config.data_source)
        if not rows:
            logger.info(f"[CHART] No rows for data source '{config.data_source}'")
            return self.empty_state(f"No data for '{config.data_source}'")

        source = data_sources.get_source(config.data_source)
        category_field = source.category_field if source and source.category_field else next(iter(rows[0]), None)
        value_field = source.value_field if source else None
        source_label = source.label if source else config.data_source

        if category_field is None:
            return self.empty_state(f"No data for '{config.data_source}'")

        aggregation = config.aggregation
        if aggregation != Aggregation.COUNT and not value_field:
            logger.warning(
                f"[CHART] '{config.data_source}' has no numeric field; "
                f"using count instead of {aggregation.value}"
            )
            aggregation = Aggregation.COUNT

        labels, values = aggregate_rows(rows, category_field, value_field, aggregation)
        measure = source_label if aggregation == Aggregation.COUNT else value_field.replace('_', ' ')
        dataset_label = f"{AGGREGATION_LABELS[aggregation]} of {measure}"
        title = f"{source_label} by {category_field.replace('_', ' ')}"

        return {
            "kind": "chart",
            "dataSource": config.data_source,
            "aggregation": aggregation.value,
            "chart": self._chart_js_config(config.chart_type, labels, values, dataset_label, title),
        }

    def _chart_js_config(
        self,
        chart_type: ChartType,
        labels: List[str],
        values: List[float],
        dataset_label: str,
        title: str
    ) -> Dict[str, Any]:
        circular = chart_type in (ChartType.PIE, ChartType.DOUGHNUT)

        if circular:
            colors = [PALETTE[i % len(PALETTE)] for i in range(len(labels))]
            dataset = {
                'label': dataset_label,
                'data': values,
                'backgroundColor': [_rgba(c, 0.8) for c in colors],
                'borderColor': [_rgba(c, 1) for c in colors],
                'borderWidth': 1,
            }
        else:
            dataset = {
                'label': dataset_label,
                'data': values,
                'backgroundColor': _rgba(PALETTE[0], 0.3 if chart_type == ChartType.AREA else 0.8),
                'borderColor': _rgba(PALETTE[0], 1),
                'borderWidth': 1,
            }
            if chart_type == ChartType.BAR:
                dataset['borderRadius'] = 6
            else:
                dataset['fill'] = chart_type == ChartType.AREA
                dataset['tension'] = 0.3

        options = {
            'responsive': True,
            'maintainAspectRatio': False,
            'plugins': {
                'title': {'display': True, 'text': title},
                'legend': {'display': circular},
            },
        }
        if not circular:
            options['scales'] = {'y': {'beginAtZero': True}}

        return {
            # Chart.js has no area type; an area chart is a filled line chart
            'type': 'line' if chart_type == ChartType.AREA else chart_type.value,
            'data': {'labels': labels, 'datasets': [dataset]},
            'options': options,
        }
