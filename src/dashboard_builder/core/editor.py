"""
Property Editor

Presents the configuration fields valid for the selected component's type
and turns a single field change into a partial update for the layout store.
Config updates are merged shallowly at the top level of the config; the
nested ``metric`` object is merged field by field here so sibling keys are
never clobbered.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ..components import (
    Aggregation,
    ChangeType,
    ChartConfig,
    ChartType,
    DashboardComponent,
    MetricConfig,
    TableConfig,
    TextConfig,
)
from ..data_sources import DataSourceProvider, get_data_source_provider
from ..exceptions import InvalidFieldValue
from .layout import LayoutStore

logger = logging.getLogger(__name__)


class FieldKind(Enum):
    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    SELECT = "select"
    LIST = "list"  # comma-separated in the UI


CHART_TYPE_OPTIONS = [
    (ChartType.BAR.value, "Bar Chart"),
    (ChartType.LINE.value, "Line Chart"),
    (ChartType.PIE.value, "Pie Chart"),
    (ChartType.DOUGHNUT.value, "Doughnut Chart"),
    (ChartType.AREA.value, "Area Chart"),
]

AGGREGATION_OPTIONS = [
    (Aggregation.COUNT.value, "Count"),
    (Aggregation.SUM.value, "Sum"),
    (Aggregation.AVG.value, "Average"),
    (Aggregation.MIN.value, "Minimum"),
    (Aggregation.MAX.value, "Maximum"),
]

CHANGE_TYPE_OPTIONS = [
    (ChangeType.POSITIVE.value, "Positive"),
    (ChangeType.NEGATIVE.value, "Negative"),
    (ChangeType.NEUTRAL.value, "Neutral"),
]


@dataclass
class EditorField:
    """One form field shown for the selected component."""
    name: str
    label: str
    kind: FieldKind
    value: Any = None
    options: List[Tuple[str, str]] = field(default_factory=list)
    placeholder: str = ""

    def option_values(self) -> List[str]:
        return [value for value, _ in self.options]

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "name": self.name,
            "label": self.label,
            "kind": self.kind.value,
            "value": self.value,
            "placeholder": self.placeholder,
        }
        if self.options:
            result["options"] = [{"value": v, "label": l} for v, l in self.options]
        return result


def parse_number(value: Any):
    if isinstance(value, bool):
        raise InvalidFieldValue("Expected a number")
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidFieldValue(f"Expected a finite number, got {value!r}")
    if isinstance(value, (int, float)):
        return value
    text = str(value).strip()
    if not text:
        return 0
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        raise InvalidFieldValue(f"Expected a number, got {value!r}")
    # float() also parses "nan", "inf" and overflowing exponents
    if not math.isfinite(number):
        raise InvalidFieldValue(f"Expected a finite number, got {value!r}")
    return number


def parse_columns(value: Any) -> List[str]:
    if isinstance(value, str):
        parts = value.split(",")
    elif isinstance(value, (list, tuple)):
        parts = [str(part) for part in value]
    else:
        raise InvalidFieldValue("Columns must be a comma-separated string or a list")
    return [part.strip() for part in parts if part.strip()]


class PropertyEditor:
    """
    Type-specific configuration form for one component.

    Usage:
        editor = PropertyEditor(store.selected, data_sources)
        editor.apply(store, "chartType", "pie")
    """

    def __init__(self, component: DashboardComponent, data_sources: Optional[DataSourceProvider] = None):
        self.component = component
        self.data_sources = data_sources or get_data_source_provider()

    def fields(self) -> List[EditorField]:
        """Title plus exactly the config fields valid for the component's type."""
        fields = [EditorField(
            name="title",
            label="Component Title",
            kind=FieldKind.TEXT,
            value=self.component.title,
            placeholder="Enter component title...",
        )]

        config = self.component.config
        if isinstance(config, ChartConfig):
            fields += [
                EditorField("chartType", "Chart Type", FieldKind.SELECT,
                            config.chart_type.value, CHART_TYPE_OPTIONS),
                EditorField("dataSource", "Data Source", FieldKind.SELECT,
                            config.data_source, self._data_source_options()),
                EditorField("aggregation", "Aggregation", FieldKind.SELECT,
                            config.aggregation.value, AGGREGATION_OPTIONS),
            ]
        elif isinstance(config, TableConfig):
            fields += [
                EditorField("dataSource", "Data Source", FieldKind.SELECT,
                            config.data_source, self._data_source_options()),
                EditorField("columns", "Columns (comma-separated)", FieldKind.LIST,
                            ", ".join(config.columns), placeholder="name, email, status"),
            ]
        elif isinstance(config, MetricConfig):
            metric = config.metric
            fields += [
                EditorField("metric.label", "Metric Label", FieldKind.TEXT,
                            metric.label, placeholder="Total Organizations"),
                EditorField("metric.value", "Value", FieldKind.NUMBER,
                            metric.value, placeholder="1250"),
                EditorField("metric.change", "Change Percentage", FieldKind.NUMBER,
                            metric.change, placeholder="12.5"),
                EditorField("metric.changeType", "Change Type", FieldKind.SELECT,
                            metric.change_type.value, CHANGE_TYPE_OPTIONS),
            ]
        elif isinstance(config, TextConfig):
            fields.append(EditorField("content", "Content", FieldKind.TEXTAREA,
                                      config.content, placeholder="Enter your text content..."))
        return fields

    def get_field(self, name: str) -> Optional[EditorField]:
        for editor_field in self.fields():
            if editor_field.name == name:
                return editor_field
        return None

    def set_field(self, name: str, value: Any) -> Dict[str, Any]:
        """
        Build the partial update for one field change.

        Returns:
            ``{"title": ...}`` or ``{"config": <existing config merged with the change>}``

        Raises:
            InvalidFieldValue: unknown field, option outside the select list,
                or a non-numeric value for a number field
        """
        editor_field = self.get_field(name)
        if editor_field is None:
            raise InvalidFieldValue(
                f"'{name}' is not a field of {self.component.type} components"
            )

        value = self._clean(editor_field, value)
        if name == "title":
            return {"title": value}

        config = self.component.config.to_dict()
        if name.startswith("metric."):
            key = name.split(".", 1)[1]
            config["metric"] = {**config.get("metric", {}), key: value}
        else:
            config[name] = value
        return {"config": config}

    def apply(self, store: LayoutStore, name: str, value: Any) -> Optional[DashboardComponent]:
        """Compute the update for a field change and send it to the store."""
        updated = store.update(self.component.id, self.set_field(name, value))
        if updated is not None:
            self.component = updated
        return updated

    def _clean(self, editor_field: EditorField, value: Any) -> Any:
        if editor_field.kind == FieldKind.SELECT:
            if value not in editor_field.option_values():
                raise InvalidFieldValue(
                    f"Invalid value for {editor_field.name}. "
                    f"Must be one of: {editor_field.option_values()}"
                )
            return value
        if editor_field.kind == FieldKind.NUMBER:
            return parse_number(value)
        if editor_field.kind == FieldKind.LIST:
            return parse_columns(value)
        return "" if value is None else str(value)

    def _data_source_options(self) -> List[Tuple[str, str]]:
        options = [(source.name, source.label) for source in self.data_sources.list_sources()]
        current = getattr(self.component.config, "data_source", None)
        # Keep a saved source selectable even if the provider no longer lists it
        if current and current not in [name for name, _ in options]:
            options.append((current, current))
        return options
