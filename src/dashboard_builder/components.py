"""
Dashboard Component Model

A component is one tile on a dashboard canvas. Its config is a tagged union:
every component type has its own config class, and a component's type is
read off its config, so it cannot change after the component is created.

Layout documents are persisted as ``{"components": [...]}`` with camelCase
config keys. Parsing is tolerant: an unknown type or a config that does not
fit its type becomes an ``UnknownConfig`` that keeps the raw document and
renders as a placeholder. Keys a known variant does not model are kept in
its ``extra`` mapping and written back unchanged.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_DATA_SOURCE = "organizations"
DEFAULT_TABLE_COLUMNS = ["name", "membership_status", "city", "state"]
DEFAULT_TEXT_CONTENT = "Add your text content here..."


class ComponentType(Enum):
    """Supported dashboard tile types."""
    CHART = "chart"
    TABLE = "table"
    METRIC = "metric"
    TEXT = "text"


class ChartType(Enum):
    BAR = "bar"
    LINE = "line"
    PIE = "pie"
    DOUGHNUT = "doughnut"
    AREA = "area"


class Aggregation(Enum):
    COUNT = "count"
    SUM = "sum"
    AVG = "avg"
    MIN = "min"
    MAX = "max"


class ChangeType(Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _extra(data: Dict[str, Any], known) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if key not in known}


def _require_str(data: Dict[str, Any], key: str, default: str) -> str:
    value = data.get(key, default)
    if not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string, got {type(value).__name__}")
    return value


@dataclass
class Position:
    """Pixel geometry of a tile on the canvas."""
    x: float = 0
    y: float = 0
    width: float = 400
    height: float = 200

    def to_dict(self) -> Dict[str, Any]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Position":
        defaults = cls()
        if not isinstance(data, dict):
            return defaults

        values = {}
        for key in ("x", "y", "width", "height"):
            value = data.get(key, getattr(defaults, key))
            if not _is_number(value):
                logger.warning(f"Ignoring non-numeric position.{key}: {value!r}")
                value = getattr(defaults, key)
            values[key] = value
        return cls(**values)


@dataclass
class ChartConfig:
    component_type: ClassVar[ComponentType] = ComponentType.CHART

    chart_type: ChartType = ChartType.BAR
    data_source: str = DEFAULT_DATA_SOURCE
    aggregation: Aggregation = Aggregation.COUNT
    extra: Dict[str, Any] = field(default_factory=dict)  # keys this variant does not model

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.extra,
            "chartType": self.chart_type.value,
            "dataSource": self.data_source,
            "aggregation": self.aggregation.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChartConfig":
        return cls(
            chart_type=ChartType(data.get("chartType", ChartType.BAR.value)),
            data_source=_require_str(data, "dataSource", DEFAULT_DATA_SOURCE),
            aggregation=Aggregation(data.get("aggregation", Aggregation.COUNT.value)),
            extra=_extra(data, ("chartType", "dataSource", "aggregation")),
        )


@dataclass
class TableConfig:
    component_type: ClassVar[ComponentType] = ComponentType.TABLE

    data_source: str = DEFAULT_DATA_SOURCE
    columns: List[str] = field(default_factory=lambda: list(DEFAULT_TABLE_COLUMNS))
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {**self.extra, "dataSource": self.data_source, "columns": list(self.columns)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TableConfig":
        columns = data.get("columns", [])
        if not isinstance(columns, list) or not all(isinstance(c, str) for c in columns):
            raise TypeError("'columns' must be a list of strings")
        return cls(
            data_source=_require_str(data, "dataSource", DEFAULT_DATA_SOURCE),
            columns=list(columns),
            extra=_extra(data, ("dataSource", "columns")),
        )


@dataclass
class Metric:
    label: str = "Total Count"
    value: Union[int, float, str] = 0
    change: float = 0
    change_type: ChangeType = ChangeType.NEUTRAL
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.extra,
            "label": self.label,
            "value": self.value,
            "change": self.change,
            "changeType": self.change_type.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Metric":
        value = data.get("value", 0)
        if not (_is_number(value) or isinstance(value, str)):
            raise TypeError("'metric.value' must be a number or a string")
        change = data.get("change", 0)
        if change is None:
            change = 0
        if not _is_number(change):
            raise TypeError("'metric.change' must be a number")
        return cls(
            label=_require_str(data, "label", ""),
            value=value,
            change=change,
            change_type=ChangeType(data.get("changeType", ChangeType.NEUTRAL.value)),
            extra=_extra(data, ("label", "value", "change", "changeType")),
        )


@dataclass
class MetricConfig:
    component_type: ClassVar[ComponentType] = ComponentType.METRIC

    metric: Metric = field(default_factory=Metric)
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {**self.extra, "metric": self.metric.to_dict()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MetricConfig":
        metric = data.get("metric", {})
        if not isinstance(metric, dict):
            raise TypeError("'metric' must be an object")
        return cls(metric=Metric.from_dict(metric), extra=_extra(data, ("metric",)))


@dataclass
class TextConfig:
    component_type: ClassVar[ComponentType] = ComponentType.TEXT

    content: str = DEFAULT_TEXT_CONTENT
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {**self.extra, "content": self.content}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TextConfig":
        return cls(content=_require_str(data, "content", ""), extra=_extra(data, ("content",)))


@dataclass
class UnknownConfig:
    """
    Config of a tile whose type is not recognised, or whose config does not
    fit its type. Keeps the raw tag and document so layouts round-trip.
    """
    component_type: ClassVar[Optional[ComponentType]] = None

    type_tag: str
    raw: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.raw)


ComponentConfig = Union[ChartConfig, TableConfig, MetricConfig, TextConfig, UnknownConfig]

CONFIG_CLASSES = {
    ComponentType.CHART: ChartConfig,
    ComponentType.TABLE: TableConfig,
    ComponentType.METRIC: MetricConfig,
    ComponentType.TEXT: TextConfig,
}


@dataclass
class DashboardComponent:
    """One tile on a dashboard canvas."""
    id: str
    title: str
    config: ComponentConfig
    position: Position = field(default_factory=Position)

    @property
    def type(self) -> str:
        if isinstance(self.config, UnknownConfig):
            return self.config.type_tag
        return self.config.component_type.value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "title": self.title,
            "config": self.config.to_dict(),
            "position": self.position.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DashboardComponent":
        return cls(
            id=str(data.get("id", "")),
            title=str(data.get("title", "")),
            config=parse_config(str(data.get("type", "")), data.get("config")),
            position=Position.from_dict(data.get("position")),
        )


def parse_config(type_tag: str, raw: Any) -> ComponentConfig:
    """
    Build the config variant for a type tag.

    Never raises: unknown tags and malformed configs degrade to UnknownConfig.
    """
    raw_dict = dict(raw) if isinstance(raw, dict) else {}

    try:
        component_type = ComponentType(type_tag)
    except ValueError:
        logger.warning(f"Unknown component type '{type_tag}', rendering placeholder")
        return UnknownConfig(type_tag=type_tag, raw=raw_dict)

    if not isinstance(raw, dict):
        logger.warning(f"Config for '{type_tag}' component is not an object")
        return UnknownConfig(type_tag=type_tag, raw=raw_dict)

    try:
        return CONFIG_CLASSES[component_type].from_dict(raw)
    except (ValueError, TypeError) as e:
        logger.warning(f"Malformed {type_tag} config, rendering placeholder: {e}")
        return UnknownConfig(type_tag=type_tag, raw=raw_dict)


def parse_layout(layout: Any) -> List[DashboardComponent]:
    """Parse a persisted ``{"components": [...]}`` document into components."""
    if not isinstance(layout, dict):
        if layout is not None:
            logger.warning(f"Ignoring layout of type {type(layout).__name__}")
        return []

    items = layout.get("components") or []
    if not isinstance(items, list):
        logger.warning("Layout 'components' is not a list; treating as empty")
        return []

    components = []
    for item in items:
        if not isinstance(item, dict):
            logger.warning(f"Skipping non-object layout entry: {item!r}")
            continue
        components.append(DashboardComponent.from_dict(item))
    return components


def layout_to_dict(components: List[DashboardComponent]) -> Dict[str, Any]:
    """Serialise components to the persisted layout shape."""
    return {"components": [component.to_dict() for component in components]}


def empty_layout() -> Dict[str, Any]:
    return {"components": []}
