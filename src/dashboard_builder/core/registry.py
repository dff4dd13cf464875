"""
Component Registry

Maps each component type to its palette entry, its default config and the
renderer that draws it. Single entry point for the layout store and the
canvas.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from ..components import (
    ChartConfig,
    ComponentConfig,
    ComponentType,
    DashboardComponent,
    MetricConfig,
    TableConfig,
    TextConfig,
    UnknownConfig,
)
from ..data_sources import DataSourceProvider
from ..renderers import (
    BaseRenderer,
    ChartRenderer,
    FallbackRenderer,
    MetricRenderer,
    TableRenderer,
    TextRenderer,
)

logger = logging.getLogger(__name__)


@dataclass
class ComponentTypeSpec:
    """Palette entry and wiring for one component type."""
    component_type: ComponentType
    title: str
    description: str
    config_class: type
    renderer: BaseRenderer
    default_factory: Optional[Callable[[], ComponentConfig]] = None

    def default_config(self) -> ComponentConfig:
        factory = self.default_factory or self.config_class
        return factory()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.component_type.value,
            "title": self.title,
            "description": self.description,
            "defaultConfig": self.default_config().to_dict(),
        }


class ComponentRegistry:
    """
    Registry of component types.

    Usage:
        registry = build_default_registry()
        config = registry.default_config("chart")
        body = registry.render(component, data_sources)
    """

    def __init__(self):
        self._types: Dict[ComponentType, ComponentTypeSpec] = {}
        self._fallback = FallbackRenderer()

    def register(self, spec: ComponentTypeSpec):
        """
        Register (or replace) a component type.

        Args:
            spec: The type's palette entry, config class and renderer
        """
        if spec.renderer.component_type not in (None, spec.component_type):
            raise ValueError(
                f"{spec.renderer!r} cannot render {spec.component_type.value} components"
            )
        self._types[spec.component_type] = spec
        logger.info(f"Registered component type: {spec.component_type.value}")

    def get(self, type_tag: str) -> Optional[ComponentTypeSpec]:
        try:
            return self._types.get(ComponentType(type_tag))
        except ValueError:
            return None

    def is_registered(self, type_tag: str) -> bool:
        return self.get(type_tag) is not None

    def default_config(self, type_tag: str) -> ComponentConfig:
        """
        Return a structurally valid default config for a type tag.

        Unrecognised tags yield an empty UnknownConfig; nothing is raised.
        """
        spec = self.get(type_tag)
        if spec is None:
            logger.warning(f"No component type registered for '{type_tag}'")
            return UnknownConfig(type_tag=type_tag, raw={})
        return spec.default_config()

    def renderer_for(self, config: ComponentConfig) -> BaseRenderer:
        """Pick the renderer by config variant, never by the raw type tag."""
        component_type = config.component_type
        spec = self._types.get(component_type) if component_type else None
        if spec is None or not isinstance(config, spec.config_class):
            return self._fallback
        return spec.renderer

    def render(self, component: DashboardComponent, data_sources: DataSourceProvider) -> Dict[str, Any]:
        return self.renderer_for(component.config).render(component.config, data_sources)

    def list_types(self) -> List[ComponentTypeSpec]:
        return list(self._types.values())


def build_default_registry() -> ComponentRegistry:
    """Registry with the four built-in component types."""
    registry = ComponentRegistry()
    registry.register(ComponentTypeSpec(
        component_type=ComponentType.CHART,
        title="Chart",
        description="Bar, line, pie charts",
        config_class=ChartConfig,
        renderer=ChartRenderer(),
    ))
    registry.register(ComponentTypeSpec(
        component_type=ComponentType.TABLE,
        title="Data Table",
        description="Tabular data display",
        config_class=TableConfig,
        renderer=TableRenderer(),
    ))
    registry.register(ComponentTypeSpec(
        component_type=ComponentType.METRIC,
        title="Metric Card",
        description="Key performance indicator",
        config_class=MetricConfig,
        renderer=MetricRenderer(),
    ))
    registry.register(ComponentTypeSpec(
        component_type=ComponentType.TEXT,
        title="Text Block",
        description="Rich text content",
        config_class=TextConfig,
        renderer=TextRenderer(),
    ))
    return registry


# Global registry instance
_registry = None


def get_registry() -> ComponentRegistry:
    """Get the global component registry."""
    global _registry
    if _registry is None:
        _registry = build_default_registry()
    return _registry
