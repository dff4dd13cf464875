"""
Base Renderer

A renderer turns one component config into a JSON-serialisable tile body.
Renderers are pure: no side effects, no network calls of their own. Rows
come from the DataSourceProvider passed in.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from ..components import ComponentConfig, ComponentType
from ..data_sources import DataSourceProvider

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "No data available"
UNKNOWN_TYPE_MESSAGE = "Unknown component type"


class BaseRenderer(ABC):
    """
    Abstract base class for component renderers.

    Subclasses must never raise on a structurally valid config; missing data
    degrades to ``empty_state``.
    """

    # Override in subclasses
    component_type: Optional[ComponentType] = None

    @abstractmethod
    def render(self, config: ComponentConfig, data_sources: DataSourceProvider) -> Dict[str, Any]:
        """
        Render a config.

        Args:
            config: The config variant this renderer is registered for
            data_sources: Provider used to look up rows by data source name

        Returns:
            Tile body with at least a ``kind`` key
        """
        pass

    @staticmethod
    def empty_state(message: str = NO_DATA_MESSAGE) -> Dict[str, Any]:
        return {"kind": "empty", "message": message}

    @staticmethod
    def placeholder(message: str = UNKNOWN_TYPE_MESSAGE) -> Dict[str, Any]:
        return {"kind": "placeholder", "message": message}

    def __repr__(self) -> str:
        tag = self.component_type.value if self.component_type else "fallback"
        return f"<{self.__class__.__name__}({tag})>"


class FallbackRenderer(BaseRenderer):
    """Renders tiles whose type or config is not recognised."""

    def render(self, config, data_sources):
        return self.placeholder()
