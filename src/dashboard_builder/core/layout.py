"""
Layout Store

The ordered list of components on one dashboard canvas, plus the current
selection. List order is the only ordering signal; ``position.y`` is derived
from it and restacked after every structural change.
"""

import time
import logging
from dataclasses import replace
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from ..components import (
    ComponentConfig,
    DashboardComponent,
    Position,
    UnknownConfig,
    layout_to_dict,
    parse_layout,
)
from ..conf import api_settings
from ..exceptions import ComponentTypeError, InvalidFieldValue
from .registry import ComponentRegistry, get_registry

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = {"title", "config", "position"}


class Direction(Enum):
    UP = "up"
    DOWN = "down"


class LayoutStore:
    """
    In-memory component list edited by one builder session.

    Usage:
        store = LayoutStore()
        chart = store.add("chart")
        store.update(chart.id, {"title": "Members by status"})
        store.move(chart.id, "down")
        layout = store.to_layout()
    """

    def __init__(
        self,
        components: Optional[List[DashboardComponent]] = None,
        registry: Optional[ComponentRegistry] = None,
        clock: Optional[Callable[[], float]] = None
    ):
        self._components: List[DashboardComponent] = list(components or [])
        self._registry = registry or get_registry()
        self._clock = clock or time.time
        self._selected_id: Optional[str] = None
        self._last_id_ms = 0
        # Loaded documents may carry stale y values
        self._restack()

    @classmethod
    def from_layout(cls, layout: Any, **kwargs) -> "LayoutStore":
        return cls(parse_layout(layout), **kwargs)

    def to_layout(self) -> Dict[str, Any]:
        return layout_to_dict(self._components)

    # -- reads --

    @property
    def components(self) -> List[DashboardComponent]:
        return list(self._components)

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    @property
    def selected(self) -> Optional[DashboardComponent]:
        if self._selected_id is None:
            return None
        return self.get(self._selected_id)

    def get(self, component_id: str) -> Optional[DashboardComponent]:
        index = self.index_of(component_id)
        return self._components[index] if index is not None else None

    def index_of(self, component_id: str) -> Optional[int]:
        for index, component in enumerate(self._components):
            if component.id == component_id:
                return index
        return None

    def __len__(self) -> int:
        return len(self._components)

    def __iter__(self):
        return iter(list(self._components))

    # -- selection --

    def select(self, component_id: str) -> bool:
        if self.index_of(component_id) is None:
            logger.debug(f"Cannot select missing component {component_id}")
            return False
        self._selected_id = component_id
        return True

    def clear_selection(self):
        self._selected_id = None

    # -- mutations --

    def add(self, type_tag: str) -> DashboardComponent:
        """Append a new component of ``type_tag`` with its default config and select it."""
        component = DashboardComponent(
            id=self._new_id(),
            title=f"New {type_tag[:1].upper()}{type_tag[1:]}",
            config=self._registry.default_config(type_tag),
            position=Position(
                x=0,
                y=self._stack_height(),
                width=api_settings.DEFAULT_COMPONENT_WIDTH,
                height=api_settings.DEFAULT_COMPONENT_HEIGHT,
            ),
        )
        self._components.append(component)
        self._selected_id = component.id
        logger.info(f"Added {type_tag} component {component.id}")
        return component

    def update(self, component_id: str, fields: Mapping[str, Any]) -> Optional[DashboardComponent]:
        """
        Shallow-merge ``fields`` into a component.

        Accepts ``title``, ``config`` and ``position``. A config mapping is
        coerced into the component's own config variant; a position mapping is
        merged over the current position. Returns the updated component, or
        None when the id is absent.

        Raises:
            ComponentTypeError: if the update would change the id or type
            InvalidFieldValue: if the config does not fit the component's type
        """
        index = self.index_of(component_id)
        if index is None:
            logger.debug(f"Ignoring update for missing component {component_id}")
            return None

        current = self._components[index]
        if "id" in fields and fields["id"] != current.id:
            raise ComponentTypeError("A component's id cannot change")
        if "type" in fields and fields["type"] != current.type:
            raise ComponentTypeError(
                f"Cannot change component {current.id} from {current.type} to {fields['type']}"
            )

        unknown = set(fields) - UPDATABLE_FIELDS - {"id", "type"}
        if unknown:
            raise ValueError(f"Unknown component field(s): {', '.join(sorted(unknown))}")

        changes = {}
        if "title" in fields:
            title = fields["title"]
            changes["title"] = "" if title is None else str(title)
        if "config" in fields:
            changes["config"] = self._coerce_config(current, fields["config"])
        if "position" in fields:
            changes["position"] = self._coerce_position(current, fields["position"])

        self._components[index] = replace(current, **changes)
        if "position" in changes:
            self._restack()
        return self._components[index]

    def delete(self, component_id: str) -> bool:
        index = self.index_of(component_id)
        if index is None:
            return False

        del self._components[index]
        if self._selected_id == component_id:
            self._selected_id = None
        self._restack()
        logger.info(f"Deleted component {component_id}")
        return True

    def move(self, component_id: str, direction: Union[Direction, str]) -> bool:
        """
        Swap a component with its neighbour. No-op at either boundary.

        Returns True if the order changed.
        """
        direction = Direction(direction)
        index = self.index_of(component_id)
        if index is None:
            return False

        target = index - 1 if direction == Direction.UP else index + 1
        if target < 0 or target >= len(self._components):
            return False

        items = self._components
        items[index], items[target] = items[target], items[index]
        self._restack()
        return True

    # -- internals --

    def _new_id(self) -> str:
        taken = {component.id for component in self._components}
        millis = max(int(self._clock() * 1000), self._last_id_ms + 1)
        while f"component-{millis}" in taken:
            millis += 1
        self._last_id_ms = millis
        return f"component-{millis}"

    def _stack_height(self) -> float:
        return sum(component.position.height for component in self._components)

    def _restack(self):
        """Recompute y so tiles stack in list order."""
        y = 0
        for index, component in enumerate(self._components):
            if component.position.y != y:
                self._components[index] = replace(component, position=replace(component.position, y=y))
            y += component.position.height

    def _coerce_config(self, current: DashboardComponent, config: Any) -> ComponentConfig:
        if isinstance(config, Mapping):
            if isinstance(current.config, UnknownConfig):
                return UnknownConfig(type_tag=current.config.type_tag, raw=dict(config))
            try:
                return type(current.config).from_dict(dict(config))
            except (ValueError, TypeError) as e:
                raise InvalidFieldValue(f"Invalid {current.type} config: {e}") from e

        if type(config) is not type(current.config):
            raise ComponentTypeError(
                f"Cannot give {current.type} component {current.id} a {type(config).__name__}"
            )
        if isinstance(config, UnknownConfig) and config.type_tag != current.type:
            raise ComponentTypeError(
                f"Cannot change component {current.id} from {current.type} to {config.type_tag}"
            )
        return config

    def _coerce_position(self, current: DashboardComponent, position: Any) -> Position:
        if isinstance(position, Position):
            return position
        if isinstance(position, Mapping):
            return Position.from_dict({**current.position.to_dict(), **position})
        raise InvalidFieldValue("position must be a Position or a mapping")
