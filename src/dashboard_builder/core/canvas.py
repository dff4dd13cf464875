"""
Canvas rendering: dispatches every component, in layout order, to the
renderer registered for its config variant.
"""

import logging
from typing import Any, Dict, List, Optional

from ..components import DashboardComponent
from ..data_sources import DataSourceProvider
from ..renderers import BaseRenderer
from .registry import ComponentRegistry

logger = logging.getLogger(__name__)

EMPTY_CANVAS_TITLE = "Start Building Your Dashboard"
EMPTY_CANVAS_MESSAGE = "Add components from the sidebar to create your custom dashboard"


def render_component(
    component: DashboardComponent,
    registry: ComponentRegistry,
    data_sources: DataSourceProvider
) -> Dict[str, Any]:
    """Render one tile body. A failing renderer degrades to a placeholder."""
    try:
        return registry.render(component, data_sources)
    except Exception as e:
        logger.exception(f"Renderer failed for component {component.id} ({component.type})")
        return BaseRenderer.placeholder(f"Could not render component: {e}")


def render_canvas(
    components: List[DashboardComponent],
    registry: ComponentRegistry,
    data_sources: DataSourceProvider,
    selected_id: Optional[str] = None
) -> Dict[str, Any]:
    """
    Render a whole canvas.

    Returns:
        ``{"empty": bool, "tiles": [...]}`` plus a title and message when empty
    """
    if not components:
        return {
            "empty": True,
            "title": EMPTY_CANVAS_TITLE,
            "message": EMPTY_CANVAS_MESSAGE,
            "tiles": [],
        }

    last = len(components) - 1
    tiles = []
    for index, component in enumerate(components):
        tiles.append({
            "id": component.id,
            "type": component.type,
            "title": component.title,
            "position": component.position.to_dict(),
            "selected": component.id == selected_id,
            "canMoveUp": index > 0,
            "canMoveDown": index < last,
            "content": render_component(component, registry, data_sources),
        })
    return {"empty": False, "tiles": tiles}
