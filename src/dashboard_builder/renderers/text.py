from typing import Any, Dict

from ..components import DEFAULT_TEXT_CONTENT, ComponentType, TextConfig
from .base import BaseRenderer


class TextRenderer(BaseRenderer):
    component_type = ComponentType.TEXT

    def render(self, config: TextConfig, data_sources) -> Dict[str, Any]:
        return {"kind": "text", "content": config.content or DEFAULT_TEXT_CONTENT}
