"""
Table Renderer
"""

import logging
from typing import Any, Dict, Optional

from ..components import ComponentType, TableConfig
from ..conf import api_settings
from .base import BaseRenderer

logger = logging.getLogger(__name__)


class TableRenderer(BaseRenderer):
    """Projects data source rows onto the configured columns."""

    component_type = ComponentType.TABLE

    def __init__(self, row_limit: Optional[int] = None):
        self.row_limit = row_limit

    def render(self, config: TableConfig, data_sources) -> Dict[str, Any]:
        if not config.columns:
            return self.empty_state("No columns selected")

        rows = data_sources.get_rows(config.data_source)
        if not rows:
            logger.info(f"No rows for table data source '{config.data_source}'")
            return self.empty_state()

        limit = self.row_limit if self.row_limit is not None else api_settings.TABLE_ROW_LIMIT
        shown = rows[:limit] if limit else rows

        return {
            "kind": "table",
            "dataSource": config.data_source,
            "columns": list(config.columns),
            "rows": [[row.get(column) for column in config.columns] for row in shown],
            "totalRows": len(rows),
            "truncated": len(shown) < len(rows),
        }
