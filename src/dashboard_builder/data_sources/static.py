"""
Static Data Sources

Placeholder datasets loaded from YAML. Stands in for live queries so
dashboards render something meaningful without a data backend.
"""

import os
import yaml
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..conf import api_settings
from .base import DataSourceDefinition, DataSourceProvider

logger = logging.getLogger(__name__)

BUNDLED_SOURCES_FILE = Path(__file__).resolve().parent / "data" / "placeholder_sources.yaml"


class DataSourceParser:
    """
    Parser for YAML data source files.

    A file holds either a single source mapping or a ``sources`` list.
    """

    @staticmethod
    def parse_dict(data: Dict[str, Any]) -> DataSourceDefinition:
        name = data.get('name')
        if not name:
            raise ValueError("Data source is missing 'name'")

        rows = data.get('rows', [])
        if not isinstance(rows, list) or not all(isinstance(r, dict) for r in rows):
            raise ValueError(f"Rows of data source '{name}' must be a list of mappings")

        return DataSourceDefinition(
            name=str(name),
            label=data.get('label', str(name).replace('_', ' ').title()),
            category_field=data.get('category_field'),
            value_field=data.get('value_field'),
            description=data.get('description', ''),
            rows=rows,
        )

    @staticmethod
    def parse_file(filepath) -> Dict[str, DataSourceDefinition]:
        """
        Load all data sources from a YAML file.

        Args:
            filepath: Path to the YAML file

        Returns:
            Dictionary mapping source name to DataSourceDefinition
        """
        sources = {}

        if not os.path.exists(filepath):
            logger.warning(f"Data source file not found: {filepath}")
            return sources

        with open(filepath, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)

        if isinstance(data, dict) and 'sources' in data:
            entries = data['sources'] or []
        elif isinstance(data, dict):
            entries = [data]
        else:
            logger.warning(f"Skipping {filepath}: Invalid YAML structure (must be a mapping)")
            return sources

        for entry in entries:
            try:
                source = DataSourceParser.parse_dict(entry)
            except (ValueError, TypeError, AttributeError) as e:
                logger.error(f"Failed to parse data source in {filepath}: {e}")
                continue
            sources[source.name] = source
            logger.info(f"Loaded data source: {source.name} ({len(source.rows)} rows)")

        return sources


class StaticDataSourceProvider(DataSourceProvider):
    """Serves rows from an in-memory lookup table."""

    def __init__(self, sources: Optional[Dict[str, DataSourceDefinition]] = None):
        if sources is None:
            path = api_settings.DATA_SOURCES_FILE or BUNDLED_SOURCES_FILE
            sources = DataSourceParser.parse_file(path)
        self._sources = dict(sources)

    @classmethod
    def from_yaml(cls, filepath) -> "StaticDataSourceProvider":
        return cls(DataSourceParser.parse_file(filepath))

    def get_rows(self, name: str) -> List[Dict[str, Any]]:
        source = self._sources.get(name)
        if source is None:
            logger.debug(f"No rows for unknown data source '{name}'")
            return []
        # Copies so callers cannot mutate the lookup table
        return [dict(row) for row in source.rows]

    def get_source(self, name: str) -> Optional[DataSourceDefinition]:
        return self._sources.get(name)

    def list_sources(self) -> List[DataSourceDefinition]:
        return list(self._sources.values())
