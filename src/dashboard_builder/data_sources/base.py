"""
Data Source Base

Renderers read rows through a DataSourceProvider. Any provider that maps a
data source name to zero or more rows can be plugged in.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class DataSourceDefinition:
    """A named logical table the renderers can read from."""
    name: str
    label: str
    category_field: Optional[str] = None  # Field charts group by
    value_field: Optional[str] = None  # Numeric field for sum/avg/min/max
    description: str = ""
    rows: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "label": self.label,
            "description": self.description,
            "categoryField": self.category_field,
            "valueField": self.value_field,
            "rowCount": len(self.rows),
        }


class DataSourceProvider(ABC):
    """
    Abstract base class for data source providers.
    """

    @abstractmethod
    def get_rows(self, name: str) -> List[Dict[str, Any]]:
        """
        Return the rows of a data source.

        Unknown names return an empty list rather than raising.
        """
        pass

    def get_source(self, name: str) -> Optional[DataSourceDefinition]:
        """Return metadata about a data source, if the provider has any."""
        return None

    def list_sources(self) -> List[DataSourceDefinition]:
        """Return all data sources this provider knows about."""
        return []

    def source_names(self) -> List[str]:
        return [source.name for source in self.list_sources()]

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}({len(self.list_sources())} sources)>"
