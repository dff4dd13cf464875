from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..components import DashboardComponent, empty_layout, parse_layout


@dataclass
class DashboardRecord:
    """A persisted dashboard as seen through a repository."""
    id: str
    title: str
    description: str = ""
    is_public: bool = False
    layout: Dict[str, Any] = field(default_factory=empty_layout)
    created_by: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def components(self) -> List[DashboardComponent]:
        return parse_layout(self.layout)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DashboardRecord":
        return cls(
            id=str(data['id']),
            title=data.get('title', ''),
            description=data.get('description') or '',
            is_public=bool(data.get('is_public', False)),
            layout=data.get('layout') or empty_layout(),
            created_by=data.get('created_by'),
            created_at=data.get('created_at'),
            updated_at=data.get('updated_at'),
        )


class DashboardRepository(ABC):
    """
    Abstract base class for dashboard persistence.

    Every write is all-or-nothing. Implementations raise PersistenceError
    (or DashboardNotFoundError) on failure and nothing else.
    """

    @abstractmethod
    def create_dashboard(
        self,
        title: str,
        description: str,
        layout: Dict[str, Any],
        is_public: bool
    ) -> str:
        """Create a dashboard and return its id."""
        pass

    @abstractmethod
    def update_dashboard(
        self,
        dashboard_id: str,
        title: str,
        description: str,
        layout: Dict[str, Any],
        is_public: bool
    ) -> None:
        pass

    @abstractmethod
    def get_dashboard(self, dashboard_id: str) -> DashboardRecord:
        pass

    @abstractmethod
    def list_dashboards(self, search: Optional[str] = None) -> List[DashboardRecord]:
        """Dashboards visible to the caller, most recently updated first."""
        pass

    @abstractmethod
    def delete_dashboard(self, dashboard_id: str) -> None:
        pass
