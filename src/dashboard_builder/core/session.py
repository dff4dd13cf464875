"""
Builder Session

State of one open dashboard editor: the dashboard settings, the layout
store and the selection. Persistence happens only on an explicit save,
as a single all-or-nothing repository call. The repository and notifier
are always passed in.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..data_sources import DataSourceProvider, get_data_source_provider
from ..exceptions import PersistenceError, SaveInProgressError
from ..services.base import DashboardRepository
from .canvas import render_canvas
from .editor import PropertyEditor
from .layout import LayoutStore
from .notifier import LoggingNotifier, Notifier
from .registry import ComponentRegistry, get_registry

logger = logging.getLogger(__name__)


@dataclass
class SaveResult:
    success: bool
    dashboard_id: Optional[str] = None
    errors: Dict[str, List[str]] = field(default_factory=dict)  # validation errors by field
    error: Optional[str] = None  # repository failure

    def to_dict(self) -> Dict[str, Any]:
        result = {"success": self.success, "dashboard_id": self.dashboard_id}
        if self.errors:
            result["errors"] = self.errors
        if self.error:
            result["error"] = self.error
        return result


def _flatten_errors(errors, prefix: str = "") -> Dict[str, List[str]]:
    flat: Dict[str, List[str]] = {}
    if isinstance(errors, dict):
        for key, value in errors.items():
            name = f"{prefix}.{key}" if prefix else str(key)
            for sub_key, messages in _flatten_errors(value, name).items():
                flat.setdefault(sub_key, []).extend(messages)
    elif isinstance(errors, list):
        for index, item in enumerate(errors):
            if isinstance(item, (dict, list)):
                for sub_key, messages in _flatten_errors(item, f"{prefix}[{index}]").items():
                    flat.setdefault(sub_key, []).extend(messages)
            else:
                flat.setdefault(prefix, []).append(str(item))
    else:
        flat.setdefault(prefix, []).append(str(errors))
    return flat


class BuilderSession:
    """
    One dashboard editor, new or existing.

    Usage:
        session = BuilderSession(repository, notifier, data_sources=provider)
        session.title = "Membership overview"
        session.store.add("metric")
        result = session.save()
    """

    def __init__(
        self,
        repository: DashboardRepository,
        notifier: Optional[Notifier] = None,
        data_sources: Optional[DataSourceProvider] = None,
        registry: Optional[ComponentRegistry] = None,
        dashboard_id: Optional[str] = None
    ):
        self.repository = repository
        self.notifier = notifier or LoggingNotifier()
        self.data_sources = data_sources or get_data_source_provider()
        self.registry = registry or get_registry()
        self.dashboard_id = dashboard_id

        self.title = ""
        self.description = ""
        self.is_public = False
        self.store = LayoutStore(registry=self.registry)
        self.is_open = False
        self._save_lock = threading.Lock()

    @property
    def is_editing(self) -> bool:
        return self.dashboard_id is not None

    @property
    def is_saving(self) -> bool:
        return self._save_lock.locked()

    def open(self):
        """
        Load the dashboard being edited, or reset for a new one.

        Raises:
            PersistenceError: if the dashboard cannot be fetched
        """
        if self.is_editing:
            record = self.repository.get_dashboard(self.dashboard_id)
            self.title = record.title
            self.description = record.description or ""
            self.is_public = record.is_public
            self.store = LayoutStore(record.components, registry=self.registry)
            logger.info(f"Opened dashboard {self.dashboard_id} ({len(self.store)} components)")
        else:
            self.title = ""
            self.description = ""
            self.is_public = False
            self.store = LayoutStore(registry=self.registry)
        self.is_open = True

    def editor(self) -> Optional[PropertyEditor]:
        """Property editor for the selected component, if any."""
        selected = self.store.selected
        if selected is None:
            return None
        return PropertyEditor(selected, self.data_sources)

    def render(self) -> Dict[str, Any]:
        return render_canvas(self.store.components, self.registry, self.data_sources, self.store.selected_id)

    def payload(self) -> Dict[str, Any]:
        return {
            "title": self.title.strip(),
            "description": self.description.strip(),
            "layout": self.store.to_layout(),
            "is_public": bool(self.is_public),
        }

    def validate(self):
        """Run the dashboard schema over the current state. Returns (data, errors)."""
        from ..serializers import DashboardSerializer

        serializer = DashboardSerializer(data=self.payload())
        if serializer.is_valid():
            data = serializer.validated_data
            return {
                "title": data["title"],
                "description": data.get("description", ""),
                "layout": data.get("layout", self.store.to_layout()),
                "is_public": data.get("is_public", False),
            }, {}
        return None, _flatten_errors(serializer.errors)

    def save(self) -> SaveResult:
        """
        Persist the dashboard.

        Validation failures never reach the repository. A repository failure
        leaves the in-memory state untouched so the user can retry.

        Raises:
            SaveInProgressError: if another save is still in flight
        """
        if not self._save_lock.acquire(blocking=False):
            raise SaveInProgressError("A save is already in progress")

        try:
            data, errors = self.validate()
            if errors:
                logger.info(f"Dashboard save blocked by validation: {errors}")
                return SaveResult(success=False, dashboard_id=self.dashboard_id, errors=errors)

            editing = self.is_editing
            try:
                if editing:
                    self.repository.update_dashboard(self.dashboard_id, **data)
                    dashboard_id = self.dashboard_id
                else:
                    dashboard_id = self.repository.create_dashboard(**data)
            except PersistenceError as e:
                action = "update" if editing else "create"
                logger.error(f"Failed to {action} dashboard: {e}")
                self.notifier.error("Error", str(e) or f"Failed to {action} dashboard")
                return SaveResult(success=False, dashboard_id=self.dashboard_id, error=str(e))

            self.dashboard_id = dashboard_id
            self.is_open = False
            self.notifier.success(
                "Success",
                "Dashboard updated successfully." if editing else "Dashboard created successfully.",
            )
            return SaveResult(success=True, dashboard_id=dashboard_id)
        finally:
            self._save_lock.release()
