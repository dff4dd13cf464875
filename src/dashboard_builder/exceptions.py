"""
Dashboard Builder exceptions.
"""


class DashboardBuilderError(Exception):
    """Base class for all dashboard builder errors."""


class ComponentTypeError(DashboardBuilderError, ValueError):
    """Raised when an update would change a component's type or id."""


class InvalidFieldValue(DashboardBuilderError, ValueError):
    """Raised when the property editor receives a value its field cannot hold."""


class PersistenceError(DashboardBuilderError):
    """A dashboard read or write against the backing store failed."""


class DashboardNotFoundError(PersistenceError):
    """The requested dashboard does not exist or is not visible to the caller."""


class SaveInProgressError(DashboardBuilderError):
    """A save was requested while another save is still in flight."""
