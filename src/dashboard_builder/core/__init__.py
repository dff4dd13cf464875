"""
Core Package

Component registry, layout store, property editor, canvas rendering and the
builder session.
"""

from .registry import ComponentRegistry, ComponentTypeSpec, build_default_registry, get_registry
from .layout import Direction, LayoutStore
from .editor import EditorField, FieldKind, PropertyEditor
from .canvas import render_canvas, render_component
from .notifier import LoggingNotifier, Notifier
from .session import BuilderSession, SaveResult

__all__ = [
    # Registry
    'ComponentRegistry',
    'ComponentTypeSpec',
    'build_default_registry',
    'get_registry',

    # Layout
    'Direction',
    'LayoutStore',

    # Editor
    'EditorField',
    'FieldKind',
    'PropertyEditor',

    # Canvas
    'render_canvas',
    'render_component',

    # Session
    'LoggingNotifier',
    'Notifier',
    'BuilderSession',
    'SaveResult',
]
