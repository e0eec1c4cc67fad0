"""Viewport synchronization: annotation controller, scroll correction, idle repair."""

from .annotation import Annotation, AnnotationSpan, build_annotation
from .controller import ACTIVE, INACTIVE, AnnotationController, excluded_path_predicate
from .idle import IdleRefresh
from .scroll import ScrollCorrection, correct_upward_scroll, scroll_nudge
from .state import SCROLL_LINE_UP, ViewportEvent, ViewportState

__all__ = [
    "ACTIVE",
    "INACTIVE",
    "Annotation",
    "AnnotationController",
    "AnnotationSpan",
    "IdleRefresh",
    "SCROLL_LINE_UP",
    "ScrollCorrection",
    "ViewportEvent",
    "ViewportState",
    "build_annotation",
    "correct_upward_scroll",
    "excluded_path_predicate",
    "scroll_nudge",
]
