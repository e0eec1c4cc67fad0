"""Viewport annotation controller.

One controller per viewport. While active it turns host viewport events into
an ``Annotation`` pinning the context chain of the first visible line, or
``None`` when the annotation should be hidden. The annotation is replaced
wholesale on every event; nothing raised during extraction escapes to the
host's event dispatch.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from fnmatch import fnmatch

from ..chain import ContextChain, TruncationPolicy, truncate_chain
from ..config import Settings
from ..document import Document, Position
from ..registry import Extractor, ExtractorRegistry
from .annotation import Annotation, build_annotation
from .idle import IdleRefresh
from .scroll import correct_upward_scroll
from .state import ViewportEvent, ViewportState, is_upward_line_scroll

logger = logging.getLogger(__name__)

INACTIVE = "inactive"
ACTIVE = "active"


def excluded_path_predicate(globs: tuple[str, ...] | list[str]) -> Callable[[Document], bool]:
    """Build a predicate matching documents whose path or file name fits any glob."""
    patterns = tuple(globs)

    def is_excluded(document: Document) -> bool:
        if document.path is None or not patterns:
            return False
        full = document.path.as_posix()
        name = document.path.name
        return any(fnmatch(full, pattern) or fnmatch(name, pattern) for pattern in patterns)

    return is_excluded


class AnnotationController:
    def __init__(
        self,
        settings: Settings | None = None,
        registry: ExtractorRegistry | None = None,
        *,
        is_excluded: Callable[[Document], bool] | None = None,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self.settings = settings or Settings()
        self.registry = registry or ExtractorRegistry(validity_overrides=self.settings.validity_patterns)
        self.policy = TruncationPolicy(
            self.settings.lines_kept_from_top,
            self.settings.lines_kept_from_bottom,
        )
        self.is_excluded = is_excluded or excluded_path_predicate(self.settings.excluded_path_globs)
        self.monotonic = monotonic
        self.status = INACTIVE
        self.state = ViewportState()
        self.annotation: Annotation | None = None
        self.idle = IdleRefresh(self.settings.idle_refresh_seconds)
        self._extractor: Extractor | None = None

    @property
    def active(self) -> bool:
        return self.status == ACTIVE

    def enable(self, document: Document) -> None:
        """Activate for ``document``'s viewport, resolving its extractor once.

        Does nothing when the overlay strategy is turned off in settings.
        """
        if not self.settings.use_overlay_strategy:
            logger.debug("Overlay strategy disabled; annotation stays inactive")
            return
        self.idle.cancel()
        self.annotation = None
        self.state = ViewportState()
        self._extractor = self.registry.extractor_for(document)
        self.status = ACTIVE

    def disable(self) -> None:
        self.idle.cancel()
        self.annotation = None
        self.state = ViewportState()
        self._extractor = None
        self.status = INACTIVE

    def handle(self, event: ViewportEvent, now: float | None = None) -> Annotation | None:
        """Update the annotation for ``event`` and return it (``None`` hides it)."""
        if not self.active:
            return None
        self.idle.note_event(event, self.monotonic() if now is None else now)
        return self._update(event, allow_correction=True)

    def tick(self, now: float | None = None, document: Document | None = None) -> Annotation | None:
        """Replay the last event once the viewport has been idle long enough.

        Returns the current annotation unchanged when no replay is due.
        """
        if not self.active:
            return None
        if not self.idle.due(self.monotonic() if now is None else now):
            return self.annotation
        event = self.idle.take(document)
        if event is None:
            return self.annotation
        return self._update(event, allow_correction=False)

    def context_chain(self, document: Document, position: Position) -> ContextChain:
        """Extract and truncate the chain for ``position`` with the active extractor."""
        extractor = self._extractor or self.registry.extractor_for(document)
        return truncate_chain(extractor(document, position), self.policy)

    def _update(self, event: ViewportEvent, *, allow_correction: bool) -> Annotation | None:
        try:
            return self._compute(event, allow_correction)
        except Exception:
            logger.debug("Context extraction failed; hiding annotation for this event", exc_info=True)
            return self._suppress(event.first_visible)

    def _suppress(self, first_visible: Position) -> None:
        self.annotation = None
        self.state = ViewportState(first_visible=first_visible)
        return None

    def _compute(self, event: ViewportEvent, allow_correction: bool) -> Annotation | None:
        document = event.document
        if not document.lines:
            return self._suppress(event.first_visible)
        first = document.clamp(event.first_visible)

        # Split panes share one scroll position per document.
        if first.line == 0 or event.viewport_count > 1:
            return self._suppress(first)
        if document.path is None or self.is_excluded(document):
            return self._suppress(first)

        if allow_correction and is_upward_line_scroll(event.command):
            correction = correct_upward_scroll(
                document,
                self.state,
                first,
                lambda position: len(self.context_chain(document, position)),
            )
            if correction is not None:
                first = correction.start
                if first.line == 0:
                    return self._suppress(first)

        chain = self.context_chain(document, first)
        following = document.line(first.line + 1)
        if not chain or following is None:
            return self._suppress(first)

        self.annotation = build_annotation(document.lines[first.line], following, chain, first)
        self.state = ViewportState(first_visible=first, chain=tuple(chain))
        return self.annotation
