"""
CitationNavigator - Wire citation clicks to the viewer panel.

click -> NavigationResolver -> HistoryTracker -> viewer listeners

Also keeps a back/forward trail of intents for the breadcrumb bar.
Moving along the trail re-emits intents without touching history.
"""
import logging
from typing import Callable, List, Optional

from citelink.core.citation.commands import CitationCommandBus
from citelink.core.citation.history import HistoryTracker
from citelink.core.citation.resolver import NavigationResolver
from citelink.core.models.navigation import (
    CitationClickPayload,
    NavigationIntent,
    NavigationSource,
)

logger = logging.getLogger(__name__)

ViewerListener = Callable[[NavigationIntent], None]


class CitationNavigator:
    """Resolve activated citations and publish intents to viewers."""

    def __init__(self, resolver: NavigationResolver, history: HistoryTracker):
        self._resolver = resolver
        self._history = history
        self._listeners: List[ViewerListener] = []
        self._trail: List[NavigationIntent] = []
        self._position = -1

    @property
    def history(self) -> HistoryTracker:
        return self._history

    @property
    def current(self) -> Optional[NavigationIntent]:
        if 0 <= self._position < len(self._trail):
            return self._trail[self._position]
        return None

    @property
    def can_go_back(self) -> bool:
        return self._position > 0

    @property
    def can_go_forward(self) -> bool:
        return self._position < len(self._trail) - 1

    def attach(self, bus: CitationCommandBus) -> Callable[[], None]:
        """Listen for clicks on a command bus. Returns a detach callable."""
        return bus.register_click_listener(self.handle_click)

    def subscribe(self, listener: ViewerListener) -> Callable[[], None]:
        """Register a viewer panel. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, intent: NavigationIntent) -> None:
        for listener in list(self._listeners):
            try:
                listener(intent)
            except Exception as e:
                logger.error(f"Viewer listener failed for {intent.exhibit_reference}: {e}")

    def navigate(
        self,
        payload: CitationClickPayload,
        source: NavigationSource = NavigationSource.EDITOR,
    ) -> NavigationIntent:
        """
        Resolve, record and publish one navigation.

        Args:
            payload: Citation being activated
            source: Where it was activated from

        Returns:
            The resolved intent
        """
        intent = self._resolver.resolve(payload, source)
        self._history.record(payload.citation_reference, payload.exhibit_ref)

        # A new jump after going back drops the forward part of the trail
        del self._trail[self._position + 1:]
        self._trail.append(intent)
        self._position = len(self._trail) - 1

        logger.info(f"Navigating to {intent.exhibit_reference} (file={intent.file_id})")
        self._emit(intent)
        return intent

    def handle_click(self, payload: CitationClickPayload) -> None:
        """Click listener for the command bus."""
        self.navigate(payload, NavigationSource.EDITOR)

    def navigate_to_reference(
        self,
        citation_reference: str,
        source: NavigationSource = NavigationSource.BREADCRUMB,
    ) -> NavigationIntent:
        """Re-navigate from a breadcrumb or history list item."""
        return self.navigate(CitationClickPayload.from_reference(citation_reference), source)

    def back(self) -> Optional[NavigationIntent]:
        if not self.can_go_back:
            return None
        self._position -= 1
        self._emit(self._trail[self._position])
        return self._trail[self._position]

    def forward(self) -> Optional[NavigationIntent]:
        if not self.can_go_forward:
            return None
        self._position += 1
        self._emit(self._trail[self._position])
        return self._trail[self._position]
