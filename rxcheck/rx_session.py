"""
Live evaluation session.

Holds the current pattern, flags and text. Every change re-runs `evaluate`
synchronously with the latest values and hands the result to listeners.
"""

import logging
from typing import Callable, List, Optional

from rxcheck.rx_ast import Empty, RenderResult
from rxcheck.rx_renderer import evaluate

logger = logging.getLogger(__name__)

DEFAULT_FLAGS = "g"

Listener = Callable[[RenderResult], None]


class TesterSession:
    """Interactive pattern tester state: one input triple, one latest result."""

    def __init__(self, pattern: str = "", flags: str = DEFAULT_FLAGS, text: str = ""):
        self.pattern = pattern
        # Kept exactly as typed; filtering happens at compile time only
        self.flags = flags
        self.text = text
        self._listeners: List[Listener] = []
        self.result: RenderResult = Empty()
        self.refresh()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def set_pattern(self, pattern: str) -> RenderResult:
        return self.update(pattern=pattern)

    def set_flags(self, flags: str) -> RenderResult:
        return self.update(flags=flags)

    def set_text(self, text: str) -> RenderResult:
        return self.update(text=text)

    def update(
        self,
        pattern: Optional[str] = None,
        flags: Optional[str] = None,
        text: Optional[str] = None,
    ) -> RenderResult:
        if pattern is not None:
            self.pattern = pattern
        if flags is not None:
            self.flags = flags
        if text is not None:
            self.text = text
        return self.refresh()

    def refresh(self) -> RenderResult:
        self.result = evaluate(self.pattern, self.flags, self.text)
        logger.debug(
            "Evaluated /%s/%s -> %s",
            self.pattern,
            self.flags,
            type(self.result).__name__,
        )
        for listener in list(self._listeners):
            listener(self.result)
        return self.result
