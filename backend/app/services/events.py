"""Subscribe/publish helper for observable component state."""

from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

from app.logging import get_logger

logger = get_logger('services.events')
_T = TypeVar("_T")

Listener = Callable[[_T], Awaitable[None]]


class StatePublisher(Generic[_T]):
    """Fan out state snapshots to async listeners.

    A failing listener is logged and skipped; it never breaks the
    publishing component or the remaining listeners.
    """

    def __init__(self, name: str):
        self.name = name
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def publish(self, snapshot: _T) -> None:
        for listener in list(self._listeners):
            try:
                await listener(snapshot)
            except Exception:
                logger.exception("[%s] listener %r failed", self.name, listener)
