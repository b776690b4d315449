import logging
from typing import Callable, List

from .state import DetailState, ListState, StoreSnapshot

logger = logging.getLogger("repobrowser.store")

Listener = Callable[[StoreSnapshot], None]


class StateStore:
    """Holds the current list and detail state and notifies subscribers.

    Every mutation swaps in a new immutable snapshot and calls each listener
    synchronously, in subscription order, on the event loop that owns the
    store. Listeners must not block; async consumers should hand the snapshot
    to a queue.
    """

    def __init__(self) -> None:
        self._snapshot = StoreSnapshot()
        self._listeners: List[Listener] = []

    @property
    def list_state(self) -> ListState:
        return self._snapshot.list_state

    @property
    def detail_state(self) -> DetailState:
        return self._snapshot.detail_state

    def snapshot(self) -> StoreSnapshot:
        return self._snapshot

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

        return unsubscribe

    def set_list_state(self, list_state: ListState) -> None:
        self._commit(StoreSnapshot(list_state, self._snapshot.detail_state, self._snapshot.version + 1))

    def set_detail_state(self, detail_state: DetailState) -> None:
        self._commit(StoreSnapshot(self._snapshot.list_state, detail_state, self._snapshot.version + 1))

    def _commit(self, snapshot: StoreSnapshot) -> None:
        self._snapshot = snapshot
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as exc:
                logger.error("State listener failed: %s", exc, exc_info=exc)
