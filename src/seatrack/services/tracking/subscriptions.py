"""Per-vessel subscriber notifications."""

from __future__ import annotations

import itertools
import logging
import threading
from typing import Any, Callable

logger = logging.getLogger(__name__)

ALL_VESSELS = "*"

Subscriber = Callable[[str, Any], None]


class SubscriptionRegistry:
    """Maps vessel MMSIs to callbacks invoked on every update of that vessel.

    Subscribing to ``"*"`` receives updates for every vessel. A callback that
    raises is logged and does not prevent delivery to the others.
    """

    def __init__(self) -> None:
        self._subscribers: dict[int, tuple[str, Subscriber]] = {}
        self._tokens = itertools.count(1)
        self._lock = threading.Lock()

    def subscribe(self, mmsi: str, callback: Subscriber) -> int:
        token = next(self._tokens)
        with self._lock:
            self._subscribers[token] = (str(mmsi), callback)
        return token

    def unsubscribe(self, token: int) -> bool:
        with self._lock:
            return self._subscribers.pop(token, None) is not None

    def unsubscribe_vessel(self, mmsi: str) -> int:
        with self._lock:
            tokens = [token for token, (key, _) in self._subscribers.items() if key == str(mmsi)]
            for token in tokens:
                del self._subscribers[token]
        return len(tokens)

    def subscribers_for(self, mmsi: str) -> list[Subscriber]:
        with self._lock:
            return [
                callback
                for key, callback in self._subscribers.values()
                if key == str(mmsi) or key == ALL_VESSELS
            ]

    def subscribed_vessels(self) -> set[str]:
        with self._lock:
            return {key for key, _ in self._subscribers.values() if key != ALL_VESSELS}

    def publish(self, mmsi: str, update: Any) -> int:
        """Deliver ``update`` to the vessel's subscribers; returns the number notified."""

        delivered = 0
        for callback in self.subscribers_for(mmsi):
            try:
                callback(str(mmsi), update)
                delivered += 1
            except Exception:
                logger.exception(f"Subscriber callback failed for vessel {mmsi}")
        return delivered

    def __len__(self) -> int:
        with self._lock:
            return len(self._subscribers)
