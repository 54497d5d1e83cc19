"""In-process change notification channels.

Every committed mutation publishes the name of the channel it touched. Payloads
carry no diff: subscribers and polling clients are expected to refetch.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

logger = logging.getLogger(__name__)

CHANNELS: tuple[str, ...] = ("tables", "orders", "menu", "recipes", "inventory", "reservations", "profiles")

Listener = Callable[[str], None]


class ChangeFeed:
    """Per-channel version counters with synchronous listeners."""

    def __init__(self, channels: tuple[str, ...] = CHANNELS) -> None:
        self._lock = threading.Lock()
        self._versions: dict[str, int] = {channel: 0 for channel in channels}
        self._listeners: dict[str, list[Listener]] = {channel: [] for channel in channels}

    def _require_channel(self, channel: str) -> None:
        if channel not in self._versions:
            raise KeyError(f"Unknown change channel: {channel}")

    def subscribe(self, channel: str, listener: Listener) -> Callable[[], None]:
        """Register listener for channel and return a callable that removes it."""
        self._require_channel(channel)
        with self._lock:
            self._listeners[channel].append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners[channel]:
                    self._listeners[channel].remove(listener)

        return _unsubscribe

    def publish(self, channel: str) -> int:
        """Bump channel version and notify listeners; returns the new version."""
        self._require_channel(channel)
        with self._lock:
            self._versions[channel] += 1
            version = self._versions[channel]
            listeners = list(self._listeners[channel])

        logger.debug("[CHANGES] %s -> v%s", channel, version)
        for listener in listeners:
            try:
                listener(channel)
            except Exception:
                logger.exception("[CHANGES] Listener failed for channel=%s", channel)
        return version

    def version(self, channel: str) -> int:
        self._require_channel(channel)
        with self._lock:
            return self._versions[channel]

    def versions(self) -> dict[str, int]:
        with self._lock:
            return dict(self._versions)


change_feed: ChangeFeed = ChangeFeed()
