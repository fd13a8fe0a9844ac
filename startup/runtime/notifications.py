"""
Notifications
-------------
Explicit observer lists used for step and pipeline completion events.

Listeners are plain callables. A listener that raises is logged and skipped so
the remaining listeners still receive the event.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


logger = logging.getLogger(__name__)


@dataclass
class Listener:
    """A callback attached to a Notifier."""

    subscription_id: str
    """Unique identifier for this subscription"""

    callback: Callable[..., Any]
    """Callback invoked with the published arguments"""

    source: str = "anonymous"
    """Identifier of the subscriber"""


class Notifier:
    """
    Ordered list of listeners for a single notification channel.

    Publishing only reaches listeners attached at publish time; nothing is
    replayed to late subscribers.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._listeners: list[Listener] = []

    def subscribe(self, callback: Callable[..., Any], source: str = "anonymous") -> str:
        """
        Attach a listener.

        Args:
            callback: Callable invoked on every publish
            source: Identifier of the subscriber (used in error logs)

        Returns:
            Subscription ID that can be used to unsubscribe
        """
        listener = Listener(
            subscription_id=str(uuid.uuid4()),
            callback=callback,
            source=source,
        )
        self._listeners.append(listener)
        return listener.subscription_id

    def unsubscribe(self, subscription_id: str) -> bool:
        """Detach a listener. Returns True if it was attached."""
        for listener in self._listeners:
            if listener.subscription_id == subscription_id:
                self._listeners.remove(listener)
                return True
        return False

    def clear(self) -> None:
        """Detach every listener."""
        self._listeners.clear()

    def publish(self, *args: Any) -> int:
        """
        Invoke every attached listener with the given arguments.

        Returns:
            Number of listeners that ran without raising
        """
        delivered = 0
        # Snapshot so listeners may unsubscribe themselves while being notified
        for listener in list(self._listeners):
            try:
                listener.callback(*args)
                delivered += 1
            except Exception:
                logger.exception(
                    "Listener %s on %s raised",
                    listener.source,
                    self.name,
                )
        return delivered

    def __len__(self) -> int:
        return len(self._listeners)

    def __contains__(self, subscription_id: object) -> bool:
        return any(lis.subscription_id == subscription_id for lis in self._listeners)

    def __repr__(self) -> str:
        return f"<Notifier(name={self.name!r}, listeners={len(self._listeners)})>"
