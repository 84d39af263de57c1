"""Reload broadcaster — the registry of connected browser tabs.

Holds one subscription per open reload channel and fans reload messages out
to all of them.  The registry is an explicit object passed to the channel
server and the watcher consumer rather than module-level state, so either side
can be exercised on its own in tests.
"""

from __future__ import annotations

import asyncio
import json
import threading
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from flowerstall.content.watcher import ChangeEvent


class Subscriber(Protocol):
    """Anything that can receive a reload message.

    ``deliver`` returns False once the subscriber can no longer receive
    (its connection closed); the broadcaster then drops it.
    """

    client_id: str

    async def deliver(self, message: str) -> bool: ...


def reload_message(events: Iterable[ChangeEvent], root: Path | None = None) -> str:
    """Build the JSON reload message for a batch of changes.

    Paths are reported relative to *root* when given and possible.
    """
    paths: list[str] = []
    for event in events:
        path = event.path
        if root is not None and path.is_relative_to(root):
            paths.append(path.relative_to(root).as_posix())
        else:
            paths.append(path.as_posix())
    return json.dumps({"type": "reload", "paths": paths})


class Broadcaster:
    """Manages reload subscriptions and pushes messages to them.

    Subscriptions are whole entries: they are only ever added or removed,
    never modified in place, and every operation on the set holds the lock.
    Delivery works on a snapshot so a subscription that connects or leaves
    mid-broadcast does not disturb the loop.

    """

    def __init__(self) -> None:
        self._subscribers: set[Subscriber] = set()
        self._lock = threading.Lock()

    @property
    def subscriber_count(self) -> int:
        """Number of live subscriptions."""
        with self._lock:
            return len(self._subscribers)

    def subscribe(self, subscriber: Subscriber) -> None:
        """Register a subscription."""
        with self._lock:
            self._subscribers.add(subscriber)

    def unsubscribe(self, subscriber: Subscriber) -> None:
        """Remove a subscription (no-op if already gone)."""
        with self._lock:
            self._subscribers.discard(subscriber)

    def get_subscribers(self) -> frozenset[Subscriber]:
        """Snapshot of the current subscriptions (no lock held on return)."""
        with self._lock:
            return frozenset(self._subscribers)

    async def broadcast(self, message: str) -> int:
        """Deliver *message* to every live subscription.

        Subscriptions whose delivery fails are pruned here; there is no
        separate health check.

        Returns:
            Number of subscriptions that received the message.

        """
        subscribers = list(self.get_subscribers())
        if not subscribers:
            return 0

        results = await asyncio.gather(*(sub.deliver(message) for sub in subscribers))

        count = 0
        for sub, delivered in zip(subscribers, results, strict=True):
            if delivered:
                count += 1
            else:
                self.unsubscribe(sub)
        return count
