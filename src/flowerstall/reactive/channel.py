"""Reload channel — websocket side channel that browsers keep open.

Runs a websockets server on its own port (35729 by default) on the same event
loop as the HTTP server.  Each connection becomes a :class:`ReloadSubscription`
registered with the :class:`Broadcaster`.

Subscription lifecycle::

    connecting --handshake--> open --send failure / disconnect--> closed

There is no server-side reconnection; the injected script retries.

The channel is best-effort: if the port cannot be bound, :meth:`start` prints a
warning and returns False, and pages are served without the reload script.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from websockets.exceptions import ConnectionClosed

from flowerstall.banner import print_warning

if TYPE_CHECKING:
    from flowerstall._types import SubscriptionState
    from flowerstall.reactive.broadcaster import Broadcaster


@dataclass(eq=False, slots=True)
class ReloadSubscription:
    """One connected browser tab.

    Compared and hashed by identity, so two tabs never collapse into one
    entry in the broadcaster's set.

    Attributes:
        connection: The websocket connection (anything with ``async send``).
        client_id: Unique identifier for this connection.
        state: Lifecycle state.

    """

    connection: Any
    client_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    state: SubscriptionState = "connecting"

    def open(self) -> None:
        if self.state == "connecting":
            self.state = "open"

    def close(self) -> None:
        self.state = "closed"

    async def deliver(self, message: str) -> bool:
        """Send *message*; on failure move to ``closed`` and return False."""
        if self.state != "open":
            return False
        try:
            await self.connection.send(message)
        except (ConnectionClosed, OSError):
            self.close()
            return False
        return True


class ReloadChannel:
    """Websocket server feeding reload messages to browsers.

    Args:
        broadcaster: Registry that receives each new subscription.
        host: Bind address.
        port: Bind port (0 picks a free port).

    """

    def __init__(self, broadcaster: Broadcaster, host: str, port: int) -> None:
        self._broadcaster = broadcaster
        self._host = host
        self._port = port
        self._server: Any = None
        self._bound_port: int | None = None

    @property
    def port(self) -> int | None:
        """The listening port, or None when the channel is not running."""
        return self._bound_port

    @property
    def is_listening(self) -> bool:
        return self._bound_port is not None

    async def start(self) -> bool:
        """Bind and start serving.  Returns False (with a warning) on failure."""
        if self._server is not None:
            return True

        from websockets.asyncio.server import serve

        try:
            self._server = await serve(self._handle, self._host, self._port)
        except OSError as exc:
            print_warning(
                f"Live reload disabled (port {self._port}: {exc.strerror or exc})"
            )
            return False

        sockets = list(self._server.sockets)
        self._bound_port = sockets[0].getsockname()[1] if sockets else self._port
        return True

    async def stop(self) -> None:
        """Close the server and every open connection."""
        server, self._server = self._server, None
        self._bound_port = None
        if server is not None:
            server.close()
            await server.wait_closed()

    async def _handle(self, connection: Any) -> None:
        """Per-connection handler; runs after the handshake completes."""
        subscription = ReloadSubscription(connection=connection)
        subscription.open()
        self._broadcaster.subscribe(subscription)
        try:
            await connection.wait_closed()
        finally:
            subscription.close()
            self._broadcaster.unsubscribe(subscription)
