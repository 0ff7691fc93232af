"""Broadcast channels — one live-connection set per entity type.

A channel keeps the set of connected WebSocket clients for one entity
collection and fans a serialized Notification out to all of them.

Delivery is fire-and-forget: each send is bounded by a timeout and runs
concurrently with the others, so one slow or dead client never stalls
the rest. A send that fails or times out drops that connection from the
channel and closes it, so the client sees the disconnect and can reconnect. No retries, no acknowledgements, no replay.

The membership set is shared by WebSocket tasks (connect/disconnect) and
request tasks (broadcast), so every mutation goes through an asyncio.Lock.
Sends happen outside the lock against a snapshot taken at call time.
"""

import asyncio
from typing import Iterable, Protocol, runtime_checkable

import structlog

from tienda.realtime.notifications import (
    CATEGORY,
    CLIENT,
    EMPLOYEE,
    PRODUCT,
    SUPPLIERS,
    Notification,
)

logger = structlog.get_logger()


@runtime_checkable
class Connection(Protocol):
    """Anything that can receive a text frame.

    Starlette's WebSocket satisfies this; tests use plain fakes.
    """

    async def send_text(self, data: str) -> None: ...


class BroadcastChannel:
    """Live connections subscribed to notifications for one entity type."""

    def __init__(self, entity: str, path: str, send_timeout: float = 5.0):
        self.entity = entity
        self.path = path
        self.send_timeout = send_timeout
        self._connections: set[Connection] = set()
        self._lock = asyncio.Lock()

    def count(self) -> int:
        return len(self._connections)

    def members(self) -> frozenset[Connection]:
        return frozenset(self._connections)

    async def connect(self, connection: Connection) -> None:
        async with self._lock:
            self._connections.add(connection)
        logger.info("channel.connected", channel=self.entity, total=self.count())

    async def disconnect(self, connection: Connection) -> None:
        """Remove a connection. Removing an absent connection is a no-op."""
        async with self._lock:
            self._connections.discard(connection)
        logger.info("channel.disconnected", channel=self.entity, total=self.count())

    async def broadcast(self, message: Notification) -> int:
        """Push one notification to every current member.

        Returns the number of connections the message reached.
        """
        async with self._lock:
            targets = list(self._connections)

        if not targets:
            return 0

        payload = message.to_json()
        results = await asyncio.gather(
            *(self._send(conn, payload) for conn in targets)
        )
        dead = [conn for conn, ok in zip(targets, results) if not ok]

        if dead:
            async with self._lock:
                for conn in dead:
                    self._connections.discard(conn)
            logger.warning(
                "channel.pruned",
                channel=self.entity,
                dead=len(dead),
                remaining=self.count(),
            )
            await asyncio.gather(*(self._close(conn) for conn in dead))

        return len(targets) - len(dead)

    async def close_all(self) -> None:
        """Close every member (best-effort) and empty the channel."""
        async with self._lock:
            conns = list(self._connections)
            self._connections.clear()

        await asyncio.gather(*(self._close(conn) for conn in conns))

    async def _send(self, connection: Connection, payload: str) -> bool:
        try:
            await asyncio.wait_for(connection.send_text(payload), self.send_timeout)
            return True
        except asyncio.TimeoutError:
            logger.warning("channel.send_timeout", channel=self.entity)
            return False
        except Exception as e:
            logger.warning("channel.send_failed", channel=self.entity, error=str(e))
            return False

    async def _close(self, connection: Connection) -> None:
        """Best-effort close, bounded like a send."""
        close = getattr(connection, "close", None)
        if close is None:
            return
        try:
            await asyncio.wait_for(close(), self.send_timeout)
        except Exception as e:
            logger.debug("channel.close_failed", channel=self.entity, error=str(e))


class ChannelRegistry:
    """All broadcast channels of the process, keyed by entity tag."""

    def __init__(self, channels: Iterable[BroadcastChannel] = ()):
        self._channels: dict[str, BroadcastChannel] = {}
        for channel in channels:
            self.register(channel)

    def register(self, channel: BroadcastChannel) -> BroadcastChannel:
        if channel.entity in self._channels:
            raise ValueError(f"Channel already registered: {channel.entity}")
        self._channels[channel.entity] = channel
        return channel

    def get(self, entity: str) -> BroadcastChannel:
        try:
            return self._channels[entity]
        except KeyError:
            raise KeyError(f"No channel registered for entity {entity!r}") from None

    def __iter__(self):
        return iter(self._channels.values())

    def __len__(self) -> int:
        return len(self._channels)

    def counts(self) -> dict[str, int]:
        return {name: ch.count() for name, ch in self._channels.items()}

    async def close_all(self) -> None:
        for channel in self._channels.values():
            await channel.close_all()


# (entity tag, WebSocket path), one channel per entity collection
CHANNEL_PATHS: list[tuple[str, str]] = [
    (PRODUCT, "/ws/product"),
    (CATEGORY, "/ws/category"),
    (SUPPLIERS, "/ws/suppliers"),
    (EMPLOYEE, "/ws/employee"),
    (CLIENT, "/ws/clients"),
]


def build_channels(send_timeout: float = 5.0) -> ChannelRegistry:
    """Create the registry with every entity channel. Called once at startup."""
    return ChannelRegistry(
        BroadcastChannel(entity, path, send_timeout=send_timeout)
        for entity, path in CHANNEL_PATHS
    )
