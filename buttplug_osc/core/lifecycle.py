"""Connection lifecycle for the device-control server."""

from __future__ import annotations

import asyncio
import enum
import logging
from collections.abc import Callable

from buttplug_osc.core.directory import DeviceDirectory, normalize_device_name
from buttplug_osc.core.errors import ServerDisconnectedError, TransportError
from buttplug_osc.core.model import DeviceAdded, DeviceRemoved, ServerDisconnected, ServerEvent
from buttplug_osc.transports.base import DeviceServerClient

LOGGER = logging.getLogger(__name__)


class SessionState(enum.Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    ACTIVE = "active"


class ConnectionLifecycle:
    """Keeps a session open to the server and mirrors its devices into a directory.

    Each session subscribes to events before connecting, so devices the
    server already knows about are reported through the same event path.
    Losing the session is never fatal: `run_forever` reconnects.
    """

    def __init__(
        self,
        client_factory: Callable[[], DeviceServerClient],
        directory: DeviceDirectory,
        *,
        reconnect_delay_s: float = 1.0,
    ) -> None:
        self._client_factory = client_factory
        self.directory = directory
        self.reconnect_delay_s = reconnect_delay_s
        self.state = SessionState.DISCONNECTED

    async def run_forever(self, max_attempts: int | None = None) -> None:
        attempts = 0
        while max_attempts is None or attempts < max_attempts:
            attempts += 1
            try:
                await self.run_session()
            except TransportError as exc:
                LOGGER.warning("Session ended: %s", exc)
            except Exception:
                LOGGER.exception("Session failed unexpectedly")
            if max_attempts is None or attempts < max_attempts:
                await asyncio.sleep(self.reconnect_delay_s)

    async def run_session(self) -> None:
        self.state = SessionState.CONNECTING
        client = self._client_factory()
        events = client.subscribe()
        try:
            LOGGER.info("Connecting to device server")
            await client.connect()
            await client.start_scanning()
            self.state = SessionState.ACTIVE
            async for event in events:
                await self.handle_event(client, event)
            raise ServerDisconnectedError("event stream closed")
        finally:
            self.state = SessionState.DISCONNECTED
            try:
                await client.disconnect()
            except TransportError as exc:
                LOGGER.debug("Ignoring disconnect failure: %s", exc)

    async def handle_event(self, client: DeviceServerClient, event: ServerEvent) -> None:
        if isinstance(event, DeviceAdded):
            identifier = normalize_device_name(event.device.name)
            self.directory.upsert(identifier, event.device)
            self.directory.publish()
            LOGGER.info("[%s] added", identifier)
        elif isinstance(event, DeviceRemoved):
            LOGGER.warning("[%s] removed", normalize_device_name(event.device.name))
            # Usually a transient disconnect; rescan and let a re-add replace the entry.
            for request in (client.stop_scanning, client.start_scanning):
                try:
                    await request()
                except TransportError as exc:
                    LOGGER.warning("Rescan request failed: %s", exc)
        elif isinstance(event, ServerDisconnected):
            raise ServerDisconnectedError("server disconnected")
