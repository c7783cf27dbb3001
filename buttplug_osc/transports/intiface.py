"""Device-control server client backed by the `buttplug` library (Intiface)."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from typing import Any

from buttplug_osc.core.errors import DeviceCommandError, TransportConnectError
from buttplug_osc.core.model import DeviceAdded, DeviceRemoved, ServerDisconnected, ServerEvent

LOGGER = logging.getLogger(__name__)


class IntifaceDevice:
    """Wraps a library device so failures surface as `DeviceCommandError`."""

    def __init__(self, device: Any) -> None:
        self._device = device
        self.name: str = device.name

    async def vibrate(self, speeds: float | dict[int, float]) -> None:
        try:
            await self._device.send_vibrate_cmd(speeds)
        except Exception as exc:
            raise DeviceCommandError(f"vibrate failed: {exc}") from exc

    async def stop(self) -> None:
        try:
            await self._device.send_stop_device_cmd()
        except Exception as exc:
            raise DeviceCommandError(f"stop failed: {exc}") from exc


class IntifaceClient:
    def __init__(
        self,
        url: str,
        *,
        client_name: str = "buttplug-osc",
    ) -> None:
        self.url = url
        self.client_name = client_name
        self._client: Any = None
        self._events: asyncio.Queue[ServerEvent] = asyncio.Queue()
        self._devices: dict[int, IntifaceDevice] = {}
        self._watcher: asyncio.Task[None] | None = None

    def subscribe(self) -> AsyncIterator[ServerEvent]:
        try:
            from buttplug.client import ButtplugClient  # type: ignore
        except Exception as exc:  # pragma: no cover - import failure path
            raise TransportConnectError(
                "Device server support requires 'buttplug'. Install dependency and retry."
            ) from exc

        self._client = ButtplugClient(self.client_name)
        self._client.device_added_handler += self._on_device_added
        self._client.device_removed_handler += self._on_device_removed
        return self._iter_events()

    def _on_device_added(self, _emitter: Any, device: Any) -> None:
        wrapped = IntifaceDevice(device)
        self._devices[device._index] = wrapped
        self._events.put_nowait(DeviceAdded(wrapped))

    def _on_device_removed(self, _emitter: Any, device_index: int) -> None:
        # The library reports removals by index, after dropping its own record.
        wrapped = self._devices.pop(device_index, None)
        if wrapped is None:
            LOGGER.warning("Removal reported for unknown device index %s", device_index)
            return
        self._events.put_nowait(DeviceRemoved(wrapped))

    async def _iter_events(self) -> AsyncIterator[ServerEvent]:
        while True:
            event = await self._events.get()
            yield event
            if isinstance(event, ServerDisconnected):
                return

    def _is_connected(self) -> bool:
        if self._client is None:
            return False
        connector = self._client.connector
        return connector is not None and bool(connector.connected)

    async def _watch_connection(self) -> None:
        # The library never reports a dropped socket; wait for the websocket to close.
        try:
            await self._client.connector.ws.wait_closed()
        except Exception as exc:
            LOGGER.warning("Connection watcher failed: %s", exc)
        self._events.put_nowait(ServerDisconnected())

    async def connect(self) -> None:
        if self._client is None:
            raise TransportConnectError("subscribe() must be called before connect()")
        try:
            from buttplug.client import ButtplugClientWebsocketConnector  # type: ignore

            connector = ButtplugClientWebsocketConnector(self.url)
            await self._client.connect(connector)
        except Exception as exc:
            raise TransportConnectError(f"Could not connect to {self.url}: {exc}") from exc
        self._watcher = asyncio.create_task(self._watch_connection())
        LOGGER.info("Connected to %s", self.url)

    async def start_scanning(self) -> None:
        try:
            await self._client.start_scanning()
        except Exception as exc:
            raise TransportConnectError(f"start scanning failed: {exc}") from exc

    async def stop_scanning(self) -> None:
        try:
            await self._client.stop_scanning()
        except Exception as exc:
            raise TransportConnectError(f"stop scanning failed: {exc}") from exc

    async def disconnect(self) -> None:
        if self._watcher is not None:
            self._watcher.cancel()
            self._watcher = None
        if not self._is_connected():
            return
        try:
            await self._client.disconnect()
        except Exception as exc:
            raise TransportConnectError(f"disconnect failed: {exc}") from exc
