"""Device-control server interfaces."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Protocol

from buttplug_osc.core.model import ServerEvent


class DeviceHandle(Protocol):
    name: str

    async def vibrate(self, speeds: float | dict[int, float]) -> None:
        """Set a uniform intensity, or per-motor intensities keyed by motor index."""

    async def stop(self) -> None:
        """Stop every motor on the device."""


class DeviceServerClient(Protocol):
    def subscribe(self) -> AsyncIterator[ServerEvent]:
        """Start collecting server events. Must be called before `connect`."""

    async def connect(self) -> None:
        ...

    async def disconnect(self) -> None:
        ...

    async def start_scanning(self) -> None:
        ...

    async def stop_scanning(self) -> None:
        ...
