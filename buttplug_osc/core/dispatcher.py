"""Fan decoded broadcasts out to matching devices."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from concurrent.futures import Future
from typing import Any

from buttplug_osc.core.directory import DeviceDirectory, normalize_device_name
from buttplug_osc.core.errors import ButtplugOscError
from buttplug_osc.core.model import (
    Command,
    CommandBroadcast,
    Stop,
    Vibrate,
    VibratePattern,
    VibrateSingle,
)
from buttplug_osc.core.patterns import PatternPlayer
from buttplug_osc.transports.base import DeviceHandle

LOGGER = logging.getLogger(__name__)

Handler = Callable[[Any, DeviceHandle, str], Awaitable[None]]


class Dispatcher:
    """Resolves broadcast targets and runs one coroutine per matched device.

    `dispatch` is called from the OSC listener thread; executions are
    scheduled on `loop` and never block the caller or each other.
    """

    def __init__(
        self,
        directory: DeviceDirectory,
        player: PatternPlayer,
        loop: asyncio.AbstractEventLoop,
    ) -> None:
        self.directory = directory
        self.player = player
        self._loop = loop
        # Only touched from coroutines running on `loop`.
        self._pattern_runs: dict[str, asyncio.Task[Any]] = {}
        self._handlers: dict[type, Handler] = {
            Stop: self._run_stop,
            Vibrate: self._run_vibrate,
            VibrateSingle: self._run_vibrate_single,
            VibratePattern: self._run_pattern,
        }

    def dispatch(self, broadcast: CommandBroadcast) -> list[Future[None]]:
        devices = self.directory.lookup_set(broadcast.target)
        if not devices:
            LOGGER.debug("no devices match '%s'", broadcast.target)
            return []

        handler = self._handlers[type(broadcast.command)]
        futures: list[Future[None]] = []
        for device in devices:
            identifier = normalize_device_name(device.name)
            coro = self._execute(handler, broadcast.command, device, identifier)
            futures.append(asyncio.run_coroutine_threadsafe(coro, self._loop))
        return futures

    async def _execute(self, handler: Handler, command: Command, device: DeviceHandle, identifier: str) -> None:
        try:
            await handler(command, device, identifier)
        except ButtplugOscError as exc:
            LOGGER.error("[%s] %s failed: %s", identifier, type(command).__name__, exc)
        except Exception:
            LOGGER.exception("[%s] %s failed unexpectedly", identifier, type(command).__name__)

    async def _run_stop(self, command: Stop, device: DeviceHandle, identifier: str) -> None:
        LOGGER.debug("[%s] stopping", identifier)
        await device.stop()

    async def _run_vibrate(self, command: Vibrate, device: DeviceHandle, identifier: str) -> None:
        LOGGER.debug("[%s] adjusting vibration to %s", identifier, command.speed)
        await device.vibrate(command.speed)

    async def _run_vibrate_single(self, command: VibrateSingle, device: DeviceHandle, identifier: str) -> None:
        LOGGER.debug("[%s] adjusting motor %d to %s", identifier, command.motor_index, command.speed)
        await device.vibrate({command.motor_index: command.speed})

    async def _run_pattern(self, command: VibratePattern, device: DeviceHandle, identifier: str) -> None:
        previous = self._pattern_runs.get(identifier)
        if previous is not None and not previous.done():
            LOGGER.debug("[%s] cancelling running pattern", identifier)
            previous.cancel()
            await asyncio.wait([previous])

        current: asyncio.Task[Any] = asyncio.current_task()  # type: ignore[assignment]
        self._pattern_runs[identifier] = current
        try:
            await self.player.play(command.pattern_index, device)
        finally:
            if self._pattern_runs.get(identifier) is current:
                del self._pattern_runs[identifier]
