"""Timed vibration pattern playback for a single device."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping

from buttplug_osc.core.directory import normalize_device_name
from buttplug_osc.core.errors import DeviceCommandError
from buttplug_osc.core.model import Pattern
from buttplug_osc.transports.base import DeviceHandle

LOGGER = logging.getLogger(__name__)


class PatternPlayer:
    """Plays indexed patterns step by step.

    Each step's intensity is applied first and then held for the step's
    duration. The device is always stopped afterwards, including when the
    run is cancelled.
    """

    def __init__(
        self,
        patterns: Mapping[int, Pattern],
        *,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.patterns = dict(patterns)
        self._sleep = sleep

    async def play(self, pattern_index: int, device: DeviceHandle) -> int:
        """Run a pattern on `device` and return the number of steps applied."""
        identifier = normalize_device_name(device.name)
        pattern = self.patterns.get(pattern_index)
        applied = 0
        try:
            if pattern is None:
                LOGGER.warning("[%s] unknown pattern %d", identifier, pattern_index)
                return applied
            LOGGER.debug("[%s] playing pattern %d (%s)", identifier, pattern.index, pattern.name)
            for step in pattern.steps:
                intensity = step.intensity / 100.0
                try:
                    await device.vibrate({step.motor: intensity})
                    applied += 1
                except DeviceCommandError as exc:
                    LOGGER.error("[%s] pattern step failed: %s", identifier, exc)
                await self._sleep(step.duration_ms / 1000.0)
            return applied
        finally:
            try:
                await device.stop()
            except DeviceCommandError as exc:
                LOGGER.error("[%s] stop after pattern failed: %s", identifier, exc)
