"""Core data models used across decoder, dispatcher, player, and CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Stop:
    pass


@dataclass(frozen=True)
class Vibrate:
    speed: float


@dataclass(frozen=True)
class VibrateSingle:
    speed: float
    motor_index: int


@dataclass(frozen=True)
class VibratePattern:
    pattern_index: int


Command = Union[Stop, Vibrate, VibrateSingle, VibratePattern]


@dataclass(frozen=True)
class CommandBroadcast:
    target: str
    command: Command


@dataclass(frozen=True)
class OscMessage:
    """An inbound message split into address segments and typed arguments."""

    address: str
    segments: tuple[str, ...]
    args: tuple[Any, ...]

    def segment(self, index: int) -> str | None:
        if index < len(self.segments):
            return self.segments[index]
        return None


@dataclass(frozen=True)
class PatternStep:
    motor: int
    intensity: int
    duration_ms: int


@dataclass(frozen=True)
class Pattern:
    index: int
    name: str
    steps: tuple[PatternStep, ...]

    @property
    def total_ms(self) -> int:
        return sum(step.duration_ms for step in self.steps)


@dataclass(frozen=True)
class DeviceAdded:
    device: Any


@dataclass(frozen=True)
class DeviceRemoved:
    device: Any


@dataclass(frozen=True)
class ServerDisconnected:
    pass


ServerEvent = Union[DeviceAdded, DeviceRemoved, ServerDisconnected]


@dataclass(frozen=True)
class GatewayConfig:
    server_url: str
    osc_host: str
    osc_port: int
    log_level: str = "DEBUG"
    reconnect_delay_s: float = 1.0
