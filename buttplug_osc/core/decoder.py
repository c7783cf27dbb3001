"""Inbound OSC address decoding.

Decoding runs in two stages: `parse_message` splits an address into segments
and keeps the raw arguments, then `decode` validates that intermediate and
builds a `CommandBroadcast`. Addresses look like::

    /avatar/parameters/devices/<target>/stop
    /avatar/parameters/devices/<target>/vibrate/speed              <float>
    /avatar/parameters/devices/<target>/vibratesingle/<motor>/speed <float>
    /avatar/parameters/devices/<target>/vibratepattern/index       <int>

Messages whose fourth segment is not `devices` are not addressed to us and
decode to `None`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from buttplug_osc.core.errors import InvalidArgumentError, InvalidCommandError
from buttplug_osc.core.model import (
    Command,
    CommandBroadcast,
    OscMessage,
    Stop,
    Vibrate,
    VibratePattern,
    VibrateSingle,
)

_SCOPE_SEGMENT = 3
_TARGET_SEGMENT = 4
_COMMAND_SEGMENT = 5
LOGGER = logging.getLogger(__name__)


def parse_message(address: str, args: Sequence[Any] = ()) -> OscMessage:
    return OscMessage(address=address, segments=tuple(address.split("/")), args=tuple(args))


def _speed_arg(message: OscMessage) -> float:
    if not message.args:
        raise InvalidArgumentError("invalid argument value: none")
    value = message.args[0]
    # OSC float32 and float64 both arrive as Python floats; ints are rejected.
    if not isinstance(value, float):
        raise InvalidArgumentError(f"invalid argument value: {value!r}")
    return value


def _index_arg(message: OscMessage) -> int:
    if not message.args:
        raise InvalidArgumentError("invalid argument value: none")
    value = message.args[0]
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"invalid argument value: {value!r}")
    return value


def _require_name(message: OscMessage, index: int, expected: str) -> None:
    if message.segment(index) != expected:
        raise InvalidArgumentError(f"invalid argument name: {message.segment(index)!r}")


def _decode_stop(message: OscMessage) -> Command:
    return Stop()


def _decode_vibrate(message: OscMessage) -> Command:
    _require_name(message, 6, "speed")
    return Vibrate(speed=_speed_arg(message))


def _decode_vibrate_single(message: OscMessage) -> Command:
    _require_name(message, 7, "speed")
    speed = _speed_arg(message)
    raw_motor = message.segment(6) or ""
    if not (raw_motor.isascii() and raw_motor.isdigit()):
        raise InvalidArgumentError(f"invalid motor index: {raw_motor!r}")
    return VibrateSingle(speed=speed, motor_index=int(raw_motor))


def _decode_vibrate_pattern(message: OscMessage) -> Command:
    _require_name(message, 6, "index")
    return VibratePattern(pattern_index=_index_arg(message))


_DECODERS: dict[str, Callable[[OscMessage], Command]] = {
    "stop": _decode_stop,
    "vibrate": _decode_vibrate,
    "vibratesingle": _decode_vibrate_single,
    "vibratepattern": _decode_vibrate_pattern,
}


def decode(message: OscMessage) -> CommandBroadcast | None:
    """Decode a parsed message.

    Returns `None` for messages outside the `devices` namespace. Raises
    `InvalidCommandError` or `InvalidArgumentError` for malformed ones.
    """
    if message.segment(_SCOPE_SEGMENT) != "devices":
        return None

    sub_command = message.segment(_COMMAND_SEGMENT)
    decoder = _DECODERS.get(sub_command or "")
    if decoder is None:
        raise InvalidCommandError(f"invalid command: {sub_command!r}")

    command = decoder(message)
    broadcast = CommandBroadcast(target=message.segments[_TARGET_SEGMENT], command=command)
    LOGGER.debug("[%s] %s", message.address, command)
    return broadcast


def decode_message(address: str, args: Sequence[Any] = ()) -> CommandBroadcast | None:
    return decode(parse_message(address, args))
