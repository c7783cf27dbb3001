from __future__ import annotations

import logging

import pytest

from buttplug_osc.core.decoder import decode, decode_message, parse_message
from buttplug_osc.core.errors import InvalidArgumentError, InvalidCommandError
from buttplug_osc.core.model import Stop, Vibrate, VibratePattern, VibrateSingle

PREFIX = "/avatar/parameters/devices"


def test_parse_message_keeps_segments_and_args() -> None:
    message = parse_message(f"{PREFIX}/all/vibrate/speed", [0.5])
    assert message.segments == ("", "avatar", "parameters", "devices", "all", "vibrate", "speed")
    assert message.args == (0.5,)
    assert message.segment(4) == "all"
    assert message.segment(42) is None


@pytest.mark.parametrize("target", ["all", "last", "LovenseHush", "Lov"])
def test_stop_targets_segment_after_devices(target: str) -> None:
    broadcast = decode_message(f"{PREFIX}/{target}/stop")
    assert broadcast is not None
    assert broadcast.target == target
    assert broadcast.command == Stop()


def test_stop_ignores_extra_args() -> None:
    broadcast = decode_message(f"{PREFIX}/all/stop", [1])
    assert broadcast is not None
    assert broadcast.command == Stop()


@pytest.mark.parametrize(
    "address",
    [
        "/avatar/parameters/VelocityX",
        "/avatar/change",
        "/input/devices/all/stop",
        "",
        "/a/b/c/devices/all/stop",
    ],
)
def test_out_of_scope_addresses_are_ignored(address: str) -> None:
    assert decode_message(address, [1.0]) is None


def test_vibrate_with_float() -> None:
    broadcast = decode_message(f"{PREFIX}/all/vibrate/speed", [0.75])
    assert broadcast is not None
    assert broadcast.command == Vibrate(speed=0.75)


def test_vibrate_rejects_text_argument() -> None:
    with pytest.raises(InvalidArgumentError):
        decode_message(f"{PREFIX}/all/vibrate/speed", ["fast"])


def test_vibrate_rejects_int_argument() -> None:
    with pytest.raises(InvalidArgumentError):
        decode_message(f"{PREFIX}/all/vibrate/speed", [1])


def test_vibrate_rejects_missing_argument() -> None:
    with pytest.raises(InvalidArgumentError, match="none"):
        decode_message(f"{PREFIX}/all/vibrate/speed")


def test_vibrate_rejects_wrong_argument_name() -> None:
    with pytest.raises(InvalidArgumentError, match="argument name"):
        decode_message(f"{PREFIX}/all/vibrate/power", [0.5])


def test_vibrate_single() -> None:
    broadcast = decode_message(f"{PREFIX}/Toy/vibratesingle/1/speed", [0.25])
    assert broadcast is not None
    assert broadcast.target == "Toy"
    assert broadcast.command == VibrateSingle(speed=0.25, motor_index=1)


@pytest.mark.parametrize("motor", ["x", "-1", "", "1_0", " 2", "+1", "\u00b2"])
def test_vibrate_single_rejects_bad_motor_index(motor: str) -> None:
    with pytest.raises(InvalidArgumentError, match="motor index"):
        decode_message(f"{PREFIX}/Toy/vibratesingle/{motor}/speed", [0.25])


def test_vibrate_single_requires_speed_name() -> None:
    with pytest.raises(InvalidArgumentError):
        decode_message(f"{PREFIX}/Toy/vibratesingle/0", [0.25])


def test_vibrate_pattern() -> None:
    broadcast = decode_message(f"{PREFIX}/all/vibratepattern/index", [2])
    assert broadcast is not None
    assert broadcast.command == VibratePattern(pattern_index=2)


@pytest.mark.parametrize("value", [2.0, "2", True])
def test_vibrate_pattern_requires_integer(value: object) -> None:
    with pytest.raises(InvalidArgumentError):
        decode_message(f"{PREFIX}/all/vibratepattern/index", [value])


@pytest.mark.parametrize("command", ["rotate", "Stop", ""])
def test_unknown_command_rejected(command: str) -> None:
    with pytest.raises(InvalidCommandError):
        decode_message(f"{PREFIX}/all/{command}")


def test_missing_command_segment_rejected() -> None:
    with pytest.raises(InvalidCommandError):
        decode_message(f"{PREFIX}/all")


def test_decode_logs_nothing_for_ignored(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG)
    assert decode(parse_message("/avatar/parameters/Other", [0.1])) is None
    assert caplog.records == []
