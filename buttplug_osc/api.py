"""Stable public API for building tooling on top of buttplug-osc.

This module is the supported integration surface for third-party callers.
Avoid importing from private/internal modules unless intentionally depending on
non-stable internals.
"""

from __future__ import annotations

from buttplug_osc.core.config import build_config
from buttplug_osc.core.decoder import decode, decode_message, parse_message
from buttplug_osc.core.directory import DEVICES_ALL, DEVICES_LAST, DeviceDirectory, normalize_device_name
from buttplug_osc.core.dispatcher import Dispatcher
from buttplug_osc.core.errors import (
    ButtplugOscError,
    ConfigError,
    DecodeError,
    DeviceCommandError,
    InvalidArgumentError,
    InvalidCommandError,
    PatternLoadError,
    PatternValidationError,
    ServerDisconnectedError,
    TransportConnectError,
    TransportError,
)
from buttplug_osc.core.lifecycle import ConnectionLifecycle, SessionState
from buttplug_osc.core.model import (
    Command,
    CommandBroadcast,
    DeviceAdded,
    DeviceRemoved,
    GatewayConfig,
    OscMessage,
    Pattern,
    PatternStep,
    ServerDisconnected,
    Stop,
    Vibrate,
    VibratePattern,
    VibrateSingle,
)
from buttplug_osc.core.pattern_loader import load_patterns
from buttplug_osc.core.patterns import PatternPlayer
from buttplug_osc.core.service import GatewayService
from buttplug_osc.transports.base import DeviceHandle, DeviceServerClient

__all__ = [
    "ButtplugOscError",
    "ConfigError",
    "DecodeError",
    "InvalidCommandError",
    "InvalidArgumentError",
    "PatternLoadError",
    "PatternValidationError",
    "TransportError",
    "TransportConnectError",
    "DeviceCommandError",
    "ServerDisconnectedError",
    "Command",
    "CommandBroadcast",
    "Stop",
    "Vibrate",
    "VibrateSingle",
    "VibratePattern",
    "OscMessage",
    "Pattern",
    "PatternStep",
    "DeviceAdded",
    "DeviceRemoved",
    "ServerDisconnected",
    "GatewayConfig",
    "DeviceHandle",
    "DeviceServerClient",
    "DEVICES_ALL",
    "DEVICES_LAST",
    "DeviceDirectory",
    "normalize_device_name",
    "parse_message",
    "decode",
    "decode_message",
    "Dispatcher",
    "PatternPlayer",
    "load_patterns",
    "ConnectionLifecycle",
    "SessionState",
    "GatewayService",
    "build_config",
]
