"""Startup configuration parsing and validation."""

from __future__ import annotations

import logging
from urllib.parse import urlsplit

from buttplug_osc.core.errors import ConfigError
from buttplug_osc.core.model import GatewayConfig

DEFAULT_INTIFACE_CONNECT = "ws://127.0.0.1:12345"
DEFAULT_OSC_LISTEN = "udp://0.0.0.0:9000"
DEFAULT_LOG_LEVEL = "debug"
DEFAULT_RECONNECT_DELAY_S = 1.0

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def parse_osc_listen(url: str) -> tuple[str, int]:
    """Return the (host, port) to bind for a `udp://host:port` URL."""
    parts = urlsplit(url)
    if parts.scheme != "udp":
        raise ConfigError(f"Invalid --osc-listen '{url}': only OSC-over-UDP is supported")
    try:
        port = parts.port
    except ValueError as exc:
        raise ConfigError(f"Invalid --osc-listen '{url}': {exc}") from exc
    if not parts.hostname or port is None:
        raise ConfigError(f"Invalid --osc-listen '{url}': host and port are required")
    return parts.hostname, port


def validate_server_url(url: str) -> str:
    """Check that the device server URL is well formed; reachability is not tested."""
    parts = urlsplit(url)
    if parts.scheme not in {"ws", "wss"} or not parts.hostname:
        raise ConfigError(f"Invalid --intiface-connect '{url}': expected ws://host:port")
    try:
        parts.port
    except ValueError as exc:
        raise ConfigError(f"Invalid --intiface-connect '{url}': {exc}") from exc
    return url


def normalize_log_level(level: str) -> str:
    upper = level.strip().upper()
    if upper not in _LOG_LEVELS:
        allowed = ", ".join(name.lower() for name in _LOG_LEVELS)
        raise ConfigError(f"Invalid --log-level '{level}'. Allowed: {allowed}")
    return upper


def build_config(
    intiface_connect: str = DEFAULT_INTIFACE_CONNECT,
    osc_listen: str = DEFAULT_OSC_LISTEN,
    log_level: str = DEFAULT_LOG_LEVEL,
    reconnect_delay_s: float = DEFAULT_RECONNECT_DELAY_S,
) -> GatewayConfig:
    if reconnect_delay_s < 0:
        raise ConfigError("--reconnect-delay must not be negative")
    host, port = parse_osc_listen(osc_listen)
    return GatewayConfig(
        server_url=validate_server_url(intiface_connect),
        osc_host=host,
        osc_port=port,
        log_level=normalize_log_level(log_level),
        reconnect_delay_s=reconnect_delay_s,
    )


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s",
    )
