"""Service layer wiring the listener, dispatcher, and connection lifecycle."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from concurrent.futures import Future

from buttplug_osc.core.directory import DeviceDirectory
from buttplug_osc.core.dispatcher import Dispatcher
from buttplug_osc.core.lifecycle import ConnectionLifecycle
from buttplug_osc.core.model import CommandBroadcast, GatewayConfig, Pattern
from buttplug_osc.core.pattern_loader import load_patterns
from buttplug_osc.core.patterns import PatternPlayer
from buttplug_osc.transports.base import DeviceServerClient
from buttplug_osc.transports.intiface import IntifaceClient
from buttplug_osc.transports.osc_udp import OscListener

LOGGER = logging.getLogger(__name__)


class GatewayService:
    def __init__(
        self,
        config: GatewayConfig,
        *,
        client_factory: Callable[[], DeviceServerClient] | None = None,
        patterns: Mapping[int, Pattern] | None = None,
    ) -> None:
        self.config = config
        self.load_warnings: tuple[str, ...] = ()
        if patterns is None:
            loaded = load_patterns()
            patterns = loaded.patterns
            self.load_warnings = loaded.warnings
        self.directory = DeviceDirectory()
        self.player = PatternPlayer(patterns)
        self.lifecycle = ConnectionLifecycle(
            client_factory or (lambda: IntifaceClient(config.server_url)),
            self.directory,
            reconnect_delay_s=config.reconnect_delay_s,
        )
        self.dispatcher: Dispatcher | None = None

    def on_broadcast(self, broadcast: CommandBroadcast) -> list[Future[None]]:
        if self.dispatcher is None:
            LOGGER.debug("dropping broadcast for '%s': gateway not running", broadcast.target)
            return []
        return self.dispatcher.dispatch(broadcast)

    async def run(self, max_attempts: int | None = None) -> None:
        self.dispatcher = Dispatcher(self.directory, self.player, asyncio.get_running_loop())
        listener = OscListener(self.config.osc_host, self.config.osc_port, self.on_broadcast)
        listener.start()
        try:
            LOGGER.info("Starting device server client (%s)", self.config.server_url)
            await self.lifecycle.run_forever(max_attempts=max_attempts)
        finally:
            listener.shutdown()
