"""OSC-over-UDP listener running on its own thread."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

from pythonosc.dispatcher import Dispatcher as OscDispatcher
from pythonosc.osc_server import BlockingOSCUDPServer

from buttplug_osc.core.decoder import decode, parse_message
from buttplug_osc.core.errors import ConfigError, DecodeError
from buttplug_osc.core.model import CommandBroadcast

LOGGER = logging.getLogger(__name__)


class OscListener:
    """Receives OSC messages and hands decoded broadcasts to `on_broadcast`.

    Socket reads block, so the server runs on a dedicated thread rather than
    on the event loop. A bad message is logged and dropped.
    """

    def __init__(
        self,
        host: str,
        port: int,
        on_broadcast: Callable[[CommandBroadcast], Any],
    ) -> None:
        self.host = host
        self.port = port
        self._on_broadcast = on_broadcast
        self._server: BlockingOSCUDPServer | None = None
        self._thread: threading.Thread | None = None

    def handle(self, address: str, *args: Any) -> CommandBroadcast | None:
        try:
            broadcast = decode(parse_message(address, args))
        except DecodeError as exc:
            LOGGER.warning("[%s] %s", address, exc)
            return None
        if broadcast is not None:
            self._on_broadcast(broadcast)
        return broadcast

    def start(self) -> threading.Thread:
        osc_dispatcher = OscDispatcher()
        osc_dispatcher.set_default_handler(self.handle)
        try:
            self._server = BlockingOSCUDPServer((self.host, self.port), osc_dispatcher)
        except OSError as exc:
            raise ConfigError(f"Invalid --osc-listen: couldn't bind {self.host}:{self.port}: {exc}") from exc

        self._thread = threading.Thread(
            target=self._server.serve_forever,
            name="osc-listener",
            daemon=True,
        )
        self._thread.start()
        LOGGER.info("Listening for OSC on udp://%s:%d", self.host, self.port)
        return self._thread

    @property
    def server_address(self) -> tuple[str, int]:
        if self._server is None:
            return self.host, self.port
        return self._server.server_address[:2]

    def shutdown(self) -> None:
        if self._server is None:
            return
        self._server.shutdown()
        self._server.server_close()
        if self._thread is not None:
            self._thread.join(timeout=1.0)
        self._server = None
        self._thread = None
