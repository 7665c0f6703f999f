"""
OSC transport used by the crop values relay.

The relay only talks to the ``OscTransport`` protocol so the layout maths can be
driven and tested without sockets. ``UdpOscTransport`` is the python-osc backed
implementation used at runtime.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Protocol

from pythonosc.dispatcher import Dispatcher
from pythonosc.osc_server import BlockingOSCUDPServer
from pythonosc.udp_client import SimpleUDPClient

logger = logging.getLogger("cropsy")

MessageHandler = Callable[..., Any]


class OscTransport(Protocol):
    """Protocol for OSC message transports."""

    def on_message(self, address: str, handler: MessageHandler) -> None:
        """Register handler(address, *args) for messages sent to address."""
        ...

    def listen(self) -> None:
        """Receive messages and dispatch them to handlers until closed."""
        ...

    def send(self, address: str, *args: Any) -> None:
        """Send one message; raises OSError if it cannot be sent."""
        ...

    def close(self) -> None:
        """Release sockets held by the transport."""
        ...


class UdpOscTransport:
    """OSC over UDP: listens on one host/port and sends to another."""

    def __init__(self, listen_host: str, listen_port: int, target_host: str, target_port: int) -> None:
        self.listen_host = listen_host
        self.listen_port = listen_port
        self.target_host = target_host
        self.target_port = target_port

        self.dispatcher = Dispatcher()
        self.dispatcher.set_default_handler(self._log_unhandled)
        self._server: BlockingOSCUDPServer | None = None
        self._client: SimpleUDPClient | None = None

    @staticmethod
    def _log_unhandled(address: str, *args: Any) -> None:
        logger.debug("Ignoring OSC message %s %s", address, list(args))

    def on_message(self, address: str, handler: MessageHandler) -> None:
        self.dispatcher.map(address, handler)

    def listen(self) -> None:
        self._server = BlockingOSCUDPServer((self.listen_host, self.listen_port), self.dispatcher)
        logger.info("Listening to %s:%d", self.listen_host, self.listen_port)
        try:
            self._server.serve_forever()
        finally:
            self._server.server_close()
            self._server = None

    def stop(self) -> None:
        """Stop a running listen() loop; must be called from another thread."""
        if self._server is not None:
            self._server.shutdown()

    def send(self, address: str, *args: Any) -> None:
        if self._client is None:
            self._client = SimpleUDPClient(self.target_host, self.target_port)
        logger.debug("Sending to %s:%d: %s %s", self.target_host, self.target_port, address, list(args))
        self._client.send_message(address, list(args))

    def close(self) -> None:
        self.stop()
        self._client = None
