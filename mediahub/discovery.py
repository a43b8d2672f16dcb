"""Answers network discovery probes so remote controls can find this host."""

from __future__ import annotations

import logging
import socket
import threading

logger = logging.getLogger(__name__)

IDENTIFIER = b"QtMediaHub:"
DISCOVERY_PORT = 52107
REPLY_PORT = 52108
_MAX_DATAGRAM = 65535
_POLL_INTERVAL = 0.2


def reply_for(data: bytes, hostname: str) -> bytes | None:
    """The answer to a probe datagram, or None if it is not a discovery probe."""
    if bytes(data) != IDENTIFIER:
        return None
    return IDENTIFIER + hostname.encode("latin-1", errors="replace")


class DeviceExposure:
    """Listens for discovery probes over UDP and replies with this host's name."""

    def __init__(
        self,
        port: int = DISCOVERY_PORT,
        reply_port: int = REPLY_PORT,
        host: str = "",
        hostname: str | None = None,
    ) -> None:
        self.reply_port = reply_port
        self.hostname = hostname if hostname is not None else socket.gethostname()
        self._closed = threading.Event()
        self._socket = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            self._socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            self._socket.bind((host, port))
        except OSError:
            self._socket.close()
            raise
        self._socket.settimeout(_POLL_INTERVAL)

    def __enter__(self) -> DeviceExposure:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    @property
    def port(self) -> int:
        """The port probes are received on."""
        return self._socket.getsockname()[1]

    def process_datagram(self, data: bytes, address: tuple[str, int]) -> bytes | None:
        """Reply to the sender's host on the reply port if ``data`` is a probe."""
        reply = reply_for(data, self.hostname)
        if reply is not None:
            self._socket.sendto(reply, (address[0], self.reply_port))
        return reply

    def serve_forever(self) -> None:
        """Answer probes until ``close`` is called."""
        while not self._closed.is_set():
            try:
                data, address = self._socket.recvfrom(_MAX_DATAGRAM)
            except socket.timeout:
                continue
            except OSError:
                if self._closed.is_set():
                    break
                raise
            try:
                self.process_datagram(data, address)
            except OSError as error:
                logger.warning("Could not answer discovery probe from %s: %s", address, error)

    def close(self) -> None:
        self._closed.set()
        self._socket.close()