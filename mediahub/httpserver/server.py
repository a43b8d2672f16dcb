"""Streaming server handing out media files to remote clients."""

from __future__ import annotations

import ipaddress
import logging
import os
import socket
import socketserver
import threading
from collections.abc import Mapping

import psutil

from .. import libraryinfo
from ..globalsettings import GlobalSettings, Option
from .client import HttpClientHandler

logger = logging.getLogger(__name__)

FALLBACK_ADDRESS = "127.0.0.1"


def _is_loopback(address: str) -> bool:
    try:
        return ipaddress.IPv4Address(address).is_loopback
    except ValueError:
        return False


def find_address() -> str:
    """First IPv4 address of an up, non-loopback interface, else 127.0.0.1."""
    stats = psutil.net_if_stats()
    for name, addresses in psutil.net_if_addrs().items():
        stat = stats.get(name)
        if stat is None or not stat.isup:
            continue
        ipv4 = [entry.address for entry in addresses if entry.family == socket.AF_INET]
        if any(_is_loopback(address) for address in ipv4):
            continue
        if ipv4:
            return ipv4[0]
    return FALLBACK_ADDRESS


class HttpServer(socketserver.ThreadingTCPServer):
    """Listens for streaming requests and answers each connection in its own thread."""

    allow_reuse_address = True
    daemon_threads = True

    def __init__(
        self,
        settings: GlobalSettings,
        port: int,
        skins: Mapping[str, str] | None = None,
        database: str | os.PathLike[str] | None = None,
        host: str = "0.0.0.0",
    ) -> None:
        self.settings = settings
        self.skins = dict(skins or {})
        self.database = os.fspath(database) if database is not None else libraryinfo.database_file_path()
        configured = settings.value(Option.STREAMING_ADDRESS)
        self._address = str(configured) if configured else find_address()
        self._serving = threading.Event()
        try:
            super().__init__((host, port), HttpClientHandler)
        except OSError as error:
            logger.warning(
                "Streaming server failed to listen on %s on %s with the following error %s",
                self._address, port, error,
            )
            raise
        logger.debug("Streaming server listening %s on %s", self._address, self.port)

    @property
    def address(self) -> str:
        return self._address

    @property
    def port(self) -> int:
        return self.server_address[1]

    def serve_forever(self) -> None:
        """Answer requests until ``shutdown`` is called."""
        self._serving.set()
        try:
            super().serve_forever()
        finally:
            self._serving.clear()

    def shutdown(self) -> None:
        """Stop serving and close the listening socket."""
        if self._serving.is_set():
            super().shutdown()
        self.server_close()