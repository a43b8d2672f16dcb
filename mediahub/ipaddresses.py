"""Lists the IPv4 addresses under which this host can be reached."""

from __future__ import annotations

import ipaddress
import socket
from collections.abc import Callable

import psutil


def _is_loopback(address: str) -> bool:
    try:
        return ipaddress.IPv4Address(address).is_loopback
    except ValueError:
        return False


def ipv4_addresses() -> list[str]:
    """IPv4 addresses of every interface that is up and not a loopback interface."""
    stats = psutil.net_if_stats()
    result: list[str] = []
    for name, entries in psutil.net_if_addrs().items():
        stat = stats.get(name)
        if stat is None or not stat.isup:
            continue
        flags = str(getattr(stat, "flags", "") or "").split(",")
        if "loopback" in flags:
            continue
        ipv4 = [entry.address for entry in entries if entry.family == socket.AF_INET]
        if any(_is_loopback(address) for address in ipv4):
            continue
        result.extend(ipv4)
    return result


class IpAddressFinder:
    """Holds the host's current IPv4 addresses and reports when they are refreshed."""

    def __init__(self, on_change: Callable[[], None] | None = None, update: bool = True) -> None:
        self._addresses: list[str] = []
        self._on_change = on_change
        if update:
            self.update_address_list()

    @property
    def ip_addresses(self) -> list[str]:
        return list(self._addresses)

    def update_address_list(self) -> None:
        """Re-read the interface addresses and notify the change callback."""
        self._addresses = ipv4_addresses()
        if self._on_change is not None:
            self._on_change()