"""Network connectivity probes used before any Jira call is attempted."""

import logging
from typing import Protocol

import psutil

logger = logging.getLogger(__name__)


class ConnectivityProbe(Protocol):
    def is_connected_or_connecting(self) -> bool: ...


class InterfaceConnectivityProbe:
    """Reports a connection when a non-loopback network interface is up.

    A purely local check: no packet leaves the machine.
    """

    def is_connected_or_connecting(self) -> bool:
        try:
            stats = psutil.net_if_stats()
        except OSError:
            logger.exception("Could not read network interface state")
            return False
        for name, st in stats.items():
            # lo on Linux, lo0 on macOS
            if name.startswith("lo"):
                continue
            if st.isup:
                return True
        return False


class StaticConnectivityProbe:
    """Always gives the same answer (tests, environments without psutil data)."""

    def __init__(self, connected: bool = True) -> None:
        self.connected = connected

    def is_connected_or_connecting(self) -> bool:
        return self.connected
