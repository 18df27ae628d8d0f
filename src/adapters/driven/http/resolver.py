"""aiohttp resolver that pins every connection to a fixed address."""

import ipaddress
import logging
import socket
from typing import Any

from aiohttp.abc import AbstractResolver

from src.ports.http import DialOverride

__all__ = ["OverrideResolver"]

logger = logging.getLogger(__name__)


class OverrideResolver(AbstractResolver):
    """Resolve any hostname to the address of a dial override.

    Installed on a single connector, so it only affects the client that
    owns it.
    """

    def __init__(self, override: DialOverride) -> None:
        """Initialize resolver.

        Args:
            override: Address every lookup resolves to.
        """
        self.override = override
        if ipaddress.ip_address(override.ip).version == 6:
            self._family = socket.AF_INET6
        else:
            self._family = socket.AF_INET

    async def resolve(
        self,
        host: str,
        port: int = 0,
        family: socket.AddressFamily = socket.AF_INET,
    ) -> list[dict[str, Any]]:
        """Return the override address for any lookup.

        Args:
            host: Hostname taken from the request URL (ignored).
            port: Port taken from the request URL (ignored).
            family: Requested address family (ignored).

        Returns:
            A single resolution entry pointing at ``ip:port`` of the override.
        """
        ip, dial_port = self.override.address
        logger.debug(f"Resolve override: {host}:{port} -> {ip}:{dial_port}")
        return [
            {
                "hostname": host,
                "host": ip,
                "port": dial_port,
                "family": self._family,
                "proto": 0,
                "flags": socket.AI_NUMERICHOST,
            }
        ]

    async def close(self) -> None:
        """Nothing to release."""
