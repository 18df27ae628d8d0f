"""Parsing of ``host:port:ip`` resolve overrides."""

import ipaddress

from src.core.errors import ResolveOverrideError
from src.ports.http import DialOverride

__all__ = ["parse_resolve"]


def parse_resolve(resolve: str) -> DialOverride | None:
    """Parse a resolve override string.

    Args:
        resolve: ``hostname:port:ip-address`` or an empty string.

    Returns:
        The parsed override, or None when ``resolve`` is empty.

    Raises:
        ResolveOverrideError: If the string is not exactly three fields,
            the port is not a valid TCP port or the address is not an IP.
    """
    if not resolve:
        return None

    pieces = resolve.split(":")
    if len(pieces) != 3:
        raise ResolveOverrideError(
            f"Resolve override must be host:port:ip (got {len(pieces)} fields): {resolve!r}"
        )

    host, port_raw, ip = pieces
    if not host:
        raise ResolveOverrideError(f"Resolve override has an empty host: {resolve!r}")

    try:
        port = int(port_raw)
    except ValueError as e:
        raise ResolveOverrideError(f"Resolve override port is not an integer: {port_raw!r}") from e
    if not 0 < port < 65536:
        raise ResolveOverrideError(f"Resolve override port out of range: {port}")

    try:
        ipaddress.ip_address(ip)
    except ValueError as e:
        raise ResolveOverrideError(f"Resolve override address is not an IP: {ip!r}") from e

    return DialOverride(host=host, port=port, ip=ip)
