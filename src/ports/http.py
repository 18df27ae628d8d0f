"""HTTP port definitions (DTOs and client interface)."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import TracebackType
from typing import Protocol

from aiohttp import ClientResponse

__all__ = ["DialOverride", "HttpPort", "HttpClientPort"]


@dataclass(slots=True, frozen=True)
class DialOverride:
    """Manual host-to-address mapping used instead of DNS.

    Attributes:
        host: Hostname sent as the ``Host`` header.
        port: Port dialed for every connection.
        ip: IP literal dialed for every connection.
    """

    host: str
    port: int
    ip: str

    @property
    def address(self) -> tuple[str, int]:
        """Address actually dialed."""
        return self.ip, self.port


@dataclass
class HttpPort:
    """One GET request to be sent by the requester.

    Attributes:
        request_id: Random id appended to the URL query string.
        url: Target URL including the ``?<request_id>`` suffix.
        timeout_ms: Total request timeout in milliseconds (0 disables it).
        headers: Headers replacing the defaults; empty unless a Host is forced.
    """

    request_id: int
    url: str
    timeout_ms: int
    headers: dict[str, str] = field(default_factory=dict)


class HttpClientPort(Protocol):
    """Interface of the client the requester sends through."""

    async def __aenter__(self) -> HttpClientPort: ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...

    async def send(self, req: HttpPort) -> ClientResponse:
        """Send the request and return once response headers arrived."""
        ...
