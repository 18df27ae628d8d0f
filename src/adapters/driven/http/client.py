"""HTTP client adapter owning one aiohttp session per requester."""

import logging
from types import TracebackType

import aiohttp
from aiohttp import ClientResponse, ClientTimeout
from yarl import URL

from src.adapters.driven.http.resolver import OverrideResolver
from src.ports.http import DialOverride, HttpPort

__all__ = ["HttpClient", "CONNECT_TIMEOUT_SEC", "KEEPALIVE_SEC"]

logger = logging.getLogger(__name__)

# Connection pool settings, independent of the per-request timeout
CONNECT_TIMEOUT_SEC = 30
KEEPALIVE_SEC = 30


class HttpClient:
    """HTTP client used by a single requester.

    Features:
    - Own connector, so a dial override never leaks to other clients.
    - 30s connect timeout and 30s keep-alive for pooled connections.
    - Context manager for proper resource cleanup.
    """

    def __init__(self, dial_override: DialOverride | None = None) -> None:
        """Initialize HTTP client.

        Args:
            dial_override: Optional fixed address every connection dials.
        """
        self.dial_override = dial_override
        self.session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "HttpClient":
        """Enter async context manager (start session).

        Returns:
            Self for use in async with statement.
        """
        resolver = OverrideResolver(self.dial_override) if self.dial_override else None
        connector = aiohttp.TCPConnector(keepalive_timeout=KEEPALIVE_SEC, resolver=resolver)
        self.session = aiohttp.ClientSession(connector=connector)
        if self.dial_override:
            logger.info(
                f"Dial override installed: {self.dial_override.host} -> "
                f"{self.dial_override.ip}:{self.dial_override.port}"
            )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Exit async context manager (close session).

        Args:
            exc_type: Exception type if raised in context.
            exc: Exception instance if raised in context.
            tb: Traceback if raised in context.
        """
        if self.session:
            await self.session.close()

    async def send(self, req: HttpPort) -> ClientResponse:
        """Send one GET request.

        Returns as soon as the response headers arrived; the caller owns the
        response and must release it.

        Args:
            req: Request to send.

        Returns:
            HTTP response, whatever its status code.

        Raises:
            RuntimeError: If session not initialized.
            aiohttp exceptions: Network/timeout errors.
        """
        if self.session is None:
            raise RuntimeError("Session not initialized; use 'async with' context manager")

        client_timeout = ClientTimeout(
            total=req.timeout_ms / 1000 if req.timeout_ms > 0 else None,
            sock_connect=CONNECT_TIMEOUT_SEC,
        )
        return await self.session.get(
            self._connect_url(req.url),
            headers=req.headers or None,
            timeout=client_timeout,
            allow_redirects=True,
        )

    def _connect_url(self, url: str) -> str | URL:
        """Point the request at the override host so the resolver always runs.

        aiohttp never resolves IP-literal hosts, so the URL host is replaced by
        the override hostname (which the resolver maps to ``ip:port``). The
        path and query are kept; relative or host-less URLs are left for
        aiohttp to reject.
        """
        if self.dial_override is None:
            return url
        parsed = URL(url)
        if not parsed.absolute or not parsed.host:
            return url
        return parsed.with_host(self.dial_override.host)
