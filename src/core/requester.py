"""Requester: periodic HTTP GET with latency sampling and slow/error logging."""

import asyncio
import logging
import random
import time
from collections.abc import Callable

import aiohttp
from aiohttp import ClientResponse
from yarl import URL

from src.adapters.driven.http.client import HttpClient
from src.core.dial_override import parse_resolve
from src.core.errors import (
    BodyReadError,
    RequestBuildError,
    RequesterNotRunningError,
)
from src.core.samples import SampleOverflow, put_sample
from src.ports.http import DialOverride, HttpClientPort, HttpPort

__all__ = ["Requester", "SLOW_REQUEST_MS", "NETWORK_ERRORS"]

logger = logging.getLogger(__name__)
events = logging.getLogger("src.events")

# A request slower than this is logged together with its body
SLOW_REQUEST_MS = 500

NS_PER_MS = 1_000_000
MAX_REQUEST_ID = 2**63

# Transport-level failures: logged, never fatal. Non-2xx responses are not failures.
NETWORK_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError)

ClientFactory = Callable[[DialOverride | None], HttpClientPort]


def _describe(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


def _next_tick_after(tick: float, period: float, now: float) -> float:
    """Advance the tick grid, collapsing missed ticks into one pending tick."""
    next_tick = tick + period
    if next_tick < now:
        next_tick += ((now - next_tick) // period) * period
    return next_tick


class Requester:
    """Perform HTTP requests at a fixed interval.

    Every attempt pushes its elapsed time (nanoseconds) onto ``measure_queue``;
    transport errors and slow responses are logged on the ``src.events``
    logger.

    The caller must drain ``measure_queue``: with the default ``BLOCK``
    overflow policy a full queue stalls the loop.
    """

    def __init__(
        self,
        interval: int,
        timeout: int,
        url: str,
        resolve: str,
        measure_queue: "asyncio.Queue[int]",
        *,
        overflow: SampleOverflow = SampleOverflow.BLOCK,
        client_factory: ClientFactory = HttpClient,
    ) -> None:
        """Initialize requester. Nothing is validated until run().

        Args:
            interval: Tick interval in microseconds.
            timeout: Request timeout in milliseconds.
            url: Target URL.
            resolve: Optional ``host:port:ip`` override, empty to disable.
            measure_queue: Output queue of latency samples in nanoseconds.
            overflow: Policy when ``measure_queue`` is full.
            client_factory: Builds the HTTP client from the dial override.
        """
        self.interval = interval
        self.timeout = timeout
        self.url = url
        self.resolve = resolve
        self.measure_queue = measure_queue
        self.overflow = overflow
        self.client_factory = client_factory
        self.host_header = ""
        self._stop = asyncio.Event()
        self._stopped = asyncio.Event()
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def _prepare(self) -> DialOverride | None:
        """Validate configuration before the loop starts.

        Raises:
            RequestBuildError: If interval or URL cannot produce a request.
            ResolveOverrideError: If the resolve override is malformed.
        """
        if self.interval <= 0:
            raise RequestBuildError(f"Tick interval must be positive (got {self.interval}us)")

        # Unsupported schemes and missing hosts fail per request, as transport errors
        try:
            URL(self.url)
        except (TypeError, ValueError) as e:
            raise RequestBuildError(f"Invalid URL {self.url!r}: {e}") from e

        override = parse_resolve(self.resolve)
        if override is not None:
            self.host_header = override.host
        return override

    async def run(self) -> None:
        """Run the request loop until stop() is called.

        Raises:
            RequestBuildError: Configuration cannot produce a request.
            BodyReadError: Body of a slow response could not be read.
        """
        override = self._prepare()

        self._stop.clear()
        self._stopped.clear()
        self._running = True
        loop = asyncio.get_running_loop()
        period = self.interval / 1_000_000
        logger.info(
            f"Requester started: url={self.url}, interval={self.interval}us, "
            f"timeout={self.timeout}ms, resolve={self.resolve or '<none>'}"
        )

        try:
            async with self.client_factory(override) as http:
                next_tick = loop.time() + period
                while not await self._wait_tick_or_stop(next_tick):
                    await self._tick(http)
                    next_tick = _next_tick_after(next_tick, period, loop.time())
        finally:
            self._running = False
            self._stopped.set()
            logger.info("Requester stopped.")

    async def stop(self) -> None:
        """Stop the loop and wait until it has returned.

        An in-flight request is allowed to finish first.

        Raises:
            RequesterNotRunningError: If no loop is running.
        """
        if not self._running:
            raise RequesterNotRunningError("Requester is not running")
        self._stop.set()
        await self._stopped.wait()

    async def _wait_tick_or_stop(self, next_tick: float) -> bool:
        """Wait for the next tick. Returns True if stop was requested instead."""
        if self._stop.is_set():
            return True
        delay = max(0.0, next_tick - asyncio.get_running_loop().time())
        try:
            await asyncio.wait_for(self._stop.wait(), timeout=delay)
        except asyncio.TimeoutError:
            return False
        return True

    def _build_request(self) -> HttpPort:
        request_id = random.randrange(MAX_REQUEST_ID)
        headers = {"Host": self.host_header} if self.host_header else {}
        return HttpPort(
            request_id=request_id,
            url=f"{self.url}?{request_id}",
            timeout_ms=self.timeout,
            headers=headers,
        )

    async def _tick(self, http: HttpClientPort) -> None:
        """Send one request, emit its sample and log error/slow events."""
        req = self._build_request()

        started = time.perf_counter_ns()
        try:
            response = await http.send(req)
        except NETWORK_ERRORS as e:
            elapsed_ns = time.perf_counter_ns() - started
            await put_sample(self.measure_queue, elapsed_ns, self.overflow)
            events.error("error | %6dms | %s", elapsed_ns // NS_PER_MS, _describe(e))
            return
        elapsed_ns = time.perf_counter_ns() - started

        async with response:
            await put_sample(self.measure_queue, elapsed_ns, self.overflow)

            elapsed_ms = elapsed_ns // NS_PER_MS
            if elapsed_ms > SLOW_REQUEST_MS:
                body = await self._read_body(response)
                events.warning("slow | %6dms | %s | %d", elapsed_ms, body, req.request_id)

    @staticmethod
    async def _read_body(response: ClientResponse) -> str:
        try:
            body = await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise BodyReadError(f"Failed to read response body: {_describe(e)}") from e
        return body.decode("utf-8", errors="replace")
