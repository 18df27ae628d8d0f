"""Exceptions raised by the requester core."""

__all__ = [
    "RequesterError",
    "RequestBuildError",
    "ResolveOverrideError",
    "BodyReadError",
    "RequesterNotRunningError",
]


class RequesterError(Exception):
    """Base class for requester failures surfaced to the caller."""


class RequestBuildError(RequesterError):
    """Request could not be built from the requester configuration.

    Raised before the loop starts (bad URL, non-positive interval).
    """


class ResolveOverrideError(RequestBuildError):
    """Resolve override is not of the form ``host:port:ip``."""


class BodyReadError(RequesterError):
    """Body of a slow response could not be read."""


class RequesterNotRunningError(RequesterError):
    """stop() was called while no loop is running."""
