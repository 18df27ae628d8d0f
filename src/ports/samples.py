"""Sample delivery port definition (policy enum)."""

from enum import Enum

__all__ = ["SampleOverflow"]


class SampleOverflow(str, Enum):
    """What to do when the sample queue is full."""

    BLOCK = "block"
    DROP_OLDEST = "drop_oldest"
