"""Display states shared by the status blocks."""

from enum import Enum


class State(Enum):
    """Visual state of a block, from calm to alarming."""

    IDLE = "idle"
    INFO = "info"
    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"