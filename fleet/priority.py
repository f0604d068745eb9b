"""Priority enum for maintenance urgency levels."""

from enum import Enum


class Priority(Enum):
    """Maintenance priority bands. Lower value = more urgent."""

    CRITICAL = 1
    HIGH = 2
    MEDIUM = 3
    LOW = 4
