from enum import Enum


class Status(Enum):
    """Where a computation is in its lifecycle."""

    UNSTARTED = "unstarted"
    SUSPENDED = "suspended"
    COMPLETED = "completed"
