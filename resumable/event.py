import secrets
import string
from dataclasses import dataclass
from dataclasses import field
from datetime import UTC
from datetime import datetime
from typing import Any

B36_ALPHABET = string.ascii_lowercase + string.digits


def random_id(length: int = 10) -> str:
    return "".join(secrets.choice(B36_ALPHABET) for _ in range(length))


@dataclass(eq=False, kw_only=True)
class Event:
    event_id: str = field(default_factory=random_id)
    timestamp: datetime = field(default_factory=lambda: datetime.now(tz=UTC))

    def __repr__(self):
        return f"<{type(self).__name__} {self.event_id}>"


@dataclass(eq=False, kw_only=True)
class ComputationEvent(Event):
    computation_id: str

    def __repr__(self):
        return f"<{type(self).__name__} {self.computation_id}>"


@dataclass(eq=False, kw_only=True, repr=False)
class ComputationCreated(ComputationEvent): ...


@dataclass(eq=False, kw_only=True, repr=False)
class ComputationResumed(ComputationEvent): ...


@dataclass(eq=False, kw_only=True)
class ComputationSuspended(ComputationEvent):
    value: Any

    def __repr__(self):
        return f"<{type(self).__name__} {self.computation_id} value={self.value!r}>"


@dataclass(eq=False, kw_only=True)
class ComputationCompleted(ComputationEvent):
    value: Any

    def __repr__(self):
        return f"<{type(self).__name__} {self.computation_id} value={self.value!r}>"


@dataclass(eq=False, kw_only=True)
class ComputationFaulted(ComputationEvent):
    exception: Exception = field(repr=False)

    def __repr__(self):
        return f"<{type(self).__name__} {self.computation_id} {self.exception!r}>"


@dataclass(eq=False, kw_only=True)
class ComputationMoved(ComputationEvent):
    target_id: str

    def __repr__(self):
        return f"<{type(self).__name__} {self.computation_id} -> {self.target_id}>"


@dataclass(eq=False, kw_only=True, repr=False)
class ComputationClosed(ComputationEvent): ...
