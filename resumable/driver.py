from collections.abc import Callable
from collections.abc import Coroutine
from functools import wraps
from typing import Any

from .computation import SequencingError
from .handle import Handle
from .status import Status


class DriverSuspendedError(SequencingError):
    """The driver's body suspended instead of running to completion."""


class Driver[T](Handle[T]):
    """Run a computation to completion from ordinary, blocking code."""

    def __init__(self, body: Coroutine[Any, Any, T], /, **kwargs: Any):
        super().__init__(body, **kwargs)

    def get(self) -> T:
        """Resume the body once and return the value it returns.

        Everything the body awaits must complete within that one resume.
        """
        computation = self.computation
        if computation.resume() is not Status.COMPLETED:
            raise DriverSuspendedError(f"{computation!r} did not complete.")
        return computation.value()


def driver[**A, T](fn: Callable[A, Coroutine[Any, Any, T]]):
    """Decorate an async function to return a driver."""

    @wraps(fn)
    def wrapper(*args: A.args, **kwargs: A.kwargs) -> Driver[T]:
        return Driver(fn(*args, **kwargs))

    return wrapper
