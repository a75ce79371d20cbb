from collections.abc import Awaitable
from collections.abc import Callable
from collections.abc import Coroutine
from collections.abc import Generator
from functools import wraps
from typing import Any

from .computation import SequencingError
from .handle import Handle


class NotReadyError(SequencingError):
    """The task has not completed yet."""


class Task[T](Handle[T], Awaitable[T]):
    """A single value computed lazily, the first time it is awaited.

    Awaiting a task that is not ready resumes it until it completes and
    then continues the awaiting body straight away, on the same stack.
    Awaiting it again returns the same value without resuming.
    """

    def __init__(self, body: Coroutine[Any, Any, T], /, **kwargs: Any):
        super().__init__(body, **kwargs)

    def ready(self) -> bool:
        return self.computation.done()

    def result(self) -> T:
        if not self.ready():
            raise NotReadyError(f"{self!r} has not completed.")
        return self.computation.value()

    def __await__(self) -> Generator[Any, Any, T]:
        computation = self.computation
        while not computation.done():
            computation.resume()
        yield from ()
        return self.result()


def task[**A, T](fn: Callable[A, Coroutine[Any, Any, T]]):
    """Decorate an async function to return a task."""

    @wraps(fn)
    def wrapper(*args: A.args, **kwargs: A.kwargs) -> Task[T]:
        return Task(fn(*args, **kwargs))

    return wrapper
