from collections.abc import Callable
from collections.abc import Generator
from collections.abc import Iterator
from functools import wraps
from typing import Any

from .computation import SequencingError
from .handle import Handle


class FinishedCursorError(SequencingError):
    """A finished cursor has no current value and cannot advance."""


class Cursor[T](Iterator[T]):
    """Pull values from a producer one resume at a time.

    Cursors compare equal when they are both finished or both unfinished,
    regardless of position, so iterating until a cursor equals end() is
    well defined but cursors cannot locate positions.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, producer: "Producer[T]", /, *, done: bool):
        self.__producer = producer
        self.__done = done
        self.__fresh = False
        if not done:
            self.__step()

    def __repr__(self):
        state = "done" if self.__done else "active"
        return f"<{type(self).__name__} {state} of {self.__producer!r}>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cursor):
            return NotImplemented
        return self.__done == other.__done

    def __step(self) -> None:
        computation = self.__producer.computation
        computation.resume()
        self.__done = computation.done()
        self.__fresh = True

    @property
    def done(self) -> bool:
        return self.__done

    def has_next(self) -> bool:
        return not self.__done

    def advance(self) -> None:
        if self.__done:
            raise FinishedCursorError(f"{self!r} cannot advance.")
        self.__step()

    def current(self) -> T:
        if self.__done:
            raise FinishedCursorError(f"{self!r} has no current value.")
        return self.__producer.computation.value()

    def __next__(self) -> T:
        # The cursor already holds an element nobody has pulled yet
        # right after it was constructed or advanced.
        if self.__fresh:
            self.__fresh = False
        elif not self.__done:
            self.__step()
            self.__fresh = False
        if self.__done:
            raise StopIteration
        return self.current()


class Producer[T](Handle[T]):
    """A lazy, single-pass sequence that suspends after each value.

    Nothing bounds the sequence, so consumers decide when to stop.
    Iterating again continues where the previous iteration stopped.
    """

    def __init__(self, body: Generator[T, Any, Any], /, **kwargs: Any):
        super().__init__(body, **kwargs)

    def begin(self) -> Cursor[T]:
        """Get a cursor already advanced to the next element."""
        return Cursor(self, done=self.computation.done())

    def end(self) -> Cursor[T]:
        return Cursor(self, done=True)

    def __iter__(self) -> Cursor[T]:
        return self.begin()


def producer[**A, T](fn: Callable[A, Generator[T, Any, Any]]):
    """Decorate a generator function to return a producer."""

    @wraps(fn)
    def wrapper(*args: A.args, **kwargs: A.kwargs) -> Producer[T]:
        return Producer(fn(*args, **kwargs))

    return wrapper
