import os
import sys
import traceback
from collections.abc import Callable
from collections.abc import Coroutine
from collections.abc import Generator
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from functools import wraps
from typing import Any
from typing import NoReturn
from typing import Self
from typing import cast

from .config import Config
from .config import FaultPolicy
from .event import ComputationClosed
from .event import ComputationCompleted
from .event import ComputationCreated
from .event import ComputationEvent
from .event import ComputationFaulted
from .event import ComputationMoved
from .event import ComputationResumed
from .event import ComputationSuspended
from .event import random_id
from .status import Status

type Body[T] = Generator[T, Any, Any] | Coroutine[Any, Any, T]


class SequencingError(RuntimeError):
    """A computation was driven out of order."""


class ResumedCompletedError(SequencingError):
    """A completed computation cannot be resumed."""


class ResumedRunningError(SequencingError):
    """A running computation cannot be resumed or closed from its own body."""


class EmptyHandleError(SequencingError):
    """The handle no longer owns a computation."""


class NoValueError(SequencingError):
    """The computation has not produced a value yet."""


class Fault(Exception):
    """An exception escaped a resumed body."""


_NOTHING: Any = object()


class Computation[T]:
    """A body that pauses at each yield and continues when resumed.

    The handle is the single owner of the body. It starts unstarted,
    without running any of the body, and each resume runs the body to
    its next suspension point or to its end. The last yielded or returned
    value is kept in a single slot.
    """

    # Defaults for __del__ when __init__ never finished.
    __body = None
    __running = False

    __observer = ContextVar[Callable[[ComputationEvent], None] | None](
        "Computation.observer", default=None
    )

    def __init__(self, body: Body[T], /, *, fault: FaultPolicy | None = None):
        self.id = random_id()
        self.__body: Body[T] | None = body
        self.__status = Status.UNSTARTED
        self.__slot: Any = _NOTHING
        self.__running = False
        self.__fault = fault
        self.__publish(ComputationCreated(computation_id=self.id))

    @classmethod
    @contextmanager
    def observer(cls, observer: Callable[[ComputationEvent], None]) -> Iterator[None]:
        """Send every computation event in this context to the observer."""
        token = cls.__observer.set(observer)
        try:
            yield
        finally:
            cls.__observer.reset(token)

    def __publish(self, event: ComputationEvent) -> None:
        if observer := self.__observer.get():
            observer(event)

    def __repr__(self):
        if self.__body is None:
            return f"<{type(self).__name__} {self.id!r} empty>"
        return f"<{type(self).__name__} {self.id!r} {self.__status.value}>"

    def __copy__(self) -> NoReturn:
        raise TypeError(
            f"{type(self).__name__} cannot be copied, use take() to move it."
        )

    def __deepcopy__(self, memo: dict[int, Any]) -> NoReturn:
        self.__copy__()

    def __reduce__(self) -> NoReturn:
        self.__copy__()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __owned(self) -> Body[T]:
        if self.__body is None:
            raise EmptyHandleError(f"{self!r} has been closed or moved.")
        return self.__body

    @property
    def status(self) -> Status:
        self.__owned()
        return self.__status

    def empty(self) -> bool:
        return self.__body is None

    def done(self) -> bool:
        return self.status is Status.COMPLETED

    def value(self) -> T:
        """Get the value most recently deposited in the slot."""
        self.__owned()
        if self.__slot is _NOTHING:
            raise NoValueError(f"{self!r} has not produced a value.")
        return cast(T, self.__slot)

    def resume(self, value: Any = None) -> Status:
        """Run the body until it suspends again or finishes.

        The value is sent in as the result of the suspension point the
        body is paused at. An unstarted body has no such point, so it can
        only be resumed with None.
        """
        body = self.__owned()
        if self.__status is Status.COMPLETED:
            raise ResumedCompletedError(f"{self!r} cannot be resumed.")
        if self.__running:
            raise ResumedRunningError(f"{self!r} is already running.")
        if self.__status is Status.UNSTARTED and value is not None:
            raise SequencingError(f"{self!r} must first be resumed with None.")

        self.__publish(ComputationResumed(computation_id=self.id))
        self.__running = True
        try:
            produced = body.send(value)
        except StopIteration as stop:
            self.__slot = stop.value
            self.__status = Status.COMPLETED
            self.__publish(
                ComputationCompleted(computation_id=self.id, value=stop.value)
            )
        except (Fault, SequencingError) as exception:
            # Already classified by a nested computation.
            self.__status = Status.COMPLETED
            self.__publish(
                ComputationFaulted(computation_id=self.id, exception=exception)
            )
            raise
        except Exception as exception:
            self.__status = Status.COMPLETED
            self.__publish(
                ComputationFaulted(computation_id=self.id, exception=exception)
            )
            self.__fail(exception)
        else:
            self.__slot = produced
            self.__status = Status.SUSPENDED
            self.__publish(
                ComputationSuspended(computation_id=self.id, value=produced)
            )
        finally:
            self.__running = False
        return self.__status

    def __fail(self, exception: Exception) -> NoReturn:
        policy = self.__fault or Config.load().fault
        if policy is FaultPolicy.RAISE:
            raise Fault(f"{self!r} raised {exception!r}") from exception

        print(f"Unhandled exception in {self!r}, terminating.", file=sys.stderr)
        traceback.print_exception(exception, file=sys.stderr)
        sys.stderr.flush()
        os.abort()

    def take(self) -> "Computation[T]":
        """Move the body into a new handle, leaving this one empty."""
        body = self.__owned()
        if self.__running:
            raise ResumedRunningError(f"{self!r} cannot be moved while running.")
        moved = Computation[T](body, fault=self.__fault)
        moved.__status = self.__status
        moved.__slot = self.__slot
        self.__body = None
        self.__slot = _NOTHING
        self.__publish(ComputationMoved(computation_id=self.id, target_id=moved.id))
        return moved

    def close(self) -> None:
        """Tear down the body, whatever state it is in.

        Closing an empty handle does nothing.
        """
        if self.__body is None:
            return
        if self.__running:
            raise ResumedRunningError(f"{self!r} cannot be closed while running.")
        body, self.__body = self.__body, None
        self.__slot = _NOTHING
        try:
            body.close()
        except Exception as exception:
            # The body ran code while being torn down, and that code failed.
            self.__publish(
                ComputationFaulted(computation_id=self.id, exception=exception)
            )
            self.__fail(exception)
        finally:
            self.__publish(ComputationClosed(computation_id=self.id))

    def __del__(self):
        if self.__body is not None and not self.__running:
            self.close()


def resumable[**A, T](fn: Callable[A, Body[T]]):
    """Decorate a generator or async function to return a computation."""

    @wraps(fn)
    def wrapper(*args: A.args, **kwargs: A.kwargs) -> Computation[T]:
        return Computation(fn(*args, **kwargs))

    return wrapper
