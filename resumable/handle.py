from typing import Any
from typing import NoReturn
from typing import Self

from .computation import Body
from .computation import Computation
from .config import FaultPolicy


class Handle[T]:
    """Base class for the single owner of a computation.

    Copying a handle would give two owners the right to resume the same
    body, so handles can only be moved with take().
    """

    def __init__(self, body: Body[T], /, *, fault: FaultPolicy | None = None):
        self.__computation = Computation(body, fault=fault)

    @classmethod
    def adopt(cls, computation: Computation[T], /) -> Self:
        """Take ownership of an existing computation."""
        handle = cls.__new__(cls)
        handle.__computation = computation.take()
        return handle

    def __repr__(self):
        return f"<{type(self).__name__} {self.__computation!r}>"

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

    @property
    def computation(self) -> Computation[T]:
        return self.__computation

    def take(self) -> Self:
        """Move ownership to a new handle, leaving this one empty."""
        return type(self).adopt(self.__computation)

    def close(self) -> None:
        self.__computation.close()
