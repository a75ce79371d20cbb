from collections.abc import Generator

from .driver import driver
from .producer import producer
from .task import task


@producer
def count(start: int = 1) -> Generator[int, None, None]:
    """Yield consecutive integers, forever."""
    value = start
    while True:
        yield value
        value += 1


@task
async def one() -> int:
    return 1


@driver
async def show() -> int:
    # Driver bodies can't be folded into a plain function: they await.
    value = await one()
    print(value)
    return 0
