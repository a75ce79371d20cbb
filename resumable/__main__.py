import sys
from contextlib import AbstractContextManager
from contextlib import nullcontext
from typing import Annotated

from typer import Exit
from typer import Option
from typer import Typer

from .computation import Computation
from .event import ComputationEvent
from .samples import count
from .samples import show

app = Typer()

TraceOption = Annotated[
    bool,
    Option(help="Print computation lifecycle events to stderr."),
]


def print_event(event: ComputationEvent) -> None:
    print(repr(event), file=sys.stderr)


def tracing(trace: bool) -> AbstractContextManager[None]:
    return Computation.observer(print_event) if trace else nullcontext()


@app.command()
def awaiter(trace: TraceOption = False):
    """Await a task from a synchronous driver.

    The driver prints the value of the task it awaited, and its own
    return value becomes the exit status.
    """
    with tracing(trace):
        status = show().get()
    raise Exit(code=status)


@app.command()
def generator(
    stop_at: Annotated[
        int,
        Option(help="Stop after printing the first value at least this large."),
    ] = 21,
    trace: TraceOption = False,
):
    """Print consecutive integers pulled from a lazy producer."""
    with tracing(trace), count() as numbers:
        for value in numbers:
            print(value)
            if value >= stop_at:
                break


if __name__ == "__main__":
    app()
