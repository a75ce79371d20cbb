import copy
import gc

import pytest

from .computation import Computation
from .computation import EmptyHandleError
from .computation import Fault
from .event import ComputationResumed
from .status import Status
from .task import NotReadyError
from .task import Task
from .task import task


def drive(awaitable):
    """Await from a computation resumed once, returning what it awaited."""

    async def body():
        return await awaitable

    computation = Computation(body())
    assert computation.resume() is Status.COMPLETED
    return computation.value()


class TestTask:
    def test_creation_runs_nothing(self):
        started = []

        @task
        async def body():
            started.append(True)
            return 1

        with body() as pending:
            assert started == []
            assert not pending.ready()

    def test_await_runs_to_completion(self):
        @task
        async def double(value: int):
            return value * 2

        doubled = double(21)
        assert drive(doubled) == 42
        assert doubled.ready()
        assert doubled.result() == 42

    def test_result_before_ready(self):
        @task
        async def body():
            return 1

        with body() as pending:
            with pytest.raises(NotReadyError):
                pending.result()

    def test_await_is_idempotent(self, events):
        runs = []

        @task
        async def body():
            runs.append(True)
            return "cached"

        once = body()

        async def await_three_times():
            return [await once, await once, await once]

        computation = Computation(await_three_times())
        computation.resume()

        assert computation.value() == ["cached", "cached", "cached"]
        assert once.result() == "cached"
        assert drive(once) == "cached"
        assert runs == [True]
        resumes = [
            e
            for e in events
            if isinstance(e, ComputationResumed)
            and e.computation_id == once.computation.id
        ]
        assert len(resumes) == 1

    def test_nested_tasks(self):
        @task
        async def leaf():
            return 1

        @task
        async def branch():
            return await leaf() + await leaf()

        assert drive(branch()) == 2

    def test_generator_body_is_driven_until_complete(self):
        def body():
            yield "partial"
            yield "partial"
            return "complete"

        assert drive(Task(body())) == "complete"

    def test_fault_reaches_the_awaiting_body(self):
        @task
        async def broken():
            raise ValueError("boom")

        with pytest.raises(Fault) as excinfo:
            drive(broken())
        assert isinstance(excinfo.value.__cause__, ValueError)

    def test_take(self):
        @task
        async def body():
            return 5

        source = body()
        moved = source.take()

        assert isinstance(moved, Task)
        assert drive(moved) == 5
        with pytest.raises(EmptyHandleError):
            source.ready()

    def test_copying_is_rejected(self):
        @task
        async def body():
            return 1

        with body() as pending:
            with pytest.raises(TypeError):
                copy.deepcopy(pending)

    def test_close_never_awaited_task(self, recwarn):
        @task
        async def body():
            return 1

        pending = body()
        pending.close()
        pending.close()

        assert pending.computation.empty()
        assert not [w for w in recwarn if issubclass(w.category, RuntimeWarning)]

    def test_dropping_never_awaited_task(self, recwarn):
        released = []

        @task
        async def body():
            try:
                return 1
            finally:
                released.append(True)

        body()
        gc.collect()

        assert released == []
        assert not [w for w in recwarn if issubclass(w.category, RuntimeWarning)]
