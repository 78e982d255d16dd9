from __future__ import annotations
"""Task – a lazy node of the computation DAG.

Building a task has no side effects: it only records a label, the ordered
dependencies and the compute function.  Nothing runs until an
:class:`~dagette.core.executor.Executor` is asked for the node's result.

Compute functions are called as ``fn(h, *values)``::

    user = task("user", [], fetch_user)
    streams = task("streams", [user], lambda h, u: h.ok(list_streams(u.id)))

``values`` follow the order of ``deps``.  ``h.ok(v)`` / ``h.err(e)`` build the
result; ``h.err`` binds *this* node as the failure origin.
"""
import functools
import inspect
import uuid
from enum import Enum
from typing import Any, Callable, Generic, Optional, Sequence, Tuple, TypeVar, TYPE_CHECKING

import anyio

from .result import Err, Ok, Result, ok

if TYPE_CHECKING:  # pragma: no cover
    from .executor import _Execution

T = TypeVar("T")
E = TypeVar("E")

__all__ = ["Task", "TaskState", "TaskHelpers", "task"]


class TaskState(str, Enum):
    UNSTARTED = "unstarted"
    IN_FLIGHT = "in_flight"
    SETTLED = "settled"
    FAULTED = "faulted"  # compute raised and exceptions are not captured


class TaskHelpers(Generic[E]):
    """Result constructors handed to a compute function as first argument."""

    __slots__ = ("_task",)

    def __init__(self, owner: "Task[Any, E]"):
        self._task = owner

    ok = staticmethod(ok)

    def err(self, error: E) -> Err[E]:  # noqa: D401
        return Err(error, self._task)


class _ExecutionCell:
    """Write-once execution state owned by one task.

    ``in_flight`` is assigned once when the first caller asks for the result;
    ``settled`` (or ``fault``) is assigned once when that execution finishes.
    """

    __slots__ = ("in_flight", "settled", "fault")

    def __init__(self):
        self.in_flight: Optional["_Execution"] = None
        self.settled: Optional[Result] = None
        self.fault: Optional[BaseException] = None

    @property
    def state(self) -> TaskState:
        if self.settled is not None:
            return TaskState.SETTLED
        if self.fault is not None:
            return TaskState.FAULTED
        if self.in_flight is not None:
            return TaskState.IN_FLIGHT
        return TaskState.UNSTARTED

    def begin(self, handle: "_Execution") -> None:
        if self.in_flight is not None:
            raise RuntimeError("execution already started")
        self.in_flight = handle

    def settle(self, result: Result) -> None:
        if self.settled is not None or self.fault is not None:
            raise RuntimeError("result already settled")
        self.settled = result

    def fail(self, exc: BaseException) -> None:
        if self.settled is not None or self.fault is not None:
            raise RuntimeError("result already settled")
        self.fault = exc


class Task(Generic[T, E]):  # noqa: D101
    def __init__(
        self,
        label: str,
        deps: Sequence["Task[Any, E]"],
        fn: Callable[..., Any],
    ):
        for dep in deps:
            if not isinstance(dep, Task):
                raise TypeError(
                    f"task '{label}': dependencies must be Task instances, got {type(dep).__name__}"
                )
        self.label = label
        self.id = uuid.uuid4().hex  # labels may repeat, ids never do
        self.deps: Tuple["Task[Any, E]", ...] = tuple(deps)
        self.fn = fn
        self._cell = _ExecutionCell()

    # -------------------------------------------------- #
    @property
    def state(self) -> TaskState:
        return self._cell.state

    @property
    def result(self) -> Optional[Result[T, E]]:
        """Settled result, or ``None`` while unstarted / in flight."""
        return self._cell.settled

    # -------------------------------------------------- #
    async def compute(
        self, values: Sequence[Any], limiter: Optional[anyio.CapacityLimiter] = None
    ) -> Result[T, E]:
        """Invoke *fn* once with the dependency *values*.

        Coroutine functions are awaited on the event loop, plain functions run
        in a worker thread so a blocking call does not stall sibling branches.
        Worker threads are drawn from *limiter*, or anyio's default limiter
        (40 threads) when it is ``None``.
        """
        helpers: TaskHelpers[E] = TaskHelpers(self)
        if inspect.iscoroutinefunction(self.fn):
            out = await self.fn(helpers, *values)
        else:
            out = await anyio.to_thread.run_sync(
                functools.partial(self.fn, helpers, *values), limiter=limiter
            )
            if inspect.isawaitable(out):
                out = await out
        if not isinstance(out, (Ok, Err)):
            raise TypeError(
                f"task '{self.label}' returned {type(out).__name__}; expected Ok or Err"
            )
        return out

    def __repr__(self) -> str:
        return f"Task({self.label!r}, deps={len(self.deps)}, state={self.state.value})"


def task(label: str, deps: Sequence[Task[Any, E]], fn: Callable[..., Any]) -> Task[Any, E]:  # noqa: D401
    """Return a new, not yet executed :class:`Task`."""
    return Task(label, deps, fn)
