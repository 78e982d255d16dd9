from __future__ import annotations
"""Executor – lazy, memoised, fail-fast evaluation of a task DAG.

Keeps the promise-like semantics callers expect from a task graph while
staying inside anyio's structured concurrency:

* every dependency of a node is launched together in the executor's task
  group, so independent branches overlap;
* a node settles at most once; later callers read the cached result and
  concurrent callers await the same in-flight handle;
* the first failing dependency decides the outcome of its dependents
  immediately.  Slower siblings are *not* cancelled; they finish in the
  background and settle their own cache.  Leaving the ``async with`` block
  waits for them.

Example::

    async with Executor() as ex:
        result = await ex.execute(root)
"""
from contextlib import AsyncExitStack
from time import perf_counter
from typing import Any, List, Optional, Sequence, Union

import anyio
from anyio.abc import TaskGroup

from dagette.config import Settings, get_settings
from dagette.errors import ExecutionCancelled, ExecutorNotRunning
from dagette.utils.events import publish, TaskShortCircuited, TaskSettled, TaskStarted, Event
from dagette.utils.logging import log
from .result import Err, Ok, Result
from .task import Task

__all__ = ["Executor", "run"]

_Outcome = Union[Ok[tuple], Err[Any]]


class _Execution:
    """In-flight handle shared by every caller waiting on one node."""

    __slots__ = ("_done", "result", "fault")

    def __init__(self):
        self._done = anyio.Event()
        self.result: Optional[Result] = None
        self.fault: Optional[BaseException] = None

    def finish(self, result: Result) -> None:
        self.result = result
        self._done.set()

    @property
    def done(self) -> bool:
        return self._done.is_set()

    def crash(self, exc: BaseException) -> None:
        self.fault = exc
        self._done.set()

    async def wait(self) -> Result:
        await self._done.wait()
        if self.fault is not None:
            raise self.fault
        return self.result  # type: ignore[return-value]


class _Race:
    """Single-assignment outcome slot written by the first observer to finish."""

    __slots__ = ("_done", "outcome", "fault")

    def __init__(self):
        self._done = anyio.Event()
        self.outcome: Optional[_Outcome] = None
        self.fault: Optional[BaseException] = None

    def publish(self, outcome: _Outcome) -> None:
        if self._done.is_set():
            return
        self.outcome = outcome
        self._done.set()

    def publish_fault(self, exc: BaseException) -> None:
        if self._done.is_set():
            return
        self.fault = exc
        self._done.set()

    async def wait(self) -> _Outcome:
        await self._done.wait()
        if self.fault is not None:
            raise self.fault
        return self.outcome  # type: ignore[return-value]


class Executor:  # noqa: D101
    def __init__(self, settings: Settings | None = None):
        self._settings = settings
        self._stack: AsyncExitStack | None = None
        self._tg: TaskGroup | None = None
        self._limiter: anyio.CapacityLimiter | None = None
        # executions started by this executor, swept on exit
        self._launched: List[tuple[Task, _Execution]] = []

    @property
    def settings(self) -> Settings:
        return self._settings if self._settings is not None else get_settings()

    # ------------------------------------------------------------------ #
    async def __aenter__(self) -> "Executor":
        if self._tg is not None:
            raise RuntimeError("Executor is already running")
        limit = self.settings.max_worker_threads
        self._limiter = anyio.CapacityLimiter(limit) if limit is not None else None
        self._launched = []
        self._stack = AsyncExitStack()
        self._tg = await self._stack.enter_async_context(anyio.create_task_group())
        return self

    async def __aexit__(self, *exc_info) -> Optional[bool]:
        stack, self._stack = self._stack, None
        try:
            return await stack.__aexit__(*exc_info)  # type: ignore[union-attr]
        finally:
            # Drivers cancelled before their first step never reach _drive's handler.
            for node, handle in self._launched:
                if not handle.done:
                    self._abandon(node, handle)
            self._launched = []
            self._tg = None
            self._limiter = None

    # ------------------------------------------------------------------ #
    async def execute(self, node: Task) -> Result:
        """Return the settled result of *node*, running it at most once."""
        cell = node._cell
        if cell.settled is not None:
            return cell.settled
        if cell.fault is not None:
            raise cell.fault
        return await self._launch(node).wait()

    # ------------------------------------------------------------------ #
    def _launch(self, node: Task) -> _Execution:
        """Return *node*'s in-flight handle, starting the execution if needed.

        No suspension happens between the check and the assignment, so two
        callers can never both start the same node.
        """
        cell = node._cell
        if cell.in_flight is None:
            if self._tg is None:
                raise ExecutorNotRunning("use 'async with Executor() as ex' before executing tasks")
            handle = _Execution()
            cell.begin(handle)
            self._launched.append((node, handle))
            self._tg.start_soon(self._drive, node, handle, name=f"dagette:{node.label}")
        return cell.in_flight  # type: ignore[return-value]

    async def _drive(self, node: Task, handle: _Execution) -> None:
        started = perf_counter()
        log.debug("task '%s' started (%d deps)", node.label, len(node.deps))
        self._emit(TaskStarted(task_id=node.id, label=node.label))
        try:
            result = await self._resolve(node)
        except Exception as exc:  # noqa: BLE001 – stored and re-raised to every waiter
            log.error("task '%s' faulted: %r", node.label, exc)
            node._cell.fail(exc)
            handle.crash(exc)
            return
        except anyio.get_cancelled_exc_class():
            self._abandon(node, handle)
            raise

        node._cell.settle(result)
        handle.finish(result)
        elapsed = perf_counter() - started
        log.debug("task '%s' settled ok=%s in %.3fs", node.label, result.ok, elapsed)
        self._emit(TaskSettled(task_id=node.id, label=node.label, ok=result.ok, elapsed=elapsed))

    async def _resolve(self, node: Task) -> Result:
        if not node.deps:
            return await self._compute(node, ())

        # A failure that is already known decides the outcome without new work.
        for dep in node.deps:
            if dep._cell.fault is not None:
                raise dep._cell.fault
            if isinstance(dep._cell.settled, Err):
                self._short_circuited(node, dep._cell.settled)
                return dep._cell.settled

        handles = [self._launch(dep) for dep in node.deps]
        race = _Race()
        for handle in handles:
            self._tg.start_soon(self._observe, handle, handles, race)  # type: ignore[union-attr]

        outcome = await race.wait()
        if isinstance(outcome, Err):
            self._short_circuited(node, outcome)
            return outcome
        return await self._compute(node, outcome.value)

    async def _observe(self, handle: _Execution, handles: List[_Execution], race: _Race) -> None:
        """Report *handle*'s failure at once, or the full value set once all settle."""
        try:
            result = await handle.wait()
            if not result.ok:
                race.publish(result)  # type: ignore[arg-type]
                return
            results = [await h.wait() for h in handles]
        except Exception as exc:  # noqa: BLE001 – forwarded to the racing node
            race.publish_fault(exc)
            return

        failed = next((r for r in results if not r.ok), None)
        if failed is not None:
            race.publish(failed)  # type: ignore[arg-type]
        else:
            race.publish(Ok(tuple(r.value for r in results)))  # type: ignore[union-attr]

    async def _compute(self, node: Task, values: Sequence[Any]) -> Result:
        try:
            return await node.compute(values, limiter=self._limiter)
        except Exception as exc:
            if not self.settings.capture_exceptions:
                raise
            log.warning("task '%s' raised %r; recorded as Err", node.label, exc, exc_info=True)
            return Err(exc, node)

    def _abandon(self, node: Task, handle: _Execution) -> None:
        log.warning("task '%s' cancelled before it settled", node.label)
        exc = ExecutionCancelled(node.label)
        node._cell.fail(exc)
        handle.crash(exc)

    # ------------------------------------------------------------------ #
    def _short_circuited(self, node: Task, failure: Err) -> None:
        log.debug("task '%s' short-circuited by failure in '%s'", node.label, failure.origin.label)
        self._emit(
            TaskShortCircuited(task_id=node.id, label=node.label, origin_label=failure.origin.label)
        )

    def _emit(self, evt: Event) -> None:
        if self.settings.emit_events:
            publish(evt)


async def run(node: Task, settings: Settings | None = None) -> Result:  # noqa: D401
    """Execute *node* in a throw-away executor.

    The result is decided as early as with :meth:`Executor.execute`, but this
    coroutine only returns once every dependency launched on the way (including
    ones whose value was not needed) has settled.
    """
    fault: Exception | None = None
    async with Executor(settings) as ex:
        try:
            result = await ex.execute(node)
        except Exception as exc:  # noqa: BLE001 – re-raised once stragglers settle
            fault = exc
    if fault is not None:
        raise fault
    return result
