from __future__ import annotations
"""Exceptions raised by dagette itself.

Task failures are *values* (:class:`~dagette.core.result.Err`), not
exceptions.  The classes below only surface at the edges: when a caller
unwraps a failed result or misuses the executor.
"""
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from dagette.core.task import Task

__all__ = ["DagetteError", "TaskFailed", "ExecutorNotRunning", "ExecutionCancelled"]


class DagetteError(Exception):
    """Base class for every exception raised by dagette."""


class TaskFailed(DagetteError):
    """Raised by :meth:`Err.unwrap`; keeps the payload and the failing node."""

    def __init__(self, error: Any, origin: "Task"):
        self.error = error
        self.origin = origin
        super().__init__(f"task '{origin.label}' failed: {error!r}")


class ExecutorNotRunning(DagetteError):
    """The executor was used outside its ``async with`` block."""


class ExecutionCancelled(DagetteError):
    """The executor running a task was cancelled before the task settled.

    Recorded as the task's fault so later callers fail at once instead of
    waiting on an execution that will never finish.
    """

    def __init__(self, label: str):
        self.label = label
        super().__init__(f"task '{label}' was cancelled before it settled")
