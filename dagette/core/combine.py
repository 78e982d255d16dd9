from __future__ import annotations
"""all_of – run several independent tasks as one, like ``asyncio.gather``.

Nothing special happens here: the combined task simply depends on every input
task, so parallelism, fail-fast and memoisation come from the executor.
"""
from typing import Any, Sequence

from .task import Task, TaskHelpers

__all__ = ["all_of"]


def all_of(label: str, tasks: Sequence[Task[Any, Any]]) -> Task[tuple, Any]:  # noqa: D401
    """Return a task whose value is the tuple of *tasks*' values, in order."""

    async def _collect(h: TaskHelpers, *values: Any):
        return h.ok(values)

    return Task(label, tasks, _collect)
