from __future__ import annotations
"""Read-only traversals of a task graph, for debugging and visualisation.

Both walks are depth-first and key their visited set on ``Task.id`` so that
shared dependencies are handled once even when labels repeat.
"""
from typing import List, Set, Tuple

from .task import Task

__all__ = ["trace", "edges"]


def trace(root: Task) -> List[str]:  # noqa: D401
    """Return labels reachable from *root*, dependencies before dependents.

    >>> trace(combine)
    ['fetch-user', 'fetch-streams', 'combine']
    """
    visited: Set[str] = set()
    path: List[str] = []

    def _visit(t: Task):
        if t.id in visited:
            return
        visited.add(t.id)
        for dep in t.deps:
            _visit(dep)
        path.append(t.label)

    _visit(root)
    return path


def edges(root: Task) -> List[Tuple[str, str]]:  # noqa: D401
    """Return ``(dependency, dependent)`` label pairs reachable from *root*."""
    visited: Set[str] = set()
    es: List[Tuple[str, str]] = []

    def _visit(t: Task):
        if t.id in visited:
            return
        visited.add(t.id)
        for dep in t.deps:
            es.append((dep.label, t.label))
            _visit(dep)

    _visit(root)
    return es
