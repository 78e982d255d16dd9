from __future__ import annotations
"""Ok / Err tagged union returned by every task.

Failures travel as values through the graph; an :class:`Err` always remembers
the node whose own compute produced it (*origin*), so a failure surfacing
three levels up still points at the culprit.
"""
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union, TYPE_CHECKING

from dagette.errors import TaskFailed

if TYPE_CHECKING:  # pragma: no cover
    from .task import Task

T = TypeVar("T")
E = TypeVar("E")

__all__ = ["Ok", "Err", "Result", "ok"]


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):  # noqa: D101
    value: T

    # ------------------------------------------------------------------ #
    @property
    def ok(self) -> bool:  # noqa: D401
        return True

    def unwrap(self) -> T:  # noqa: D401
        return self.value


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):  # noqa: D101
    error: E
    origin: "Task[Any, E]"

    # ------------------------------------------------------------------ #
    @property
    def ok(self) -> bool:  # noqa: D401
        return False

    def unwrap(self):  # noqa: D401
        """Raise :class:`TaskFailed` carrying *error* and *origin* (Rust-like)."""
        raise TaskFailed(self.error, self.origin)

    def __repr__(self) -> str:
        # origin repr would recurse into the whole graph
        return f"Err(error={self.error!r}, origin={self.origin.label!r})"


Result = Union[Ok[T], Err[E]]


def ok(value: T) -> Ok[T]:  # noqa: D401
    """Return a success result wrapping *value*."""
    return Ok(value)
