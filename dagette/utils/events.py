from __future__ import annotations
"""Ultra-lightweight pub/sub **EventBus** for task lifecycle notifications.

Example
-------
```python
from dagette.utils.events import subscribe, TaskSettled

@subscribe(TaskSettled)
def _on_settled(evt: TaskSettled):
    print(f"{evt.label} ok={evt.ok} in {evt.elapsed:.3f}s")
```
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Type, TypeVar

__all__ = [
    "Event",
    "TaskStarted",
    "TaskSettled",
    "TaskShortCircuited",
    "subscribe",
    "unsubscribe",
    "publish",
]

T = TypeVar("T", bound="Event")
_Handler = Callable[[Any], None]
_REGISTRY: Dict[Type["Event"], List[_Handler]] = {}


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True, kw_only=True)
class Event:  # noqa: D101 – base event
    ts: datetime = field(default_factory=_now)


# --------------------------------------------------------------------------- #
# Concrete events
# --------------------------------------------------------------------------- #
@dataclass(slots=True)
class TaskStarted(Event):
    task_id: str
    label: str


@dataclass(slots=True)
class TaskSettled(Event):
    task_id: str
    label: str
    ok: bool
    elapsed: float  # seconds, including waiting on dependencies


@dataclass(slots=True)
class TaskShortCircuited(Event):
    task_id: str
    label: str
    origin_label: str  # node whose compute failed


# --------------------------------------------------------------------------- #
# API helpers
# --------------------------------------------------------------------------- #

def subscribe(event_type: Type[T]):  # noqa: D401
    """Decorator: register *func* to receive *event_type* events."""

    def _decorator(func: _Handler) -> _Handler:
        _REGISTRY.setdefault(event_type, []).append(func)
        return func

    return _decorator


def unsubscribe(event_type: Type[T], func: _Handler) -> None:
    handlers = _REGISTRY.get(event_type, [])
    if func in handlers:
        handlers.remove(func)


def publish(evt: Event) -> None:  # noqa: D401
    """Publish an event to all registered subscribers."""
    for func in list(_REGISTRY.get(type(evt), [])):
        try:
            func(evt)
        except Exception as e:  # noqa: BLE001
            # A broken subscriber must never break task execution.
            from dagette.utils.logging import log

            log.warning("event handler %s failed: %s", getattr(func, "__name__", func), e)
