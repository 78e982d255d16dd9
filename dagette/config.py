from __future__ import annotations
"""Process-wide settings for dagette.

Settings are plain in-process state: there are no environment variables.
Change them with :func:`configure` or load a YAML mapping::

    # dagette.yml
    capture_exceptions: false
    log_level: debug

    load_settings_from_yaml("dagette.yml")
"""
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = ["Settings", "get_settings", "configure", "load_settings_from_yaml"]

_LEVELS = ("debug", "info", "warning", "error")


class Settings(BaseModel):  # noqa: D101
    model_config = ConfigDict(frozen=True, extra="forbid")

    # Turn exceptions raised by compute functions into Err(exc, origin=node).
    # When False the exception reaches every caller awaiting the node.
    capture_exceptions: bool = True
    # Level of the "dagette" logger; applied at import and by configure().
    log_level: str = "warning"
    emit_events: bool = True
    # Worker threads available to plain (sync) compute functions per executor.
    # None keeps anyio's default limiter, shared process-wide, of 40 threads.
    max_worker_threads: Optional[int] = Field(default=None, ge=1)

    @field_validator("log_level")
    @classmethod
    def _check_level(cls, v: str) -> str:
        v = v.lower()
        if v not in _LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LEVELS)}")
        return v


_SETTINGS = Settings()


def get_settings() -> Settings:
    return _SETTINGS


def configure(**kwargs: Any) -> Settings:  # noqa: D401
    """Replace the given fields of the global settings and return them."""
    global _SETTINGS
    _SETTINGS = Settings.model_validate({**_SETTINGS.model_dump(), **kwargs})

    from dagette.utils.logging import get  # local import: logging reads settings too

    get(_SETTINGS.log_level)
    return _SETTINGS


def load_settings_from_yaml(path: str | Path) -> Settings:  # noqa: D401
    """Apply the mapping stored in the YAML file at *path*."""
    data = yaml.safe_load(Path(path).read_text()) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping of settings, got {type(data).__name__}")
    return configure(**data)
