"""Lightweight configuration package exports."""

from __future__ import annotations

from .settings import (
    DEFAULT_STATUS_SOURCE,
    ProblemSettings,
    get_settings,
    load_settings,
)

__all__ = [
    "DEFAULT_STATUS_SOURCE",
    "ProblemSettings",
    "get_settings",
    "load_settings",
]
