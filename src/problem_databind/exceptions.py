"""Errors raised while indexing status enumerations."""

from __future__ import annotations


class DuplicateStatusCodeError(ValueError):
    """Raised when two indexed statuses share a status code."""

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__("Duplicate status codes are not allowed")


__all__ = ["DuplicateStatusCodeError"]
