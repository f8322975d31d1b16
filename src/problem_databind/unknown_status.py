"""Placeholder status for codes no indexed enumeration defines."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UnknownStatus:
    status_code: int

    @property
    def reason_phrase(self) -> str:
        return "Unknown"

    def __str__(self) -> str:
        return f"{self.status_code} {self.reason_phrase}"


__all__ = ["UnknownStatus"]
