"""Fluent builder for :class:`~problem_databind.problem.DefaultProblem`."""

from __future__ import annotations

from typing import Any

from .codec import CARRIER_FIELDS
from .problem import DefaultProblem, Problem
from .status import StatusType

# Standard members plus names the wire format never carries as parameters.
RESERVED_PROPERTIES = frozenset({"type", "title", "status", "detail", "instance", "cause"}) | CARRIER_FIELDS


class ProblemBuilder:
    def __init__(self) -> None:
        self._type: str | None = None
        self._title: str | None = None
        self._status: StatusType | None = None
        self._detail: str | None = None
        self._instance: str | None = None
        self._cause: Problem | None = None
        self._parameters: dict[str, Any] = {}

    def with_type(self, type: str | None) -> ProblemBuilder:
        self._type = type
        return self

    def with_title(self, title: str | None) -> ProblemBuilder:
        self._title = title
        return self

    def with_status(self, status: StatusType | None) -> ProblemBuilder:
        self._status = status
        return self

    def with_detail(self, detail: str | None) -> ProblemBuilder:
        self._detail = detail
        return self

    def with_instance(self, instance: str | None) -> ProblemBuilder:
        self._instance = instance
        return self

    def with_cause(self, cause: Problem | None) -> ProblemBuilder:
        self._cause = cause
        return self

    def with_parameter(self, key: str, value: Any) -> ProblemBuilder:
        """Add an extension member.

        Raises:
            ValueError: If ``key`` names a standard member or a member of the
                exception carrier.
        """
        if key in RESERVED_PROPERTIES:
            raise ValueError(f"Property {key} is reserved")
        self._parameters[key] = value
        return self

    def build(self) -> DefaultProblem:
        return DefaultProblem(
            type=self._type,
            title=self._title,
            status=self._status,
            detail=self._detail,
            instance=self._instance,
            cause=self._cause,
            **self._parameters,
        )


__all__ = ["RESERVED_PROPERTIES", "ProblemBuilder"]
