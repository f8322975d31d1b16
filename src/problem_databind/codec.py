"""Translation of individual problem members to and from their JSON form.

Key Responsibilities:
    - Elide the default ``about:blank`` type URI on write
    - Write a status as its bare integer code and read it back through a
      :class:`~problem_databind.status_index.StatusIndex`
    - Name the members that belong to the exception carrier and never to a
      document

Collaborators:
    - Upstream: :class:`~problem_databind.problem.Problem` validators and
      serializers
    - Downstream: :class:`~problem_databind.status_index.StatusIndex`

Side Effects:
    - None
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .status import Status, StatusType
from .status_index import StatusIndex

DEFAULT_TYPE = "about:blank"

# Validation context keys set by ProblemMapper.
STATUSES_CONTEXT = "statuses"
SUBTYPES_CONTEXT = "subtypes"

DEFAULT_STATUSES = StatusIndex.build(Status)

CARRIER_FIELDS: frozenset[str] = frozenset(
    {
        "message",
        "localizedMessage",
        "localized_message",
        "suppressed",
        "notes",
        "stackTrace",
        "stack_trace",
        "stacktrace",
    }
)


class ProblemTypeConverter:
    """Maps the default type URI to ``None`` so that it is omitted."""

    def convert(self, value: str | None) -> str | None:
        return None if value == DEFAULT_TYPE else value


def write_status(status: StatusType) -> int:
    return status.status_code


def read_status(value: Any, statuses: StatusIndex) -> StatusType:
    """Resolve a decoded status member.

    Integers resolve through ``statuses``; codes the index does not know
    become :class:`~problem_databind.unknown_status.UnknownStatus`.
    """
    if isinstance(value, StatusType):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return statuses.resolve(value)
    raise ValueError(f"Status must be an integer status code, got {type(value).__name__}")


def statuses_from(context: Any) -> StatusIndex:
    if isinstance(context, Mapping):
        statuses = context.get(STATUSES_CONTEXT)
        if statuses is not None:
            return statuses
    return DEFAULT_STATUSES


__all__ = [
    "CARRIER_FIELDS",
    "DEFAULT_STATUSES",
    "DEFAULT_TYPE",
    "ProblemTypeConverter",
    "STATUSES_CONTEXT",
    "SUBTYPES_CONTEXT",
    "read_status",
    "statuses_from",
    "write_status",
]
