"""Reverse lookup from numeric status codes to canonical status values."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from .exceptions import DuplicateStatusCodeError
from .status import StatusType
from .unknown_status import UnknownStatus

StatusSource = Iterable[StatusType]
"""Anything yielding status values; an ``Enum`` of statuses qualifies."""


class StatusIndex(Mapping[int, StatusType]):
    """Read-only mapping of status code to the status value that defines it."""

    __slots__ = ("_statuses",)

    def __init__(self, statuses: Mapping[int, StatusType] | None = None) -> None:
        self._statuses: Mapping[int, StatusType] = MappingProxyType(dict(statuses or {}))

    @classmethod
    def build(cls, *sources: StatusSource) -> StatusIndex:
        """Index every status of ``sources`` in order.

        Raises:
            DuplicateStatusCodeError: If two statuses share a code, whether
                within one source or across sources.
        """
        index: dict[int, StatusType] = {}
        for source in sources:
            for status in source:
                if status.status_code in index:
                    raise DuplicateStatusCodeError(status.status_code)
                index[status.status_code] = status
        return cls(index)

    def __getitem__(self, status_code: int) -> StatusType:
        return self._statuses[status_code]

    def __iter__(self) -> Iterator[int]:
        return iter(self._statuses)

    def __len__(self) -> int:
        return len(self._statuses)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self)} statuses)"

    def resolve(self, status_code: int) -> StatusType:
        """Return the indexed status for ``status_code`` or a fresh :class:`UnknownStatus`."""
        status = self._statuses.get(status_code)
        return status if status is not None else UnknownStatus(status_code)


__all__ = ["StatusIndex", "StatusSource"]
