"""Composition root registering problem support with a :class:`ProblemMapper`.

Key Responsibilities:
    - Index the configured status enumerations once, failing fast on
      duplicate codes
    - Carry the stack-trace setting that decides whether raised problems
      are written with a ``stacktrace`` member

Collaborators:
    - Upstream: Applications pass a :class:`ProblemModule` to
      :class:`~problem_databind.mapper.ProblemMapper`
    - Downstream: :class:`~problem_databind.status_index.StatusIndex`

Side Effects:
    - None beyond configuring the mapper it is registered with

Thread Safety:
    - Immutable after construction; one instance may back many mappers
"""

from __future__ import annotations

import importlib
from collections.abc import Hashable
from importlib import metadata
from typing import TYPE_CHECKING

from .status import Status
from .status_index import StatusIndex, StatusSource

if TYPE_CHECKING:
    from .config.settings import ProblemSettings

DISTRIBUTION = "problem-databind"
UNKNOWN_VERSION = "0.0.0"


def load_status_source(path: str) -> StatusSource:
    """Import a status source given as ``"package.module:attribute"``."""
    module_name, _, attribute = path.partition(":")
    if not module_name or not attribute:
        raise ValueError(f"Status source '{path}' must look like 'package.module:attribute'")
    module = importlib.import_module(module_name)
    try:
        return getattr(module, attribute)
    except AttributeError as exc:
        raise ValueError(f"Status source '{path}' does not exist") from exc


class ProblemModule:
    """Configures how a :class:`ProblemMapper` reads and writes problems.

    Args:
        *sources: Status enumerations whose values decoded status codes map
            back to. Defaults to :class:`~problem_databind.status.Status`.

    Raises:
        DuplicateStatusCodeError: If two statuses across ``sources`` share a
            status code.

    Example:
        >>> mapper = ProblemMapper(modules=[ProblemModule().with_stack_traces()])
    """

    __slots__ = ("_stack_traces", "_statuses")

    def __init__(self, *sources: StatusSource) -> None:
        self._stack_traces = False
        self._statuses = StatusIndex.build(*(sources or (Status,)))

    @classmethod
    def _create(cls, stack_traces: bool, statuses: StatusIndex) -> ProblemModule:
        module = cls.__new__(cls)
        module._stack_traces = stack_traces
        module._statuses = statuses
        return module

    @classmethod
    def from_settings(cls, settings: ProblemSettings) -> ProblemModule:
        sources = [load_status_source(path) for path in settings.status_sources]
        return cls(*sources).with_stack_traces(settings.stack_traces)

    @property
    def stack_traces(self) -> bool:
        return self._stack_traces

    @property
    def statuses(self) -> StatusIndex:
        return self._statuses

    @property
    def module_name(self) -> str:
        return type(self).__name__

    def version(self) -> str:
        try:
            return metadata.version(DISTRIBUTION)
        except metadata.PackageNotFoundError:
            return UNKNOWN_VERSION

    @property
    def registration_id(self) -> Hashable:
        """Key under which a mapper registers this module at most once.

        Statuses are compared by identity, so status values need not be
        hashable.
        """
        statuses = tuple((code, id(status)) for code, status in self._statuses.items())
        return (self.module_name, self._stack_traces, statuses)

    def with_stack_traces(self, stack_traces: bool = True) -> ProblemModule:
        """Return a module sharing this status index with the given stack-trace setting."""
        return self._create(stack_traces, self._statuses)


__all__ = ["DISTRIBUTION", "ProblemModule", "UNKNOWN_VERSION", "load_status_source"]
