"""RFC 7807 problem details for JSON.

Key Responsibilities:
    - Provide the pydantic problem model (:mod:`problem_databind.problem`)
    - Read and write problem documents through
      :class:`~problem_databind.mapper.ProblemMapper`, configured by a
      :class:`~problem_databind.module.ProblemModule`

Example:
    >>> from problem_databind import Problem, ProblemMapper, ProblemModule, Status
    >>> mapper = ProblemMapper(modules=[ProblemModule()])
    >>> mapper.write_value_as_string(Problem.value_of(Status.NOT_FOUND))
    '{"title":"Not Found","status":404}'
"""

from .builder import ProblemBuilder
from .exceptions import DuplicateStatusCodeError
from .mapper import ProblemMapper
from .module import ProblemModule
from .problem import DefaultProblem, Problem, ProblemError
from .registry import ProblemTypeRegistry
from .status import Status, StatusType
from .status_index import StatusIndex
from .unknown_status import UnknownStatus

__all__ = [
    "DefaultProblem",
    "DuplicateStatusCodeError",
    "Problem",
    "ProblemBuilder",
    "ProblemError",
    "ProblemMapper",
    "ProblemModule",
    "ProblemTypeRegistry",
    "Status",
    "StatusIndex",
    "StatusType",
    "UnknownStatus",
]
