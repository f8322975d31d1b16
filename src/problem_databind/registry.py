"""Registry resolving problem type URIs to problem subclasses."""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from .codec import DEFAULT_TYPE
from .problem import DefaultProblem, Problem

logger = structlog.get_logger(__name__)


def problem_type_of(problem_class: type[Problem]) -> str:
    """Return the type URI a subclass declares as its ``type`` default."""
    declared = problem_class.model_fields["type"].default
    if not isinstance(declared, str) or declared == DEFAULT_TYPE:
        raise ValueError(f"{problem_class.__name__} does not declare a problem type URI")
    return declared


@dataclass(slots=True)
class ProblemTypeRegistry:
    """Stores problem subclasses keyed by the type URI they declare.

    Registering a second class under the same URI replaces the first.
    """

    _subtypes: dict[str, type[Problem]] = field(default_factory=dict)

    def register(self, problem_class: type[Problem]) -> None:
        problem_type = problem_type_of(problem_class)
        replaced = self._subtypes.get(problem_type)
        self._subtypes[problem_type] = problem_class
        if replaced is not None and replaced is not problem_class:
            logger.debug(
                "problem.subtype.replaced",
                type=problem_type,
                previous=replaced.__qualname__,
                subtype=problem_class.__qualname__,
            )

    def resolve(self, requested: type[Problem], problem_type: object) -> type[Problem]:
        """Pick the class a document of ``problem_type`` binds to.

        A registered class wins when it is a subclass of ``requested``;
        otherwise :class:`DefaultProblem` when ``requested`` admits it, and
        ``requested`` itself as the last resort.
        """
        candidate = self._subtypes.get(problem_type) if isinstance(problem_type, str) else None
        if candidate is not None and issubclass(candidate, requested):
            return candidate
        if issubclass(DefaultProblem, requested):
            return DefaultProblem
        return requested

    def __contains__(self, problem_type: object) -> bool:
        return problem_type in self._subtypes

    def __len__(self) -> int:
        return len(self._subtypes)


__all__ = ["ProblemTypeRegistry", "problem_type_of"]
