"""JSON codec for problem documents.

Key Responsibilities:
    - Dump problems with ``model_dump(mode="json")`` and emit bytes through
      ``orjson``
    - Parse JSON with ``orjson`` and bind it with ``model_validate``, passing
      the status index and subtype registry as validation context
    - Add the ``stacktrace`` member for raised problems when the registered
      :class:`~problem_databind.module.ProblemModule` asks for it

Collaborators:
    - Upstream: Applications register modules and subtypes, then call the
      ``write_*``/``read_*`` methods
    - Downstream: :mod:`orjson`, :class:`~problem_databind.problem.Problem`

Thread Safety:
    - Configure once, then share. Reads and writes only consult the
      registered configuration.

Example:
    >>> mapper = ProblemMapper(modules=[ProblemModule()])
    >>> mapper.write_value_as_string(Problem.value_of(Status.NOT_FOUND))
    '{"title":"Not Found","status":404}'
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable
from typing import Any, TypeVar

import orjson
import structlog

from .codec import DEFAULT_STATUSES, STATUSES_CONTEXT, SUBTYPES_CONTEXT
from .module import ProblemModule
from .problem import Problem, ProblemError
from .registry import ProblemTypeRegistry
from .stacktrace import format_stack
from .status_index import StatusIndex

logger = structlog.get_logger(__name__)

P = TypeVar("P", bound=Problem)


class ProblemMapper:
    """Reads and writes problem documents as JSON.

    Args:
        modules: Modules to register, in order. The last one registered
            decides the status index and the stack-trace setting.
        subtypes: Problem subclasses to dispatch to by their type URI.
    """

    def __init__(
        self,
        *,
        modules: Iterable[ProblemModule] = (),
        subtypes: Iterable[type[Problem]] = (),
    ) -> None:
        self._statuses: StatusIndex = DEFAULT_STATUSES
        self._stack_traces = False
        self._subtypes = ProblemTypeRegistry()
        self._registered: list[Hashable] = []
        self.register_modules(*modules)
        self.register_subtypes(*subtypes)

    @property
    def registered_module_ids(self) -> tuple[Hashable, ...]:
        return tuple(self._registered)

    def register_module(self, module: ProblemModule) -> ProblemMapper:
        registration_id = module.registration_id
        if registration_id in self._registered:
            return self
        self._registered.append(registration_id)
        self._statuses = module.statuses
        self._stack_traces = module.stack_traces
        logger.debug(
            "problem.module.registered",
            module=module.module_name,
            version=module.version(),
            statuses=len(module.statuses),
            stack_traces=module.stack_traces,
        )
        return self

    def register_modules(self, *modules: ProblemModule) -> ProblemMapper:
        for module in modules:
            self.register_module(module)
        return self

    def register_subtypes(self, *subtypes: type[Problem]) -> ProblemMapper:
        for subtype in subtypes:
            self._subtypes.register(subtype)
        return self

    def _context(self) -> dict[str, Any]:
        return {STATUSES_CONTEXT: self._statuses, SUBTYPES_CONTEXT: self._subtypes}

    def value_to_tree(self, value: Problem | ProblemError) -> dict[str, Any]:
        """Return the JSON-compatible tree of a problem or a raised problem."""
        if isinstance(value, ProblemError):
            tree = value.problem.model_dump(mode="json")
            if self._stack_traces:
                tree["stacktrace"] = format_stack(value.stack_trace)
            return tree
        return value.model_dump(mode="json")

    def write_value_as_bytes(self, value: Problem | ProblemError, *, indent: bool = False) -> bytes:
        option = orjson.OPT_INDENT_2 if indent else 0
        return orjson.dumps(self.value_to_tree(value), option=option)

    def write_value_as_string(self, value: Problem | ProblemError, *, indent: bool = False) -> str:
        return self.write_value_as_bytes(value, indent=indent).decode("utf-8")

    def tree_to_value(self, node: Any, value_type: type[P] = Problem) -> P:
        """Bind a decoded JSON tree.

        Raises:
            pydantic.ValidationError: If ``node`` is not a problem document.
        """
        return value_type.model_validate(node, context=self._context())

    def read_value(self, content: str | bytes, value_type: type[P] = Problem) -> P:
        """Parse and bind one problem document.

        Raises:
            orjson.JSONDecodeError: If ``content`` is not JSON.
            pydantic.ValidationError: If the JSON is not a problem document.
        """
        return self.tree_to_value(orjson.loads(content), value_type)


__all__ = ["ProblemMapper"]
