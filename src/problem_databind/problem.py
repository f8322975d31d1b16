"""RFC 7807 problem documents as pydantic models.

Key Responsibilities:
    - Model the five standard members plus an optional ``cause`` and any
      number of extension members kept as pydantic extras
    - Shape the wire form: default type elided, ``null`` members omitted,
      status written as its integer code, ``cause`` written last
    - Resolve the concrete class of a document from its ``type`` member when
      read with a subtype registry in the validation context
    - Carry a problem through ``raise`` via :class:`ProblemError`

Collaborators:
    - Upstream: :class:`~problem_databind.mapper.ProblemMapper`,
      :class:`~problem_databind.builder.ProblemBuilder`
    - Downstream: :mod:`problem_databind.codec`,
      :mod:`problem_databind.stacktrace`

Side Effects:
    - ``ProblemError`` captures the current stack when constructed
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ModelWrapValidatorHandler,
    SerializeAsAny,
    SerializerFunctionWrapHandler,
    ValidationInfo,
    field_serializer,
    field_validator,
    model_serializer,
    model_validator,
)

from .codec import (
    CARRIER_FIELDS,
    DEFAULT_TYPE,
    SUBTYPES_CONTEXT,
    ProblemTypeConverter,
    read_status,
    statuses_from,
    write_status,
)
from .stacktrace import StackFrame, capture_stack
from .status import StatusType

if TYPE_CHECKING:
    from .builder import ProblemBuilder

_LEADING_FIELDS = ("type", "title", "status", "detail", "instance")
_TYPE_CONVERTER = ProblemTypeConverter()


class Problem(BaseModel):
    """A problem document.

    Members the model does not declare are kept in :attr:`parameters` and
    written back as top-level members. Subclasses declare a problem type by
    giving ``type`` a default URI and may add their own fields.

    Example:
        >>> Problem.value_of(Status.NOT_FOUND).model_dump(mode="json")
        {'title': 'Not Found', 'status': 404}
    """

    model_config = ConfigDict(extra="allow", frozen=True, arbitrary_types_allowed=True)

    DEFAULT_TYPE: ClassVar[str] = DEFAULT_TYPE

    type: str = Field(default=DEFAULT_TYPE, description="URI identifying the problem type")
    title: str | None = Field(default=None, description="Short summary of the problem type")
    status: StatusType | None = Field(default=None, description="HTTP status of this occurrence")
    detail: str | None = Field(default=None, description="Explanation of this occurrence")
    instance: str | None = Field(default=None, description="URI identifying this occurrence")
    cause: SerializeAsAny[Problem] | None = Field(default=None, description="Problem that caused this one")

    @model_validator(mode="before")
    @classmethod
    def _drop_carrier_fields(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and not CARRIER_FIELDS.isdisjoint(data):
            return {key: value for key, value in data.items() if key not in CARRIER_FIELDS}
        return data

    @model_validator(mode="wrap")
    @classmethod
    def _dispatch(
        cls,
        data: Any,
        handler: ModelWrapValidatorHandler[Problem],
        info: ValidationInfo,
    ) -> Problem:
        context = info.context
        registry = context.get(SUBTYPES_CONTEXT) if isinstance(context, Mapping) else None
        if registry is not None and isinstance(data, Mapping):
            target = registry.resolve(cls, data.get("type"))
            if target is not cls:
                return target.model_validate(data, context=context)
        return handler(data)

    @field_validator("type", mode="before")
    @classmethod
    def _default_type(cls, value: Any) -> Any:
        return DEFAULT_TYPE if value is None else value

    @field_validator("status", mode="before")
    @classmethod
    def _read_status(cls, value: Any, info: ValidationInfo) -> StatusType | None:
        if value is None:
            return None
        return read_status(value, statuses_from(info.context))

    @field_serializer("type")
    def _write_type(self, value: str) -> str | None:
        return _TYPE_CONVERTER.convert(value)

    @field_serializer("status")
    def _write_status(self, status: StatusType | None) -> int | None:
        return None if status is None else write_status(status)

    @model_serializer(mode="wrap")
    def _write_document(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        fields = handler(self)
        cause = fields.pop("cause", None)
        extras = self.__pydantic_extra__ or {}
        document = {}
        for name in _LEADING_FIELDS:
            value = fields.pop(name, None)
            if value is not None:
                document[name] = value
        for name, value in fields.items():
            if value is not None or name in extras:
                document[name] = value
        if cause is not None:
            document["cause"] = cause
        return document

    @property
    def parameters(self) -> Mapping[str, Any]:
        """Extension members in the order they were given or decoded."""
        return MappingProxyType(self.__pydantic_extra__ or {})

    @staticmethod
    def builder() -> ProblemBuilder:
        from .builder import ProblemBuilder

        return ProblemBuilder()

    @staticmethod
    def value_of(
        status: StatusType,
        detail: str | None = None,
        instance: str | None = None,
    ) -> Problem:
        """Create a problem titled with the reason phrase of ``status``."""
        return DefaultProblem(title=status.reason_phrase, status=status, detail=detail, instance=instance)

    def to_exception(self) -> ProblemError:
        return ProblemError(self)

    def __str__(self) -> str:
        return problem_to_string(self)


class DefaultProblem(Problem):
    """Concrete problem used when no registered subtype claims a document."""


class ProblemError(Exception):
    """Raises a :class:`Problem`.

    The message is ``"title: detail"``, skipping whichever is missing. The
    stack is captured on construction and the problem's cause, if any, is
    chained as ``__cause__``.
    """

    def __init__(self, problem: Problem) -> None:
        super().__init__(": ".join(part for part in (problem.title, problem.detail) if part is not None))
        self.problem = problem
        self.stack_trace: tuple[StackFrame, ...] = capture_stack(type(self))
        if problem.cause is not None:
            self.__cause__ = ProblemError(problem.cause)


def problem_to_string(problem: Problem) -> str:
    """Render ``type{status, title, detail, instance=..., key=value}``."""
    parts = []
    if problem.status is not None:
        parts.append(str(problem.status.status_code))
    parts.extend(part for part in (problem.title, problem.detail) if part is not None)
    if problem.instance is not None:
        parts.append(f"instance={problem.instance}")
    parts.extend(f"{key}={value}" for key, value in problem.parameters.items())
    return f"{problem.type}{{{', '.join(parts)}}}"


__all__ = ["DefaultProblem", "Problem", "ProblemError", "problem_to_string"]
