from __future__ import annotations

import pytest
import structlog

from problem_databind import DefaultProblem, Problem, ProblemTypeRegistry
from problem_databind.registry import problem_type_of
from tests.problems import OUT_OF_STOCK, InsufficientFundsProblem, OutOfStockProblem


class RestockedProblem(Problem):
    type: str = OUT_OF_STOCK


def test_type_is_taken_from_the_subclass_default():
    assert problem_type_of(OutOfStockProblem) == OUT_OF_STOCK


@pytest.mark.parametrize("problem_class", [Problem, DefaultProblem])
def test_classes_without_a_type_cannot_register(problem_class):
    with pytest.raises(ValueError, match="does not declare a problem type URI"):
        ProblemTypeRegistry().register(problem_class)


def test_resolve_prefers_registered_subtype():
    registry = ProblemTypeRegistry()
    registry.register(OutOfStockProblem)

    assert registry.resolve(Problem, OUT_OF_STOCK) is OutOfStockProblem
    assert OUT_OF_STOCK in registry


@pytest.mark.parametrize("problem_type", ["https://example.org/other", None, 42])
def test_resolve_falls_back_to_default_problem(problem_type):
    registry = ProblemTypeRegistry()
    registry.register(OutOfStockProblem)

    assert registry.resolve(Problem, problem_type) is DefaultProblem


def test_resolve_ignores_subtypes_outside_the_requested_class():
    registry = ProblemTypeRegistry()
    registry.register(OutOfStockProblem)

    assert registry.resolve(InsufficientFundsProblem, OUT_OF_STOCK) is InsufficientFundsProblem
    assert registry.resolve(DefaultProblem, OUT_OF_STOCK) is DefaultProblem


def test_last_registration_wins():
    registry = ProblemTypeRegistry()

    with structlog.testing.capture_logs() as events:
        registry.register(OutOfStockProblem)
        registry.register(RestockedProblem)

    assert registry.resolve(Problem, OUT_OF_STOCK) is RestockedProblem
    assert len(registry) == 1
    assert [event["event"] for event in events] == ["problem.subtype.replaced"]
