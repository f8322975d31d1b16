"""Status values written as bare integers and read back through the index."""

from __future__ import annotations

import pytest

from problem_databind import DefaultProblem, Status, StatusIndex, UnknownStatus
from problem_databind.codec import ProblemTypeConverter, read_status, write_status
from tests.problems import TeapotStatus


@pytest.mark.parametrize(
    ("status", "code"),
    [(Status.IM_USED, 226), (TeapotStatus.EMPTY_POT, 419), (UnknownStatus(666), 666)],
)
def test_status_written_as_integer(status, code):
    assert write_status(status) == code
    assert DefaultProblem(status=status).model_dump(mode="json") == {"status": code}


def test_status_read_by_identity():
    index = StatusIndex.build(Status)

    assert read_status(404, index) is Status.NOT_FOUND


def test_unindexed_status_read_as_unknown():
    assert read_status(419, StatusIndex.build(Status)) == UnknownStatus(419)


def test_status_values_pass_through():
    assert read_status(TeapotStatus.BREWING, StatusIndex.build()) is TeapotStatus.BREWING


@pytest.mark.parametrize("value", ["404", False, 404.5, {}])
def test_non_integer_status_rejected(value):
    with pytest.raises(ValueError, match="Status must be an integer status code"):
        read_status(value, StatusIndex.build(Status))


def test_model_reads_status_through_context_index():
    context = {"statuses": StatusIndex.build(TeapotStatus)}

    problem = DefaultProblem.model_validate({"status": 218}, context=context)

    assert problem.status is TeapotStatus.BREWING


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("about:blank", None),
        ("https://example.org/out-of-stock", "https://example.org/out-of-stock"),
        (None, None),
        ("", ""),
    ],
)
def test_type_converter(value, expected):
    assert ProblemTypeConverter().convert(value) == expected
