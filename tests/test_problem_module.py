from __future__ import annotations

from importlib import metadata

import pytest

from problem_databind import (
    DuplicateStatusCodeError,
    Problem,
    ProblemMapper,
    ProblemModule,
    Status,
    StatusIndex,
)
from problem_databind.config import ProblemSettings
from problem_databind.module import UNKNOWN_VERSION, load_status_source
from tests.problems import LEGACY_STATUSES, CustomStatus, TeapotStatus


def test_default_module_indexes_standard_statuses():
    module = ProblemModule()

    assert isinstance(module.statuses, StatusIndex)
    assert len(module.statuses) == len(Status)
    assert module.statuses[404] is Status.NOT_FOUND
    assert module.stack_traces is False


def test_explicit_sources_replace_default():
    module = ProblemModule(TeapotStatus)

    assert set(module.statuses) == {218, 419}


def test_duplicate_codes_across_sources_fail_construction():
    with pytest.raises(DuplicateStatusCodeError, match="Duplicate status codes are not allowed") as excinfo:
        ProblemModule(Status, CustomStatus)

    assert excinfo.value.status_code == 200


def test_duplicate_codes_are_value_errors():
    with pytest.raises(ValueError):
        ProblemModule(CustomStatus, CustomStatus)


def test_with_stack_traces_returns_new_module():
    module = ProblemModule(Status, TeapotStatus)

    enabled = module.with_stack_traces()
    disabled = enabled.with_stack_traces(False)

    assert module.stack_traces is False
    assert enabled.stack_traces is True
    assert disabled.stack_traces is False
    assert enabled is not module
    assert enabled.statuses is module.statuses


def test_module_identity():
    module = ProblemModule()

    assert module.module_name == "ProblemModule"
    assert isinstance(module.version(), str)
    assert module.version()


def test_stack_trace_setting_changes_registration_id():
    module = ProblemModule()

    assert module.registration_id == ProblemModule().registration_id
    assert module.registration_id != module.with_stack_traces().registration_id
    assert module.registration_id != ProblemModule(Status, TeapotStatus).registration_id


def test_module_from_settings():
    settings = ProblemSettings(
        stack_traces=True,
        status_sources=[
            "problem_databind.status:Status",
            "tests.problems:TeapotStatus",
        ],
    )

    module = ProblemModule.from_settings(settings)

    assert module.stack_traces is True
    assert module.statuses[419] is TeapotStatus.EMPTY_POT
    assert module.statuses[500] is Status.INTERNAL_SERVER_ERROR


def test_load_status_source_rejects_malformed_paths():
    with pytest.raises(ValueError, match="must look like"):
        load_status_source("problem_databind.status")

    with pytest.raises(ValueError, match="does not exist"):
        load_status_source("problem_databind.status:Missing")


def test_version_falls_back_when_not_installed(monkeypatch):
    def missing(name):
        raise metadata.PackageNotFoundError(name)

    monkeypatch.setattr(metadata, "version", missing)

    assert ProblemModule().version() == UNKNOWN_VERSION


def test_unhashable_status_source_registers():
    module = ProblemModule(Status, LEGACY_STATUSES)
    mapper = ProblemMapper(modules=[module, ProblemModule(Status, LEGACY_STATUSES)])

    problem = mapper.read_value('{"title": "Legacy", "status": 299}', Problem)

    assert problem.status is LEGACY_STATUSES[0]
    assert len(mapper.registered_module_ids) == 1
    assert len(mapper.register_module(ProblemModule(LEGACY_STATUSES)).registered_module_ids) == 2
    assert mapper.value_to_tree(problem) == {"title": "Legacy", "status": 299}
