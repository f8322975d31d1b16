from __future__ import annotations

from pathlib import Path

import pytest

from problem_databind import ProblemMapper, ProblemModule
from problem_databind.config.settings import get_settings
from tests.problems import InsufficientFundsProblem, OutOfStockProblem

FIXTURES = Path(__file__).parent / "fixtures" / "problems"


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def load_fixture():
    def _load(name: str) -> str:
        return (FIXTURES / name).read_text(encoding="utf-8")

    return _load


@pytest.fixture
def mapper() -> ProblemMapper:
    return ProblemMapper(
        modules=[ProblemModule()],
        subtypes=[InsufficientFundsProblem, OutOfStockProblem],
    )
