"""Problem subtypes and status enumerations shared by the tests."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from problem_databind import Problem, Status, StatusType

INSUFFICIENT_FUNDS = "https://example.org/insufficient-funds"
OUT_OF_STOCK = "https://example.org/out-of-stock"


class CustomStatus(Enum):
    OK = (200, "OK")

    def __init__(self, status_code: int, reason_phrase: str) -> None:
        self.status_code = status_code
        self.reason_phrase = reason_phrase


class TeapotStatus(Enum):
    BREWING = (218, "Brewing")
    EMPTY_POT = (419, "Empty Pot")

    def __init__(self, status_code: int, reason_phrase: str) -> None:
        self.status_code = status_code
        self.reason_phrase = reason_phrase


@dataclass
class PlainStatus:
    """A mutable, unhashable status value."""

    status_code: int
    reason_phrase: str


LEGACY_STATUSES = [PlainStatus(299, "Deprecated"), PlainStatus(598, "Network Read Timeout")]


class InsufficientFundsProblem(Problem):
    type: str = INSUFFICIENT_FUNDS
    title: str | None = "Insufficient Funds"
    status: StatusType | None = Status.BAD_REQUEST
    balance: int
    debit: int


class OutOfStockProblem(Problem):
    type: str = OUT_OF_STOCK
    title: str | None = "Out of Stock"
    status: StatusType | None = Status.BAD_REQUEST
