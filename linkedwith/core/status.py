"""Outcome values returned by every mutating call and query.

Expected failures are data, not exceptions: callers branch on the status.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any


class StatusCode(Enum):
    """Result of a link or query operation."""
    SUCCESS = "success"
    ALREADY_VALID = "already_valid"
    ALREADY_ACTIVE = "already_active"
    ALREADY_INACTIVE = "already_inactive"
    INVALID_USERS = "invalid_users"
    INVALID_DATE = "invalid_date"
    INVALID_DISTANCE = "invalid_distance"


@dataclass(frozen=True)
class Outcome:
    """Status plus optional payload. Falsy unless the status is SUCCESS."""
    status: StatusCode
    value: Any = None

    @property
    def ok(self) -> bool:
        return self.status is StatusCode.SUCCESS

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, value: Any = None) -> "Outcome":
        return cls(StatusCode.SUCCESS, value)

    @classmethod
    def failure(cls, status: StatusCode) -> "Outcome":
        return cls(status)
