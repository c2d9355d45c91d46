"""Forecast error taxonomy.

Every failure the core raises derives from ForecastError so front ends can
translate them in one place.  Repository collaborators raise
RepositoryError for backend failures; the core lets those propagate
unchanged and never retries them.
"""

from __future__ import annotations

from typing import Any


class ForecastError(Exception):
    """Base exception for forecasting failures."""

    default_message = "Forecast failed"

    def __init__(self, message: str | None = None, details: dict[str, Any] | None = None) -> None:
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        error: dict[str, Any] = {
            "error": self.__class__.__name__,
            "message": self.message,
        }
        if self.details:
            error["details"] = self.details
        return error


class InvalidArgumentError(ForecastError, ValueError):
    """A caller-supplied argument is out of range.

    Raised before any data access, so nothing has been computed.
    """

    default_message = "Invalid argument"


class InsufficientHistoryError(ForecastError):
    """Fewer monthly price points than the configured minimum (before the CPI join)."""

    default_message = "Not enough monthly price history"

    def __init__(
        self,
        part_code: str,
        count: int,
        required: int,
        message: str | None = None,
    ) -> None:
        self.part_code = part_code
        self.count = count
        self.required = required
        super().__init__(
            message
            or (
                f"Not enough monthly history for PART_CODE={part_code}. "
                f"Got {count} months, need at least {required}."
            ),
            details={"part_code": part_code, "count": count, "required": required},
        )


class InsufficientAlignedHistoryError(ForecastError):
    """Enough price history, but too few months left after the CPI join.

    Kept separate from InsufficientHistoryError: this one points at CPI
    coverage rather than purchase history.
    """

    default_message = "Not enough CPI-aligned monthly history"

    def __init__(self, part_code: str, count: int, required: int) -> None:
        self.part_code = part_code
        self.count = count
        self.required = required
        super().__init__(
            f"Not enough CPI-aligned months for PART_CODE={part_code}. "
            f"Got {count} months after join, need at least {required}.",
            details={"part_code": part_code, "count": count, "required": required},
        )


class RepositoryError(ForecastError):
    """A price or CPI source failed to produce its data."""

    default_message = "Repository failure"
