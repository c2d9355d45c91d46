"""Monthly series models.

MonthlyPricePoint: average nominal unit price for one calendar month.
AlignedPoint: a monthly price joined with that month's CPI reading.

Sequences of either type are ordered ascending by month with at most one
point per month.  Months with no data are absent, never zero-filled.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, field_validator

from poforecast.domain.calendar import month_start


class MonthlyPricePoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    month: date
    avg_nominal_price: Decimal

    @field_validator("month")
    @classmethod
    def _first_of_month(cls, value: date) -> date:
        return month_start(value)


class AlignedPoint(BaseModel):
    """Monthly nominal price with the CPI value for the same month."""

    model_config = ConfigDict(frozen=True)

    month: date
    nominal_price: Decimal
    cpi_value: Decimal

    @field_validator("month")
    @classmethod
    def _first_of_month(cls, value: date) -> date:
        return month_start(value)
