"""Raw observation models supplied by the repository collaborators.

PriceObservation: one purchase-order line (date, part, currency, unit price).
CpiObservation: one consumer price index reading for a calendar month.

Both are immutable value objects; nothing in the core mutates them.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from poforecast.domain.calendar import month_start


class PriceObservation(BaseModel):
    """Unit price paid on a single purchase-order line.

    order_date keeps the full calendar date; monthly bucketing happens in
    MonthlyAggregator.  price_per_unit is an exact decimal in the line's
    currency and must be non-negative.
    """

    model_config = ConfigDict(frozen=True)

    order_date: date
    part_code: str
    currency_code: str = ""
    price_per_unit: Decimal = Field(ge=0)


class CpiObservation(BaseModel):
    """CPI reading for one month.

    month is normalised to the first day of its month on construction.
    cpi_value is expected to be positive but is not constrained here:
    InflationAdjuster guards against zero and negative index values.
    """

    model_config = ConfigDict(frozen=True)

    month: date
    cpi_value: Decimal

    @field_validator("month")
    @classmethod
    def _first_of_month(cls, value: date) -> date:
        return month_start(value)
