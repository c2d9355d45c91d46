"""Nominal <-> real price conversion anchored to a base month's CPI.

  real    = nominal · (base_cpi / month_cpi)
  nominal = real    · (month_cpi / base_cpi)

Both functions are total: a non-positive CPI in the denominator returns the
input unchanged instead of dividing by zero or flipping the sign.
"""

from __future__ import annotations

from decimal import Decimal


class InflationAdjuster:
    @staticmethod
    def to_real(nominal: Decimal, month_cpi: Decimal, base_cpi: Decimal) -> Decimal:
        """Express a nominal price in base-month dollars."""
        if month_cpi <= 0:
            return nominal
        return nominal * (base_cpi / month_cpi)

    @staticmethod
    def to_nominal(real: Decimal, month_cpi: Decimal, base_cpi: Decimal) -> Decimal:
        """Express a base-month-dollar price in the dollars of month_cpi's month."""
        if base_cpi <= 0:
            return real
        return real * (month_cpi / base_cpi)
