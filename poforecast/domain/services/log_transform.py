"""Reversible log transform for the real-price series.

  to_log(v, eps)   = ln(max(v, 0) + eps)
  from_log(y, eps) = max(exp(y) - eps, 0)

Applied to real prices only, never to CPI.  The inverse clamps at zero, so
un-logged forecasts and bounds are non-negative without a separate clamp.
Arithmetic stays in Decimal (Decimal.ln / Decimal.exp).
"""

from __future__ import annotations

from decimal import Decimal

_ZERO = Decimal(0)


class LogStabilizer:
    @staticmethod
    def to_log(value: Decimal, eps: Decimal) -> Decimal:
        return (max(value, _ZERO) + eps).ln()

    @staticmethod
    def from_log(log_value: Decimal, eps: Decimal) -> Decimal:
        return max(log_value.exp() - eps, _ZERO)
