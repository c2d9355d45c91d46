"""Domain model package.

All domain objects are pure Pydantic models with no ORM or infrastructure
dependencies.  Import from this package to avoid coupling application code
to individual module paths.
"""

from .forecast import (
    ForecastDiagnostics,
    ForecastOptions,
    ForecastPoint,
    ForecastResult,
    PriceForecastRequest,
    SpectralParams,
    WindowedForecast,
)
from .observations import CpiObservation, PriceObservation
from .series import AlignedPoint, MonthlyPricePoint

__all__ = [
    # observations
    "PriceObservation",
    "CpiObservation",
    # series
    "MonthlyPricePoint",
    "AlignedPoint",
    # forecast
    "ForecastOptions",
    "PriceForecastRequest",
    "SpectralParams",
    "ForecastPoint",
    "ForecastDiagnostics",
    "ForecastResult",
    "WindowedForecast",
]
