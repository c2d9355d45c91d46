"""Domain services package."""

from .aggregation import MonthlyAggregator
from .alignment import AlignmentResult, CpiAligner
from .forecasting import PriceForecastService
from .inflation import InflationAdjuster
from .log_transform import LogStabilizer
from .spectral import SpectralForecast, SpectralForecaster
from .window import ForecastWindowService

__all__ = [
    "MonthlyAggregator",
    "CpiAligner",
    "AlignmentResult",
    "InflationAdjuster",
    "LogStabilizer",
    "SpectralForecaster",
    "SpectralForecast",
    "PriceForecastService",
    "ForecastWindowService",
]
