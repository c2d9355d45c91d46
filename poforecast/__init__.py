"""Inflation-aware purchase price forecasting.

Deflates historical purchase-order prices into real dollars with a CPI
series, forecasts the real price and the CPI independently with singular
spectrum analysis, and re-inflates the result into a nominal forecast with
confidence bounds.
"""

__version__ = "0.1.0"
