"""Singular spectrum analysis (SSA) forecaster.

Pure computation on a single real-valued series:

  1. Geometry:   L = clamp(n // 6, 4, 12),  N = min(n, 2L),  K = N - L + 1
  2. Embedding:  X[i, j] = y[j + i]   over the most recent N observations (L × K)
  3. SVD:        X = U Σ Vᵀ,  keep the leading r components (energy threshold)
  4. Smoothing:  X_r = U_r U_rᵀ X,  diagonal averaging of X_r -> ŷ (length N)
  5. Recurrence: π = last row of U_r,  ν² = ‖π‖²,
                 a = U_r[:-1] π / (1 - ν²)   (L - 1 coefficients)
                 y_{t} = Σ_k a_k · y_{t-L+1+k}
                 iterated from the tail of ŷ for `horizon` steps
  6. Interval:   half-width = z_{(1+c)/2} · sd(ŷ - y),  flat across the horizon

The recurrence is seeded from data that does not depend on the horizon, so
a longer horizon only appends values: forecasts for overlapping months are
identical regardless of how many months were requested.

A series of at most L points cannot be embedded and, like a basis with no
usable recurrence, gets the last observed value with an interval built
from the sd of first differences.

The service holds only its rank-selection configuration; every call is
independent and safe to run concurrently.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

import numpy as np
from scipy.stats import norm

from poforecast.domain.exceptions import InvalidArgumentError
from poforecast.domain.models.forecast import SpectralParams

logger = logging.getLogger(__name__)

MIN_WINDOW = 4
MAX_WINDOW = 12
_SEASONAL_DIVISOR = 6         # L ≈ n / 6 before clamping
_ENERGY_EPS = 1e-12           # total energy at or below this counts as "no signal"
_VERTICALITY_TOL = 1e-9       # ν² must stay below 1 - tol for the recurrence to exist


@dataclass
class SpectralForecast:
    """Output of one forecaster call.

    forecast / lower / upper have shape (horizon,).
    reconstruction is the smoothed working sub-series (length series_length)
    and residual_std the standard deviation of reconstruction - actual.
    """

    forecast: np.ndarray
    lower: np.ndarray
    upper: np.ndarray
    params: SpectralParams
    reconstruction: np.ndarray
    residual_std: float

    @property
    def half_width(self) -> float:
        return float(self.upper[0] - self.forecast[0]) if self.forecast.size else 0.0


class SpectralForecaster:
    """Trend/oscillation decomposition with linear-recurrence extrapolation.

    Rank selection keeps the smallest number of leading singular components
    whose share of total energy (sum of squared singular values) reaches
    energy_threshold, capped at max_rank (default L // 2).  If the resulting
    basis has no valid recurrence (ν² ≈ 1) components are dropped from the
    tail until it does.
    """

    def __init__(self, energy_threshold: float = 0.99, max_rank: int | None = None) -> None:
        if not 0.0 < energy_threshold <= 1.0:
            raise InvalidArgumentError(
                f"energy_threshold must be in (0, 1], got {energy_threshold}."
            )
        if max_rank is not None and max_rank < 1:
            raise InvalidArgumentError(f"max_rank must be a positive integer, got {max_rank}.")
        self.energy_threshold = energy_threshold
        self.max_rank = max_rank

    # ─────────────────────────────────────────────────────────────────── #
    # Public API                                                           #
    # ─────────────────────────────────────────────────────────────────── #

    @staticmethod
    def choose_geometry(train_size: int) -> tuple[int, int]:
        """Return (window_size, series_length) for a series of train_size points.

        The window favours ~12 months for long histories and never drops
        below 4; only the most recent 2·window points enter the decomposition.
        """
        window = min(MAX_WINDOW, max(MIN_WINDOW, train_size // _SEASONAL_DIVISOR))
        return window, min(train_size, window * 2)

    def forecast(
        self,
        series: Sequence[Decimal | float],
        horizon: int,
        confidence_level: float = 0.95,
    ) -> SpectralForecast:
        """Forecast `horizon` steps past the end of `series`.

        Args:
            series: Observations in time order (oldest first).
            horizon: Number of future steps; must be positive.
            confidence_level: Two-sided coverage of the interval, in (0, 1).

        Returns:
            SpectralForecast with point forecast, bounds and the geometry used.

        Raises:
            InvalidArgumentError: Non-positive horizon, confidence outside
                (0, 1), empty or non-finite series.

        A series too short to embed (n <= window) gets the last-value
        forecast with a first-difference interval, like a series whose
        decomposition has no usable recurrence.
        """
        if horizon <= 0:
            raise InvalidArgumentError(f"horizon must be positive, got {horizon}.")
        if not 0.0 < confidence_level < 1.0:
            raise InvalidArgumentError(
                f"confidence_level must be in (0, 1), got {confidence_level}."
            )

        values = np.array([float(v) for v in series], dtype=float)
        if values.size == 0:
            raise InvalidArgumentError("Cannot forecast an empty series.")
        if not np.all(np.isfinite(values)):
            raise InvalidArgumentError("Series contains non-finite values.")

        train_size = int(values.size)
        window, series_length = self.choose_geometry(train_size)
        working = values[-series_length:]
        z = float(norm.ppf(0.5 + confidence_level / 2.0))

        if np.all(working == working[0]):
            # Constant input: exact repetition, zero-width interval.
            rank = 0 if working[0] == 0.0 else 1
            point = np.full(horizon, working[0])
            return self._assemble(
                point, 0.0, working.copy(), 0.0,
                SpectralParams(
                    train_size=train_size,
                    window_size=window,
                    series_length=series_length,
                    horizon=horizon,
                    rank=rank,
                ),
            )

        if series_length <= window:
            logger.warning(
                "Series of %d points is too short to embed a window of %d; "
                "falling back to last-value forecast.",
                train_size,
                window,
            )
            params = SpectralParams(
                train_size=train_size,
                window_size=window,
                series_length=series_length,
                horizon=horizon,
                rank=0,
            )
            return self._last_value(working, horizon, z, params)

        trajectory = _trajectory_matrix(working, window)
        u, s, _ = np.linalg.svd(trajectory, full_matrices=False)
        rank = self._select_rank(s, window)

        coefficients: np.ndarray | None = None
        while rank > 0:
            coefficients = _recurrence_coefficients(u[:, :rank])
            if coefficients is not None:
                break
            rank -= 1

        params = SpectralParams(
            train_size=train_size,
            window_size=window,
            series_length=series_length,
            horizon=horizon,
            rank=rank,
        )

        if coefficients is None:
            logger.warning(
                "No usable recurrence for series of %d points (window=%d); "
                "falling back to last-value forecast.",
                train_size,
                window,
            )
            return self._last_value(working, horizon, z, params)

        basis = u[:, :rank]
        reconstruction = _diagonal_average(basis @ (basis.T @ trajectory))
        residual_std = _std(reconstruction - working)
        point = _extrapolate(reconstruction, coefficients, horizon)

        logger.debug(
            "SSA n=%d L=%d N=%d rank=%d residual_sd=%.6g",
            train_size,
            window,
            series_length,
            rank,
            residual_std,
        )
        return self._assemble(point, z * residual_std, reconstruction, residual_std, params)

    # ─────────────────────────────────────────────────────────────────── #
    # Internal                                                             #
    # ─────────────────────────────────────────────────────────────────── #

    def _select_rank(self, singular_values: np.ndarray, window: int) -> int:
        energy = singular_values**2
        total = float(energy.sum())
        if total <= _ENERGY_EPS:
            return 0
        cumulative = np.cumsum(energy) / total
        rank = int(np.searchsorted(cumulative, self.energy_threshold - 1e-12) + 1)
        cap = self.max_rank if self.max_rank is not None else max(1, window // 2)
        return max(1, min(rank, cap, singular_values.size, window - 1))

    @staticmethod
    def _last_value(
        working: np.ndarray, horizon: int, z: float, params: SpectralParams
    ) -> SpectralForecast:
        residual_std = _std(np.diff(working))
        point = np.full(horizon, working[-1])
        return SpectralForecaster._assemble(point, z * residual_std, working.copy(), residual_std, params)

    @staticmethod
    def _assemble(
        point: np.ndarray,
        half_width: float,
        reconstruction: np.ndarray,
        residual_std: float,
        params: SpectralParams,
    ) -> SpectralForecast:
        return SpectralForecast(
            forecast=point,
            lower=point - half_width,
            upper=point + half_width,
            params=params,
            reconstruction=reconstruction,
            residual_std=residual_std,
        )


# ─────────────────────────────────────────────────────────────────────────── #
# Linear algebra helpers                                                       #
# ─────────────────────────────────────────────────────────────────────────── #


def _trajectory_matrix(values: np.ndarray, window: int) -> np.ndarray:
    """L × K Hankel matrix whose columns are the sliding windows of values."""
    k = values.size - window + 1
    return np.column_stack([values[j : j + window] for j in range(k)])


def _diagonal_average(matrix: np.ndarray) -> np.ndarray:
    """Average each anti-diagonal of an L × K matrix into a series of length L + K - 1."""
    rows, cols = matrix.shape
    sums = np.zeros(rows + cols - 1)
    counts = np.zeros(rows + cols - 1)
    for i in range(rows):
        sums[i : i + cols] += matrix[i]
        counts[i : i + cols] += 1.0
    return sums / counts


def _recurrence_coefficients(basis: np.ndarray) -> np.ndarray | None:
    """Linear recurrence coefficients from an orthonormal L × r basis.

    Returns the L - 1 weights applied to the previous L - 1 values (oldest
    first), or None when the verticality coefficient ν² is too close to 1.
    """
    pi = basis[-1, :]
    nu2 = float(pi @ pi)
    if nu2 >= 1.0 - _VERTICALITY_TOL:
        return None
    return (basis[:-1, :] @ pi) / (1.0 - nu2)


def _extrapolate(seed: np.ndarray, coefficients: np.ndarray, horizon: int) -> np.ndarray:
    lag = coefficients.size
    extended = list(seed[-lag:])
    out = np.empty(horizon)
    for step in range(horizon):
        value = float(np.dot(coefficients, extended[-lag:]))
        out[step] = value
        extended.append(value)
    return out


def _std(values: np.ndarray) -> float:
    if values.size < 2:
        return 0.0
    return float(np.std(values, ddof=1))
