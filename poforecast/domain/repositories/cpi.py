"""CPI repository interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from poforecast.domain.models.observations import CpiObservation


class CpiRepository(ABC):
    """Read interface for the monthly consumer price index series."""

    @abstractmethod
    async def get_monthly_cpi(self) -> list[CpiObservation]:
        """Return the full available CPI history.

        Not part specific.  Months are first-of-month dates; order is
        unspecified and duplicate months may occur (CpiAligner keeps the
        highest value).
        """
