"""Purchase-order repository interface.

PurchaseOrderRepository is a read-only, query-by-part interface.  Order
lines are ingested by upstream systems; the forecasting core only reads
them for one part code (and optionally one currency) at a time.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from poforecast.domain.models.observations import PriceObservation


class PurchaseOrderRepository(ABC):
    """Read interface for purchase-order price lines."""

    @abstractmethod
    async def get_lines(
        self,
        part_code: str,
        currency_code: str | None = None,
    ) -> list[PriceObservation]:
        """Return all order lines for the part code.

        part_code and currency_code match case-insensitively after trimming.
        When currency_code is None or blank, lines in every currency are
        returned.  Order is unspecified; callers sort and group themselves.
        Prices are exact decimals.
        """
