"""CSV implementation of PurchaseOrderRepository."""

from __future__ import annotations

import logging
from pathlib import Path

from poforecast.domain.models.observations import PriceObservation
from poforecast.domain.repositories.purchase_orders import PurchaseOrderRepository

from .parsing import parse_date, parse_decimal, read_table

logger = logging.getLogger(__name__)

# Fixed positions in the purchase-order export.
ORDER_DATE_COL = 1
PART_CODE_COL = 4
PRICE_PER_UNIT_COL = 7
CURRENCY_CODE_COL = 9


class CsvPurchaseOrderRepository(PurchaseOrderRepository):
    """Reads order lines from a purchase-order export.

    The whole file is scanned on every call; rows with an unparsable date or
    price, or a negative price, are skipped.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    async def get_lines(
        self,
        part_code: str,
        currency_code: str | None = None,
    ) -> list[PriceObservation]:
        frame = read_table(self._path)
        if frame.shape[1] <= CURRENCY_CODE_COL:
            logger.warning("%s has %d columns; no order lines read.", self._path, frame.shape[1])
            return []

        wanted_part = part_code.strip().casefold()
        wanted_currency = (
            currency_code.strip().casefold() if currency_code and currency_code.strip() else None
        )
        columns = [ORDER_DATE_COL, PART_CODE_COL, PRICE_PER_UNIT_COL, CURRENCY_CODE_COL]

        lines: list[PriceObservation] = []
        skipped = 0
        for date_raw, part_raw, price_raw, currency_raw in frame.iloc[:, columns].itertuples(
            index=False, name=None
        ):
            part = part_raw.strip()
            currency = currency_raw.strip()
            if part.casefold() != wanted_part:
                continue
            if wanted_currency is not None and currency.casefold() != wanted_currency:
                continue
            order_date = parse_date(date_raw)
            price = parse_decimal(price_raw)
            if order_date is None or price is None or price < 0:
                skipped += 1
                continue
            lines.append(
                PriceObservation(
                    order_date=order_date,
                    part_code=part,
                    currency_code=currency,
                    price_per_unit=price,
                )
            )

        if skipped:
            logger.debug("PART_CODE=%s: skipped %d unparsable row(s) in %s", part_code, skipped, self._path)
        return lines
