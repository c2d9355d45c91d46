"""SQLAlchemy implementation of PurchaseOrderRepository."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from poforecast.domain.exceptions import RepositoryError
from poforecast.domain.models.observations import PriceObservation
from poforecast.domain.repositories.purchase_orders import PurchaseOrderRepository
from poforecast.infrastructure.persistence.models.purchasing import PurchaseOrderLine


class SqlPurchaseOrderRepository(PurchaseOrderRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @staticmethod
    def _to_domain(row: PurchaseOrderLine) -> PriceObservation | None:
        if row.price_per_unit is None or row.price_per_unit < 0:
            return None
        return PriceObservation(
            order_date=row.order_date,
            part_code=(row.part_code or "").strip(),
            currency_code=(row.sys_currency_code or "").strip(),
            price_per_unit=row.price_per_unit,
        )

    async def get_lines(
        self,
        part_code: str,
        currency_code: str | None = None,
    ) -> list[PriceObservation]:
        part = part_code.strip()
        if not part:
            return []
        currency = currency_code.strip() if currency_code and currency_code.strip() else None

        stmt = (
            select(PurchaseOrderLine)
            .where(
                func.upper(func.trim(PurchaseOrderLine.part_code)) == part.upper(),
                PurchaseOrderLine.price_per_unit.is_not(None),
            )
            .order_by(PurchaseOrderLine.order_date.asc())
        )
        if currency is not None:
            stmt = stmt.where(
                func.upper(func.trim(PurchaseOrderLine.sys_currency_code)) == currency.upper()
            )
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            raise RepositoryError(
                f"Failed to load purchase-order lines for PART_CODE={part}: {exc}",
                details={"part_code": part},
            ) from exc

        lines: list[PriceObservation] = []
        for row in result.scalars():
            line = self._to_domain(row)
            if line is None:
                continue
            # Same filters in Python: the SQL dialect's UPPER/TRIM may differ from casefold.
            if line.part_code.casefold() != part.casefold():
                continue
            if currency is not None and line.currency_code.casefold() != currency.casefold():
                continue
            lines.append(line)
        return lines
