"""Purchasing ORM models: po_order_analysis."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import BigInteger, Date, Index, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column

from poforecast.infrastructure.database import Base


class PurchaseOrderLine(Base):
    """One purchase-order line as exported by the purchasing system.

    price_per_unit is nullable in the source; NULL-priced lines are never
    returned to the domain.
    """

    __tablename__ = "po_order_analysis"
    __table_args__ = (
        Index("ix_po_order_analysis_part_date", "part_code", "order_date"),
    )

    po_line_id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    order_date: Mapped[date] = mapped_column(Date, nullable=False)
    part_code: Mapped[str] = mapped_column(Text, nullable=False)
    sys_currency_code: Mapped[str] = mapped_column(Text, nullable=False)
    price_per_unit: Mapped[Optional[Decimal]] = mapped_column(Numeric(18, 6), nullable=True)
