"""CPI ORM models: cpi_data."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import Date, Numeric
from sqlalchemy.orm import Mapped, mapped_column

from poforecast.infrastructure.database import Base


class CpiReading(Base):
    """Monthly CPI observation (e.g. FRED CPIAUCSL), keyed by observation date."""

    __tablename__ = "cpi_data"

    observation_date: Mapped[date] = mapped_column(Date, primary_key=True)
    cpiaucsl: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 4), nullable=True)
