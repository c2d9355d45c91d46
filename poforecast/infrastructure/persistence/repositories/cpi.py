"""SQLAlchemy implementation of CpiRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from poforecast.domain.exceptions import RepositoryError
from poforecast.domain.models.observations import CpiObservation
from poforecast.domain.repositories.cpi import CpiRepository
from poforecast.domain.services.alignment import CpiAligner
from poforecast.infrastructure.persistence.models.cpi import CpiReading


class SqlCpiRepository(CpiRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @staticmethod
    def _to_domain(row: CpiReading) -> CpiObservation | None:
        if row.cpiaucsl is None:
            return None
        return CpiObservation(month=row.observation_date, cpi_value=row.cpiaucsl)

    async def get_monthly_cpi(self) -> list[CpiObservation]:
        stmt = select(CpiReading).order_by(CpiReading.observation_date.asc())
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            raise RepositoryError(f"Failed to load CPI series: {exc}") from exc

        observations = [obs for obs in map(self._to_domain, result.scalars()) if obs is not None]
        # Same duplicate-month rule as the CSV source: highest reading wins.
        cpi_map = CpiAligner().build_cpi_map(observations)
        return [CpiObservation(month=month, cpi_value=value) for month, value in cpi_map.items()]
