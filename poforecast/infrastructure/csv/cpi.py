"""CSV implementation of CpiRepository (FRED observation_date,CPIAUCSL layout)."""

from __future__ import annotations

from pathlib import Path

from poforecast.domain.models.observations import CpiObservation
from poforecast.domain.repositories.cpi import CpiRepository
from poforecast.domain.services.alignment import CpiAligner

from .parsing import parse_date, parse_decimal, read_table

OBSERVATION_DATE_COL = 0
CPI_VALUE_COL = 1


class CsvCpiRepository(CpiRepository):
    """Reads a monthly CPI export.

    Invalid rows are skipped.  Duplicate months collapse to the highest
    reading and the result is ascending by month.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    async def get_monthly_cpi(self) -> list[CpiObservation]:
        frame = read_table(self._path)
        if frame.shape[1] <= CPI_VALUE_COL:
            return []

        observations: list[CpiObservation] = []
        for date_raw, cpi_raw in frame.iloc[:, [OBSERVATION_DATE_COL, CPI_VALUE_COL]].itertuples(
            index=False, name=None
        ):
            observed = parse_date(date_raw)
            cpi = parse_decimal(cpi_raw)
            if observed is None or cpi is None:
                continue
            observations.append(CpiObservation(month=observed, cpi_value=cpi))

        cpi_map = CpiAligner().build_cpi_map(observations)
        return [CpiObservation(month=month, cpi_value=value) for month, value in cpi_map.items()]
