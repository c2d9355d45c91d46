"""Repository backend selection.

The forecasting core depends only on the repository interfaces.  This
module turns Settings into a concrete pair of repositories and scopes any
resources they hold to a single block.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path

from poforecast.domain.exceptions import InvalidArgumentError
from poforecast.domain.repositories.cpi import CpiRepository
from poforecast.domain.repositories.purchase_orders import PurchaseOrderRepository
from poforecast.infrastructure.csv import CsvCpiRepository, CsvPurchaseOrderRepository
from poforecast.infrastructure.database import session_scope
from poforecast.infrastructure.persistence.repositories import get_repositories
from poforecast.infrastructure.settings import Settings

logger = logging.getLogger(__name__)


@dataclass
class Repositories:
    """The two collaborators a forecast needs."""

    purchase_orders: PurchaseOrderRepository
    cpi: CpiRepository


def csv_repositories(po_path: Path | str, cpi_path: Path | str) -> Repositories:
    return Repositories(
        purchase_orders=CsvPurchaseOrderRepository(po_path),
        cpi=CsvCpiRepository(cpi_path),
    )


@asynccontextmanager
async def open_repositories(
    settings: Settings,
    po_path: Path | None = None,
    cpi_path: Path | None = None,
) -> AsyncIterator[Repositories]:
    """Yield repositories for the configured backend.

    CSV mode: po_path / cpi_path override the settings; both must resolve.
    SQL mode: one session is opened for the block and released on exit;
    the path arguments are ignored.

    Raises:
        InvalidArgumentError: CSV mode without both file paths.
    """
    if settings.data_source == "sql":
        logger.debug("Using SQL repositories")
        async with session_scope(settings.database_url) as session:
            purchase_orders, cpi = get_repositories(session)
            yield Repositories(purchase_orders=purchase_orders, cpi=cpi)
        return

    po = po_path or settings.po_csv_path
    cpi = cpi_path or settings.cpi_csv_path
    if po is None or cpi is None:
        raise InvalidArgumentError(
            "CSV mode requires both a purchase-order and a CPI file "
            "(set PO_CSV_PATH / CPI_CSV_PATH or pass --po / --cpi)."
        )
    logger.debug("Using CSV repositories: po=%s cpi=%s", po, cpi)
    yield csv_repositories(po, cpi)
