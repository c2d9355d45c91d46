"""Concrete SQLAlchemy repository implementations.

Exports the SqlRepository classes and the get_repositories() factory used
at the application boundary.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from .cpi import SqlCpiRepository
from .purchase_orders import SqlPurchaseOrderRepository


def get_repositories(session: AsyncSession) -> tuple[SqlPurchaseOrderRepository, SqlCpiRepository]:
    """Construct both repositories bound to the given session.

        async with session_scope(settings.database_url) as session:
            purchase_orders, cpi = get_repositories(session)
            lines = await purchase_orders.get_lines("888012", "USD")
    """
    return SqlPurchaseOrderRepository(session), SqlCpiRepository(session)


__all__ = [
    "SqlPurchaseOrderRepository",
    "SqlCpiRepository",
    "get_repositories",
]
