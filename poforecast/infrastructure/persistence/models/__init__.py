"""ORM model registry. Imports every mapper class so it is registered with
Base.metadata before Alembic or SQLAlchemy runs.
"""

from poforecast.infrastructure.persistence.models.cpi import CpiReading
from poforecast.infrastructure.persistence.models.purchasing import PurchaseOrderLine

__all__ = [
    "PurchaseOrderLine",
    "CpiReading",
]
