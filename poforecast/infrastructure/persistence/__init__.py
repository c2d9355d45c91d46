"""Persistence package.

Importing this package registers every ORM mapper with Base.metadata
(required for Alembic autogenerate and SQLAlchemy mapper configuration)
and exports the repository implementations and the factory.
"""

from poforecast.infrastructure.persistence.models import *  # noqa: F401, F403
from poforecast.infrastructure.persistence.models import __all__ as _orm_all
from poforecast.infrastructure.persistence.repositories import (
    SqlCpiRepository,
    SqlPurchaseOrderRepository,
    get_repositories,
)

__all__ = _orm_all + [
    "SqlPurchaseOrderRepository",
    "SqlCpiRepository",
    "get_repositories",
]
