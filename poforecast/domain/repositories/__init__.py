"""Domain repository interfaces.

All abstractions are defined here with abc.ABC and @abstractmethod.
Concrete implementations live in poforecast/infrastructure/ (CSV files and
SQL tables) and are selected at the application boundary by configuration.
"""

from .cpi import CpiRepository
from .purchase_orders import PurchaseOrderRepository

__all__ = [
    "PurchaseOrderRepository",
    "CpiRepository",
]
