"""Delimited-text (CSV) repository implementations."""

from .cpi import CsvCpiRepository
from .purchase_orders import CsvPurchaseOrderRepository

__all__ = ["CsvPurchaseOrderRepository", "CsvCpiRepository"]
