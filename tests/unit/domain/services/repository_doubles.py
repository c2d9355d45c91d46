"""In-memory repository doubles shared by the orchestration tests."""

from datetime import date
from decimal import Decimal

from poforecast.domain.calendar import add_months
from poforecast.domain.models import CpiObservation, PriceObservation
from poforecast.domain.repositories import CpiRepository, PurchaseOrderRepository

START = date(2022, 1, 1)


class InMemoryPurchaseOrders(PurchaseOrderRepository):
    def __init__(self, lines):
        self.lines = list(lines)
        self.calls = []

    async def get_lines(self, part_code, currency_code=None):
        self.calls.append((part_code, currency_code))
        return [
            line
            for line in self.lines
            if line.part_code.casefold() == part_code.strip().casefold()
            and (not currency_code or line.currency_code.casefold() == currency_code.strip().casefold())
        ]


class InMemoryCpi(CpiRepository):
    def __init__(self, observations):
        self.observations = list(observations)

    async def get_monthly_cpi(self):
        return list(self.observations)


def price_lines(prices, part_code="888012", currency_code="USD", start=START):
    """One order line on the 15th of each consecutive month."""
    return [
        PriceObservation(
            order_date=add_months(start, i).replace(day=15),
            part_code=part_code,
            currency_code=currency_code,
            price_per_unit=Decimal(str(price)),
        )
        for i, price in enumerate(prices)
    ]


def cpi_series(values, start=START):
    return [
        CpiObservation(month=add_months(start, i), cpi_value=Decimal(str(value)))
        for i, value in enumerate(values)
    ]


def constant_repositories():
    """24 months of price 100 with CPI 300, starting 2022-01."""
    return InMemoryPurchaseOrders(price_lines([100] * 24)), InMemoryCpi(cpi_series([300] * 24))


def trending_repositories():
    """36 months of rising prices with gently rising CPI."""
    prices = [round(80 + 0.75 * i + (i % 12) * 0.3, 4) for i in range(36)]
    cpi = [round(290 + 0.6 * i, 3) for i in range(36)]
    return InMemoryPurchaseOrders(price_lines(prices)), InMemoryCpi(cpi_series(cpi))
