"""Tests for the CSV repositories and their field parsing."""

from datetime import date
from decimal import Decimal

import pytest

from poforecast.domain.exceptions import RepositoryError
from poforecast.infrastructure.csv import CsvCpiRepository, CsvPurchaseOrderRepository
from poforecast.infrastructure.csv.parsing import parse_date, parse_decimal

PO_HEADER = "PO_LINE,ORDER_DATE,VENDOR,BUYER,PART_CODE,DESCRIPTION,QTY,PRICE_PER_UNIT,UOM,SYS_CURRENCY_CODE"


def _po_row(order_date, part, price, currency):
    return f"1,{order_date},ACME,JD,{part},Widget,10,{price},EA,{currency}"


@pytest.fixture
def po_file(tmp_path):
    rows = [
        PO_HEADER,
        _po_row("01/05/2024", "888012", "10.00", "USD"),
        _po_row("2024-01-20", " 888012 ", "20.00", "usd"),
        _po_row("02/01/2024", "888012", "5.50", "EUR"),
        _po_row("not-a-date", "888012", "7.00", "USD"),
        _po_row("03/01/2024", "888012", "abc", "USD"),
        _po_row("03/02/2024", "888012", "-1.00", "USD"),
        _po_row("03/03/2024", "999999", "3.00", "USD"),
        "",
    ]
    path = tmp_path / "po.csv"
    path.write_text("\n".join(rows))
    return path


@pytest.fixture
def cpi_file(tmp_path):
    path = tmp_path / "cpi.csv"
    path.write_text(
        "observation_date,CPIAUCSL\n"
        "2024-02-01,310.3\n"
        "2024-01-01,300\n"
        "2024-01-15,305\n"
        "2024-03-01,.\n"
        "garbage,1\n"
    )
    return path


# --- parsing ---

@pytest.mark.parametrize(
    "raw, expected",
    [
        ("01/05/2024", date(2024, 1, 5)),
        ("1/5/24", date(2024, 1, 5)),
        ("2024-01-05", date(2024, 1, 5)),
        ("2024-01-05T10:30:00", date(2024, 1, 5)),
        ("", None),
        ("yesterday", None),
    ],
)
def test_parse_date(raw, expected):
    assert parse_date(raw) == expected


def test_parse_decimal():
    assert parse_decimal(" 12.50 ") == Decimal("12.50")


@pytest.mark.parametrize("raw", ["", ".", "abc", "NaN", "inf"])
def test_parse_decimal_rejects(raw):
    assert parse_decimal(raw) is None


# --- purchase orders ---

async def test_part_matches_trimmed_and_case_insensitive(po_file):
    lines = await CsvPurchaseOrderRepository(po_file).get_lines("888012")
    assert sorted(line.price_per_unit for line in lines) == [Decimal("5.50"), Decimal("10.00"), Decimal("20.00")]
    assert all(line.part_code == "888012" for line in lines)


async def test_currency_filter_is_case_insensitive(po_file):
    lines = await CsvPurchaseOrderRepository(po_file).get_lines("888012", "USD")
    assert [line.order_date for line in lines] == [date(2024, 1, 5), date(2024, 1, 20)]


async def test_blank_currency_means_all(po_file):
    assert len(await CsvPurchaseOrderRepository(po_file).get_lines("888012", "  ")) == 3


async def test_unknown_part_returns_empty(po_file):
    assert await CsvPurchaseOrderRepository(po_file).get_lines("000000") == []


async def test_too_few_columns_returns_empty(tmp_path):
    path = tmp_path / "narrow.csv"
    path.write_text("a,b,c\n1,2,3\n")
    assert await CsvPurchaseOrderRepository(path).get_lines("1") == []


async def test_header_only_returns_empty(tmp_path):
    path = tmp_path / "header.csv"
    path.write_text(PO_HEADER + "\n")
    assert await CsvPurchaseOrderRepository(path).get_lines("888012") == []


async def test_missing_file_raises_repository_error(tmp_path):
    with pytest.raises(RepositoryError):
        await CsvPurchaseOrderRepository(tmp_path / "missing.csv").get_lines("888012")


# --- CPI ---

async def test_cpi_duplicates_collapse_to_highest_and_sorted(cpi_file):
    observations = await CsvCpiRepository(cpi_file).get_monthly_cpi()
    assert [(o.month, o.cpi_value) for o in observations] == [
        (date(2024, 1, 1), Decimal("305")),
        (date(2024, 2, 1), Decimal("310.3")),
    ]


async def test_cpi_empty_file(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("")
    assert await CsvCpiRepository(path).get_monthly_cpi() == []


async def test_cpi_missing_file(tmp_path):
    with pytest.raises(RepositoryError):
        await CsvCpiRepository(tmp_path / "nope.csv").get_monthly_cpi()
