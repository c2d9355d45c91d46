"""Tests for poforecast/infrastructure/settings.py."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from poforecast.infrastructure.settings import Settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("DATA_SOURCE", "PO_CSV_PATH", "CPI_CSV_PATH", "DATABASE_URL", "DEFAULT_CURRENCY", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.data_source == "csv"
    assert settings.po_csv_path is None
    assert settings.default_currency is None
    assert settings.log_level == "INFO"


def test_default_url_uses_asyncpg():
    assert "postgresql+asyncpg" in Settings(_env_file=None).database_url


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("DATA_SOURCE", "sql")
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@myhost/mydb")
    monkeypatch.setenv("PO_CSV_PATH", "/data/po.csv")
    settings = Settings(_env_file=None)
    assert settings.data_source == "sql"
    assert settings.database_url == "postgresql+asyncpg://u:p@myhost/mydb"
    assert settings.po_csv_path == Path("/data/po.csv")


def test_reads_env_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("DEFAULT_CURRENCY=USD\nLOG_LEVEL=DEBUG\n")
    settings = Settings(_env_file=env_file)
    assert settings.default_currency == "USD"
    assert settings.log_level == "DEBUG"


def test_unknown_data_source_rejected(monkeypatch):
    monkeypatch.setenv("DATA_SOURCE", "excel")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
