"""Lenient field parsing shared by the CSV repositories.

Export files come from different tools, so dates and numbers are accepted
in several layouts.  A field that cannot be parsed yields None and the
caller skips the row.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path

import pandas as pd

from poforecast.domain.exceptions import RepositoryError

# Two-digit years first: %Y would also accept "24" as year 24.
DATE_FORMATS = ("%m/%d/%y", "%m/%d/%Y", "%Y-%m-%d")


def parse_date(raw: str) -> date | None:
    raw = raw.strip()
    if not raw:
        return None
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(raw, fmt).date()
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(raw).date()
    except ValueError:
        return None


def parse_decimal(raw: str) -> Decimal | None:
    try:
        value = Decimal(raw.strip())
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


def read_table(path: Path) -> pd.DataFrame:
    """Read a header-first delimited file as strings.

    Columns are addressed by position, so header names are ignored.  Short
    rows are padded with empty strings; rows longer than the header are
    skipped.  The file handle is released before returning.

    Raises:
        RepositoryError: The file is missing or cannot be parsed.
    """
    if not path.exists():
        raise RepositoryError(f"CSV path does not exist: {path}", details={"path": str(path)})
    try:
        frame = pd.read_csv(
            path,
            header=0,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            skipinitialspace=True,
            on_bad_lines="skip",
        )
    except pd.errors.EmptyDataError:
        return pd.DataFrame()
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as exc:
        raise RepositoryError(
            f"Failed to read CSV {path}: {exc}", details={"path": str(path)}
        ) from exc
    return frame.fillna("")
