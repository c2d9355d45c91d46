"""Source tables for price forecasting: po_order_analysis and cpi_data.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "po_order_analysis",
        sa.Column("po_line_id", sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column("order_date", sa.Date, nullable=False),
        sa.Column("part_code", sa.Text, nullable=False),
        sa.Column("sys_currency_code", sa.Text, nullable=False),
        sa.Column("price_per_unit", sa.Numeric(18, 6), nullable=True),
    )
    op.create_index(
        "ix_po_order_analysis_part_date",
        "po_order_analysis",
        ["part_code", "order_date"],
    )

    op.create_table(
        "cpi_data",
        sa.Column("observation_date", sa.Date, primary_key=True),
        sa.Column("cpiaucsl", sa.Numeric(12, 4), nullable=True),
    )


def downgrade() -> None:
    op.drop_table("cpi_data")
    op.drop_index("ix_po_order_analysis_part_date", table_name="po_order_analysis")
    op.drop_table("po_order_analysis")
