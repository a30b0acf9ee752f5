"""Reference data tables: bidlist, curvepoint, rating, rulename, trade.

Revision ID: 20251019000000
Revises:
Create Date: 2025-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20251019000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _deal_columns() -> list[sa.Column]:
    """Optional audit/deal columns shared by bidlist and trade."""
    return [
        sa.Column("benchmark", sa.String(length=125), nullable=True),
        sa.Column("security", sa.String(length=125), nullable=True),
        sa.Column("status", sa.String(length=10), nullable=True),
        sa.Column("trader", sa.String(length=125), nullable=True),
        sa.Column("book", sa.String(length=125), nullable=True),
        sa.Column("creation_name", sa.String(length=125), nullable=True),
        sa.Column(
            "creation_date",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=True,
        ),
        sa.Column("revision_name", sa.String(length=125), nullable=True),
        sa.Column("revision_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("deal_name", sa.String(length=125), nullable=True),
        sa.Column("deal_type", sa.String(length=125), nullable=True),
        sa.Column("source_list_id", sa.String(length=125), nullable=True),
        sa.Column("side", sa.String(length=125), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "bidlist",
        sa.Column("bid_list_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("account", sa.String(length=30), nullable=False),
        sa.Column("type", sa.String(length=30), nullable=False),
        sa.Column("bid_quantity", sa.Float(), nullable=True),
        sa.Column("ask_quantity", sa.Float(), nullable=True),
        sa.Column("bid", sa.Float(), nullable=True),
        sa.Column("ask", sa.Float(), nullable=True),
        sa.Column("bid_list_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("commentary", sa.String(length=125), nullable=True),
        *_deal_columns(),
        sa.PrimaryKeyConstraint("bid_list_id"),
    )
    op.create_table(
        "curvepoint",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("curve_id", sa.Integer(), nullable=False),
        sa.Column("as_of_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("term", sa.Float(), nullable=True),
        sa.Column("curve_value", sa.Float(), nullable=True),
        sa.Column(
            "creation_date",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=True,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "rating",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("moodys_rating", sa.String(length=125), nullable=False),
        sa.Column("sand_p_rating", sa.String(length=125), nullable=False),
        sa.Column("fitch_rating", sa.String(length=125), nullable=False),
        sa.Column("order_number", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "rulename",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=125), nullable=False),
        sa.Column("description", sa.String(length=125), nullable=False),
        sa.Column("json", sa.String(length=125), nullable=False),
        sa.Column("template", sa.String(length=512), nullable=False),
        sa.Column("sql_str", sa.String(length=125), nullable=False),
        sa.Column("sql_part", sa.String(length=125), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "trade",
        sa.Column("trade_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("account", sa.String(length=30), nullable=False),
        sa.Column("type", sa.String(length=30), nullable=False),
        sa.Column("buy_quantity", sa.Float(), nullable=True),
        sa.Column("sell_quantity", sa.Float(), nullable=True),
        sa.Column("buy_price", sa.Float(), nullable=True),
        sa.Column("sell_price", sa.Float(), nullable=True),
        sa.Column("trade_date", sa.DateTime(timezone=True), nullable=True),
        *_deal_columns(),
        sa.PrimaryKeyConstraint("trade_id"),
    )


def downgrade() -> None:
    op.drop_table("trade")
    op.drop_table("rulename")
    op.drop_table("rating")
    op.drop_table("curvepoint")
    op.drop_table("bidlist")
