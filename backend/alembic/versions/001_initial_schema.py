"""Initial schema — producers, consumers, transactions.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "producers",
        sa.Column("seq", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("energy_capacity", sa.BigInteger, nullable=False),
        sa.Column("price_per_kwh", sa.BigInteger, nullable=False),
        sa.Column("available_energy", sa.BigInteger, nullable=False),
    )
    op.create_index("ix_producers_id", "producers", ["id"], unique=True)

    op.create_table(
        "consumers",
        sa.Column("seq", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("energy_need", sa.BigInteger, nullable=False),
        sa.Column("budget", sa.BigInteger, nullable=False),
    )
    op.create_index("ix_consumers_id", "consumers", ["id"], unique=True)

    op.create_table(
        "transactions",
        sa.Column("seq", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("producer_id", sa.String(36), nullable=False),
        sa.Column("consumer_id", sa.String(36), nullable=False),
        sa.Column("energy_amount", sa.BigInteger, nullable=False),
        sa.Column("total_price", sa.BigInteger, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_transactions_id", "transactions", ["id"], unique=True)
    op.create_index("ix_transactions_producer_id", "transactions", ["producer_id"])
    op.create_index("ix_transactions_consumer_id", "transactions", ["consumer_id"])


def downgrade() -> None:
    op.drop_table("transactions")
    op.drop_table("consumers")
    op.drop_table("producers")
