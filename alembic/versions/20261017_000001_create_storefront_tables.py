"""Create members, price_quotes, transactions and anonymous_sessions tables

Revision ID: 20261017_000001
Revises:
Create Date: 2026-10-17

Records are independent; transactions copy member fields instead of
referencing members by foreign key.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "20261017_000001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "members",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("book_id", sa.String(100), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=False),
        sa.Column("is_admin", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("total_grams", sa.Float(), nullable=False, server_default="0"),
        sa.Column("total_amount_spent", sa.Float(), nullable=False, server_default="0"),
        sa.Column("months_paid", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_members_book_id", "members", ["book_id"], unique=True)
    op.create_index("ix_members_is_active", "members", ["is_active"])
    op.create_index("ix_members_created_at", "members", ["created_at"])

    op.create_table(
        "price_quotes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("gold_price", sa.Float(), nullable=False),
        sa.Column("silver_price", sa.Float(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_by", sa.String(200), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_price_quotes_updated_at", "price_quotes", ["updated_at"])

    op.create_table(
        "transactions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("user_book_id", sa.String(100), nullable=False),
        sa.Column("user_name", sa.String(200), nullable=False),
        sa.Column("grams_purchased", sa.Float(), nullable=False),
        sa.Column("price_per_gram", sa.Float(), nullable=False),
        sa.Column("total_amount", sa.Float(), nullable=False),
        sa.Column("transaction_date", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("month", sa.Integer(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_transactions_user_id", "transactions", ["user_id"])
    op.create_index("ix_transactions_transaction_date", "transactions", ["transaction_date"])

    op.create_table(
        "anonymous_sessions",
        sa.Column("uid", sa.String(32), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("uid"),
    )


def downgrade() -> None:
    op.drop_table("anonymous_sessions")
    op.drop_index("ix_transactions_transaction_date", table_name="transactions")
    op.drop_index("ix_transactions_user_id", table_name="transactions")
    op.drop_table("transactions")
    op.drop_index("ix_price_quotes_updated_at", table_name="price_quotes")
    op.drop_table("price_quotes")
    op.drop_index("ix_members_created_at", table_name="members")
    op.drop_index("ix_members_is_active", table_name="members")
    op.drop_index("ix_members_book_id", table_name="members")
    op.drop_table("members")
