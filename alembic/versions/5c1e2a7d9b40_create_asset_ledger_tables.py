"""create asset ledger tables

Revision ID: 5c1e2a7d9b40
Revises:
Create Date: 2026-10-19 10:12:41.118305

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '5c1e2a7d9b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade():
    op.create_table(
        "asset_records",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("originator", sa.String(length=128), nullable=False),
        sa.Column(
            "lifecycle_state",
            sa.Integer(),
            server_default=sa.text("1"),
            nullable=False,
        ),
        sa.Column("reviewer", sa.String(length=128), nullable=True),
        sa.Column("reviewed_at", sa.BigInteger(), nullable=True),
        sa.Column("metadata_uri", sa.String(length=256), nullable=False),
        sa.Column("integrity_hash", sa.String(length=64), nullable=False),
        sa.Column("created_at", sa.BigInteger(), nullable=False),
        sa.Column("modified_at", sa.BigInteger(), nullable=False),
        sa.Column("decommissioned", sa.Boolean(), nullable=False),
        sa.CheckConstraint(
            "lifecycle_state BETWEEN 1 AND 5", name="ck_asset_records_state_range"
        ),
    )
    op.create_index("ix_asset_records_originator", "asset_records", ["originator"])
    op.create_index("ix_asset_records_state", "asset_records", ["lifecycle_state"])

    op.create_table(
        "token_specs",
        sa.Column(
            "asset_id",
            sa.String(length=36),
            sa.ForeignKey("asset_records.id", ondelete="RESTRICT"),
            primary_key=True,
            nullable=False,
        ),
        sa.Column("supply", sa.BigInteger(), nullable=False),
        sa.Column("token_precision", sa.Integer(), nullable=False),
        sa.Column("token_uri", sa.String(length=256), nullable=False),
        sa.Column("activated_at", sa.BigInteger(), nullable=False),
        sa.CheckConstraint("supply > 0", name="ck_token_specs_supply_positive"),
        sa.CheckConstraint(
            "token_precision >= 0", name="ck_token_specs_precision_nonnegative"
        ),
    )

    op.create_table(
        "holder_balances",
        sa.Column(
            "asset_id",
            sa.String(length=36),
            sa.ForeignKey("asset_records.id", ondelete="RESTRICT"),
            primary_key=True,
            nullable=False,
        ),
        sa.Column("holder", sa.String(length=128), primary_key=True, nullable=False),
        sa.Column("quantity", sa.BigInteger(), nullable=False),
        sa.CheckConstraint("quantity >= 0", name="ck_holder_balances_nonnegative"),
    )
    op.create_index("ix_holder_balances_holder", "holder_balances", ["holder"])

    op.create_table(
        "reviewer_grants",
        sa.Column("reviewer", sa.String(length=128), primary_key=True, nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False),
        sa.Column("enrolled_at", sa.BigInteger(), nullable=False),
    )

    op.create_table(
        "transfer_records",
        sa.Column(
            "sequence",
            sa.BigInteger(),
            primary_key=True,
            autoincrement=False,
            nullable=False,
        ),
        sa.Column(
            "asset_id",
            sa.String(length=36),
            sa.ForeignKey("asset_records.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("sender", sa.String(length=128), nullable=False),
        sa.Column("receiver", sa.String(length=128), nullable=False),
        sa.Column("quantity", sa.BigInteger(), nullable=False),
        sa.Column("occurred_at", sa.BigInteger(), nullable=False),
        sa.Column("prev_hash", sa.String(length=64), nullable=False),
        sa.Column("entry_hash", sa.String(length=64), nullable=False),
        sa.CheckConstraint("sequence >= 0", name="ck_transfer_records_seq_nonnegative"),
        sa.CheckConstraint("quantity > 0", name="ck_transfer_records_quantity_positive"),
    )
    op.create_index("ix_transfer_records_asset", "transfer_records", ["asset_id"])

    op.create_table(
        "ledger_counters",
        sa.Column("name", sa.String(length=32), primary_key=True, nullable=False),
        sa.Column("value", sa.BigInteger(), nullable=False),
    )


def downgrade():
    op.drop_table("ledger_counters")
    op.drop_index("ix_transfer_records_asset", table_name="transfer_records")
    op.drop_table("transfer_records")
    op.drop_table("reviewer_grants")
    op.drop_index("ix_holder_balances_holder", table_name="holder_balances")
    op.drop_table("holder_balances")
    op.drop_table("token_specs")
    op.drop_index("ix_asset_records_state", table_name="asset_records")
    op.drop_index("ix_asset_records_originator", table_name="asset_records")
    op.drop_table("asset_records")
