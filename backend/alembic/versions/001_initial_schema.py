"""Initial schema — tvl_values, verifier_status.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

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
        "tvl_values",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("project_id", sa.String(64), nullable=False),
        sa.Column("data_source", sa.String(64), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("canonical", sa.Numeric(78, 0), nullable=False, server_default="0"),
        sa.Column("external", sa.Numeric(78, 0), nullable=False, server_default="0"),
        sa.Column("native", sa.Numeric(78, 0), nullable=False, server_default="0"),
    )
    op.create_index(
        "ix_tvl_values_project_source_ts", "tvl_values",
        ["project_id", "data_source", "timestamp"],
    )

    op.create_table(
        "verifier_status",
        sa.Column("address", sa.String(66), primary_key=True),
        sa.Column("chain_id", sa.Integer, primary_key=True),
        sa.Column("last_used", sa.DateTime(timezone=True), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("verifier_status")
    op.drop_index("ix_tvl_values_project_source_ts", table_name="tvl_values")
    op.drop_table("tvl_values")
