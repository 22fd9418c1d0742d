"""Value ORM — TVL samples per project and data source.

Invariants:
    - canonical/external/native are smallest-unit integers (cents), never floats
    - Many rows per (project_id, data_source); the newest timestamp is the "latest value"

Design Decisions:
    - Numeric(78, 0) columns: wide enough for uint256-scale sums, read back as int
    - Table named tvl_values: VALUES is reserved in SQL
"""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from project_catalog.db.base import Base


class Value(Base):
    """One TVL sample."""
    __tablename__ = "tvl_values"
    __table_args__ = (
        Index("ix_tvl_values_project_source_ts", "project_id", "data_source", "timestamp"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    project_id: Mapped[str] = mapped_column(String(64), nullable=False)
    data_source: Mapped[str] = mapped_column(String(64), nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    canonical: Mapped[int] = mapped_column(Numeric(78, 0), nullable=False, default=0)
    external: Mapped[int] = mapped_column(Numeric(78, 0), nullable=False, default=0)
    native: Mapped[int] = mapped_column(Numeric(78, 0), nullable=False, default=0)
