"""Verifier Status ORM — last observed use of a verifier contract.

Invariants:
    - One row per (address, chain_id)
    - last_used is timezone-aware UTC
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from project_catalog.db.base import Base


class VerifierStatus(Base):
    """Usage status for one verifier deployment."""
    __tablename__ = "verifier_status"

    address: Mapped[str] = mapped_column(String(66), primary_key=True)
    chain_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    last_used: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
