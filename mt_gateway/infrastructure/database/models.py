"""SQLAlchemy ORM models for the SQL-backed ledger store"""

from sqlalchemy import Column, DateTime, LargeBinary, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class LedgerEntry(Base):
    """One key/value pair of a ledger store instance"""

    __tablename__ = "ledger_entry"

    store_id = Column(Text, primary_key=True)
    key = Column(Text, primary_key=True)
    value = Column(LargeBinary, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
