"""SQLAlchemy ORM models for the lifestyle deposit backing store"""

from sqlalchemy import Column, Integer, Numeric, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class LifestyleDepositRecord(Base):
    """Monthly deposit per lifestyle type; lifestyle_type is stored lower-cased"""

    __tablename__ = "lifestyle_deposit"

    id = Column(Integer, primary_key=True, autoincrement=True)
    lifestyle_type = Column(String(64), nullable=False, unique=True, index=True)
    monthly_deposit = Column(Numeric(12, 2), nullable=False)
