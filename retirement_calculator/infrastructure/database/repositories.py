"""Data access layer for lifestyle deposits"""

from decimal import Decimal
from typing import List, Optional
from sqlalchemy.orm import Session
from retirement_calculator.infrastructure.database.models import LifestyleDepositRecord
from retirement_calculator.domain.models import LifestyleDeposit
from retirement_calculator.utils.decimal_utils import round_to_scale


def _to_domain(record: LifestyleDepositRecord) -> LifestyleDeposit:
    return LifestyleDeposit(
        lifestyle_type=record.lifestyle_type,
        monthly_deposit=round_to_scale(Decimal(str(record.monthly_deposit))),
    )


class LifestyleDepositRepository:
    """Repository for lifestyle deposit records"""

    def __init__(self, db: Session):
        self.db = db

    def find_by_lifestyle_type(self, lifestyle_type: str) -> Optional[LifestyleDeposit]:
        """Fetch the deposit for a normalized (lower-cased) lifestyle type"""
        record = (
            self.db.query(LifestyleDepositRecord)
            .filter(LifestyleDepositRecord.lifestyle_type == lifestyle_type.lower())
            .first()
        )
        return _to_domain(record) if record else None

    def find_all(self) -> List[LifestyleDeposit]:
        """Fetch every record ordered by lifestyle type"""
        records = (
            self.db.query(LifestyleDepositRecord)
            .order_by(LifestyleDepositRecord.lifestyle_type)
            .all()
        )
        return [_to_domain(r) for r in records]

    def save(self, deposit: LifestyleDeposit) -> LifestyleDepositRecord:
        """Insert or update the record for a lifestyle type (administrative loading)"""
        key = deposit.lifestyle_type.lower()
        record = (
            self.db.query(LifestyleDepositRecord)
            .filter(LifestyleDepositRecord.lifestyle_type == key)
            .first()
        )
        if record is None:
            record = LifestyleDepositRecord(lifestyle_type=key)
            self.db.add(record)
        record.monthly_deposit = round_to_scale(deposit.monthly_deposit)
        self.db.flush()
        return record
