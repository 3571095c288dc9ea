"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass
class LifestyleDeposit:
    """Monthly deposit configured for a lifestyle type"""

    lifestyle_type: str
    monthly_deposit: Decimal


@dataclass
class RetirementRequest:
    """Input to a retirement plan calculation"""

    current_age: int
    retirement_age: int
    lifestyle_type: str
    interest_rate: Optional[Decimal] = None  # annual percentage; falls back to cached rate


@dataclass(frozen=True)
class RetirementResult:
    """Output of a retirement plan calculation"""

    current_age: int
    retirement_age: int
    interest_rate: Decimal
    lifestyle_type: str
    monthly_deposit: Decimal
    future_value: Decimal


@dataclass(frozen=True)
class MaintenanceResult:
    """Outcome of a cache maintenance operation"""

    ok: bool
    message: str
    value: Optional[str] = None
    code: Optional[str] = None  # error code when ok is False

    @classmethod
    def success(cls, message: str, value: Optional[str] = None) -> "MaintenanceResult":
        return cls(ok=True, message=message, value=value)

    @classmethod
    def failure(cls, message: str, code: str) -> "MaintenanceResult":
        return cls(ok=False, message=message, code=code)

    def __str__(self) -> str:
        return self.message
