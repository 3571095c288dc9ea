"""Pydantic schemas for API request/response validation"""

from decimal import Decimal
from pydantic import BaseModel, Field
from typing import Dict, Optional


class RetirementPlanRequest(BaseModel):
    """Request body for POST /v1/retirement-plans/calculate"""

    current_age: int = Field(..., description="Current age in years")
    retirement_age: int = Field(..., description="Planned retirement age in years")
    interest_rate: Optional[Decimal] = Field(
        None, description="Annual interest rate in percent; cached rate is used when omitted"
    )
    lifestyle_type: str = Field(..., min_length=1, description="Lifestyle label, e.g. simple or fancy")


class RetirementPlanResponse(BaseModel):
    """Response for POST /v1/retirement-plans/calculate"""

    current_age: int
    retirement_age: int
    interest_rate: Decimal
    lifestyle_type: str
    monthly_deposit: Decimal
    future_value: Decimal


class ErrorDetail(BaseModel):
    """Error body carried in HTTPException detail"""

    code: str
    message: str


class CacheStatusResponse(BaseModel):
    """Response for GET /v1/cache/status/{key}"""

    status: str
    cache_status: str


class CacheEntryResponse(BaseModel):
    """Single cache entry"""

    key: str
    value: str


class CacheOperationResponse(BaseModel):
    """Response for cache mutations"""

    status: str
    message: str
    key: Optional[str] = None
    value: Optional[str] = None


class CacheDumpResponse(BaseModel):
    """Response for GET /v1/cache/all"""

    entries: Dict[str, Optional[str]]
