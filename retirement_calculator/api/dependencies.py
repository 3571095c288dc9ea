"""Dependency injection for FastAPI endpoints"""

from functools import lru_cache

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from retirement_calculator.config import settings
from retirement_calculator.domain.ports import CachePort
from retirement_calculator.infrastructure.cache.redis_cache import RedisCache
from retirement_calculator.infrastructure.database.repositories import LifestyleDepositRepository
from retirement_calculator.infrastructure.database.session import get_db
from retirement_calculator.services.cache_maintenance import CacheMaintenanceService
from retirement_calculator.services.retirement import RetirementService


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


@lru_cache
def get_deposit_cache() -> CachePort:
    """Provide the deposit namespace (one client per process)"""
    return RedisCache.from_url(db=settings.redis_deposit_db, name="deposit")


@lru_cache
def get_interest_cache() -> CachePort:
    """Provide the interest-rate namespace (one client per process)"""
    return RedisCache.from_url(db=settings.redis_interest_db, name="interest")


def get_retirement_service(
    deposit_cache: CachePort = Depends(get_deposit_cache),
    interest_cache: CachePort = Depends(get_interest_cache),
) -> RetirementService:
    """Provide calculation service wired to both cache namespaces"""
    return RetirementService(deposit_cache, interest_cache)


def get_cache_maintenance_service(
    db: Session = Depends(get_db),
    deposit_cache: CachePort = Depends(get_deposit_cache),
    interest_cache: CachePort = Depends(get_interest_cache),
) -> CacheMaintenanceService:
    """Provide cache maintenance service backed by the database store"""
    return CacheMaintenanceService(deposit_cache, LifestyleDepositRepository(db), interest_cache)
