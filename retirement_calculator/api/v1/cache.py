"""/v1/cache - inspection, refresh and manual overrides of the deposit cache"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Query

from retirement_calculator.api.v1.schemas import (
    CacheDumpResponse,
    CacheEntryResponse,
    CacheOperationResponse,
    CacheStatusResponse,
)
from retirement_calculator.api.dependencies import get_cache_maintenance_service
from retirement_calculator.domain.exceptions import HTTP_STATUS, INVALID_INPUT, NOT_FOUND, CacheUnavailableError
from retirement_calculator.domain.models import MaintenanceResult
from retirement_calculator.services.cache_maintenance import CacheMaintenanceService

router = APIRouter()


def _unavailable(e: CacheUnavailableError) -> HTTPException:
    logging.error(f"Cache unavailable: {e}")
    return HTTPException(status_code=HTTP_STATUS[e.code], detail={"code": e.code, "message": e.message})


def _failed(result: MaintenanceResult) -> HTTPException:
    logging.error(f"Cache maintenance failed: {result.message}")
    status_code = HTTP_STATUS.get(result.code, 500)
    return HTTPException(status_code=status_code, detail={"code": result.code, "message": result.message})


@router.get("/cache/status/{key}", response_model=CacheStatusResponse)
def get_cache_status(key: str, service: CacheMaintenanceService = Depends(get_cache_maintenance_service)):
    """Report cache liveness and whether `key` is cached"""
    result = service.get_status(key.lower())
    return CacheStatusResponse(status="success" if result.ok else "error", cache_status=result.message)


@router.put("/cache/refresh/{key}", response_model=CacheOperationResponse)
def refresh_cache(key: str, service: CacheMaintenanceService = Depends(get_cache_maintenance_service)):
    """Reload one lifestyle deposit from the store into the cache"""
    normalized = key.lower()
    result = service.refresh_cache(normalized)
    if not result.ok:
        raise _failed(result)

    return CacheOperationResponse(
        status="success",
        message="Cache refreshed successfully",
        key=normalized,
        value=result.value,
    )


@router.post("/cache/refresh-all", response_model=CacheOperationResponse)
def refresh_all_cache(service: CacheMaintenanceService = Depends(get_cache_maintenance_service)):
    """Rebuild the whole deposit cache from the store"""
    result = service.refresh_all_cache()
    if not result.ok:
        raise _failed(result)
    return CacheOperationResponse(status="success", message=result.message, value=result.value)


@router.post("/cache/set", response_model=CacheOperationResponse)
def set_cache(
    key: str | None = Query(None, description="Lifestyle key"),
    value: str | None = Query(None, description="Value to cache"),
    service: CacheMaintenanceService = Depends(get_cache_maintenance_service),
):
    """Manually override a cached deposit value"""
    if key is None or not key.strip():
        raise HTTPException(status_code=400, detail={"code": INVALID_INPUT, "message": "Key must not be null or empty"})
    if value is None or not value.strip():
        raise HTTPException(status_code=400, detail={"code": INVALID_INPUT, "message": "Value must not be null or empty"})

    normalized = key.strip().lower()
    try:
        service.update_cache(normalized, value)
    except CacheUnavailableError as e:
        raise _unavailable(e)

    return CacheOperationResponse(status="success", message="Cache set successfully", key=normalized, value=value)


@router.get("/cache/get/{key}", response_model=CacheEntryResponse)
def get_cache(key: str, service: CacheMaintenanceService = Depends(get_cache_maintenance_service)):
    """Read one cached deposit value"""
    try:
        value = service.fetch_from_cache(key.lower())
    except CacheUnavailableError as e:
        raise _unavailable(e)

    if value is None:
        raise HTTPException(status_code=404, detail={"code": NOT_FOUND, "message": f"No cache entry for key: {key}"})
    return CacheEntryResponse(key=key.lower(), value=value)


@router.get("/cache/all", response_model=CacheDumpResponse)
def get_all_cache(service: CacheMaintenanceService = Depends(get_cache_maintenance_service)):
    """Dump every cached deposit (and interest rate) entry"""
    return CacheDumpResponse(entries=service.fetch_all_cache())


@router.delete("/cache/delete/{key}", response_model=CacheOperationResponse)
def delete_cache(key: str, service: CacheMaintenanceService = Depends(get_cache_maintenance_service)):
    """Evict one cached deposit value"""
    normalized = key.lower()
    try:
        service.delete_from_cache(normalized)
    except CacheUnavailableError as e:
        raise _unavailable(e)

    return CacheOperationResponse(
        status="success", message=f"Cache for '{normalized}' deleted successfully", key=normalized
    )
