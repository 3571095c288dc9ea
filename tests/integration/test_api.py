"""Integration tests for API endpoints"""

from decimal import Decimal
from unittest.mock import MagicMock
from fastapi.testclient import TestClient
from retirement_calculator.api.dependencies import get_cache_maintenance_service
from retirement_calculator.infrastructure.cache.memory import InMemoryCache
from retirement_calculator.services.cache_maintenance import CacheMaintenanceService


def calculate(client: TestClient, **overrides):
    body = {"current_age": 30, "retirement_age": 65, "interest_rate": 5.0, "lifestyle_type": "fancy"}
    body.update(overrides)
    return client.post("/v1/retirement-plans/calculate", json=body)


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    calculate(client)
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "retirement_calculation_total" in response.text


def test_request_id_is_propagated(client: TestClient):
    """Test caller-supplied request ID is echoed"""
    response = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"


def test_calculate_endpoint(client: TestClient):
    """Test POST /v1/retirement-plans/calculate"""
    response = calculate(client, lifestyle_type="Fancy")

    assert response.status_code == 200
    data = response.json()
    assert data["lifestyle_type"] == "Fancy"
    assert Decimal(data["monthly_deposit"]) == Decimal("3000.00")
    assert Decimal("3000000") < Decimal(data["future_value"]) < Decimal("5000000")


def test_calculate_zero_rate(client: TestClient):
    """Test zero rate yields the simple sum"""
    response = calculate(client, lifestyle_type="simple", interest_rate=0.0)

    assert response.status_code == 200
    assert Decimal(response.json()["future_value"]) == Decimal("420000.00")


def test_calculate_uses_cached_rate_when_omitted(client: TestClient):
    """Test interest_rate may be left out"""
    response = calculate(client, interest_rate=None)

    assert response.status_code == 200
    assert Decimal(response.json()["interest_rate"]) == Decimal("6.0")


def test_calculate_invalid_ages(client: TestClient):
    """Test equal ages map to 400 with RC-400"""
    response = calculate(client, current_age=65, retirement_age=65)

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "RC-400"


def test_calculate_negative_rate(client: TestClient):
    """Test negative rate maps to 400"""
    response = calculate(client, interest_rate=-1.0)

    assert response.status_code == 400
    assert "interest_rate" in response.json()["detail"]["message"]


def test_calculate_unknown_lifestyle(client: TestClient):
    """Test uncached lifestyle maps to 404 with RC-404"""
    response = calculate(client, lifestyle_type="unknown")

    assert response.status_code == 404
    assert response.json()["detail"]["code"] == "RC-404"


def test_calculate_cache_outage(client: TestClient, deposit_cache: InMemoryCache):
    """Test cache outage maps to 500 with RC-500"""
    deposit_cache.available = False

    response = calculate(client)

    assert response.status_code == 500
    assert response.json()["detail"]["code"] == "RC-500"


def test_cache_status(client: TestClient):
    """Test GET /v1/cache/status/{key}"""
    response = client.get("/v1/cache/status/FANCY")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "success"
    assert "Cache key fancy exists" in data["cache_status"]


def test_cache_refresh(client: TestClient):
    """Test PUT /v1/cache/refresh/{key}"""
    response = client.put("/v1/cache/refresh/Simple")

    assert response.status_code == 200
    data = response.json()
    assert data["key"] == "simple"
    assert data["value"] == "LifestyleType: simple, Amount: 1000.00"


def test_cache_refresh_unknown_key(client: TestClient):
    """Test refresh of a key the store does not know"""
    response = client.put("/v1/cache/refresh/unknown")

    assert response.status_code == 404
    assert response.json()["detail"]["code"] == "RC-404"


def test_cache_refresh_store_failure_maps_to_500(client: TestClient, deposit_cache: InMemoryCache):
    """Test store errors keep their RC-500 status on refresh routes"""
    store = MagicMock()
    store.find_by_lifestyle_type.side_effect = RuntimeError("database is down")
    store.find_all.side_effect = RuntimeError("database is down")
    service = CacheMaintenanceService(deposit_cache, store)
    client.app.dependency_overrides[get_cache_maintenance_service] = lambda: service

    for response in (client.put("/v1/cache/refresh/simple"), client.post("/v1/cache/refresh-all")):
        assert response.status_code == 500
        assert response.json()["detail"]["code"] == "RC-500"


def test_cache_refresh_all_when_cache_down(client: TestClient, deposit_cache: InMemoryCache):
    """Test cache outage on refresh-all maps to 503"""
    deposit_cache.available = False

    response = client.post("/v1/cache/refresh-all")

    assert response.status_code == 503
    assert response.json()["detail"]["code"] == "RC-503"


def test_calculate_after_refresh(client: TestClient):
    """Test refreshed record-form values still calculate"""
    client.put("/v1/cache/refresh/simple")

    response = calculate(client, lifestyle_type="simple", interest_rate=0.0)

    assert response.status_code == 200
    assert Decimal(response.json()["future_value"]) == Decimal("420000.00")


def test_cache_refresh_all(client: TestClient, deposit_cache: InMemoryCache):
    """Test POST /v1/cache/refresh-all"""
    deposit_cache.set("stale", "1.00")

    response = client.post("/v1/cache/refresh-all")

    assert response.status_code == 200
    assert response.json()["status"] == "success"
    assert deposit_cache.keys() == {"simple", "fancy"}


def test_cache_set_get_delete(client: TestClient):
    """Test manual override lifecycle"""
    response = client.post("/v1/cache/set", params={"key": "Luxury", "value": "5000.00"})
    assert response.status_code == 200
    assert response.json()["key"] == "luxury"

    response = client.get("/v1/cache/get/luxury")
    assert response.status_code == 200
    assert response.json()["value"] == "5000.00"

    response = client.delete("/v1/cache/delete/LUXURY")
    assert response.status_code == 200

    response = client.get("/v1/cache/get/luxury")
    assert response.status_code == 404


def test_cache_set_requires_key_and_value(client: TestClient):
    """Test blank parameters are rejected"""
    assert client.post("/v1/cache/set", params={"value": "1"}).status_code == 400
    assert client.post("/v1/cache/set", params={"key": "simple", "value": " "}).status_code == 400


def test_cache_set_when_cache_down(client: TestClient, deposit_cache: InMemoryCache):
    """Test outage on manual write maps to 503"""
    deposit_cache.available = False

    response = client.post("/v1/cache/set", params={"key": "simple", "value": "1.00"})

    assert response.status_code == 503
    assert response.json()["detail"]["code"] == "RC-503"


def test_cache_all(client: TestClient):
    """Test GET /v1/cache/all"""
    response = client.get("/v1/cache/all")

    assert response.status_code == 200
    entries = response.json()["entries"]
    assert entries["fancy:deposit"] == "3000.00"
    assert entries["simple:interest"] == "4.5"
