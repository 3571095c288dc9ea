"""Prometheus metrics for calculation outcomes and cache behaviour"""

from prometheus_client import Counter, Histogram

# Calculation metrics
calculation_counter = Counter(
    "retirement_calculation_total",
    "Total retirement plan calculations",
    ["outcome"],  # success | invalid_input | not_found | failed
)

# Cache metrics
cache_lookup_counter = Counter(
    "retirement_cache_lookup_total",
    "Cache reads made while calculating",
    ["namespace", "result"],  # deposit | interest ; hit | miss
)

cache_maintenance_counter = Counter(
    "retirement_cache_maintenance_total",
    "Cache maintenance operations",
    ["operation", "outcome"],  # status | refresh | refresh_all | set | delete ; success | error
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_calculation(outcome: str) -> None:
    """Record a calculation outcome"""
    calculation_counter.labels(outcome=outcome).inc()


def record_cache_lookup(namespace: str, hit: bool) -> None:
    """Record a cache hit or miss for a namespace"""
    cache_lookup_counter.labels(namespace=namespace, result="hit" if hit else "miss").inc()


def record_cache_maintenance(operation: str, ok: bool) -> None:
    """Record a maintenance operation outcome"""
    cache_maintenance_counter.labels(operation=operation, outcome="success" if ok else "error").inc()
