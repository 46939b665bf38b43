"""Prometheus metrics for the Card Ledger service.

Metrics are organized into two categories:

Business Metrics (for Product/Finance):
- cardledger_repair_runs_total: Repair runs by outcome
- cardledger_repair_rows_total: Flagged transactions by migration outcome
- cardledger_repair_pending: Flagged transactions found by the last scan
- cardledger_transactions_created_total: Created entries by kind

Technical Metrics (for Engineering/SRE):
- cardledger_repair_latency_seconds: Repair run latency
- cardledger_guard_rejections_total: Credit-card expenses rejected at write time
- cardledger_dependency_failures_total: Bill/limit collaborator failures
- cardledger_http_requests_total: HTTP requests by endpoint/status
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, Gauge, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics (Product/Finance dashboards)
# =============================================================================

repair_runs_total = Counter(
    "cardledger_repair_runs_total",
    "Total number of credit-card transaction repair runs",
    ["outcome"],  # clean, partial, failed
)

repair_rows_total = Counter(
    "cardledger_repair_rows_total",
    "Flagged transactions processed by the repair",
    ["outcome"],  # migrated, failed
)

repair_pending_gauge = Gauge(
    "cardledger_repair_pending",
    "Flagged transactions found by the most recent scan",
)

transactions_created_total = Counter(
    "cardledger_transactions_created_total",
    "Entries created through the transaction endpoint",
    ["kind"],  # transaction, credit_card_purchase
)


# =============================================================================
# Technical Metrics (Engineering/SRE dashboards)
# =============================================================================

repair_latency = Histogram(
    "cardledger_repair_latency_seconds",
    "Repair run latency in seconds",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

guard_rejections_total = Counter(
    "cardledger_guard_rejections_total",
    "Credit-card expenses rejected by the transactions table guard",
)

dependency_failures_total = Counter(
    "cardledger_dependency_failures_total",
    "Failures of billing collaborators",
    ["dependency"],  # bill_generator, limit_recalculator
)

http_requests_total = Counter(
    "cardledger_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "cardledger_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_repair_run(fixed: int, failed: int) -> None:
    """Record a finished repair run in metrics."""
    if failed == 0:
        outcome = "clean"
    elif fixed == 0:
        outcome = "failed"
    else:
        outcome = "partial"

    repair_runs_total.labels(outcome=outcome).inc()
    repair_rows_total.labels(outcome="migrated").inc(fixed)
    repair_rows_total.labels(outcome="failed").inc(failed)


def record_repair_scan(pending: int) -> None:
    """Record how many flagged transactions a scan found."""
    repair_pending_gauge.set(pending)


def record_transaction_created(kind: str) -> None:
    transactions_created_total.labels(kind=kind).inc()


def record_guard_rejection() -> None:
    guard_rejections_total.inc()


def record_dependency_failure(dependency: str) -> None:
    dependency_failures_total.labels(dependency=dependency).inc()


@contextmanager
def track_repair_latency() -> Generator[None, None, None]:
    """Context manager to track repair latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        repair_latency.observe(duration)


def record_http_request(method: str, endpoint: str, status: int, duration: float) -> None:
    """Record an HTTP request."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=str(status)).inc()
    http_request_latency.labels(method=method, endpoint=endpoint).observe(duration)


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST
