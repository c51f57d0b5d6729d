"""Prometheus metrics for monitoring estimate volume, product mix, and renderer performance"""

from decimal import Decimal
from prometheus_client import Counter, Histogram, Gauge

# Estimate metrics
estimate_counter = Counter(
    "woundcare_estimate_total",
    "Total revenue estimates computed",
    ["kind", "billing_code"],  # progression | quote
)

estimate_billable_bucket_counter = Counter(
    "woundcare_estimate_billable_bucket",
    "Progression total billable by bucket",
    ["bucket"],  # <$10k, $10k-$50k, $50k-$100k, $100k+
)

# Price table health
price_table_errors_gauge = Gauge(
    "woundcare_price_table_errors",
    "Validation errors found in the loaded graft price table",
)

# Report renderer metrics
renderer_latency_histogram = Histogram(
    "report_renderer_latency_seconds",
    "Report renderer response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

renderer_failure_counter = Counter(
    "report_renderer_failures_total",
    "Failed report render attempts",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_estimate(kind: str, billing_code: str, total_billable: Decimal | None = None) -> None:
    """Record estimate metrics for product mix and deal size analysis"""
    estimate_counter.labels(kind=kind, billing_code=billing_code).inc()

    if total_billable is None:
        return

    # Bucket total billable for deal size distribution
    if total_billable < 10_000:
        bucket = "<$10k"
    elif total_billable < 50_000:
        bucket = "$10k-$50k"
    elif total_billable < 100_000:
        bucket = "$50k-$100k"
    else:
        bucket = "$100k+"

    estimate_billable_bucket_counter.labels(bucket=bucket).inc()
