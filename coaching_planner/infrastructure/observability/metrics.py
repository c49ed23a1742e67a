"""Prometheus metrics for plan outcomes, solver latency and HTTP traffic"""

from prometheus_client import Counter, Histogram

# Plan metrics
plan_counter = Counter(
    "planner_plans_total",
    "Payment plans computed",
    ["operation", "outcome"],  # operation: options | design | tune | minimum_deposit | cashflow
)

plan_duration_bucket_counter = Counter(
    "planner_plan_duration_bucket",
    "Plans computed by duration bucket",
    ["bucket"],  # 1m, 2-3m, 4-6m, 7m+
)

# Solver metrics
solver_latency_histogram = Histogram(
    "planner_solver_seconds",
    "Time spent computing plans",
    ["operation"],
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0],
)

invalid_visits_counter = Counter(
    "planner_invalid_visit_requests_total",
    "Requests rejected because visits were not plannable",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_plan(operation: str, is_valid: bool, duration: int) -> None:
    """Record plan metrics for monitoring how often schedules fit the cap"""
    outcome = "valid" if is_valid else "exceeds_cap"
    plan_counter.labels(operation=operation, outcome=outcome).inc()

    if duration <= 1:
        bucket = "1m"
    elif duration <= 3:
        bucket = "2-3m"
    elif duration <= 6:
        bucket = "4-6m"
    else:
        bucket = "7m+"

    plan_duration_bucket_counter.labels(bucket=bucket).inc()
