from __future__ import annotations

from prometheus_client import Counter, Histogram
from tablebrowser.prom import REGISTRY

from adapters.metrics.base import Metrics

# -----------------------------------------------------------------------------
# Statement-level metrics
# -----------------------------------------------------------------------------
db_statement_duration_ms = Histogram(
    "db_statement_duration_ms",
    "Duration (ms) of each database statement",
    ["operation"],
    buckets=(0.5, 1, 2, 5, 10, 20, 50, 100, 200, 500, 1000, 5000),
    registry=REGISTRY,
)

db_statements_total = Counter(
    "db_statements_total",
    "Count of database statements labeled by operation and ok",
    ["operation", "ok"],
    registry=REGISTRY,
)


class PrometheusMetrics(Metrics):
    def observe_statement_duration_ms(self, *, operation: str, dt_ms: float) -> None:
        db_statement_duration_ms.labels(operation=operation).observe(float(dt_ms))

    def inc_statement(self, *, operation: str, ok: bool) -> None:
        db_statements_total.labels(
            operation=operation, ok=("true" if ok else "false")
        ).inc()


# -----------------------------------------------------------------------------
# Label priming to keep /metrics stable
# -----------------------------------------------------------------------------
for operation in ("catalog", "select", "insert", "update", "delete", "ping"):
    for ok in ("true", "false"):
        db_statements_total.labels(operation=operation, ok=ok).inc(0)
