from __future__ import annotations

from adapters.metrics.base import Metrics


class NoOpMetrics(Metrics):
    def observe_statement_duration_ms(self, *, operation: str, dt_ms: float) -> None:
        return

    def inc_statement(self, *, operation: str, ok: bool) -> None:
        return
