from __future__ import annotations

from abc import ABC, abstractmethod


class Metrics(ABC):
    @abstractmethod
    def observe_statement_duration_ms(self, *, operation: str, dt_ms: float) -> None: ...

    @abstractmethod
    def inc_statement(self, *, operation: str, ok: bool) -> None: ...
