import sqlite3
import logging
import threading
import time
from typing import Any, List, Optional, Sequence, Tuple
from adapters.db.base import DBAdapter
from adapters.metrics.base import Metrics
from adapters.metrics.noop import NoOpMetrics
from pathlib import Path

log = logging.getLogger(__name__)


def quote_identifier(name: str) -> str:
    """Quote an SQL identifier, doubling embedded double quotes."""
    return '"' + name.replace('"', '""') + '"'


class SQLiteAdapter(DBAdapter):
    name = "sqlite"
    dialect = "sqlite"

    def __init__(
        self,
        path: str,
        timeout: float = 5.0,
        metrics: Optional[Metrics] = None,
    ):
        # resolve absolute path for safety
        self.path = Path(path).resolve()
        self.timeout = timeout
        self.metrics = metrics or NoOpMetrics()
        self._conn: Optional[sqlite3.Connection] = None
        self._lock = threading.Lock()
        log.info("SQLiteAdapter initialized with DB path: %s", self.path)

    def _connection(self) -> sqlite3.Connection:
        # Caller holds self._lock.
        if self._conn is None:
            if not self.path.exists():
                raise FileNotFoundError(f"SQLite DB does not exist: {self.path}")
            # isolation_level=None → every statement autocommits on its own.
            self._conn = sqlite3.connect(
                str(self.path),
                timeout=self.timeout,
                check_same_thread=False,
                isolation_level=None,
            )
            log.info("Opened shared SQLite connection", extra={"path": str(self.path)})
        return self._conn

    def _run(self, operation: str, sql: str, params: Sequence[Any], fetch: bool):
        t0 = time.perf_counter()
        ok = False
        try:
            with self._lock:
                cur = self._connection().cursor()
                try:
                    log.debug("Executing SQL: %s", sql)
                    cur.execute(sql, tuple(params))
                    if fetch:
                        rows = cur.fetchall()
                        cols = [d[0] for d in cur.description or ()]
                        result: Any = (rows, cols)
                    else:
                        result = cur.rowcount
                finally:
                    cur.close()
            ok = True
            return result
        finally:
            self.metrics.inc_statement(operation=operation, ok=ok)
            self.metrics.observe_statement_duration_ms(
                operation=operation, dt_ms=(time.perf_counter() - t0) * 1000
            )

    def list_tables(self) -> List[str]:
        rows, _ = self._run(
            "catalog",
            "SELECT name FROM sqlite_master "
            "WHERE type='table' AND name NOT LIKE 'sqlite_%' "
            "ORDER BY name;",
            (),
            fetch=True,
        )
        return [r[0] for r in rows if r and r[0]]

    def table_info(self, table: str) -> List[Tuple[Any, ...]]:
        # PRAGMA arguments cannot be bound; table must already be allow-listed.
        rows, _ = self._run(
            "catalog", f"PRAGMA table_info({quote_identifier(table)});", (), fetch=True
        )
        return rows

    def fetch_all(
        self, sql: str, params: Sequence[Any] = ()
    ) -> Tuple[List[Tuple[Any, ...]], List[str]]:
        rows, cols = self._run("select", sql, params, fetch=True)
        log.info("Query executed successfully. Returned %d rows.", len(rows))
        return rows, cols

    def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        operation = sql.lstrip().split(None, 1)[0].lower() if sql.strip() else "empty"
        affected = self._run(operation, sql, params, fetch=False)
        log.info("Statement executed. %d rows affected.", affected)
        return affected

    def ping(self) -> None:
        self._run("ping", "SELECT 1;", (), fetch=True)

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
