from typing import Any, List, Protocol, Sequence, Tuple


class DBAdapter(Protocol):
    """Storage adapter owning the database handle. One statement per call."""

    name: str
    dialect: str

    def list_tables(self) -> List[str]:
        """Names of user tables from the catalog, sorted."""

    def table_info(self, table: str) -> List[Tuple[Any, ...]]:
        """Catalog rows describing the columns of an already-validated table."""

    def fetch_all(
        self, sql: str, params: Sequence[Any] = ()
    ) -> Tuple[List[Tuple[Any, ...]], List[str]]:
        """Run a SELECT and return (rows, columns)."""

    def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run a mutating statement in autocommit mode. Returns affected rows."""

    def ping(self) -> None:
        """Raise if the database cannot answer a trivial query."""
