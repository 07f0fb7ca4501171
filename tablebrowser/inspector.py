from __future__ import annotations

import logging
from typing import Iterable, List

from adapters.db.base import DBAdapter
from tablebrowser.types import Column

log = logging.getLogger(__name__)


class UnknownIdentifier(LookupError):
    """A table or column name that is not present in the live catalog."""

    def __init__(self, kind: str, name: str, table: str | None = None) -> None:
        self.kind = kind
        self.name = name
        self.table = table
        where = f" in table {table!r}" if table else ""
        super().__init__(f"unknown {kind} {name!r}{where}")


class SchemaInspector:
    """
    Reads table names and column schemas from the catalog.

    Nothing is cached: every call queries the database again, so schema
    changes made by other clients are visible on the next request.

    The `require_*` helpers form the allow-list that guards every place an
    identifier is spliced into statement text.
    """

    def __init__(self, db: DBAdapter):
        self.db = db

    def list_tables(self) -> List[str]:
        return self.db.list_tables()

    def require_table(self, table: str) -> str:
        """Return the catalog spelling of `table`; SQLite names ignore case."""
        catalog = {t.casefold(): t for t in self.list_tables()}
        name = catalog.get(table.casefold())
        if name is None:
            log.warning("Rejected unknown table", extra={"table": table})
            raise UnknownIdentifier("table", table)
        return name

    def describe_columns(self, table: str) -> List[Column]:
        name = self.require_table(table)
        return [Column.from_table_info(info) for info in self.db.table_info(name)]

    def require_columns(self, table: str, names: Iterable[str]) -> List[str]:
        """Catalog spellings of `names`, in the order given."""
        known = {c.name.casefold(): c.name for c in self.describe_columns(table)}
        resolved: List[str] = []
        for name in names:
            column = known.get(name.casefold())
            if column is None:
                log.warning(
                    "Rejected unknown column", extra={"table": table, "column": name}
                )
                raise UnknownIdentifier("column", name, table=table)
            resolved.append(column)
        return resolved
