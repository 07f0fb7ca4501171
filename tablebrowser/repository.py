from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from adapters.db.base import DBAdapter
from adapters.db.sqlite_adapter import quote_identifier
from tablebrowser.inspector import SchemaInspector
from tablebrowser.types import IdentifiedRow, Row

log = logging.getLogger(__name__)

# Form field carrying the row identity on update submissions.
IDENTITY_FIELD = "rowid"


class RowRepository:
    """
    Parameterized CRUD statements against a single table.

    Rows are addressed by SQLite's native `rowid`, not by any declared
    primary key. Table and column names are checked against the catalog
    before they are quoted into statement text; values are always bound.
    """

    def __init__(self, db: DBAdapter, inspector: Optional[SchemaInspector] = None):
        self.db = db
        self.inspector = inspector or SchemaInspector(db)

    def _table(self, table: str) -> str:
        return quote_identifier(self.inspector.require_table(table))

    def select_all(self, table: str) -> List[Row]:
        rows, cols = self.db.fetch_all(f"SELECT * FROM {self._table(table)};")
        return [dict(zip(cols, r)) for r in rows]

    def select_with_identity(self, table: str) -> List[IdentifiedRow]:
        # Alias explicitly: for INTEGER PRIMARY KEY tables SQLite would
        # otherwise report the rowid under the key column's name.
        rows, cols = self.db.fetch_all(
            f'SELECT rowid AS "{IDENTITY_FIELD}", * FROM {self._table(table)};'
        )
        return [
            IdentifiedRow(identity=r[0], values=dict(zip(cols[1:], r[1:])))
            for r in rows
        ]

    def select_one(self, table: str, identity: Optional[int]) -> Optional[Row]:
        rows, cols = self.db.fetch_all(
            f"SELECT * FROM {self._table(table)} WHERE rowid = ?;", (identity,)
        )
        if not rows:
            return None
        return dict(zip(cols, rows[0]))

    def insert(self, table: str, fields: Mapping[str, Any]) -> None:
        """
        Insert one row. Blank ("") fields are left out of the statement so
        rowid assignment and column DEFAULTs apply to them.
        """
        target = self._table(table)
        names = self.inspector.require_columns(table, fields.keys())
        pairs = [(n, v) for n, v in zip(names, fields.values()) if v != ""]
        if not pairs:
            self.db.execute(f"INSERT INTO {target} DEFAULT VALUES;")
            return

        columns = ", ".join(quote_identifier(n) for n, _ in pairs)
        placeholders = ", ".join("?" for _ in pairs)
        self.db.execute(
            f"INSERT INTO {target} ({columns}) VALUES ({placeholders});",
            [v for _, v in pairs],
        )

    def update(
        self, table: str, identity: Optional[int], fields: Mapping[str, Any]
    ) -> Optional[int]:
        """
        Update one row by rowid. Blank ("") fields are stored as NULL, so a
        NULL shown as an empty input survives an unchanged save.

        Returns the affected row count, or None when nothing remained to
        set and no statement was executed.
        """
        keys = [k for k in fields.keys() if k != IDENTITY_FIELD]
        if not keys:
            log.info("Update short-circuited: no fields", extra={"table": table})
            return None

        target = self._table(table)
        names = self.inspector.require_columns(table, keys)
        assignments = ", ".join(f"{quote_identifier(n)} = ?" for n in names)
        params = [None if fields[k] == "" else fields[k] for k in keys] + [identity]
        return self.db.execute(
            f"UPDATE {target} SET {assignments} WHERE rowid = ?;", params
        )

    def delete(self, table: str, identity: Optional[int]) -> int:
        return self.db.execute(
            f"DELETE FROM {self._table(table)} WHERE rowid = ?;", (identity,)
        )
