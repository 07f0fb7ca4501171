from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Mapping, Optional, Tuple

from adapters.db.base import DBAdapter
from tablebrowser.inspector import SchemaInspector, UnknownIdentifier
from tablebrowser.repository import RowRepository
from tablebrowser.types import Column, IdentifiedRow, Row

from app.settings import Settings
from app.errors import (
    RowNotFoundError,
    StorageError,
    UnknownIdentifierError,
)

log = logging.getLogger(__name__)


def parse_identity(raw: Any) -> Optional[int]:
    """
    Coerce a submitted rowid to int. Blanks and junk become None, which
    binds as NULL and so matches no row.
    """
    if raw is None:
        return None
    try:
        return int(str(raw).strip())
    except ValueError:
        log.info("Unparseable row identity", extra={"identity": str(raw)})
        return None


@dataclass
class BrowserService:
    """
    Application-level service for the table browser.

    Responsibilities:
        - Wire the schema inspector and row repository to one adapter.
        - Turn driver failures into StorageError with a message naming
          the table and operation, logging the original exception.
        - Apply the zero-affected-rows policy from Settings.
    """

    settings: Settings
    db: DBAdapter
    inspector: SchemaInspector = field(init=False)
    repository: RowRepository = field(init=False)

    def __post_init__(self) -> None:
        self.inspector = SchemaInspector(self.db)
        self.repository = RowRepository(self.db, self.inspector)

    @contextmanager
    def _storage(self, message: str, **context: Any) -> Iterator[None]:
        try:
            yield
        except UnknownIdentifier as exc:
            log.warning("Unknown identifier: %s", exc, extra=context)
            raise UnknownIdentifierError(message, extra=context) from exc
        except (sqlite3.Error, OSError) as exc:
            log.exception("Storage failure: %s", message, extra=context)
            raise StorageError(message, extra=context) from exc

    def _check_affected(
        self, affected: Optional[int], table: str, identity: Optional[int]
    ) -> None:
        if affected == 0:
            log.info(
                "Statement matched no rows",
                extra={"table": table, "identity": identity},
            )
            if self.settings.strict_row_match:
                raise RowNotFoundError(
                    f"No row with identity {identity} in table {table}."
                )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_tables(self) -> List[str]:
        with self._storage("Error retrieving tables."):
            return self.inspector.list_tables()

    def describe_columns(self, table: str) -> List[Column]:
        with self._storage(f"Error retrieving schema for table {table}.", table=table):
            return self.inspector.describe_columns(table)

    def view_rows(self, table: str) -> Tuple[List[Column], List[Row]]:
        with self._storage(f"Error fetching data from table {table}.", table=table):
            columns = self.inspector.describe_columns(table)
            return columns, self.repository.select_all(table)

    def identified_rows(
        self, table: str, purpose: str
    ) -> Tuple[List[Column], List[IdentifiedRow]]:
        with self._storage(
            f"Error retrieving data for {purpose} in table {table}.", table=table
        ):
            columns = self.inspector.describe_columns(table)
            return columns, self.repository.select_with_identity(table)

    def get_row(self, table: str, raw_identity: Any) -> Tuple[List[Column], Optional[Row]]:
        """A missing row yields None, and the edit form renders empty."""
        identity = parse_identity(raw_identity)
        with self._storage(
            f"Error retrieving data for update in table {table}.",
            table=table,
            identity=identity,
        ):
            columns = self.inspector.describe_columns(table)
            return columns, self.repository.select_one(table, identity)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def add_row(self, table: str, fields: Mapping[str, Any]) -> None:
        with self._storage(f"Error adding data to table {table}.", table=table):
            self.repository.insert(table, fields)

    def delete_row(self, table: str, raw_identity: Any) -> None:
        identity = parse_identity(raw_identity)
        with self._storage(
            f"Error deleting row from table {table}.", table=table, identity=identity
        ):
            affected = self.repository.delete(table, identity)
        self._check_affected(affected, table, identity)

    def update_row(self, table: str, fields: Mapping[str, Any]) -> bool:
        """
        Returns False when there was nothing to set and no statement ran.
        """
        identity = parse_identity(fields.get("rowid"))
        with self._storage(
            f"Error updating row in table {table}.", table=table, identity=identity
        ):
            affected = self.repository.update(table, identity, fields)
        if affected is None:
            return False
        self._check_affected(affected, table, identity)
        return True
