from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class Action(str, Enum):
    VIEW = "view"
    ADD = "add"
    DELETE = "delete"
    UPDATE = "update"

    @classmethod
    def parse(cls, raw: str) -> Optional["Action"]:
        try:
            return cls(raw)
        except ValueError:
            return None


# =====================
# Catalog
# =====================


@dataclass(frozen=True)
class Column:
    """One entry of PRAGMA table_info, in declaration order."""

    name: str
    type: str = ""
    notnull: bool = False
    default: Optional[str] = None
    pk: bool = False

    @classmethod
    def from_table_info(cls, info: Tuple[Any, ...]) -> "Column":
        # (cid, name, type, notnull, dflt_value, pk)
        return cls(
            name=str(info[1]),
            type=str(info[2] or ""),
            notnull=bool(info[3]),
            default=None if info[4] is None else str(info[4]),
            pk=bool(info[5]),
        )


# =====================
# Rows
# =====================

# Column name -> value (str, int, float, None or bytes), in column order.
Row = Dict[str, Any]


@dataclass(frozen=True)
class IdentifiedRow:
    identity: int
    values: Row = field(default_factory=dict)
