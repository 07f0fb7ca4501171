from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class AppError(Exception):
    """Base class for domain-level errors. Rendered as plain text."""

    message: str
    http_status: int = 500
    code: str = "internal_error"
    extra: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.message


# 4xx
@dataclass
class BadRequestError(AppError):
    http_status: int = 400
    code: str = "bad_request"


@dataclass
class InvalidActionError(BadRequestError):
    message: str = "Invalid action."
    code: str = "invalid_action"


@dataclass
class RowNotFoundError(AppError):
    http_status: int = 404
    code: str = "row_not_found"


# 5xx
@dataclass
class StorageError(AppError):
    http_status: int = 500
    code: str = "storage_error"


@dataclass
class UnknownIdentifierError(StorageError):
    code: str = "unknown_identifier"
