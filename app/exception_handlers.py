from __future__ import annotations

import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from app.errors import AppError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers for the FastAPI application."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> PlainTextResponse:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        status = getattr(exc, "http_status", 500)
        message = getattr(exc, "message", str(exc))

        logger.info(
            "Request failed",
            extra={
                "request_id": request_id,
                "path": request.url.path,
                "status": status,
                "code": getattr(exc, "code", "app_error"),
                **(getattr(exc, "extra", {}) or {}),
            },
        )

        headers = {"X-Request-ID": request_id}
        return PlainTextResponse(message, status_code=status, headers=headers)
