from __future__ import annotations

from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.responses import Response
from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def cell(value: Any) -> str:
    """Display form of a stored value inside a table cell."""
    if value is None:
        return "NULL"
    if isinstance(value, (bytes, bytearray, memoryview)):
        return f"<{len(value)} bytes>"
    return str(value)


def field_value(value: Any) -> str:
    """Value attribute for an <input>; NULL shows as an empty field."""
    if value is None:
        return ""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).hex()
    return str(value)


templates.env.filters["cell"] = cell
templates.env.filters["field_value"] = field_value


def render(request: Request, name: str, **context: Any) -> Response:
    return templates.TemplateResponse(request, name, context)
