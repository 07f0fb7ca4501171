from __future__ import annotations

import logging
from typing import Dict
from urllib.parse import quote

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse, Response
from fastapi.concurrency import run_in_threadpool

from app.dependencies import get_browser_service
from app.errors import InvalidActionError
from app.rendering import render
from app.services.browser_service import BrowserService
from tablebrowser.types import Action

logger = logging.getLogger(__name__)

router = APIRouter(tags=["browser"])

# Template per action for GET /{action}/{table}
ACTION_TEMPLATES = {
    Action.VIEW: "view_table.html",
    Action.ADD: "add_row.html",
    Action.DELETE: "delete_row.html",
    Action.UPDATE: "update_row.html",
}


def _parse_action(raw: str) -> Action:
    action = Action.parse(raw)
    if action is None:
        logger.info("Rejected invalid action", extra={"action": raw})
        raise InvalidActionError()
    return action


def _redirect(*segments: str) -> RedirectResponse:
    url = "/" + "/".join(quote(s, safe="") for s in segments)
    return RedirectResponse(url=url, status_code=303)


async def _form_fields(request: Request) -> Dict[str, str]:
    form = await request.form()
    # Last value wins for repeated keys; files are not accepted.
    return {k: v for k, v in form.items() if isinstance(v, str)}


# -------------------------------
# Pages
# -------------------------------


@router.get("/", name="menu")
def menu(request: Request) -> Response:
    return render(request, "menu.html", actions=[a.value for a in Action])


@router.get("/update/{table}/{row_id}", name="edit_row")
def edit_row(
    request: Request,
    table: str,
    row_id: str,
    svc: BrowserService = Depends(get_browser_service),
) -> Response:
    columns, row = svc.get_row(table, row_id)
    return render(
        request,
        "edit_row.html",
        action=Action.UPDATE.value,
        table=table,
        columns=columns,
        row=row,
        identity=row_id,
    )


@router.get("/{action}", name="table_list")
def table_list(
    request: Request,
    action: str,
    svc: BrowserService = Depends(get_browser_service),
) -> Response:
    act = _parse_action(action)
    return render(
        request, "table_list.html", action=act.value, tables=svc.list_tables()
    )


@router.get("/{action}/{table}", name="table_page")
def table_page(
    request: Request,
    action: str,
    table: str,
    svc: BrowserService = Depends(get_browser_service),
) -> Response:
    act = _parse_action(action)
    if act is Action.VIEW:
        columns, rows = svc.view_rows(table)
    elif act is Action.ADD:
        columns, rows = svc.describe_columns(table), []
    else:
        purpose = "deletion" if act is Action.DELETE else "update"
        columns, rows = svc.identified_rows(table, purpose=purpose)

    return render(
        request,
        ACTION_TEMPLATES[act],
        action=act.value,
        table=table,
        columns=columns,
        rows=rows,
    )


# -------------------------------
# Mutations
# -------------------------------


@router.post("/add/{table}", name="add_row")
async def add_row(
    request: Request,
    table: str,
    svc: BrowserService = Depends(get_browser_service),
) -> Response:
    fields = await _form_fields(request)
    await run_in_threadpool(svc.add_row, table, fields)
    return _redirect(Action.VIEW.value, table)


@router.post("/delete/{table}", name="delete_row")
async def delete_row(
    request: Request,
    table: str,
    svc: BrowserService = Depends(get_browser_service),
) -> Response:
    fields = await _form_fields(request)
    await run_in_threadpool(svc.delete_row, table, fields.get("id"))
    return _redirect(Action.DELETE.value, table)


@router.post("/update/{table}", name="update_row")
async def update_row(
    request: Request,
    table: str,
    svc: BrowserService = Depends(get_browser_service),
) -> Response:
    fields = await _form_fields(request)
    changed = await run_in_threadpool(svc.update_row, table, fields)
    if not changed:
        return _redirect(Action.UPDATE.value, table)
    return _redirect(Action.VIEW.value, table)
