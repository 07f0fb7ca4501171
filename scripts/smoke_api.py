"""Portable smoke requests for the table browser.

- Expects the server running against the demo DB (scripts/seed_demo_db.py)
- Walks add → view → update → delete on the `drivers` table
- Exits non-zero on failure (so Make/CI can trust it)

Env:
  API_BASE: base URL of the server (default: http://127.0.0.1:3000)
"""

from __future__ import annotations

import os
import sys
import uuid

import requests


API_BASE = os.getenv("API_BASE", "http://127.0.0.1:3000").rstrip("/")
TIMEOUT = float(os.getenv("SMOKE_TIMEOUT", "10"))


def _get(path: str) -> requests.Response:
    return requests.get(f"{API_BASE}{path}", timeout=TIMEOUT)


def _post(path: str, data: dict) -> requests.Response:
    return requests.post(
        f"{API_BASE}{path}", data=data, timeout=TIMEOUT, allow_redirects=False
    )


def _expect(label: str, resp: requests.Response, status: int) -> bool:
    ok = resp.status_code == status
    mark = "✅" if ok else "❌"
    print(f"{mark} {label}: HTTP {resp.status_code} (expected {status})")
    if not ok:
        print(resp.text[:400])
    return ok


def main() -> int:
    marker = f"smoke-{uuid.uuid4().hex[:8]}"
    results = [
        _expect("menu", _get("/"), 200),
        _expect("table list", _get("/view"), 200),
        _expect("invalid action", _get("/nope"), 400),
        _expect("add form", _get("/add/drivers"), 200),
        _expect(
            "insert",
            _post("/add/drivers", {"name": marker, "license_no": marker}),
            303,
        ),
    ]

    view = _get("/view/drivers")
    results.append(_expect("view", view, 200))
    results.append(marker in view.text)

    # Find the new row's identity from the delete page hidden inputs.
    page = _get("/delete/drivers").text
    rowid = None
    for chunk in page.split("<tr>"):
        if marker in chunk and 'name="id" value="' in chunk:
            rowid = chunk.split('name="id" value="', 1)[1].split('"', 1)[0]
    if rowid is None:
        print("❌ could not find inserted row")
        return 1

    results.append(_expect("edit form", _get(f"/update/drivers/{rowid}"), 200))
    results.append(
        _expect(
            "update",
            _post("/update/drivers", {"rowid": rowid, "rating": "5"}),
            303,
        )
    )
    results.append(_expect("delete", _post("/delete/drivers", {"id": rowid}), 303))

    if all(results):
        print("\nAll smoke checks passed.")
        return 0
    print("\nSome smoke checks failed.")
    return 1


if __name__ == "__main__":
    sys.exit(main())
