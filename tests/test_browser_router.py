from __future__ import annotations

import sqlite3

import pytest

ACTIONS = ["view", "add", "delete", "update"]


def test_menu_links_every_action(client):
    r = client.get("/")
    assert r.status_code == 200
    for a in ACTIONS:
        assert f'href="/{a}"' in r.text


@pytest.mark.parametrize("action", ACTIONS)
def test_table_list_shows_full_catalog(client, db_path, action):
    conn = sqlite3.connect(str(db_path))
    conn.execute("CREATE TABLE fresh(x);")
    conn.commit()
    conn.close()

    r = client.get(f"/{action}")
    assert r.status_code == 200
    for t in ("items", "people", "fresh"):
        assert f'href="/{action}/{t}"' in r.text


@pytest.mark.parametrize("action", ["bogus", "VIEW", "drop", "views"])
def test_invalid_action_is_400_plain_text(client, action):
    r = client.get(f"/{action}")
    assert r.status_code == 400
    assert r.text == "Invalid action."
    assert r.headers["content-type"].startswith("text/plain")


def test_invalid_action_with_table_is_400(client):
    r = client.get("/bogus/items")
    assert r.status_code == 400
    assert r.text == "Invalid action."


def test_add_form_lists_columns(client):
    r = client.get("/add/items")
    assert r.status_code == 200
    assert 'action="/add/items"' in r.text
    assert 'name="name"' in r.text
    assert 'name="qty"' in r.text


def test_add_then_view_renders_row(client, read_db):
    r = client.post(
        "/add/items", data={"name": "pen", "qty": "3"}, follow_redirects=False
    )
    assert r.status_code == 303
    assert r.headers["location"] == "/view/items"

    assert read_db("SELECT name, qty, typeof(qty) FROM items;") == [
        ("pen", 3, "integer")
    ]

    page = client.get("/view/items")
    assert page.status_code == 200
    assert "<td>pen</td>" in page.text
    assert "<td>3</td>" in page.text


def test_view_escapes_cell_values(client):
    client.post("/add/items", data={"name": "<b>x</b>", "qty": "1"})
    page = client.get("/view/items")
    assert "<b>x</b>" not in page.text
    assert "&lt;b&gt;x&lt;/b&gt;" in page.text


def test_view_unknown_table_is_500_naming_table(client):
    r = client.get("/view/ghosts")
    assert r.status_code == 500
    assert r.text == "Error fetching data from table ghosts."


def test_add_unknown_column_is_500(client, adapter):
    r = client.post("/add/items", data={"name": "pen", "colour": "red"})
    assert r.status_code == 500
    assert r.text == "Error adding data to table items."
    assert adapter.mutations == []


def test_delete_page_lists_identities(client):
    r = client.get("/delete/people")
    assert r.status_code == 200
    assert 'name="id" value="10"' in r.text
    assert 'name="id" value="20"' in r.text


def test_delete_existing_row(client, read_db):
    r = client.post("/delete/people", data={"id": "10"}, follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == "/delete/people"
    assert read_db("SELECT id FROM people;") == [(20,)]


def test_delete_missing_row_is_silent(client, read_db):
    before = read_db("SELECT COUNT(*) FROM people;")
    r = client.post("/delete/people", data={"id": "999"}, follow_redirects=False)
    assert r.status_code == 303
    assert read_db("SELECT COUNT(*) FROM people;") == before


def test_delete_without_identity_is_silent(client, read_db):
    r = client.post("/delete/people", data={}, follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == "/delete/people"
    assert read_db("SELECT COUNT(*) FROM people;") == [(2,)]


def test_delete_unparseable_identity_is_silent(client, read_db):
    r = client.post("/delete/people", data={"id": "abc"}, follow_redirects=False)
    assert r.status_code == 303
    assert read_db("SELECT COUNT(*) FROM people;") == [(2,)]


def test_update_page_links_edit_forms(client):
    r = client.get("/update/people")
    assert r.status_code == 200
    assert 'href="/update/people/20"' in r.text


def test_edit_form_prefilled(client):
    r = client.get("/update/people/20")
    assert r.status_code == 200
    assert 'name="rowid" value="20"' in r.text
    assert 'name="name" value="Grace"' in r.text


def test_edit_form_for_missing_row_renders_empty(client):
    r = client.get("/update/items/1")
    assert r.status_code == 200
    assert 'name="rowid" value="1"' in r.text
    assert 'name="name" value=""' in r.text
    assert 'name="qty" value=""' in r.text


def test_update_row(client, read_db):
    r = client.post(
        "/update/people",
        data={"rowid": "20", "name": "Grace H."},
        follow_redirects=False,
    )
    assert r.status_code == 303
    assert r.headers["location"] == "/view/people"
    assert read_db("SELECT name FROM people WHERE id = 20;") == [("Grace H.",)]


def test_update_with_only_rowid_runs_no_statement(client, adapter, read_db):
    r = client.post("/update/people", data={"rowid": "20"}, follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == "/update/people"
    assert adapter.statements == []
    assert read_db("SELECT id, name FROM people ORDER BY id;") == [
        (10, "Ada"),
        (20, "Grace"),
    ]


def test_redirect_quotes_table_name(client, db_path):
    conn = sqlite3.connect(str(db_path))
    conn.execute('CREATE TABLE "my items"(a TEXT);')
    conn.commit()
    conn.close()

    r = client.post("/add/my%20items", data={"a": "x"}, follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == "/view/my%20items"


def test_view_mixed_case_table(client):
    client.post("/add/items", data={"name": "pen", "qty": "3"})

    r = client.get("/view/ITEMS")
    assert r.status_code == 200
    assert "<td>pen</td>" in r.text


def test_add_mixed_case_column(client, read_db):
    r = client.post("/add/items", data={"NAME": "pen"}, follow_redirects=False)
    assert r.status_code == 303
    assert read_db("SELECT name, qty FROM items;") == [("pen", None)]


def test_add_with_blank_integer_primary_key_assigns_rowid(client, read_db):
    r = client.post(
        "/add/people", data={"id": "", "name": "Linus"}, follow_redirects=False
    )
    assert r.status_code == 303
    assert r.headers["location"] == "/view/people"
    assert read_db("SELECT id FROM people WHERE name = 'Linus';") == [(21,)]


def test_unchanged_edit_form_save_keeps_nulls(client, read_db):
    client.post("/add/items", data={"name": "pen", "qty": ""})
    assert read_db("SELECT name, qty, typeof(qty) FROM items;") == [
        ("pen", None, "null")
    ]

    form = client.get("/update/items/1")
    assert 'name="qty" value=""' in form.text

    r = client.post(
        "/update/items",
        data={"rowid": "1", "name": "pen", "qty": ""},
        follow_redirects=False,
    )
    assert r.status_code == 303
    assert read_db("SELECT name, qty, typeof(qty) FROM items;") == [
        ("pen", None, "null")
    ]


def test_edit_form_unparseable_identity_renders_empty(client):
    r = client.get("/update/items/abc")
    assert r.status_code == 200
    assert 'name="rowid" value="abc"' in r.text
    assert 'name="name" value=""' in r.text
