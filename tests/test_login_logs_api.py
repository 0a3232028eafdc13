"""Login log API: auth, list, show, delete, batch delete, site options."""
import json
from datetime import datetime

from fastapi.testclient import TestClient

from siteadmin.models import AdminLoginLog

BASE = "/api/admin/system/login-logs"


def test_requires_token(client: TestClient):
    assert client.get(BASE).status_code == 401
    assert client.get(f"{BASE}/1").status_code == 401
    assert client.post(f"{BASE}/batch-delete", json={"ids": [1]}).status_code == 401


def test_rejects_garbage_token(client: TestClient):
    r = client.get(BASE, headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401


def test_list_scoped_to_site(client: TestClient, make_log, site5_admin, headers_for):
    own = make_log(site_id=5, username="admin")
    make_log(site_id=6, username="admin")

    r = client.get(BASE, params={"site_id": 6}, headers=headers_for(site5_admin))
    assert r.status_code == 200
    j = r.json()
    assert [row["id"] for row in j["data"]] == [own.id]
    assert j["total"] == 1
    assert j["page"] == 1
    assert j["page_size"] == 15
    assert j["last_page"] == 1


def test_list_filters_and_last_page(client: TestClient, make_log, super_admin, headers_for):
    for day in range(1, 6):
        make_log(site_id=5, status=0, created_at=datetime(2024, 1, day, 9, 0))
    make_log(site_id=5, status=1, created_at=datetime(2024, 1, 3, 9, 0))

    r = client.get(
        BASE,
        params={"status": "0", "page_size": "2", "end_date": "2024-01-04"},
        headers=headers_for(super_admin),
    )
    j = r.json()
    assert j["total"] == 4
    assert j["last_page"] == 2
    assert [row["created_at"][:10] for row in j["data"]] == ["2024-01-04", "2024-01-03"]


def test_list_tolerates_malformed_params(client: TestClient, make_log, super_admin, headers_for):
    make_log()
    r = client.get(
        BASE,
        params={"site_id": "x", "status": "", "page": "?", "page_size": "many", "start_date": "soon"},
        headers=headers_for(super_admin),
    )
    assert r.status_code == 200
    assert r.json()["total"] == 1


def test_list_includes_user_and_site(client: TestClient, users, make_log, super_admin, headers_for):
    make_log(site_id=5, username="alice", user_id=users["alice"].id, status=1)

    row = client.get(BASE, headers=headers_for(super_admin)).json()["data"][0]
    assert row["user"] == {"id": users["alice"].id, "username": "alice", "real_name": "Alice"}
    assert row["site"] == {"id": 5, "name": "Alpha", "domain": "alpha.test"}
    assert row["status"] == 1


def test_show_and_not_found(client: TestClient, make_log, site5_admin, headers_for):
    own = make_log(site_id=5)
    foreign = make_log(site_id=6)
    headers = headers_for(site5_admin)

    r = client.get(f"{BASE}/{own.id}", headers=headers)
    assert r.status_code == 200
    assert r.json()["id"] == own.id

    other = client.get(f"{BASE}/{foreign.id}", headers=headers)
    missing = client.get(f"{BASE}/999999", headers=headers)
    assert other.status_code == missing.status_code == 404
    assert other.json() == missing.json() == {"code": 404, "message": "Login log not found"}


def test_delete(client: TestClient, db, make_log, site5_admin, headers_for):
    own_id = make_log(site_id=5).id
    foreign_id = make_log(site_id=6).id
    headers = headers_for(site5_admin)

    assert client.delete(f"{BASE}/{foreign_id}", headers=headers).status_code == 404
    r = client.delete(f"{BASE}/{own_id}", headers=headers)
    assert r.status_code == 200
    assert r.json()["message"] == "Deleted"

    remaining = {row.id for row in db.query(AdminLoginLog).all()}
    assert remaining == {foreign_id}


def test_batch_delete_partial(client: TestClient, db, make_log, site5_admin, headers_for):
    ids = [make_log(site_id=5).id, make_log(site_id=5).id]
    foreign_id = make_log(site_id=6).id

    r = client.post(
        f"{BASE}/batch-delete",
        json={"ids": ids + [foreign_id]},
        headers=headers_for(site5_admin),
    )
    assert r.status_code == 200
    assert r.json() == {"message": "Deleted 2 records", "count": 2}
    assert {row.id for row in db.query(AdminLoginLog).all()} == {foreign_id}


def test_batch_delete_requires_ids(client: TestClient, super_admin, headers_for):
    r = client.post(f"{BASE}/batch-delete", json={"ids": []}, headers=headers_for(super_admin))
    assert r.status_code == 422
    assert r.json()["code"] == 422


def test_site_options(client: TestClient, sites, super_admin, site5_admin, headers_for):
    r = client.get(f"{BASE}/site-options", headers=headers_for(site5_admin))
    assert r.json() == []

    r = client.get(f"{BASE}/site-options", headers=headers_for(super_admin))
    assert r.json() == [
        {"value": "", "label": "All sites"},
        {"value": 5, "label": "Alpha"},
        {"value": 6, "label": "Beta"},
    ]


def test_list_survives_out_of_range_numbers(client: TestClient, make_log, super_admin, headers_for):
    make_log(site_id=5)
    make_log(site_id=6)
    headers = headers_for(super_admin)

    for params in (
        {"page": "inf"},
        {"page": "-inf"},
        {"page": "nan"},
        {"page": "1e30"},
        {"status": "9" * 25},
        {"site_id": "9" * 25},
        {"page_size": "1e400"},
    ):
        r = client.get(BASE, params=params, headers=headers)
        assert r.status_code == 200, params
        j = r.json()
        assert j["total"] == 2, params
        assert j["page"] == 1, params


def test_list_huge_page_in_range_is_empty(client: TestClient, make_log, super_admin, headers_for):
    make_log()
    r = client.get(BASE, params={"page": str(2 ** 62)}, headers=headers_for(super_admin))
    assert r.status_code == 200
    assert r.json()["data"] == []
    assert r.json()["total"] == 1


def test_show_and_delete_huge_id_is_not_found(client: TestClient, make_log, super_admin, headers_for):
    make_log()
    headers = headers_for(super_admin)
    huge = "9" * 25

    for r in (
        client.get(f"{BASE}/{huge}", headers=headers),
        client.delete(f"{BASE}/{huge}", headers=headers),
    ):
        assert r.status_code == 404
        assert r.json() == {"code": 404, "message": "Login log not found"}


def test_batch_delete_skips_huge_ids(client: TestClient, db, make_log, super_admin, headers_for):
    log_id = make_log().id
    r = client.post(
        f"{BASE}/batch-delete",
        json={"ids": [10 ** 25, log_id]},
        headers=headers_for(super_admin),
    )
    assert r.status_code == 200
    assert r.json()["count"] == 1
    assert db.query(AdminLoginLog).count() == 0


def test_list_filters_json_overrides_params(client: TestClient, make_log, super_admin, headers_for):
    make_log(site_id=5, username="alice", status=1)
    bob = make_log(site_id=6, username="bob", status=0)

    r = client.get(
        BASE,
        params={
            "username": "alice",
            "filters": json.dumps({"username": "bob", "site_id": 6, "_token": "x"}),
        },
        headers=headers_for(super_admin),
    )
    assert r.status_code == 200
    assert [row["id"] for row in r.json()["data"]] == [bob.id]


def test_list_filters_ignores_reserved_keys_and_junk(client: TestClient, make_log, super_admin, headers_for):
    make_log(site_id=5)
    make_log(site_id=6)
    headers = headers_for(super_admin)

    for raw in ("not json", "[1, 2]", '"text"', json.dumps({"_site_id": 5, "_page": "x"})):
        r = client.get(BASE, params={"filters": raw}, headers=headers)
        assert r.status_code == 200, raw
        assert r.json()["total"] == 2, raw


def test_list_filters_scoping_still_applies(client: TestClient, make_log, site5_admin, headers_for):
    own = make_log(site_id=5)
    make_log(site_id=6)

    r = client.get(
        BASE,
        params={"filters": json.dumps({"site_id": 6})},
        headers=headers_for(site5_admin),
    )
    assert [row["id"] for row in r.json()["data"]] == [own.id]
