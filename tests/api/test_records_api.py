"""HTTP tests for records, drafts and analytics."""

from __future__ import annotations

FORM = {
    "lotNumber": "L7",
    "familyName": "Dupont",
    "responsibleName": "Jean Dupont",
    "contact": "0612345678",
    "inhabitants": "4",
    "children": "1",
    "notes": "",
}


def test_record_crud(client, auth_headers):
    created = client.post("/api/records/", json=FORM, headers=auth_headers)
    assert created.status_code == 201
    record_id = created.json()["_id"]

    fetched = client.get(f"/api/records/{record_id}", headers=auth_headers)
    assert fetched.json()["familyName"] == "Dupont"

    updated = client.put(
        f"/api/records/{record_id}", json={**FORM, "inhabitants": "5"}, headers=auth_headers
    )
    assert updated.json()["inhabitants"] == 5

    assert client.delete(f"/api/records/{record_id}", headers=auth_headers).status_code == 204
    assert client.get(f"/api/records/{record_id}", headers=auth_headers).status_code == 404


def test_invalid_form_lists_field_errors(client, auth_headers):
    response = client.post(
        "/api/records/", json={**FORM, "contact": "12", "children": "-1"}, headers=auth_headers
    )

    assert response.status_code == 422
    assert set(response.json()["fields"]) == {"contact", "children"}


def test_list_and_search(client, auth_headers):
    for lot, family in [("A1", "Dupont"), ("A2", "Martin"), ("A3", "dupont")]:
        client.post(
            "/api/records/", json={**FORM, "lotNumber": lot, "familyName": family}, headers=auth_headers
        )

    listing = client.get("/api/records/", headers=auth_headers).json()
    assert listing["total"] == 3

    found = client.get("/api/records/", params={"search": "DUPONT"}, headers=auth_headers).json()
    assert found["total"] == 2
    assert {r["lotNumber"] for r in found["records"]} == {"A1", "A3"}


def test_draft_lifecycle(client, auth_headers):
    assert client.get("/api/drafts/", headers=auth_headers).status_code == 204

    saved = client.put("/api/drafts/", json={"lotNumber": "L1"}, headers=auth_headers)
    assert saved.status_code == 200
    assert saved.json()["form"]["lotNumber"] == "L1"

    loaded = client.get("/api/drafts/", headers=auth_headers).json()
    assert loaded["progress"] == 16.67

    assert client.delete("/api/drafts/", headers=auth_headers).status_code == 204
    assert client.get("/api/drafts/", headers=auth_headers).status_code == 204


def test_creating_record_clears_draft(client, auth_headers):
    client.put("/api/drafts/", json={"lotNumber": "L7"}, headers=auth_headers)
    client.post("/api/records/", json=FORM, headers=auth_headers)

    assert client.get("/api/drafts/", headers=auth_headers).status_code == 204


def test_analytics_and_export(client, auth_headers):
    client.post("/api/records/", json=FORM, headers=auth_headers)

    report = client.get("/api/analytics/", headers=auth_headers).json()
    assert report["totalInhabitants"] == 4
    assert report["totalAdults"] == 3

    export = client.get("/api/analytics/export", headers=auth_headers)
    assert export.status_code == 200
    assert export.headers["content-disposition"].startswith(
        'attachment; filename="census-analytics-'
    )
    assert export.json()["totalRecords"] == 1
