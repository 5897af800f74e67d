"""
API tests for the projects blueprint.
"""

from models import store


def test_create_then_fetch_returns_same_fields(client, make_project):
    project = make_project(name="  Website redesign  ")

    response = client.get(f"/api/projects/{project['id']}")
    body = response.get_json()

    assert response.status_code == 200
    assert body["success"] is True
    fetched = body["data"]
    assert fetched == project
    assert fetched["name"] == "Website redesign"
    assert fetched["status"] == "active"
    assert isinstance(fetched["id"], int)
    assert fetched["createdAt"].endswith("Z")
    assert fetched["updatedAt"] == fetched["createdAt"]


def test_create_applies_defaults(client):
    response = client.post("/api/projects", json={"projectCode": "MIN", "name": "Minimal"})
    project = response.get_json()["data"]

    assert response.status_code == 201
    assert project["status"] == "planning"
    assert project["owner"] == ""
    assert project["startDate"] == ""
    assert project["description"] == ""


def test_fetch_by_project_code(client, make_project):
    project = make_project()

    response = client.get("/api/projects/code/PRJ-001")

    assert response.status_code == 200
    assert response.get_json()["data"]["id"] == project["id"]


def test_duplicate_project_code_is_rejected_and_store_unchanged(client, make_project):
    make_project()
    before = store.load("projects")

    response = client.post("/api/projects", json={"projectCode": "PRJ-001", "name": "Another"})

    assert response.status_code == 409
    body = response.get_json()
    assert body["success"] is False
    assert body["error"]["code"] == "DUPLICATE_PROJECT_CODE"
    assert store.load("projects") == before


def test_validation_errors_are_listed(client):
    response = client.post("/api/projects", json={
        "projectCode": "",
        "name": "",
        "startDate": "2025-06-10",
        "endDate": "2025-06-01",
    })

    assert response.status_code == 400
    error = response.get_json()["error"]
    assert error["message"] == "Validation failed"
    assert error["details"] == [
        "Project code is required",
        "Project name is required",
        "End date cannot be earlier than start date",
    ]
    assert store.load("projects") == []


def test_non_json_body_is_rejected(client):
    response = client.post("/api/projects", data="projectCode=X", content_type="text/plain")

    assert response.status_code == 400
    assert response.get_json()["success"] is False


def test_missing_project_returns_404(client):
    response = client.get("/api/projects/12345")

    assert response.status_code == 404
    assert response.get_json()["error"]["code"] == "PROJECT_NOT_FOUND"


def test_partial_update_merges_fields(client, make_project):
    project = make_project()

    response = client.patch(f"/api/projects/{project['id']}", json={"status": "on-hold", "owner": " Bob "})
    updated = response.get_json()["data"]

    assert response.status_code == 200
    assert updated["status"] == "on-hold"
    assert updated["owner"] == "Bob"
    assert updated["name"] == project["name"]
    assert updated["createdAt"] == project["createdAt"]
    assert store.load("projects")[0]["status"] == "on-hold"


def test_update_by_code_validates_merged_record(client, make_project):
    make_project(startDate="2025-06-01", endDate="2025-06-30")

    response = client.put("/api/projects/code/PRJ-001", json={"endDate": "2025-05-01"})

    assert response.status_code == 400
    assert response.get_json()["error"]["details"] == ["End date cannot be earlier than start date"]


def test_rename_to_existing_code_is_conflict(client, make_project):
    make_project()
    other = make_project(projectCode="PRJ-002", name="Second")

    response = client.put(f"/api/projects/{other['id']}", json={"projectCode": "PRJ-001"})

    assert response.status_code == 409
    codes = sorted(p["projectCode"] for p in store.load("projects"))
    assert codes == ["PRJ-001", "PRJ-002"]


def test_delete_project_keeps_its_reports(client, make_project, make_report):
    project = make_project()
    report = make_report()

    response = client.delete(f"/api/projects/{project['id']}")

    assert response.status_code == 200
    assert response.get_json()["data"]["projectCode"] == "PRJ-001"
    assert client.get(f"/api/projects/{project['id']}").status_code == 404

    listing = client.get("/api/progress?projectCode=PRJ-001").get_json()
    assert [r["id"] for r in listing["data"]] == [report["id"]]


def test_delete_missing_project_returns_404(client):
    assert client.delete("/api/projects/999").status_code == 404


def test_batch_status_update_skips_unknown_ids(client, make_project):
    first = make_project()
    second = make_project(projectCode="PRJ-002", name="Second")
    make_project(projectCode="PRJ-003", name="Third", status="planning")

    response = client.patch("/api/projects/batch/status", json={
        "projectIds": [first["id"], second["id"], 999],
        "status": "completed",
    })
    data = response.get_json()["data"]

    assert response.status_code == 200
    assert data["updatedCount"] == 2
    statuses = {p["projectCode"]: p["status"] for p in store.load("projects")}
    assert statuses == {"PRJ-001": "completed", "PRJ-002": "completed", "PRJ-003": "planning"}


def test_batch_status_rejects_invalid_status(client, make_project):
    project = make_project()

    response = client.patch("/api/projects/batch/status", json={"projectIds": [project["id"]], "status": "done"})

    assert response.status_code == 400


def test_batch_status_requires_id_list(client):
    response = client.patch("/api/projects/batch/status", json={"projectIds": [], "status": "active"})

    assert response.status_code == 400


def test_list_filters_sorts_and_paginates(client, make_project):
    make_project(projectCode="C", name="Gamma", owner="Alice Chen", endDate="2025-09-01")
    make_project(projectCode="A", name="Alpha", owner="Bob Lin", endDate="2025-07-01")
    make_project(projectCode="B", name="Beta", owner="Alice Wang", endDate="2025-08-01")

    response = client.get("/api/projects?owner=Alice&sortBy=endDate&sortOrder=desc")
    body = response.get_json()

    assert response.status_code == 200
    assert [p["projectCode"] for p in body["data"]] == ["C", "B"]
    assert body["total"] == 2

    page = client.get("/api/projects?sortBy=endDate&page=2&limit=2").get_json()
    assert [p["projectCode"] for p in page["data"]] == ["C"]
    assert page["pagination"] == {"total": 3, "page": 2, "limit": 2, "totalPages": 2}


def test_list_rejects_bad_pagination(client):
    response = client.get("/api/projects?page=abc&limit=10")

    assert response.status_code == 400


def test_project_stats_summary(client, make_project):
    make_project(status="active")
    make_project(projectCode="PRJ-002", name="Done", status="completed")

    stats = client.get("/api/projects/stats/summary").get_json()["data"]

    assert stats["total"] == 2
    assert stats["byStatus"] == {"planning": 0, "active": 1, "on-hold": 0, "completed": 1}
    assert [p["projectCode"] for p in stats["upcomingDeadlines"]] == ["PRJ-001"]
    assert "daysUntilDeadline" in stats["upcomingDeadlines"][0]


def test_persistence_failure_returns_generic_500(client, monkeypatch):
    monkeypatch.setattr(store, "save", lambda collection, records: False)

    response = client.post("/api/projects", json={"projectCode": "P", "name": "N"})

    assert response.status_code == 500
    assert response.get_json()["error"]["code"] == "PERSISTENCE_FAILED"


def test_malformed_project_dates_are_rejected(client):
    response = client.post("/api/projects", json={
        "projectCode": "P",
        "name": "N",
        "startDate": "20250101",
        "endDate": "2025-12-31!!",
    })

    assert response.status_code == 400
    assert response.get_json()["error"]["details"] == ["Invalid start date format", "Invalid end date format"]
    assert store.load("projects") == []


def test_batch_status_ignores_bool_and_fractional_ids(client, file_store):
    file_store.save("projects", [
        {"id": 1, "projectCode": "A", "name": "A", "status": "active"},
        {"id": 2, "projectCode": "B", "name": "B", "status": "active"},
    ])

    response = client.patch("/api/projects/batch/status", json={
        "projectIds": [True, 1.9, "1", 2],
        "status": "completed",
    })

    assert response.status_code == 200
    assert response.get_json()["data"]["updatedCount"] == 1
    statuses = {p["id"]: p["status"] for p in store.load("projects")}
    assert statuses == {1: "active", 2: "completed"}
