"""
API tests for the progress, dashboard and health endpoints.
"""

from datetime import timedelta

import pytest

from models import store


@pytest.fixture
def project(make_project):
    return make_project()


def test_create_report_stores_float_hours_and_defaults(client, project, today):
    response = client.post("/api/progress", json={
        "reporter": " Bob Lin ",
        "date": today.isoformat(),
        "projectCode": "PRJ-001",
        "workHours": "7.5",
    })
    report = response.get_json()["data"]

    assert response.status_code == 201
    assert report["reporter"] == "Bob Lin"
    assert report["workHours"] == 7.5
    assert report["needHelp"] == "否"
    assert report["content"] == ""
    assert store.load("progress") == [report]


def test_need_help_aliases_are_normalized(client, project, make_report):
    report = make_report(needHelp="yes")

    assert report["needHelp"] == "是"


def test_report_for_missing_project_is_rejected_and_nothing_written(client, project, today):
    response = client.post("/api/progress", json={
        "reporter": "Alice Chen",
        "date": today.isoformat(),
        "projectCode": "NOPE",
        "workHours": 4,
    })

    assert response.status_code == 400
    assert response.get_json()["error"]["message"] == "Specified project does not exist"
    assert store.load("progress") == []


def test_report_validation_errors(client, project, today):
    response = client.post("/api/progress", json={
        "reporter": "",
        "date": (today + timedelta(days=8)).isoformat(),
        "projectCode": "PRJ-001",
        "workHours": 25,
    })

    assert response.status_code == 400
    assert response.get_json()["error"]["details"] == [
        "Reporter is required",
        "Report date cannot be more than 7 days in the future",
        "Work hours must be between 0 and 24",
    ]


def test_report_seven_days_ahead_is_accepted(project, make_report, today):
    report = make_report(date=(today + timedelta(days=7)).isoformat())

    assert report["date"] == (today + timedelta(days=7)).isoformat()


def test_list_second_page_of_filtered_reports(client, make_project, make_report, today):
    make_project()
    make_project(projectCode="PRJ-002", name="Other")
    for i in range(25):
        make_report(date=(today - timedelta(days=i)).isoformat())
    for i in range(3):
        make_report(projectCode="PRJ-002", date=(today - timedelta(days=i)).isoformat())

    body = client.get("/api/progress?projectCode=PRJ-001&page=2&limit=10").get_json()

    expected_dates = [(today - timedelta(days=i)).isoformat() for i in range(10, 20)]
    assert [r["date"] for r in body["data"]] == expected_dates
    assert body["pagination"] == {"total": 25, "page": 2, "limit": 10, "totalPages": 3}


def test_list_filters_by_reporter_and_date_range(client, project, make_report, today):
    make_report(reporter="Alice Chen", date=(today - timedelta(days=1)).isoformat())
    make_report(reporter="Bob Lin", date=(today - timedelta(days=1)).isoformat())
    make_report(reporter="Alice Chen", date=(today - timedelta(days=10)).isoformat())

    start = (today - timedelta(days=2)).isoformat()
    body = client.get(f"/api/progress?reporter=Alice&startDate={start}").get_json()

    assert [(r["reporter"], r["date"]) for r in body["data"]] == [
        ("Alice Chen", (today - timedelta(days=1)).isoformat()),
    ]


def test_list_rejects_invalid_sort_order(client):
    response = client.get("/api/progress?sortOrder=sideways")

    assert response.status_code == 400


def test_get_missing_report_returns_404(client):
    response = client.get("/api/progress/4242")

    assert response.status_code == 404
    assert response.get_json()["error"]["code"] == "PROGRESS_NOT_FOUND"


def test_update_report_merges_and_revalidates(client, project, make_report):
    report = make_report()

    ok = client.patch(f"/api/progress/{report['id']}", json={"content": "Finished the login page"})
    assert ok.status_code == 200
    updated = ok.get_json()["data"]
    assert updated["content"] == "Finished the login page"
    assert updated["reporter"] == report["reporter"]
    assert updated["createdAt"] == report["createdAt"]

    bad_hours = client.put(f"/api/progress/{report['id']}", json={"workHours": 30})
    assert bad_hours.status_code == 400

    bad_project = client.put(f"/api/progress/{report['id']}", json={"projectCode": "NOPE"})
    assert bad_project.status_code == 400

    assert store.load("progress")[0]["content"] == "Finished the login page"


def test_delete_report(client, project, make_report):
    report = make_report()

    response = client.delete(f"/api/progress/{report['id']}")

    assert response.status_code == 200
    assert store.load("progress") == []
    assert client.delete(f"/api/progress/{report['id']}").status_code == 404


def test_batch_help_status_skips_unknown_ids(client, project, make_report):
    first = make_report()
    second = make_report(reporter="Bob Lin")

    response = client.patch("/api/progress/batch/help-status", json={
        "progressIds": [first["id"], 999],
        "needHelp": "yes",
    })

    assert response.status_code == 200
    assert response.get_json()["data"]["updatedCount"] == 1
    stored = {r["id"]: r["needHelp"] for r in store.load("progress")}
    assert stored == {first["id"]: "是", second["id"]: "否"}


def test_batch_help_status_rejects_unknown_value(client, project, make_report):
    report = make_report()

    response = client.patch("/api/progress/batch/help-status", json={
        "progressIds": [report["id"]],
        "needHelp": "maybe",
    })

    assert response.status_code == 400


def test_project_lookup_requires_existing_project(client):
    assert client.get("/api/progress/project/NOPE").status_code == 404


def test_project_lookup_newest_first_with_limit(client, project, make_report, today):
    for i in range(4):
        make_report(date=(today - timedelta(days=i)).isoformat())

    body = client.get("/api/progress/project/PRJ-001?limit=2").get_json()

    assert [r["date"] for r in body["data"]] == [today.isoformat(), (today - timedelta(days=1)).isoformat()]
    assert body["total"] == 2


def test_reporter_lookup_with_date_range(client, project, make_report, today):
    make_report(reporter="Bob Lin", date=(today - timedelta(days=3)).isoformat())
    make_report(reporter="Bob Lin", date=(today - timedelta(days=20)).isoformat())
    make_report(reporter="Alice Chen")

    start = (today - timedelta(days=7)).isoformat()
    body = client.get(f"/api/progress/reporter/Bob%20Lin?startDate={start}").get_json()

    assert [r["date"] for r in body["data"]] == [(today - timedelta(days=3)).isoformat()]


def test_need_help_lists_orphans_as_unknown_project(client, project, make_project, make_report):
    make_report(needHelp="是")
    make_report(needHelp="否")
    make_project(projectCode="OLD", name="Legacy")
    make_report(projectCode="OLD", needHelp="是")
    old = client.get("/api/projects/code/OLD").get_json()["data"]
    client.delete(f"/api/projects/{old['id']}")

    body = client.get("/api/progress/need-help").get_json()
    names = {item["projectCode"]: item for item in body["data"]}

    assert body["total"] == 2
    assert names["PRJ-001"]["projectName"] == "Website redesign"
    assert names["PRJ-001"]["projectOwner"] == "Alice Chen"
    assert names["OLD"]["projectName"] == "Unknown project"
    assert names["OLD"]["projectOwner"] is None


def test_progress_stats_summary(client, project, make_report):
    make_report(workHours=8)
    make_report(workHours=4, needHelp="是", reporter="Bob Lin")

    stats = client.get("/api/progress/stats/summary").get_json()["data"]

    assert stats["total"] == 2
    assert stats["totalWorkHours"] == 12
    assert stats["averageWorkHours"] == 6
    assert stats["thisWeek"] == {"reports": 2, "workHours": 12, "needHelp": 1}
    assert [p["projectCode"] for p in stats["byProject"]] == ["PRJ-001"]


def test_filtered_stats_ignore_pagination(client, make_project, make_report):
    make_project()
    make_project(projectCode="PRJ-002", name="Other")
    make_report()
    make_report(reporter="Bob Lin")
    make_report(projectCode="PRJ-002")

    stats = client.get("/api/progress/stats/filtered?projectCode=PRJ-001&page=1&limit=1").get_json()["data"]

    assert stats["totalReports"] == 2
    assert stats["uniqueReporters"] == 2
    assert stats["topProject"] == {"code": "PRJ-001", "count": 2}


def test_dashboard_stats(client, make_project, make_report):
    make_project()
    make_project(projectCode="PRJ-002", name="Done", status="completed")
    make_report(needHelp="是", workHours=3)

    stats = client.get("/api/dashboard/stats").get_json()["data"]

    assert stats == {
        "totalProjects": 2,
        "activeProjects": 1,
        "completedProjects": 1,
        "totalReports": 1,
        "needHelpCount": 1,
        "thisWeekReports": 1,
        "totalWorkHours": 3,
    }


def test_health_check(client, data_dir):
    body = client.get("/health").get_json()

    assert body["success"] is True
    assert body["data"]["status"] == "healthy"
    assert body["data"]["data_dir"] == str(data_dir)


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.get_json()["success"] is False


@pytest.mark.parametrize("value", ["2025-06-10garbage", "20250610"])
def test_report_with_malformed_date_is_rejected(client, project, value):
    response = client.post("/api/progress", json={
        "reporter": "Alice Chen",
        "date": value,
        "projectCode": "PRJ-001",
        "workHours": 4,
    })

    assert response.status_code == 400
    assert response.get_json()["error"]["details"] == ["Invalid date format"]
    assert store.load("progress") == []


def test_report_date_is_stored_trimmed(project, make_report, today):
    report = make_report(date=f"  {today.isoformat()} ")

    assert report["date"] == today.isoformat()
    assert store.load("progress")[0]["date"] == today.isoformat()
