"""
Register pytest fixtures shared by the unit and API tests.

Every test gets its own temporary data directory, so the JSON collections
never leak between tests.
"""

import sys
from datetime import date
from pathlib import Path

import pytest

THIS_DIR = Path(__file__).parent
TESTS_DIR_PARENT = (THIS_DIR / "..").resolve()

# add the project root to PYTHONPATH so that "app", "api", "core" and "models" import
sys.path.insert(0, str(TESTS_DIR_PARENT))

from app import create_app  # noqa: E402
from models import JsonStore  # noqa: E402


@pytest.fixture
def data_dir(tmp_path):
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def app(data_dir):
    app = create_app("testing", DATA_DIR=str(data_dir), LOG_LEVEL="WARNING")
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def file_store(data_dir):
    """A store bound directly to the temp directory, usable without an app context."""
    return JsonStore(data_dir=str(data_dir))


@pytest.fixture
def today():
    return date.today()


@pytest.fixture
def make_project(client):
    def _make_project(**overrides):
        payload = {
            "projectCode": "PRJ-001",
            "name": "Website redesign",
            "owner": "Alice Chen",
            "startDate": "2025-01-01",
            "endDate": "2025-12-31",
            "status": "active",
            "description": "Refresh the public website",
        }
        payload.update(overrides)
        response = client.post("/api/projects", json=payload)
        assert response.status_code == 201, response.get_json()
        return response.get_json()["data"]

    return _make_project


@pytest.fixture
def make_report(client, today):
    def _make_report(**overrides):
        payload = {
            "reporter": "Alice Chen",
            "date": today.isoformat(),
            "projectCode": "PRJ-001",
            "workHours": 8,
            "content": "Implemented the login page",
            "blocker": "",
            "plan": "Write tests",
            "needHelp": "否",
        }
        payload.update(overrides)
        response = client.post("/api/progress", json=payload)
        assert response.status_code == 201, response.get_json()
        return response.get_json()["data"]

    return _make_report
