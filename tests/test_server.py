"""
HTTP boundary tests using Flask's test client:
- read all / read one / unknown id
- refresh with good and bad secrets
- failed refresh keeps serving the old collection
- health endpoint
"""

import os
import sys

import pytest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from api.server import create_app
from etl.data_store import FacultyStore
from etl.sheets_reader import SourceUnavailableError

SECRET = "test-secret"

TABLES = {
    "personalInfo": [["faculty_id", "name"], ["f1", "Alice"], ["f2", "Bob"]],
    "courses": [["faculty_id", "name", "credits"], ["f1", "Algorithms", "4"], ["f3", "Orphan", "3"]],
}


@pytest.fixture
def store(tmp_path):
    s = FacultyStore(tmp_path / "facultyData.json")
    s.replace([
        {"faculty_id": "old1", "facultyID": "old1", "personalInfo": {"name": "Old"}},
    ])
    return s


def _client(store, fetch_tables=lambda: TABLES, secret=SECRET):
    app = create_app(store=store, fetch_tables=fetch_tables, refresh_secret=secret)
    app.config["TESTING"] = True
    return app.test_client()


def test_get_all_faculty(store):
    resp = _client(store).get("/api/faculty")

    assert resp.status_code == 200
    assert [d["faculty_id"] for d in resp.get_json()] == ["old1"]
    assert resp.headers["Access-Control-Allow-Origin"] == "*"


def test_get_one_faculty(store):
    resp = _client(store).get("/api/faculty?facultyId=old1")

    assert resp.status_code == 200
    assert resp.get_json()["personalInfo"]["name"] == "Old"


def test_unknown_faculty_lists_available_ids(store):
    resp = _client(store).get("/api/faculty?facultyId=nobody")

    assert resp.status_code == 404
    body = resp.get_json()
    assert body["message"] == 'Faculty with ID "nobody" not found'
    assert body["availableIds"] == ["old1"]


def test_unreadable_store_is_500(tmp_path):
    path = tmp_path / "facultyData.json"
    path.write_text("garbage", encoding="utf-8")

    resp = _client(FacultyStore(path)).get("/api/faculty")

    assert resp.status_code == 500
    assert resp.get_json()["message"] == "Error reading faculty data from database"


def test_refresh_rejects_wrong_secret(store):
    resp = _client(store).get("/api/fetchLatest/wrong")

    assert resp.status_code == 401
    assert resp.get_json()["success"] is False
    assert store.ids() == ["old1"]


def test_refresh_disabled_without_secret(store):
    resp = _client(store, secret="").get("/api/fetchLatest/anything")
    assert resp.status_code == 401


def test_refresh_replaces_collection(store):
    client = _client(store)
    resp = client.get(f"/api/fetchLatest/{SECRET}")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert body["totalFaculty"] == 2
    assert body["facultyIds"] == ["f1", "f2"]
    assert body["timestamp"]

    doc = client.get("/api/faculty?facultyId=f1").get_json()
    assert doc["courses"][0]["credits"] == 4
    assert client.get("/api/faculty?facultyId=f3").status_code == 404


def test_failed_refresh_keeps_old_data(store):
    def failing():
        raise SourceUnavailableError("Failed to read sheet 'Links': auth error")

    client = _client(store, fetch_tables=failing)
    resp = client.get(f"/api/fetchLatest/{SECRET}")

    assert resp.status_code == 500
    body = resp.get_json()
    assert body["success"] is False
    assert body["message"].startswith("Error fetching data from Google Sheets: ")
    assert "auth error" in body["message"]

    still = client.get("/api/faculty")
    assert still.status_code == 200
    assert [d["faculty_id"] for d in still.get_json()] == ["old1"]


def test_health(store):
    resp = _client(store).get("/health")
    assert resp.get_json() == {"status": "Backend running"}


def test_lookup_goes_through_store(tmp_path):
    class CountingStore(FacultyStore):
        def __init__(self, path):
            super().__init__(path)
            self.finds = []
            self.id_calls = 0

        def find(self, faculty_id):
            self.finds.append(faculty_id)
            return super().find(faculty_id)

        def ids(self):
            self.id_calls += 1
            return super().ids()

    store = CountingStore(tmp_path / "facultyData.json")
    store.replace([{"faculty_id": "legacy"}, {"facultyID": "modern"}])
    client = _client(store)

    assert client.get("/api/faculty?facultyId=legacy").get_json() == {"faculty_id": "legacy"}
    missing = client.get("/api/faculty?facultyId=nobody")

    assert missing.status_code == 404
    assert missing.get_json()["availableIds"] == ["legacy", "modern"]
    assert store.finds == ["legacy", "nobody"]
    assert store.id_calls == 1
