"""Tests for server.py Flask endpoints: all pipeline runs are mocked."""

import json
import time
from unittest.mock import patch

import pytest

from core.errors import ReportWriteError
from core.state import AnalysisResult


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

PAYLOAD = {
    "summary": {"total_files": 2, "issues_found": 1},
    "issues": [{"type": "xss_vulnerability", "severity": "high",
                "description": "Unescaped output", "file": "a.js"}],
}


def _ok_result():
    return AnalysisResult(success=True, message="Analysis completed successfully",
                          results=PAYLOAD)


@pytest.fixture
def client():
    """Flask test client with a fresh job store each test."""
    import server
    server.app.config["TESTING"] = True
    server._jobs.clear()
    with server.app.test_client() as c:
        yield c


# ---------------------------------------------------------------------------
# GET /api/categories, /api/profiles
# ---------------------------------------------------------------------------

def test_categories(client):
    resp = client.get("/api/categories")
    assert resp.status_code == 200
    data = resp.get_json()
    assert len(data) == 15
    assert data[0] == {"category": "security", "display_name": "Security Analysis"}


def test_profiles(client):
    resp = client.get("/api/profiles")
    names = [p["profile"] for p in resp.get_json()]
    assert "production_ready" in names


# ---------------------------------------------------------------------------
# POST /api/analyze
# ---------------------------------------------------------------------------

def test_analyze_missing_body(client):
    resp = client.post("/api/analyze", data="nope", content_type="text/plain")
    assert resp.status_code == 400
    assert "error" in resp.get_json()


def test_analyze_missing_project_path(client):
    resp = client.post("/api/analyze", json={"scan_types": ["security"]})
    assert resp.status_code == 400


def test_analyze_success(client):
    with patch("server.pipeline.run", return_value=_ok_result()) as mock_run:
        resp = client.post("/api/analyze", json={
            "project_path": "/p", "scan_types": ["security"], "files": ["/p/a.js"],
        })
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["success"] is True
    assert data["results"] == PAYLOAD
    request = mock_run.call_args[0][0]
    assert request.files == ["/p/a.js"]


def test_analyze_failure_is_still_200(client):
    failed = AnalysisResult(success=False, message="Analysis failed: boom")
    with patch("server.pipeline.run", return_value=failed):
        resp = client.post("/api/analyze", json={"project_path": "/p"})
    assert resp.status_code == 200
    assert resp.get_json() == {"success": False, "message": "Analysis failed: boom",
                               "results": None}


def test_analyze_background_job(client):
    with patch("server.pipeline.run", return_value=_ok_result()):
        resp = client.post("/api/analyze", json={"project_path": "/p", "background": True})
        assert resp.status_code == 202
        job_id = resp.get_json()["job_id"]

        status = None
        for _ in range(100):
            status = client.get(f"/api/status/{job_id}").get_json()
            if status["status"] == "done":
                break
            time.sleep(0.01)

    assert status["status"] == "done"
    assert status["result"]["success"] is True


def test_status_unknown_job(client):
    resp = client.get("/api/status/nope")
    assert resp.status_code == 404


# ---------------------------------------------------------------------------
# POST /api/accessibility
# ---------------------------------------------------------------------------

def test_accessibility(client):
    with patch("server.pipeline.run_accessibility", return_value=_ok_result()) as mock_run:
        resp = client.post("/api/accessibility", json={"project_path": "/p"})
    assert resp.status_code == 200
    mock_run.assert_called_once_with("/p")


def test_accessibility_missing_path(client):
    resp = client.post("/api/accessibility", json={})
    assert resp.status_code == 400


# ---------------------------------------------------------------------------
# POST /api/scores
# ---------------------------------------------------------------------------

def test_scores_from_result(client):
    resp = client.post("/api/scores", json=_ok_result().to_dict())
    data = resp.get_json()
    assert resp.status_code == 200
    assert len(data["category_scores"]) == 15
    security = data["category_scores"][0]
    assert security["category"] == "security"
    assert security["critical_issues"] == 1
    assert data["overall_score"] < 100


def test_scores_from_bare_payload(client):
    resp = client.post("/api/scores", json=PAYLOAD)
    assert resp.get_json()["category_scores"][0]["critical_issues"] == 1


# ---------------------------------------------------------------------------
# POST /api/report
# ---------------------------------------------------------------------------

def test_report_written(client, tmp_path):
    resp = client.post("/api/report", json={
        "result": _ok_result().to_dict(),
        "project_name": "demo",
        "output_path": str(tmp_path / "ElyScan-Report-1"),
    })
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["html"].endswith("ElyScan-Report-1.html")
    with open(data["json"], encoding="utf-8") as f:
        assert json.load(f) == PAYLOAD


def test_report_default_name_in_output_dir(client, tmp_path):
    resp = client.post("/api/report", json={
        "result": _ok_result().to_dict(),
        "project_path": "/work/shop",
        "output_dir": str(tmp_path),
    })
    data = resp.get_json()
    assert resp.status_code == 200
    assert str(tmp_path) in data["html"]
    assert data["html"].endswith("-shop.html")


def test_report_missing_destination(client):
    resp = client.post("/api/report", json={"result": _ok_result().to_dict()})
    assert resp.status_code == 400


def test_report_missing_result(client, tmp_path):
    resp = client.post("/api/report", json={"output_path": str(tmp_path / "r")})
    assert resp.status_code == 400


def test_report_write_failure(client):
    err = ReportWriteError("/locked/r.html", "Permission denied")
    with patch("server.pipeline.save_report", side_effect=err):
        resp = client.post("/api/report", json={
            "result": _ok_result().to_dict(), "output_path": "/locked/r",
        })
    assert resp.status_code == 500
    assert resp.get_json()["path"] == "/locked/r.html"
    assert "/locked/r.html" in resp.get_json()["error"]


# ---------------------------------------------------------------------------
# Non-object bodies and mistyped fields
# ---------------------------------------------------------------------------

def test_accessibility_list_body(client):
    resp = client.post("/api/accessibility", json=[1])
    assert resp.status_code == 400
    assert "error" in resp.get_json()


def test_report_list_body(client):
    resp = client.post("/api/report", json=[1])
    assert resp.status_code == 400


def test_report_non_string_project_path(client, tmp_path):
    resp = client.post("/api/report", json={
        "result": _ok_result().to_dict(),
        "project_path": 5,
        "output_dir": str(tmp_path),
    })
    assert resp.status_code == 400
    assert "project_path" in resp.get_json()["error"]


def test_report_output_path_folder(client, tmp_path):
    target = str(tmp_path / "reports") + "/"
    resp = client.post("/api/report", json={
        "result": _ok_result().to_dict(),
        "project_name": "demo",
        "output_path": target,
    })
    assert resp.status_code == 200
    assert resp.get_json()["html"].endswith("-demo.html")
    assert len(list((tmp_path / "reports").iterdir())) == 2
