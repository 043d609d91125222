"""Tests for core.pipeline: the engine process is always mocked."""

import json
import os
from unittest.mock import patch

from core.errors import EngineNotFoundError, EngineSpawnError
from core.pipeline import AnalysisPipeline, run_accessibility_analysis, summary_message
from core.state import AnalysisRequest

SETTINGS = {
    "engine_names": ["analysis-engine"],
    "engine_timeout": 30,
    "packaged": False,
    "resource_dir": "",
    "data_dir": "",
}

PAYLOAD = {
    "summary": {"total_files": 5, "issues_found": 2},
    "files": ["a.go", "b.go", "c.go"],
    "issues": [
        {"type": "sql_injection_risk", "severity": "high", "description": "SQL", "file": "a.go"},
        {"type": "test_missing", "severity": "low", "description": "tests", "file": "b.go"},
    ],
    "analyzers_used": ["security", "testing"],
}


def _pipeline():
    return AnalysisPipeline(dict(SETTINGS), engine_path="/opt/engine")


def _request():
    return AnalysisRequest(project_path="/p", scan_types=["security"])


def test_success_parses_payload():
    stdout = "Starting analysis\nFound 3 files to analyze\n" + json.dumps(PAYLOAD)
    with patch("core.pipeline.run_engine", return_value=(stdout, "", 0)) as mock_run:
        result = _pipeline().run(_request())
    assert result.success is True
    assert result.results == PAYLOAD
    assert result.message == "Analysis completed successfully\n3 files scanned\n2 issues found"
    executable, request = mock_run.call_args[0]
    assert executable == "/opt/engine"
    assert mock_run.call_args[1]["timeout"] == 30


def test_success_without_issues_message():
    stdout = json.dumps({"summary": {"total_files": 4}, "issues": []})
    with patch("core.pipeline.run_engine", return_value=(stdout, "", 0)):
        result = _pipeline().run(_request())
    assert result.message.endswith("No issues found")


def test_fallback_still_succeeds():
    stdout = "Found 42 files to analyze\nSummary: 7 issues\nnot json"
    with patch("core.pipeline.run_engine", return_value=(stdout, "", 0)):
        result = _pipeline().run(_request())
    assert result.success is True
    assert result.results["summary"] == {"total_files": 42, "issues_found": 7}
    assert result.message == "Analysis completed\n42 files scanned\n7 issues found"


def test_nonzero_exit_is_failed_result():
    with patch("core.pipeline.run_engine", return_value=("engine crashed", "trace", 3)):
        result = _pipeline().run(_request())
    assert result.success is False
    assert result.results is None
    assert result.message == "Analysis failed: engine crashed"


def test_nonzero_exit_uses_stderr_when_stdout_empty():
    with patch("core.pipeline.run_engine", return_value=("", "bad flag", 2)):
        result = _pipeline().run(_request())
    assert result.message == "Analysis failed: bad flag"


def test_engine_not_found_is_failed_result():
    pipeline = AnalysisPipeline(dict(SETTINGS))
    with patch("core.pipeline.locate_from_settings",
               side_effect=EngineNotFoundError(["/a/engine", "/b/engine"])):
        result = pipeline.run(_request())
    assert result.success is False
    assert "/a/engine" in result.message
    assert "/b/engine" in result.message


def test_spawn_failure_is_failed_result():
    with patch("core.pipeline.run_engine",
               side_effect=EngineSpawnError("/opt/engine", "Permission denied")):
        result = _pipeline().run(_request())
    assert result.success is False
    assert "Permission denied" in result.message


def test_timeout_override_and_disable():
    with patch("core.pipeline.run_engine", return_value=("{}", "", 0)) as mock_run:
        _pipeline().run(_request(), timeout=5)
        assert mock_run.call_args[1]["timeout"] == 5
        _pipeline().run(_request(), timeout=0)
        assert mock_run.call_args[1]["timeout"] is None


def test_accessibility_shortcut():
    with patch("core.pipeline.run_engine", return_value=("{}", "", 0)) as mock_run, \
         patch("core.pipeline.locate_from_settings", return_value="/opt/engine"):
        run_accessibility_analysis("/p", settings=dict(SETTINGS))
    request = mock_run.call_args[0][1]
    assert request.scan_types == ["accessibility"]
    assert request.files is None
    assert request.project_path == "/p"


def test_category_scores():
    with patch("core.pipeline.run_engine", return_value=(json.dumps(PAYLOAD), "", 0)):
        pipeline = _pipeline()
        result = pipeline.run(_request())
    scores, overall = pipeline.category_scores(result)
    by_id = {s.category: s for s in scores}
    assert by_id["security"].critical_issues == 1
    assert by_id["testing"].info_issues == 1
    assert 0 < overall < 100


def test_save_report_uses_payload_project_path(tmp_path):
    from core.state import AnalysisResult
    result = AnalysisResult(success=True, message="ok",
                            results={"project_path": "/work/shop", "issues": []})
    html_path, json_path = _pipeline().save_report(result, str(tmp_path / "r"))
    with open(html_path, encoding="utf-8") as f:
        assert "shop" in f.read()
    assert os.path.exists(json_path)


def test_summary_message_counts():
    assert summary_message({"files": [1, 2], "issues": [{}]}) == \
        "Analysis completed successfully\n2 files scanned\n1 issues found"
    assert summary_message({}, parsed=False) == \
        "Analysis completed\n0 files scanned\nNo issues found"
