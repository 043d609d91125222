#!/usr/bin/env python3
"""ElyScan - JSON API for the desktop front end."""

import logging
import os
import threading
import time
import uuid
from flask import Flask, jsonify, request

from config.categories import CATEGORIES, PROFILES
from config.defaults import load_settings
from core.errors import ReportWriteError
from core.pipeline import AnalysisPipeline
from core.state import AnalysisRequest, AnalysisResult
from utils.report_naming import (
    default_report_base,
    project_name_from_path,
    resolve_report_base,
)

logger = logging.getLogger(__name__)

app = Flask(__name__)
settings = load_settings()
pipeline = AnalysisPipeline(settings)

# Background analysis jobs keyed by job_id: {id: {"status", "result", "created"}}
_jobs = {}
_jobs_lock = threading.Lock()
_MAX_JOBS = settings["max_jobs"]
_JOB_TTL = settings["job_ttl"]


def _cleanup_jobs():
    """Remove expired jobs. Called under _jobs_lock."""
    now = time.time()
    expired = [jid for jid, job in _jobs.items() if now - job["created"] > _JOB_TTL]
    for jid in expired:
        del _jobs[jid]
    # If still over limit, remove oldest
    if len(_jobs) > _MAX_JOBS:
        by_age = sorted(_jobs.items(), key=lambda x: x[1]["created"])
        for jid, _ in by_age[:len(_jobs) - _MAX_JOBS]:
            del _jobs[jid]


def _store_job():
    """Register a running job and return its ID."""
    job_id = str(uuid.uuid4())[:8]
    with _jobs_lock:
        _cleanup_jobs()
        _jobs[job_id] = {"status": "running", "result": None, "created": time.time()}
    return job_id


def _finish_job(job_id, result):
    with _jobs_lock:
        job = _jobs.get(job_id)
        if job:
            job["status"] = "done"
            job["result"] = result


def _get_job(job_id):
    """Get a job, or None if not found/expired."""
    with _jobs_lock:
        job = _jobs.get(job_id)
        if job and time.time() - job["created"] > _JOB_TTL:
            _jobs.pop(job_id, None)
            job = None
    return job


def _json_object():
    """Request body as a dict, or None when it is missing or not a JSON object."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


def _run_job(job_id, analysis_request):
    _finish_job(job_id, pipeline.run(analysis_request))


def _scores_payload(result):
    scores, overall = pipeline.category_scores(result)
    return {
        "overall_score": overall,
        "category_scores": [s.to_dict() for s in scores],
    }


@app.route("/api/categories")
def api_categories():
    return jsonify([{"category": cid, "display_name": name} for cid, name in CATEGORIES])


@app.route("/api/profiles")
def api_profiles():
    return jsonify([
        {
            "profile": key,
            "name": p["name"],
            "analyzers": list(p["analyzers"]),
            "time_limit": p["time_limit"],
        }
        for key, p in PROFILES.items()
    ])


@app.route("/api/analyze", methods=["POST"])
def api_analyze():
    """Run an analysis. With "background": true, returns a job_id to poll."""
    data = request.get_json(silent=True)
    try:
        analysis_request = AnalysisRequest.from_dict(data)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    if data.get("background"):
        job_id = _store_job()
        threading.Thread(
            target=_run_job, args=(job_id, analysis_request), daemon=True,
        ).start()
        return jsonify({"job_id": job_id, "status": "running"}), 202

    result = pipeline.run(analysis_request)
    return jsonify(result.to_dict())


@app.route("/api/accessibility", methods=["POST"])
def api_accessibility():
    data = _json_object()
    if data is None:
        return jsonify({"error": "Request body must be a JSON object"}), 400
    project_path = data.get("project_path", "")
    if not isinstance(project_path, str) or not project_path.strip():
        return jsonify({"error": "Missing project_path"}), 400
    result = pipeline.run_accessibility(project_path)
    return jsonify(result.to_dict())


@app.route("/api/status/<job_id>")
def api_status(job_id):
    """Check a background analysis job."""
    job = _get_job(job_id)
    if not job:
        return jsonify({"error": "Job not found"}), 404
    body = {"job_id": job_id, "status": job["status"]}
    if job["result"] is not None:
        body["result"] = job["result"].to_dict()
    return jsonify(body)


@app.route("/api/scores", methods=["POST"])
def api_scores():
    """Category scores for a result (or a bare engine payload)."""
    data = request.get_json(silent=True)
    try:
        result = AnalysisResult.from_dict(data)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify(_scores_payload(result))


@app.route("/api/report", methods=["POST"])
def api_report():
    """Write the HTML + JSON report pair for a result."""
    data = _json_object()
    if data is None:
        return jsonify({"error": "Request body must be a JSON object"}), 400
    try:
        result = AnalysisResult.from_dict(data.get("result"))
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    project_name = data.get("project_name")
    project_path = data.get("project_path")
    for key, value in (("project_name", project_name), ("project_path", project_path),
                       ("output_path", data.get("output_path")),
                       ("output_dir", data.get("output_dir"))):
        if value is not None and not isinstance(value, str):
            return jsonify({"error": f"{key} must be a string"}), 400
    project_name = project_name or project_name_from_path(project_path)

    base_path = data.get("output_path")
    if base_path:
        base_path = resolve_report_base(base_path, project_name)
    else:
        output_dir = data.get("output_dir")
        if not output_dir:
            return jsonify({"error": "Missing output_path or output_dir"}), 400
        base_path = default_report_base(output_dir, project_name)

    try:
        html_path, json_path = pipeline.save_report(result, base_path, project_name)
    except ReportWriteError as e:
        return jsonify({"error": str(e), "path": e.path}), 500

    return jsonify({
        "html": html_path,
        "json": json_path,
        "message": f"Reports saved:\n- HTML: {html_path}\n- JSON: {json_path}",
    })


if __name__ == "__main__":
    logging.basicConfig(level=getattr(logging, settings["log_level"], logging.INFO),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    port = int(os.environ.get("PORT", settings["port"]))
    print(f"ElyScan API running at http://localhost:{port}")
    app.run(debug=False, port=port)
