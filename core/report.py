"""Build the HTML and JSON report artifacts for an analysis result."""

import json
import logging
import os
from datetime import datetime, timezone

from config.categories import analyzer_label
from config.rules import REPORT_DEFAULT_GROUP, REPORT_SEVERITY_GROUPS
from core import payload as pl
from core.errors import ReportWriteError
from core.scoring import overall_score, score_categories
from core.state import AnalysisResult
from utils.template_engine import escape, render_template

logger = logging.getLogger(__name__)

_GROUP = "report"


def _basename(path):
    return path.replace("\\", "/").rsplit("/", 1)[-1] or path


def group_by_severity(issues):
    """Bucket engine issues into critical/high/medium/low; anything else is medium."""
    groups = {key: [] for key, _ in REPORT_SEVERITY_GROUPS}
    for issue in issues:
        severity = issue.get("severity")
        key = severity.lower() if isinstance(severity, str) else ""
        groups.get(key, groups[REPORT_DEFAULT_GROUP]).append(issue)
    return groups


def _render_issue(issue, css_class):
    file = issue.get("file") or "Unknown file"
    line = issue.get("line")
    return render_template(_GROUP, "issue.html", {
        "css_class": css_class,
        "filename": _basename(str(file)),
        "description": issue.get("description") or "No description",
        "suggestion": issue.get("suggestion") or "No suggestion available",
        "file": file,
        "line": f":{line}" if isinstance(line, int) and line > 0 else "",
        "issue_type": str(issue.get("type") or "General Issue").replace("_", " "),
    })


def _render_scores(issues):
    scores = score_categories(issues)
    rows = "\n".join(
        f"    <tr><td>{escape(s.display_name)}</td><td>{s.score:.1f}</td>"
        f"<td>{s.critical_issues}</td><td>{s.warning_issues}</td><td>{s.info_issues}</td></tr>"
        for s in scores
    )
    return render_template(_GROUP, "scores.html", {
        "overall_score": f"{overall_score(scores):.1f}",
        "rows": rows,
    }, fragments=("rows",))


def render_results(payload):
    """HTML fragment for the results section: counts, analyzers, issues."""
    payload = payload or {}
    parts = [render_template(_GROUP, "summary.html", {
        "files_scanned": pl.files_scanned(payload),
        "issues_found": pl.issues_found(payload),
    })]

    analyzers = pl.get_analyzers_used(payload)
    if analyzers:
        badges = "".join(
            f'<span class="analyzer">{escape(analyzer_label(a))}</span>' for a in analyzers
        )
        parts.append(render_template(_GROUP, "analyzers.html", {"analyzers": badges},
                                     fragments=("analyzers",)))

    issues = pl.get_issues(payload)
    if issues:
        parts.append(_render_scores(issues))
        groups = group_by_severity(issues)
        for key, title in REPORT_SEVERITY_GROUPS:
            group = groups[key]
            if not group:
                continue
            parts.append(render_template(_GROUP, "severity_section.html", {
                "title": title,
                "count": len(group),
                "issues": "\n".join(_render_issue(i, key) for i in group),
            }, fragments=("issues",)))
    elif pl.issues_found(payload) == 0:
        parts.append(render_template(_GROUP, "no_issues.html", {}))
    else:
        parts.append(render_template(_GROUP, "no_details.html", {}))

    return "\n".join(parts)


def render_html(result: AnalysisResult, project_name, generated_at=None):
    """Self-contained HTML document for a result."""
    generated_at = generated_at or datetime.now(timezone.utc)
    timestamp = generated_at.strftime("%Y-%m-%d %H:%M:%S UTC")
    raw = json.dumps(result.to_dict(), indent=2, ensure_ascii=False, default=str)
    if result.results is None and not result.success:
        results_html = render_template(_GROUP, "no_details.html", {})
    else:
        results_html = render_results(result.results)

    return render_template(_GROUP, "report.html", {
        "project_name": project_name,
        "timestamp": timestamp,
        "status_class": "status-success" if result.success else "status-error",
        "status": "SUCCESS" if result.success else "FAILED",
        "message": result.message or "No message",
        "results": results_html,
        "raw_json": raw,
    }, fragments=("results",))


def report_json(result: AnalysisResult):
    """Structured artifact: the engine payload, or the whole result without one."""
    data = result.results if result.results is not None else result.to_dict()
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def report_paths(base_path):
    root, _ext = os.path.splitext(os.fspath(base_path))
    return root + ".html", root + ".json"


def _write(path, content):
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        raise ReportWriteError(path, e.strerror or str(e))


def write_report(result: AnalysisResult, base_path, project_name):
    """Write <base>.html and <base>.json side by side. Returns (html_path, json_path).

    Raises:
        ReportWriteError: Naming the artifact that could not be written.
    """
    html_path, json_path = report_paths(base_path)
    directory = os.path.dirname(html_path)
    if directory:
        try:
            os.makedirs(directory, exist_ok=True)
        except OSError as e:
            raise ReportWriteError(directory, e.strerror or str(e))

    _write(html_path, render_html(result, project_name))
    _write(json_path, report_json(result))
    logger.info("Reports saved: %s, %s", html_path, json_path)
    return html_path, json_path
