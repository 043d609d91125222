"""Analysis pipeline: locate -> run -> extract -> classify/score -> report."""

import logging

from config.defaults import engine_timeout, load_settings
from core import payload as pl
from core.errors import AnalysisError, EngineFailedError
from core.extractor import extract_payload
from core.locator import locate_from_settings
from core.report import write_report
from core.runner import run_engine
from core.scoring import overall_score, score_categories
from core.state import AnalysisRequest, AnalysisResult
from utils.report_naming import project_name_from_path

logger = logging.getLogger(__name__)


def summary_message(payload, parsed=True):
    """Human summary for a successful run."""
    head = "Analysis completed successfully" if parsed else "Analysis completed"
    files = pl.files_scanned(payload)
    issues = pl.issues_found(payload)
    tail = f"{issues} issues found" if issues > 0 else "No issues found"
    return f"{head}\n{files} files scanned\n{tail}"


class AnalysisPipeline:
    """Runs one analysis per call. Holds settings only, no per-run state.

    run() never raises for the failure kinds in core.errors; they come back as
    AnalysisResult(success=False).
    """

    def __init__(self, settings=None, engine_path=None):
        self.settings = settings if settings is not None else load_settings()
        self.engine_path = engine_path

    def resolve_engine(self):
        if self.engine_path:
            return self.engine_path
        return locate_from_settings(self.settings)

    def run(self, request: AnalysisRequest, timeout=None) -> AnalysisResult:
        """Run the engine for request and turn its output into a result."""
        if timeout is None:
            timeout = engine_timeout(self.settings)
        elif timeout <= 0:
            timeout = None
        logger.info("Starting analysis: project=%s scan_types=%s files=%s",
                    request.project_path, request.scan_types, request.files)
        try:
            executable = self.resolve_engine()
            stdout, stderr, returncode = run_engine(executable, request, timeout=timeout)
            if returncode != 0:
                logger.warning("Analysis engine exited with status %s", returncode)
                raise EngineFailedError(returncode, stdout, stderr)
        except AnalysisError as e:
            logger.error("%s", e)
            return AnalysisResult(success=False, message=str(e), results=None)

        payload, parsed = extract_payload(stdout)
        return AnalysisResult(
            success=True,
            message=summary_message(payload, parsed),
            results=payload,
        )

    def run_accessibility(self, project_path, timeout=None) -> AnalysisResult:
        request = AnalysisRequest(project_path=project_path, scan_types=["accessibility"])
        return self.run(request, timeout=timeout)

    def category_scores(self, result: AnalysisResult):
        """(scores, overall) for a result; empty issue lists score 100 everywhere."""
        issues = pl.get_issues(result.results) or []
        scores = score_categories(issues)
        return scores, overall_score(scores)

    def save_report(self, result: AnalysisResult, base_path, project_name=None):
        """Write both report artifacts. Raises ReportWriteError."""
        if not project_name:
            project_path = (result.results or {}).get("project_path")
            project_name = project_name_from_path(project_path if isinstance(project_path, str) else "")
        return write_report(result, base_path, project_name)


def run_analysis(request, settings=None, engine_path=None):
    return AnalysisPipeline(settings, engine_path).run(request)


def run_accessibility_analysis(project_path, settings=None, engine_path=None):
    return AnalysisPipeline(settings, engine_path).run_accessibility(project_path)
