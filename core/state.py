"""Request, issue, score and result models shared across the pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class AnalysisRequest:
    project_path: str
    scan_types: list[str] = field(default_factory=list)
    files: list[str] | None = None      # individual files win over project_path

    @property
    def targets(self) -> list[str]:
        """Positional targets handed to the engine."""
        if self.files:
            return list(self.files)
        return [self.project_path]

    @classmethod
    def from_dict(cls, data) -> AnalysisRequest:
        """Build a request from its JSON shape.

        Raises:
            ValueError: If project_path is missing or a list field is not a list.
        """
        if not isinstance(data, dict):
            raise ValueError("Request must be a JSON object")
        project_path = data.get("project_path")
        if not isinstance(project_path, str) or not project_path.strip():
            raise ValueError("Missing project_path")

        scan_types = data.get("scan_types") or []
        if not isinstance(scan_types, list):
            raise ValueError("scan_types must be a list")

        files = data.get("files")
        if files is not None and not isinstance(files, list):
            raise ValueError("files must be a list")

        return cls(
            project_path=project_path,
            scan_types=[str(s) for s in scan_types],
            files=[str(f) for f in files] if files is not None else None,
        )

    def to_dict(self) -> dict:
        return {
            "project_path": self.project_path,
            "scan_types": list(self.scan_types),
            "files": list(self.files) if self.files is not None else None,
        }


@dataclass
class RawIssue:
    type: str
    description: str
    severity: str       # engine vocabulary, normalized later
    file: str
    line: int | None = None
    suggestion: str | None = None

    @classmethod
    def from_dict(cls, data) -> RawIssue:
        """Lenient construction from an engine record; missing fields become empty."""
        line = data.get("line")
        return cls(
            type=str(data.get("type") or ""),
            description=str(data.get("description") or ""),
            severity=str(data.get("severity") or ""),
            file=str(data.get("file") or ""),
            line=line if isinstance(line, int) and not isinstance(line, bool) else None,
            suggestion=data.get("suggestion") or None,
        )


@dataclass
class CategoryScore:
    category: str
    display_name: str
    score: float
    critical_issues: int = 0
    warning_issues: int = 0
    info_issues: int = 0
    improvements: list[str] = field(default_factory=list)

    @property
    def issue_count(self) -> int:
        return self.critical_issues + self.warning_issues + self.info_issues

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "display_name": self.display_name,
            "score": self.score,
            "critical_issues": self.critical_issues,
            "warning_issues": self.warning_issues,
            "info_issues": self.info_issues,
            "issue_count": self.issue_count,
            "improvements": list(self.improvements),
        }


@dataclass(frozen=True)
class AnalysisResult:
    success: bool
    message: str
    results: dict | None = None     # engine payload

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "message": self.message,
            "results": self.results,
        }

    @classmethod
    def from_dict(cls, data) -> AnalysisResult:
        """Rebuild a result sent back by the UI.

        A bare engine payload (no "success" key) is wrapped as a successful result.
        """
        if not isinstance(data, dict):
            raise ValueError("Result must be a JSON object")
        if "success" not in data and "results" not in data:
            return cls(success=True, message="", results=data)
        results = data.get("results")
        return cls(
            success=bool(data.get("success", False)),
            message=str(data.get("message") or ""),
            results=results if isinstance(results, dict) else None,
        )
