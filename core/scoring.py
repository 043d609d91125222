"""Per-category health scores with diminishing-returns penalties."""

from config.categories import CATEGORIES
from config.rules import CRITICAL, INFO, WARNING
from core.classifier import classify_issue
from core.severity import normalize_severity
from core.state import CategoryScore

# severity -> (cap, divisor). Caps sum to 70, so a score never drops below 30.
PENALTY_CURVES = {
    "critical": (30.0, 100.0),
    "warning": (25.0, 1000.0),
    "info": (15.0, 5000.0),
}

MAX_IMPROVEMENTS = 5


def _penalty(count, cap, divisor):
    if count <= 0:
        return 0.0
    return cap * (1.0 - 1.0 / (1.0 + count / divisor))


def calculate_score(critical, warning, info):
    """Score in [0, 100]; exactly 100 when all counts are zero."""
    if critical == 0 and warning == 0 and info == 0:
        return 100.0
    penalty = (
        _penalty(critical, *PENALTY_CURVES["critical"])
        + _penalty(warning, *PENALTY_CURVES["warning"])
        + _penalty(info, *PENALTY_CURVES["info"])
    )
    return max(0.0, min(100.0, 100.0 - penalty))


def score_categories(issues):
    """One CategoryScore per category, in table order, for a list of engine issues."""
    counts = {cid: {CRITICAL: 0, WARNING: 0, INFO: 0} for cid, _ in CATEGORIES}
    suggestions = {cid: [] for cid, _ in CATEGORIES}

    for issue in issues or []:
        category = classify_issue(issue)
        if isinstance(issue, dict):
            severity = issue.get("severity")
            suggestion = issue.get("suggestion")
        else:
            severity = issue.severity
            suggestion = issue.suggestion
        counts[category][normalize_severity(severity)] += 1

        bucket = suggestions[category]
        if (isinstance(suggestion, str) and suggestion.strip()
                and suggestion not in bucket and len(bucket) < MAX_IMPROVEMENTS):
            bucket.append(suggestion)

    scores = []
    for cid, display_name in CATEGORIES:
        c = counts[cid]
        scores.append(CategoryScore(
            category=cid,
            display_name=display_name,
            score=calculate_score(c[CRITICAL], c[WARNING], c[INFO]),
            critical_issues=c[CRITICAL],
            warning_issues=c[WARNING],
            info_issues=c[INFO],
            improvements=suggestions[cid],
        ))
    return scores


def overall_score(scores):
    """Mean category score rounded to 2 decimals; 0 for an empty list."""
    if not scores:
        return 0.0
    return round(sum(s.score for s in scores) / len(scores), 2)
