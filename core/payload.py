"""Optional-field accessors over the engine payload.

Every read of the loosely-typed payload goes through these helpers so the
"missing field -> default" rules live in one place:

    summary         -> {}
    files           -> None (absent) / list
    issues          -> None (absent) / list of dicts
    analyzers_used  -> []
    counts          -> length of a non-empty array, else summary, else 0
"""


def _as_int(value, default=0):
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return default


def get_summary(payload):
    summary = (payload or {}).get("summary")
    return summary if isinstance(summary, dict) else {}


def get_files(payload):
    files = (payload or {}).get("files")
    return files if isinstance(files, list) else None


def get_issues(payload):
    """Issue records, or None when the payload carries no issue array."""
    issues = (payload or {}).get("issues")
    if not isinstance(issues, list):
        return None
    return [i for i in issues if isinstance(i, dict)]


def get_analyzers_used(payload):
    analyzers = (payload or {}).get("analyzers_used")
    if not isinstance(analyzers, list):
        return []
    return [a for a in analyzers if isinstance(a, str)]


def _count(items, summary_value):
    # An empty array defers to the summary so the fallback payload keeps its scraped counts.
    if items:
        return len(items)
    return _as_int(summary_value)


def files_scanned(payload):
    return _count(get_files(payload), get_summary(payload).get("total_files"))


def issues_found(payload):
    return _count(get_issues(payload), get_summary(payload).get("issues_found"))
