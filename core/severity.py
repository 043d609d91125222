"""Severity normalization to critical / warning / info."""

from config.rules import INFO, SEVERITY_ALIASES


def normalize_severity(value):
    """Map any severity string to critical, warning or info. Unknown -> info."""
    if not isinstance(value, str):
        return INFO
    return SEVERITY_ALIASES.get(value.strip().lower(), INFO)
