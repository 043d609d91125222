"""Pull the engine payload out of stdout that mixes log lines with one JSON object."""

import json
import logging
import re

logger = logging.getLogger(__name__)

_FILES_RE = re.compile(r"(\d+) files")
_ISSUES_RE = re.compile(r"(\d+) issues")

FALLBACK_NOTE = "Analysis completed but detailed results not available in JSON format"


def find_json_start(lines):
    """Index of the first line whose first non-blank character is '{', else 0."""
    for i, line in enumerate(lines):
        if line.lstrip().startswith("{"):
            return i
    return 0


def scrape_counts(lines):
    """Read (file_count, issue_count) from engine log lines; missing counts are 0.

    Later matches override earlier ones.
    """
    file_count = 0
    issue_count = 0
    for line in lines:
        if "Found" in line and "files to analyze" in line:
            m = _FILES_RE.search(line)
            if m:
                file_count = int(m.group(1))
        if "Summary:" in line and "issues" in line:
            m = _ISSUES_RE.search(line)
            if m:
                issue_count = int(m.group(1))
    return file_count, issue_count


def fallback_payload(file_count, issue_count):
    return {
        "summary": {
            "total_files": file_count,
            "issues_found": issue_count,
        },
        "issues": [],
        "message": FALLBACK_NOTE,
    }


def extract_payload(stdout):
    """Return (payload, parsed).

    parsed is False when the JSON document could not be decoded and the payload
    was synthesized from log counts instead.
    """
    lines = (stdout or "").splitlines()
    start = find_json_start(lines)
    document = "\n".join(lines[start:])
    logger.debug("JSON candidate starts at line %d (%d chars)", start, len(document))

    try:
        payload = json.loads(document)
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        return payload, True

    logger.warning("Engine output is not a JSON object, falling back to log counts")
    file_count, issue_count = scrape_counts(lines)
    return fallback_payload(file_count, issue_count), False
