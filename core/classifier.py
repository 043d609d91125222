"""Map engine issues to analysis categories: type table first, description keywords second."""

from config.categories import DEFAULT_CATEGORY
from config.rules import DESCRIPTION_KEYWORDS, FALLBACK_TOKEN_FOLDS, ISSUE_TYPE_CATEGORIES


def category_for_type(issue_type):
    """Category bound to an issue type tag, or None if the tag is unknown."""
    if not issue_type:
        return None
    return ISSUE_TYPE_CATEGORIES.get(issue_type)


def keyword_token(description):
    """First matching keyword token for a description, or None.

    Tokens may fall outside the category table ("complexity", "reliability").
    """
    text = (description or "").lower()
    for keywords, token in DESCRIPTION_KEYWORDS:
        if any(k in text for k in keywords):
            return token
    return None


def category_for_description(description):
    """Keyword fallback folded into the category table; defaults to code_quality."""
    token = keyword_token(description)
    if token is None:
        return DEFAULT_CATEGORY
    return FALLBACK_TOKEN_FOLDS.get(token, token)


def classify_issue(issue):
    """Return the category id for one issue (RawIssue or engine dict). Never fails."""
    if isinstance(issue, dict):
        issue_type = issue.get("type")
        description = issue.get("description")
    else:
        issue_type = issue.type
        description = issue.description

    issue_type = issue_type if isinstance(issue_type, str) else ""
    description = description if isinstance(description, str) else ""

    category = category_for_type(issue_type)
    if category:
        return category
    return category_for_description(description)
