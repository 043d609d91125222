"""Analysis categories, analyzer labels and named analysis profiles."""

from types import MappingProxyType

# Closed, ordered category table: (id, display name).
CATEGORIES = (
    ("security", "Security Analysis"),
    ("code_quality", "Code Quality"),
    ("performance", "Performance"),
    ("accessibility", "Accessibility"),
    ("documentation", "Documentation"),
    ("testing", "Testing Coverage"),
    ("dependencies", "Dependencies"),
    ("architecture", "Architecture"),
    ("error_handling", "Error Handling"),
    ("api_design", "API Design"),
    ("database", "Database Analysis"),
    ("compliance", "Compliance & Privacy"),
    ("mobile", "Mobile & Cross-Platform"),
    ("logging", "Logging & Observability"),
    ("ai_hallucinations", "AI Hallucinations"),
)

CATEGORY_IDS = tuple(cid for cid, _ in CATEGORIES)

DISPLAY_NAMES = MappingProxyType(dict(CATEGORIES))

DEFAULT_CATEGORY = "code_quality"

# Labels for the "analyzers used" block of the report. The engine reports the
# mobile analyzer under its own name, so both spellings are listed.
ANALYZER_LABELS = MappingProxyType({
    "security": "Security",
    "code_quality": "Code Quality",
    "performance": "Performance",
    "accessibility": "Accessibility",
    "compliance": "Compliance",
    "architecture": "Architecture",
    "testing": "Testing",
    "documentation": "Documentation",
    "dependencies": "Dependencies",
    "logging": "Logging",
    "error_handling": "Error Handling",
    "api_design": "API Design",
    "database": "Database",
    "ai_hallucinations": "AI Hallucinations",
    "mobile": "Mobile & Cross-Platform",
    "mobile_crossplatform": "Mobile & Cross-Platform",
})

# Category ids whose engine analyzer is registered under a different name.
ENGINE_ANALYZER_NAMES = MappingProxyType({
    "mobile": "mobile_crossplatform",
})


def engine_analyzer(name):
    """Engine analyzer name for a category id; other names pass through."""
    return ENGINE_ANALYZER_NAMES.get(name, name)


ENGINE_ANALYZERS = tuple(engine_analyzer(cid) for cid in CATEGORY_IDS)

# Profile analyzer lists use the engine's names, as sent on --analyzers.
PROFILES = MappingProxyType({
    "blocking_only": {
        "name": "Blocking issues only",
        "analyzers": ("security", "error_handling", "code_quality",
                      "dependencies", "architecture"),
        "time_limit": 60,
    },
    "production_ready": {
        "name": "Production ready",
        "analyzers": ("security", "performance", "error_handling",
                      "code_quality", "testing", "dependencies",
                      "architecture", "database", "api_design"),
        "time_limit": 300,
    },
    "quality_focused": {
        "name": "Quality focused",
        "analyzers": ("code_quality", "testing", "documentation",
                      "architecture", "performance", "error_handling",
                      "dependencies", "logging"),
        "time_limit": 600,
    },
    "comprehensive": {
        "name": "Comprehensive",
        "analyzers": ENGINE_ANALYZERS,
        "time_limit": 1200,
    },
})


def analyzer_label(name):
    """Human label for an analyzer id; unknown ids are returned unchanged."""
    return ANALYZER_LABELS.get(name, name)
