"""Issue classification and severity rules."""

from types import MappingProxyType


def _bind(category, *types):
    return {t: category for t in types}


# Issue type tag -> category. Many-to-one; each tag belongs to exactly one category.
ISSUE_TYPE_CATEGORIES = MappingProxyType({
    **_bind(
        "security",
        "input_validation_missing", "sql_injection_risk", "xss_vulnerability",
        "csrf_vulnerability", "authentication_weakness", "authorization_missing",
        "insecure_data_storage", "insecure_api_call", "https_missing",
        "outdated_dependency", "session_management_issue", "security_logging_missing",
        "rate_limiting_missing", "vulnerable_dependency", "secret_exposure",
        "deployment_security_issue",
    ),
    **_bind(
        "performance",
        "performance_issue", "caching_missing", "memory_leak_risk",
        "slow_database_query", "slow_response_time", "performance_bottleneck",
    ),
    **_bind(
        "code_quality",
        "code_duplication", "high_cyclomatic_complexity", "poor_code_readability",
        "solid_principle_violation", "comment_issue", "refactor_needed",
        "testability_issue", "design_pattern_missing", "dependency_injection_missing",
        "inconsistent_naming_pattern", "ai_generated_placeholder", "unused_import",
        "incomplete_implementation", "framework_mismatch", "over_engineering",
        "deprecated_import", "missing_header_guard",
    ),
    **_bind(
        "accessibility",
        "accessibility_issue", "ux_issue", "mobile_compatibility_issue",
        "contrast_issue",
    ),
    **_bind(
        "documentation",
        "documentation_missing", "documentation_quality_issue",
        "api_documentation_missing", "user_documentation_missing",
        "architecture_documentation_missing",
    ),
    **_bind(
        "testing",
        "test_missing", "low_test_coverage", "test_not_isolated", "mocking_issue",
        "ci_pipeline_missing",
    ),
    **_bind(
        "dependencies",
        "missing_required_import", "unused_dependency", "too_many_dependencies",
        "singleton_misuse", "typescript_type_error", "license_conflict",
        "legal_risk", "missing_package_dependency", "versioning_issue",
    ),
    **_bind(
        "architecture",
        "multiple_same_services", "config_file_conflict", "wrong_directory_structure",
        "backend_frontend_integration_error", "architecture_issue", "dip_violation",
        "isp_violation", "missing_dependency_injection", "lsp_violation_type_check",
        "ocp_violation_ifelse", "ocp_violation_switch", "duplicate_entity_files",
        "circular_dependency",
    ),
    **_bind(
        "error_handling",
        "error_handling_issue", "insufficient_logging", "wrong_log_level",
        "pii_exposure_in_logs", "monitoring_missing", "distributed_tracing_missing",
    ),
    **_bind(
        "api_design",
        "api_design_issue", "missing_api_versioning", "missing_pagination",
        "caching_missing_api", "insecure_api_design", "performance_issue_api",
        "graphql_issue", "microservices_issue", "rest_compliance_issue",
        "api_consistency_issue", "content_negotiation_issue",
        "async_pattern_missing", "security_headers_missing",
    ),
    **_bind(
        "database",
        "database_column_mismatch", "database_index_missing", "database_issue",
    ),
    **_bind(
        "compliance",
        "gdpr_violation", "compliance_issue", "privacy_policy_missing",
    ),
    **_bind(
        "mobile",
        "missing_expo_config", "localstorage_in_mobile",
        # platform / layout
        "missing_platform_check", "missing_safe_area", "hardcoded_dimensions",
        "missing_keyboard_handling", "missing_responsive_hooks",
        "desktop_first_approach", "non_standard_breakpoints", "excessive_px_units",
        "not_mobile_first", "missing_orientation_handling",
        # pwa
        "missing_service_worker", "missing_install_prompt", "missing_pwa_manifest",
        "missing_manifest_field", "missing_icon_size", "missing_pwa_dependencies",
        # viewport / native
        "missing_viewport_meta", "incorrect_viewport_width", "missing_initial_scale",
        "missing_apple_meta", "missing_auto_layout", "missing_accessibility_swift",
        "non_responsive_android_layout", "missing_content_description",
        "non_responsive_flutter_widget", "missing_flutter_semantics",
        "missing_responsive_flutter", "missing_mobile_testing",
        # touch / rendering
        "heavy_library_import", "missing_lazy_loading", "missing_virtualization",
        "missing_touch_feedback", "missing_gesture_handling", "small_touch_target",
        "missing_mobile_a11y", "missing_aria_labels", "missing_semantic_html",
        "missing_focus_management",
        # network / battery
        "missing_offline_handling", "missing_network_retry",
        "missing_connection_check", "missing_cache_strategy", "battery_drain_risk",
        "excessive_animations", "missing_request_animation_frame",
        "background_processing_issue",
        # storage / state
        "missing_csp_mobile", "insecure_mobile_storage", "missing_cert_pinning",
        "missing_data_encryption", "inconsistent_state_management",
        "missing_state_abstraction", "platform_specific_state",
    ),
    **_bind("logging", "logging_insufficient"),
    **_bind("ai_hallucinations", "ai_hallucination", "missing_auth_context"),
})

# Description fallback, checked in order; first keyword hit wins.
# Each entry: (keywords, token). Tokens outside the category table are folded
# through FALLBACK_TOKEN_FOLDS.
DESCRIPTION_KEYWORDS = (
    (("security", "vulnerability"), "security"),
    (("performance", "memory"), "performance"),
    (("test",), "testing"),
    (("document",), "documentation"),
    (("error",), "error_handling"),
    (("complex",), "complexity"),
    (("architect",), "architecture"),
    (("depend",), "dependencies"),
    (("compliance", "gdpr"), "reliability"),
)

FALLBACK_TOKEN_FOLDS = MappingProxyType({
    "complexity": "code_quality",
    "reliability": "compliance",
})

CRITICAL = "critical"
WARNING = "warning"
INFO = "info"

SEVERITY_LEVELS = (CRITICAL, WARNING, INFO)

SEVERITY_ALIASES = MappingProxyType({
    "high": CRITICAL,
    "error": CRITICAL,
    "critical": CRITICAL,
    "medium": WARNING,
    "warning": WARNING,
    "warn": WARNING,
    "low": INFO,
    "info": INFO,
    "note": INFO,
    "informational": INFO,
})

# Report grouping uses the engine's own four-level vocabulary.
REPORT_SEVERITY_GROUPS = (
    ("critical", "Critical Issues"),
    ("high", "High Priority"),
    ("medium", "Medium Priority"),
    ("low", "Low Priority"),
)
REPORT_DEFAULT_GROUP = "medium"
