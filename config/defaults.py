"""Default scanner settings."""

import os

DEFAULTS = {
    "engine_names": ["analysis-engine", "scanner"],
    "engine_timeout": 600,      # seconds; 0 or None disables the limit
    "report_prefix": "ElyScan-Report",
    "log_level": "INFO",
    "port": 5001,
    "resource_dir": "",         # set by the packaged app
    "data_dir": "",
    "packaged": False,
    "max_jobs": 50,
    "job_ttl": 3600,
}

# env var -> (settings key, parser)
_ENV_OVERRIDES = {
    "ELYSCAN_ENGINE_TIMEOUT": ("engine_timeout", int),
    "ELYSCAN_LOG_LEVEL": ("log_level", str.upper),
    "ELYSCAN_RESOURCE_DIR": ("resource_dir", str),
    "ELYSCAN_DATA_DIR": ("data_dir", str),
    "ELYSCAN_PACKAGED": ("packaged", lambda v: v.strip().lower() in ("1", "true", "yes")),
    "PORT": ("port", int),
}


def load_settings(environ=None):
    """Return a copy of DEFAULTS with environment overrides applied.

    Values that fail to parse keep their default.
    """
    if environ is None:
        environ = os.environ

    settings = dict(DEFAULTS)
    settings["engine_names"] = list(DEFAULTS["engine_names"])
    for var, (key, parse) in _ENV_OVERRIDES.items():
        raw = environ.get(var)
        if raw is None or not raw.strip():
            continue
        try:
            settings[key] = parse(raw)
        except ValueError:
            pass
    return settings


def engine_timeout(settings):
    """Timeout in seconds for subprocess.run, or None when disabled."""
    timeout = settings.get("engine_timeout")
    if not timeout or timeout <= 0:
        return None
    return timeout
