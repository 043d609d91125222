"""Resolve the analysis engine executable from a prioritized candidate list."""

import logging
import os
import platform

from config.defaults import DEFAULTS
from core.errors import EngineNotFoundError

logger = logging.getLogger(__name__)


def _exe(name):
    return name + ".exe" if os.name == "nt" else name


def candidate_paths(packaged=False, resource_dir=None, data_dirs=(), names=None):
    """Return engine candidates, most specific first.

    Order: packaged resource locations, app-data locations, development-relative
    paths, then paths relative to the current working directory. Packaged
    locations are only considered when running packaged with a resource dir.
    """
    names = names or DEFAULTS["engine_names"]
    primary = names[0]
    candidates = []

    if packaged and resource_dir:
        machine = platform.machine().lower() or "unknown"
        candidates.extend([
            os.path.join(resource_dir, _exe(primary)),
            os.path.join(resource_dir, _exe(f"{primary}-{machine}")),
            os.path.join(resource_dir, "binaries", _exe(primary)),
        ])

    for data_dir in data_dirs:
        if data_dir:
            candidates.append(os.path.join(data_dir, _exe(primary)))

    # development checkout: engine built next to the desktop app
    for up in (os.path.join("..", ".."), os.path.join("..", "..", "..")):
        for name in names:
            candidates.append(os.path.join(up, primary, _exe(name)))

    for name in names:
        candidates.append(_exe(name))
    candidates.extend([
        os.path.join("binaries", _exe(primary)),
        os.path.join("src-tauri", "binaries", _exe(primary)),
        os.path.join("..", _exe(primary)),
    ])

    # de-dup, keep first occurrence
    seen = set()
    ordered = []
    for path in candidates:
        if path not in seen:
            seen.add(path)
            ordered.append(path)
    return ordered


def locate_engine(packaged=False, resource_dir=None, data_dirs=(), names=None):
    """Return the first existing candidate path.

    Raises:
        EngineNotFoundError: If no candidate exists; carries the full list.
    """
    candidates = candidate_paths(packaged, resource_dir, data_dirs, names)
    for path in candidates:
        exists = os.path.isfile(path)
        logger.debug("Checking engine path %s - exists: %s", path, exists)
        if exists:
            logger.info("Using analysis engine: %s", path)
            return path
    raise EngineNotFoundError(candidates)


def locate_from_settings(settings):
    """locate_engine() driven by load_settings() output."""
    data_dir = settings.get("data_dir") or ""
    return locate_engine(
        packaged=settings.get("packaged", False),
        resource_dir=settings.get("resource_dir") or None,
        data_dirs=(data_dir,) if data_dir else (),
        names=settings.get("engine_names"),
    )
