"""Report naming utilities: project names, default report base names, slugs."""

import os
import re
import time

from config.defaults import DEFAULTS

UNKNOWN_PROJECT = "Unknown Project"


def slugify(text):
    """Convert text to a filesystem-safe slug."""
    text = text.lower().strip()
    text = re.sub(r"[^\w\s-]", "", text)
    text = re.sub(r"[\s_-]+", "_", text)
    return text.strip("_")


def project_name_from_path(project_path):
    """Last path component of the project path, or 'Unknown Project'."""
    if not project_path:
        return UNKNOWN_PROJECT
    trimmed = project_path.replace("\\", "/").rstrip("/")
    name = trimmed.rsplit("/", 1)[-1]
    return name or UNKNOWN_PROJECT


def default_report_name(now=None, prefix=None):
    """Base name such as 'ElyScan-Report-1760781600' (no extension)."""
    now = int(time.time() if now is None else now)
    return f"{prefix or DEFAULTS['report_prefix']}-{now}"


def default_report_base(output_dir, project_name=None, now=None):
    """Base path for a report pair inside output_dir.

    The project slug is appended when one is available so reports for different
    projects do not collide in a shared folder.
    """
    name = default_report_name(now)
    slug = slugify(project_name or "")
    if slug and project_name != UNKNOWN_PROJECT:
        name = f"{name}-{slug}"
    return os.path.join(output_dir, name)


def is_folder_target(target):
    """An existing directory, or a path ending in a separator (created on write)."""
    return target.endswith(("/", os.sep)) or os.path.isdir(target)


def resolve_report_base(target, project_name=None, now=None):
    """Report base path for a user-supplied --report / output_path value.

    A folder target gets a default base name inside it; anything else is used
    as the base path itself.
    """
    if is_folder_target(target):
        return default_report_base(target, project_name, now)
    return target
