"""HTML report templates rendered with string.Template.

Templates live under templates/<group>/<name>. Values are HTML-escaped on the
way in unless the caller names them in ``fragments``, which is how already
rendered sub-templates are nested into a page.
"""

import html
import os
from functools import lru_cache
from string import Template


def get_templates_dir():
    """Return the absolute path to the templates directory."""
    return os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")


@lru_cache(maxsize=None)
def load_template(group, template_name):
    """Read templates/<group>/<template_name>; cached for the life of the process.

    Raises:
        ValueError: If the resolved path leaves the templates directory.
        OSError: If the file cannot be read.
    """
    templates_dir = os.path.realpath(get_templates_dir())
    resolved = os.path.realpath(os.path.join(templates_dir, group, template_name))
    if not resolved.startswith(templates_dir + os.sep):
        raise ValueError(f"Template path escapes templates directory: {group}/{template_name}")
    with open(resolved, "r", encoding="utf-8") as f:
        return Template(f.read())


def escape(value):
    return html.escape(str(value), quote=True)


def render_template(group, template_name, variables, fragments=()):
    """Render a template, escaping every value except keys listed in fragments.

    Unknown placeholders are left as-is (safe_substitute).
    """
    values = {
        key: value if key in fragments else escape(value)
        for key, value in variables.items()
    }
    return load_template(group, template_name).safe_substitute(values)
