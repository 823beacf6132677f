"""Jinja2 template rendering for generated files.

Provides the TemplateRenderer class which loads Jinja2 templates from the
bundled ``easy_cfhighlander/templates/`` directory (or an override) and
renders them with the resolved parameter map.  Rendering is a pure function
of the template and the parameters: the same inputs always give the same
text, which the generator relies on to classify files as unchanged.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
    TemplateNotFound,
    select_autoescape,
)

from easy_cfhighlander.exceptions import TemplateRenderError


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders ``.j2`` templates with a parameter map.

    Undefined variables are errors rather than empty strings, so a template
    referencing a parameter the command never resolved fails loudly instead of
    producing a half-filled file.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # Register custom filters
        self.env.filters["slugify"] = _slugify_filter
        self.env.filters["pascal_case"] = _pascal_case_filter
        self.env.filters["snake_case"] = _snake_case_filter
        self.env.filters["bool_str"] = _bool_str_filter

    def render(self, template_id: str, params: Mapping[str, Any]) -> str:
        """Render a single template with the provided parameters.

        Args:
            template_id: Path relative to the template directory (e.g.
                ``"code/Jenkinsfile.j2"``).
            params: Resolved parameter map.

        Raises:
            TemplateRenderError: The template is missing, invalid, or uses a
                parameter that is not in *params*.
        """
        try:
            template = self.env.get_template(template_id)
            return template.render(**params)
        except TemplateNotFound as exc:
            raise TemplateRenderError(template_id, f"template not found: {exc.name}") from exc
        except TemplateError as exc:
            raise TemplateRenderError(template_id, str(exc)) from exc


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _slugify_filter(value: str) -> str:
    """Convert a string to a URL/filename-safe slug."""
    slug = re.sub(r"[^a-z0-9]+", "-", str(value).lower().strip())
    return slug.strip("-")


def _pascal_case_filter(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``SomeThing``."""
    parts = re.split(r"[-_.\s]+", str(value))
    return "".join(word[:1].upper() + word[1:] for word in parts if word)


def _snake_case_filter(value: str) -> str:
    """Convert ``SomeThing`` or ``some-thing`` to ``some_thing``."""
    s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", str(value))
    s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1)
    return re.sub(r"[-.\s]+", "_", s2).lower()


def _bool_str_filter(value: Any) -> str:
    """Render a boolean parameter as ``true``/``false``."""
    return "true" if value else "false"
