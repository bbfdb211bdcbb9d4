"""Pure rendering functions: structured data -> HTML strings.

All renderers follow the same pattern:
  - Input: DataFrame or dict (from analysis/ or the store)
  - Output: str (HTML fragment, or a full page for report.py)
  - No side effects, no I/O, no Prefect decorators

Used by flows/reports.py which writes the rendered pages.

Public API:
  - charts: build_coordinate_scatter_html, build_temperature_histogram_html
  - report: build_species_report_html, report_filename
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

# Shared Jinja2 environment for all renderers
_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
_jinja_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=True,
)


def render_template(template_name: str, **kwargs: Any) -> str:
    """Render a Jinja2 template by name."""
    return _jinja_env.get_template(template_name).render(**kwargs)
