"""Pure rendering functions: structured data -> HTML strings.

All renderers follow the same pattern:
  - Input: TemperaturePayload (from analysis/) plus display parameters
  - Output: str (HTML fragment, not a full page)
  - No side effects, no I/O

``page.build_page_html`` assembles the fragments into the full page served by
the API at ``/`` and written by the build flow.

Public API:
  - charts: build_yearly_chart_html, build_daily_comparison_html
  - winners: determine_winner, build_winners_html
  - page: build_page_html
  - date_utils: normalize_day, format_day, format_moment

Adding a renderer
-----------------
1. Create ``renderers/{name}.py`` with a build function returning
   ``render_template("{name}.html.j2", ...)``.
2. Create the Jinja2 fragment in ``templates/{name}.html.j2``
   (no <html>/<body> tags; CSS lives in ``templates/base.html.j2``).
3. Call it from ``page.build_page_html`` and add the placeholder to
   ``base.html.j2``.
4. Add tests asserting the returned HTML contains the expected content.
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
