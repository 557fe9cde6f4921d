"""Standalone HTML page shell shared by every renderer."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

TEMPLATES_DIR = Path(__file__).parent / "templates"
PAGE_TEMPLATE = "page.html"


@lru_cache(maxsize=1)
def _get_environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html"]),
        keep_trailing_newline=True,
    )


def render_page(body: str, *, title: str = "", css: str = "") -> str:
    """Wrap an HTML fragment in a complete document with head and body."""

    template = _get_environment().get_template(PAGE_TEMPLATE)
    return template.render(title=title, css=css, body=Markup(body))
