"""Presentation wrapper for extracted description fragments (Jinja2)."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"

# fragments are already HTML scraped from the source page
_env = Environment(loader=FileSystemLoader(str(TEMPLATE_DIR)), autoescape=False)


def render_description(desc: Optional[str], template: str = "description.html") -> Optional[str]:
    if not desc:
        return desc
    return _env.get_template(template).render(desc=desc).strip()
