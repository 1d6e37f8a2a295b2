"""shortcut_site.builder.pages: writing one HTML document per page via Jinja2."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Sequence, Union

from jinja2 import Environment, PackageLoader, Template, select_autoescape

from shortcut_site.logger import logger

PAGE_TEMPLATE = "page.html.j2"

STYLE = """
body { font-family: system-ui, -apple-system, "Segoe UI", Roboto, sans-serif; margin: 0; color: #1f2328; line-height: 1.5; }
header { background: #2f1c6a; padding: 0.75rem 1.5rem; }
header nav { display: flex; flex-wrap: wrap; gap: 1rem; }
header nav a { color: #fff; text-decoration: none; font-weight: 600; }
header nav a:hover { text-decoration: underline; }
main { max-width: 50rem; margin: 0 auto; padding: 1.5rem; }
main img { max-width: 100%; height: auto; }
main pre { background: #f6f8fa; padding: 1rem; overflow-x: auto; }
main table { border-collapse: collapse; }
main td, main th { border: 1px solid #d0d7de; padding: 0.25rem 0.5rem; }
ul.stories { padding-left: 1.25rem; }
small { color: #656d76; }
"""


@dataclass(frozen=True, slots=True)
class NavLink:
    href: str
    label: str


HOME_LINK = NavLink(href="/", label="Home")


def epic_href(epic_id: int) -> str:
    return f"/{epic_id}/"


def story_href(epic_id: int, story_id: int) -> str:
    return f"/{epic_id}/{story_id}/"


@lru_cache(maxsize=1)
def _environment() -> Environment:
    env = Environment(
        loader=PackageLoader("shortcut_site", "templates"),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    env.globals.update(epic_href=epic_href, story_href=story_href)
    return env


def _template(name: str) -> Template:
    return _environment().get_template(name)


def render_fragment(name: str, **context: Any) -> str:
    """Render a body fragment template (``home``, ``epic`` or ``story``)."""
    return _template(f"{name}.html.j2").render(**context)


def render_page(title: str, nav_links: Sequence[NavLink], body_html: str) -> str:
    """Full HTML document; *title* and link labels are escaped, *body_html* is not."""
    return _template(PAGE_TEMPLATE).render(title=title, nav_links=nav_links, body=body_html, style=STYLE)


def write_page(
    path: Union[Path, str],
    title: str,
    nav_links: Sequence[NavLink],
    body_html: str,
) -> Path:
    """Render a page and save it, creating parent directories as needed.

    Args:
        path: target file, usually ``.../index.html``.
        title: document ``<title>``.
        nav_links: header navigation; the home link is expected first.
        body_html: trusted HTML placed inside ``<main>``.

    Returns:
        Path of the written file.
    """
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_page(title, nav_links, body_html), encoding="utf-8")
    logger.debug("Wrote %s", output_path)
    return output_path


__all__ = [
    "NavLink",
    "HOME_LINK",
    "STYLE",
    "epic_href",
    "story_href",
    "render_fragment",
    "render_page",
    "write_page",
]
