"""shortcut_site.builder: rendering and writing of the static site."""

from shortcut_site.builder.generator import GenerationContext, GenerationResult, SiteGenerator
from shortcut_site.builder.images import ImageJob, ImageRelocator
from shortcut_site.builder.markdown import RenderedDescription, render_description
from shortcut_site.builder.pages import NavLink, write_page
from shortcut_site.builder.tracker import ImageReport, wait_for_images

__all__ = [
    "GenerationContext",
    "GenerationResult",
    "SiteGenerator",
    "ImageJob",
    "ImageRelocator",
    "RenderedDescription",
    "render_description",
    "NavLink",
    "write_page",
    "ImageReport",
    "wait_for_images",
]
