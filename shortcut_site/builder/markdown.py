"""Markdown description rendering with image relocation."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Tuple

import markdown

from .images import ImageJob

# ![alt](url) or ![alt](url "title")
IMAGE_PATTERN = re.compile(r"!\[(?P<alt>[^\]]*)\]\((?P<url>[^)\s]+)(?P<title>\s+\"[^\"]*\")?\)")
MARKDOWN_EXTENSIONS = ["fenced_code", "tables"]


class Relocator(Protocol):
    def handles(self, url: str) -> bool: ...

    def relocate(self, source_url: str) -> ImageJob: ...


@dataclass(frozen=True)
class RenderedDescription:
    """HTML for a description plus the image jobs it started."""

    html: str
    jobs: Tuple[ImageJob, ...] = field(default_factory=tuple)


def replace_image_links(text: str, relocator: Relocator) -> Tuple[str, List[ImageJob]]:
    """Point media-host images at local copies; other images are untouched."""
    jobs: List[ImageJob] = []

    def _substitute(match: re.Match[str]) -> str:
        url = match.group("url")
        if not relocator.handles(url):
            return match.group(0)
        job = relocator.relocate(url)
        jobs.append(job)
        return f"![{match.group('alt')}]({job.local_path}{match.group('title') or ''})"

    return IMAGE_PATTERN.sub(_substitute, text), jobs


def render_description(text: Optional[str], relocator: Relocator) -> RenderedDescription:
    """Convert a Markdown description to HTML, relocating hosted images first."""
    if not text:
        return RenderedDescription(html="")
    rewritten, jobs = replace_image_links(text, relocator)
    html = markdown.markdown(rewritten, extensions=MARKDOWN_EXTENSIONS)
    return RenderedDescription(html=html, jobs=tuple(jobs))


__all__ = ["RenderedDescription", "render_description", "replace_image_links", "IMAGE_PATTERN"]
