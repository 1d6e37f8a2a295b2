"""
shortcut_site.builder.generator: objective → epics → stories, one page each.
"""
from __future__ import annotations

import asyncio
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Sequence

from shortcut_site.config import SiteConfig
from shortcut_site.logger import logger
from shortcut_site.remote.client import RemoteDataClient
from shortcut_site.remote.models import Epic, EpicSummary, Objective, Story

from .images import ImageJob
from .markdown import Relocator, render_description
from .pages import HOME_LINK, NavLink, epic_href, render_fragment, write_page

PAGE_FILE = "index.html"


@dataclass
class GenerationContext:
    """Everything one generation run needs; discarded afterwards."""

    site: SiteConfig
    client: RemoteDataClient
    relocator: Relocator
    output_root: Path

    @property
    def site_dir(self) -> Path:
        return Path(self.output_root) / self.site.slug


@dataclass
class GenerationResult:
    """Pages written, image jobs started and epics whose subtree failed."""

    pages: List[Path] = field(default_factory=list)
    jobs: List[ImageJob] = field(default_factory=list)
    failed_epics: Dict[int, Exception] = field(default_factory=dict)


@dataclass
class _Subtree:
    """Pages and image jobs of one epic, filled in as they are produced."""

    pages: List[Path] = field(default_factory=list)
    jobs: List[ImageJob] = field(default_factory=list)


class SiteGenerator:
    """Writes the HTML of a whole site; image downloads may still be running on return."""

    def __init__(self, context: GenerationContext) -> None:
        self.context = context

    async def generate(self) -> GenerationResult:
        site = self.context.site
        client = self.context.client

        logger.info("Fetching objective %s for site %r", site.objective_id, site.name)
        objective = await client.get_objective(site.objective_id)
        epics = await client.list_objective_epics(site.objective_id)
        logger.info("Objective %r has %d epic(s)", objective.name, len(epics))

        self._reset_output_dir()

        nav = [HOME_LINK, *(NavLink(href=epic_href(e.id), label=e.name) for e in epics)]
        result = GenerationResult()
        result.pages.append(self._write_home(objective, nav))

        subtrees = [_Subtree() for _ in epics]
        tasks = [
            asyncio.create_task(self._build_epic(epic, nav, subtree), name=f"epic:{epic.id}")
            for epic, subtree in zip(epics, subtrees)
        ]
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)
        for epic, subtree, outcome in zip(epics, subtrees, outcomes):
            if isinstance(outcome, BaseException) and not isinstance(outcome, Exception):
                raise outcome
            # a failed epic may already have pages on disk referencing started downloads
            result.pages.extend(subtree.pages)
            result.jobs.extend(subtree.jobs)
            if isinstance(outcome, Exception):
                logger.error("Epic %s (%s) failed: %r", epic.id, epic.name, outcome)
                result.failed_epics[epic.id] = outcome

        logger.info(
            "Wrote %d page(s) for %r, %d image(s) pending",
            len(result.pages),
            site.name,
            len(result.jobs),
        )
        return result

    def _reset_output_dir(self) -> None:
        site_dir = self.context.site_dir
        if site_dir.exists():
            logger.info("Removing previous output %s", site_dir)
            shutil.rmtree(site_dir)
        site_dir.mkdir(parents=True)

    def _write_home(self, objective: Objective, nav: Sequence[NavLink]) -> Path:
        # the objective description is inserted as-is, without Markdown rendering
        body = render_fragment("home", objective=objective)
        title = f"{self.context.site.name} | Home"
        return write_page(self.context.site_dir / PAGE_FILE, title, nav, body)

    async def _build_epic(self, summary: EpicSummary, nav: Sequence[NavLink], out: _Subtree) -> None:
        client = self.context.client
        epic, stories = await asyncio.gather(
            client.get_epic(summary.id),
            client.list_epic_stories(summary.id, includes_description=True),
        )

        rendered = render_description(epic.description, self.context.relocator)
        out.jobs.extend(rendered.jobs)
        body = render_fragment("epic", epic=epic, description=rendered.html, stories=stories)
        title = f"{self.context.site.name} | {epic.name}"
        epic_dir = self.context.site_dir / str(epic.id)
        out.pages.append(write_page(epic_dir / PAGE_FILE, title, nav, body))

        for story in stories:
            self._write_story(epic, story, nav, out)

        logger.debug("Epic %s: %d story page(s), %d image(s)", epic.id, len(stories), len(out.jobs))

    def _write_story(self, epic: Epic, story: Story, nav: Sequence[NavLink], out: _Subtree) -> None:
        rendered = render_description(story.description, self.context.relocator)
        out.jobs.extend(rendered.jobs)
        body = render_fragment("story", epic=epic, story=story, description=rendered.html)
        title = f"{self.context.site.name} | {epic.name} | {story.name}"
        path = self.context.site_dir / str(epic.id) / str(story.id) / PAGE_FILE
        out.pages.append(write_page(path, title, nav, body))


__all__ = ["GenerationContext", "GenerationResult", "SiteGenerator", "PAGE_FILE"]
