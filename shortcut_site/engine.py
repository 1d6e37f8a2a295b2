# File: shortcut_site/engine.py
"""shortcut_site.engine: runs one site generation and waits for its images."""

from __future__ import annotations

import json
import time
from contextlib import AsyncExitStack
from dataclasses import asdict, dataclass, field
from typing import List, Optional

from aiohttp import ClientSession, ClientTimeout

from shortcut_site.builder.generator import GenerationContext, SiteGenerator
from shortcut_site.builder.images import ImageRelocator
from shortcut_site.builder.tracker import ImageReport, wait_for_images
from shortcut_site.config import BuilderConfig, SiteConfig
from shortcut_site.errors import SiteGenerationError
from shortcut_site.logger import logger, stage
from shortcut_site.remote.client import RemoteDataClient, ShortcutClient

__all__ = ["BuildReport", "build_site"]


@dataclass(slots=True)
class BuildReport:
    """Summary of a finished build, printed by the CLI."""

    site: str
    output_dir: str
    pages: int = 0
    images: ImageReport = field(default_factory=ImageReport)
    failed_epics: List[int] = field(default_factory=list)
    duration: float = 0.0

    def json(self, *, pretty: bool = False) -> str:
        return json.dumps(asdict(self), ensure_ascii=False, indent=2 if pretty else None)


async def build_site(
    site: SiteConfig,
    config: BuilderConfig,
    client: Optional[RemoteDataClient] = None,
) -> BuildReport:
    """
    Generate *site* under ``config.output_dir`` and wait for every image download.

    A ShortcutClient is opened with the site's API key unless *client* is given.
    Raises SiteGenerationError when any epic could not be generated; fetch and
    file-system errors before the first page propagate unchanged.
    """
    start = time.monotonic()
    site_dir = config.output_dir / site.slug
    logger.info("Generating site %r into %s", site.name, site_dir)

    async with AsyncExitStack() as stack:
        if client is None:
            client = await stack.enter_async_context(
                ShortcutClient(site.api_key, base_url=config.api_base, timeout=config.timeout)
            )
        media_session = await stack.enter_async_context(
            ClientSession(timeout=ClientTimeout(total=config.timeout))
        )
        relocator = ImageRelocator(media_session, config.media_prefix, site.api_key, site_dir)
        context = GenerationContext(
            site=site, client=client, relocator=relocator, output_root=config.output_dir
        )

        with stage("Writing pages"):
            result = await SiteGenerator(context).generate()
        with stage("Settling image downloads"):
            images = await wait_for_images(result.jobs)

    report = BuildReport(
        site=site.name,
        output_dir=str(site_dir),
        pages=len(result.pages),
        images=images,
        failed_epics=sorted(result.failed_epics),
        duration=round(time.monotonic() - start, 3),
    )
    if result.failed_epics:
        logger.warning(
            "Site %r incomplete: %d page(s), %d/%d image(s), failed epic(s) %s in %.2f s",
            site.name,
            report.pages,
            images.downloaded,
            images.total,
            report.failed_epics,
            report.duration,
        )
        raise SiteGenerationError(result.failed_epics)

    logger.info(
        "Site %r ready: %d page(s), %d/%d image(s) in %.2f s",
        site.name,
        report.pages,
        images.downloaded,
        images.total,
        report.duration,
    )
    return report
