"""shortcut_site.builder.tracker: waiting for image downloads to settle."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import List, Sequence

from shortcut_site.logger import logger

from .images import ImageJob


@dataclass(slots=True)
class ImageReport:
    """Outcome of every image download in one generation run."""

    total: int = 0
    downloaded: int = 0
    failed: List[str] = field(default_factory=list)


async def wait_for_images(jobs: Sequence[ImageJob]) -> ImageReport:
    """
    Await every job regardless of outcome and tally the results.

    Call only after generation has returned: rendering is what creates jobs.
    """
    report = ImageReport(total=len(jobs))
    if not jobs:
        return report

    logger.info("Waiting for %d image download(s)…", len(jobs))
    outcomes = await asyncio.gather(*(job.task for job in jobs), return_exceptions=True)
    for job, outcome in zip(jobs, outcomes):
        if outcome is True:
            report.downloaded += 1
            continue
        if isinstance(outcome, BaseException):
            logger.error("Image %s could not be saved: %r", job.source_url, outcome)
        report.failed.append(job.source_url)

    if report.failed:
        logger.warning("%d of %d image(s) failed to download", len(report.failed), report.total)
    return report


__all__ = ["ImageReport", "wait_for_images"]
