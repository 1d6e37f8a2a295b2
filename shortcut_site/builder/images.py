"""Relocation of Shortcut-hosted images into the generated site."""

from __future__ import annotations

import asyncio
import secrets
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from urllib.parse import urlparse

from aiohttp import ClientError, ClientSession

from shortcut_site.logger import logger

IMAGE_DIR_NAME = "imgs"
TOKEN_PARAM = "token"


@dataclass(frozen=True, slots=True)
class ImageJob:
    """One image found while rendering, and the task that downloads it."""

    source_url: str
    filename: str
    task: "asyncio.Task[bool]"

    @property
    def local_path(self) -> str:
        return f"/{IMAGE_DIR_NAME}/{self.filename}"


def new_image_filename(source_url: str) -> str:
    """Random 32-hex stem with the extension of *source_url* (if any)."""
    suffix = PurePosixPath(urlparse(source_url).path).suffix
    return secrets.token_hex(16) + suffix


class ImageRelocator:
    """Starts background downloads for media-host images of one site."""

    def __init__(
        self,
        session: ClientSession,
        media_host: str,
        api_token: str,
        site_dir: Path,
    ) -> None:
        self.session = session
        self.media_host = media_host.rstrip("/")
        self._api_token = api_token
        self.image_dir = Path(site_dir) / IMAGE_DIR_NAME

    def handles(self, url: str) -> bool:
        return url.startswith(self.media_host + "/")

    def relocate(self, source_url: str) -> ImageJob:
        """
        Return the job for *source_url* immediately; the bytes arrive later.

        Must be called with a running event loop.
        """
        filename = new_image_filename(source_url)
        task = asyncio.get_running_loop().create_task(
            self._download(source_url, filename), name=f"image:{filename}"
        )
        return ImageJob(source_url=source_url, filename=filename, task=task)

    async def _download(self, source_url: str, filename: str) -> bool:
        try:
            async with self.session.get(source_url, params={TOKEN_PARAM: self._api_token}) as resp:
                if resp.status != 200:
                    logger.warning("Image %s -> HTTP %s, skipped", source_url, resp.status)
                    return False
                data = await resp.read()
        except (ClientError, asyncio.TimeoutError) as exc:
            logger.warning("Failed to fetch image %s: %s", source_url, exc)
            return False

        self.image_dir.mkdir(parents=True, exist_ok=True)
        destination = self.image_dir / filename
        destination.write_bytes(data)
        logger.debug("Saved image %s (%d bytes)", destination, len(data))
        return True


__all__ = ["ImageJob", "ImageRelocator", "new_image_filename", "IMAGE_DIR_NAME"]
