# File: tests/test_images.py
"""Image relocation and completion tracking."""
from __future__ import annotations

import re

import pytest
from aiohttp import ClientSession

from shortcut_site.builder.images import ImageRelocator, new_image_filename
from shortcut_site.builder.tracker import wait_for_images

from conftest import PNG_BYTES

FILENAME_RE = re.compile(r"^[0-9a-f]{32}\.png$")


def test_filename_keeps_extension_and_is_random():
    names = {new_image_filename("https://media.app.shortcut.com/foo.png") for _ in range(50)}
    assert len(names) == 50
    assert all(FILENAME_RE.match(n) for n in names)


def test_filename_ignores_query_string():
    name = new_image_filename("https://media.app.shortcut.com/api/attachments/files/x/diagram.jpeg?v=2")
    assert name.endswith(".jpeg")
    assert len(name) == 32 + len(".jpeg")


def test_filename_without_extension():
    name = new_image_filename("https://media.app.shortcut.com/files/abc")
    assert re.fullmatch(r"[0-9a-f]{32}", name)


@pytest.mark.asyncio()
async def test_handles_only_media_host(tmp_path):
    async with ClientSession() as session:
        relocator = ImageRelocator(session, "https://media.app.shortcut.com/", "tok", tmp_path)
        assert relocator.handles("https://media.app.shortcut.com/foo.png")
        assert not relocator.handles("https://example.com/foo.png")
        assert not relocator.handles("https://media.app.shortcut.com.evil.io/foo.png")


@pytest.mark.asyncio()
async def test_relocate_downloads_with_token(tmp_path, media_server):
    async with ClientSession() as session:
        relocator = ImageRelocator(session, media_server.url, "secret-token", tmp_path)
        job = relocator.relocate(f"{media_server.url}/shot.png")

        assert FILENAME_RE.match(job.filename)
        assert job.local_path == f"/imgs/{job.filename}"
        assert await job.task is True

    saved = tmp_path / "imgs" / job.filename
    assert saved.read_bytes() == PNG_BYTES
    assert media_server.queries[0]["token"] == "secret-token"


@pytest.mark.asyncio()
async def test_relocate_returns_before_failed_fetch(tmp_path, media_server):
    async with ClientSession() as session:
        relocator = ImageRelocator(session, media_server.url, "tok", tmp_path)
        job = relocator.relocate(f"{media_server.url}/missing.png")

        # filename is available before the download has even started
        assert FILENAME_RE.match(job.filename)
        assert not job.task.done()
        assert await job.task is False

    assert not (tmp_path / "imgs" / job.filename).exists()


@pytest.mark.asyncio()
async def test_relocate_swallows_transport_errors(tmp_path, unused_tcp_port):
    dead_host = f"http://localhost:{unused_tcp_port}"
    async with ClientSession() as session:
        relocator = ImageRelocator(session, dead_host, "tok", tmp_path)
        job = relocator.relocate(f"{dead_host}/a.gif")
        assert await job.task is False
    assert not (tmp_path / "imgs").exists()


@pytest.mark.asyncio()
async def test_wait_for_images_tallies_outcomes(tmp_path, media_server):
    async with ClientSession() as session:
        relocator = ImageRelocator(session, media_server.url, "tok", tmp_path)
        jobs = [
            relocator.relocate(f"{media_server.url}/one.png"),
            relocator.relocate(f"{media_server.url}/missing.png"),
            relocator.relocate(f"{media_server.url}/broken.jpg"),
            relocator.relocate(f"{media_server.url}/two.png"),
        ]
        report = await wait_for_images(jobs)

    assert report.total == 4
    assert report.downloaded == 2
    assert sorted(report.failed) == sorted(
        [f"{media_server.url}/missing.png", f"{media_server.url}/broken.jpg"]
    )
    assert len(list((tmp_path / "imgs").iterdir())) == 2


@pytest.mark.asyncio()
async def test_wait_for_images_counts_save_errors(tmp_path, media_server):
    blocker = tmp_path / "site"
    blocker.mkdir()
    (blocker / "imgs").write_text("not a directory")

    async with ClientSession() as session:
        relocator = ImageRelocator(session, media_server.url, "tok", blocker)
        job = relocator.relocate(f"{media_server.url}/ok.png")
        report = await wait_for_images([job])

    assert report.downloaded == 0
    assert report.failed == [f"{media_server.url}/ok.png"]


@pytest.mark.asyncio()
async def test_wait_for_images_without_jobs():
    report = await wait_for_images([])
    assert report.total == 0
    assert report.failed == []
