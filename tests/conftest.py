# File: tests/conftest.py
from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List

import pytest
import pytest_asyncio
from aiohttp import web

from shortcut_site.config import BuilderConfig, SiteConfig
from shortcut_site.errors import ShortcutAPIError
from shortcut_site.remote.models import Epic, EpicSummary, Objective, Story

#: smallest valid PNG signature plus padding; content is never decoded
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\0" * 64


async def serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


class FakeShortcutClient:
    """In-memory RemoteDataClient built from plain API-shaped dicts."""

    def __init__(
        self,
        objective: Dict[str, Any],
        epics: List[Dict[str, Any]],
        stories: Dict[int, List[Dict[str, Any]]] | None = None,
        fail_epics: Iterable[int] = (),
    ) -> None:
        self.objective = objective
        self.epics = epics
        self.stories = stories or {}
        self.fail_epics = set(fail_epics)
        self.calls: List[tuple] = []

    async def get_objective(self, objective_id: int) -> Objective:
        await asyncio.sleep(0)
        self.calls.append(("objective", objective_id))
        return Objective.model_validate(self.objective)

    async def list_objective_epics(self, objective_id: int) -> List[EpicSummary]:
        await asyncio.sleep(0)
        self.calls.append(("objective_epics", objective_id))
        return [EpicSummary.model_validate(e) for e in self.epics]

    async def get_epic(self, epic_id: int) -> Epic:
        await asyncio.sleep(0)
        self.calls.append(("epic", epic_id))
        if epic_id in self.fail_epics:
            raise ShortcutAPIError(500, f"/epics/{epic_id}", "boom")
        return Epic.model_validate(next(e for e in self.epics if e["id"] == epic_id))

    async def list_epic_stories(self, epic_id: int, includes_description: bool = True) -> List[Story]:
        await asyncio.sleep(0)
        self.calls.append(("epic_stories", epic_id, includes_description))
        return [Story.model_validate(s) for s in self.stories.get(epic_id, [])]


@dataclass
class MediaServer:
    url: str
    queries: List[Dict[str, str]] = field(default_factory=list)


@pytest_asyncio.fixture
async def media_server(unused_tcp_port: int) -> AsyncIterator[MediaServer]:
    """
    Fake media host: ``/missing*`` → 404, ``/broken*`` → 500, anything else → PNG.
    """
    server = MediaServer(url="")

    async def handle_file(request: web.Request) -> web.StreamResponse:
        server.queries.append(dict(request.query))
        name = request.match_info["name"]
        if name.startswith("missing"):
            return web.Response(status=404)
        if name.startswith("broken"):
            return web.Response(status=500)
        return web.Response(body=PNG_BYTES, content_type="image/png")

    app = web.Application()
    app.router.add_get("/{name}", handle_file)

    async for url in serve_app(app, unused_tcp_port):
        server.url = url
        yield server


@pytest.fixture()
def site() -> SiteConfig:
    return SiteConfig(name="Acme Docs", slug="acme", api_key="secret-token", objective_id=7)


@pytest.fixture()
def make_config(tmp_path: Path, site: SiteConfig):
    """Factory for a BuilderConfig writing into tmp_path/sites."""

    def _make(media_host: str = "https://media.app.shortcut.com", **overrides: Any) -> BuilderConfig:
        data: Dict[str, Any] = {
            "output_dir": tmp_path / "sites",
            "media_host": media_host,
            "sites": [site],
        }
        data.update(overrides)
        return BuilderConfig(**data)

    return _make


@pytest.fixture()
def two_epic_client() -> FakeShortcutClient:
    """Objective with two epics: the first has three stories, the second none."""
    return FakeShortcutClient(
        objective={"id": 7, "name": "Roadmap", "description": "All the <b>plans</b>"},
        epics=[
            {"id": 101, "name": "Onboarding", "description": "Welcome **aboard**", "updated_at": "2024-03-01"},
            {"id": 102, "name": "Billing", "description": None, "updated_at": "2024-03-02"},
        ],
        stories={
            101: [
                {"id": 1001, "name": "Sign up", "description": "First step", "created_at": "2024-01-01"},
                {"id": 1002, "name": "Verify email", "description": "", "updated_at": "2024-01-05"},
                {"id": 1003, "name": "Tour", "description": None, "created_at": "2024-01-09"},
            ],
        },
    )
