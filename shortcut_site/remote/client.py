# shortcut_site/remote/client.py
"""
Shortcut REST API client: the four reads the site generator needs.
"""
from __future__ import annotations

from typing import Any, List, Optional, Protocol

from aiohttp import ClientSession, ClientTimeout

from shortcut_site.config import DEFAULT_API_URL
from shortcut_site.errors import ShortcutAPIError
from shortcut_site.logger import logger
from shortcut_site.remote.models import Epic, EpicSummary, Objective, Story


class RemoteDataClient(Protocol):
    """Read-only view of an objective tree."""

    async def get_objective(self, objective_id: int) -> Objective: ...

    async def list_objective_epics(self, objective_id: int) -> List[EpicSummary]: ...

    async def get_epic(self, epic_id: int) -> Epic: ...

    async def list_epic_stories(self, epic_id: int, includes_description: bool = True) -> List[Story]: ...


class ShortcutClient:
    """Async Shortcut API client. Use as ``async with ShortcutClient(token) as client``."""

    def __init__(
        self,
        api_token: str,
        base_url: str = DEFAULT_API_URL,
        timeout: Optional[float] = None,
    ) -> None:
        self._api_token = api_token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session: Optional[ClientSession] = None

    async def __aenter__(self) -> ShortcutClient:
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.timeout),
            headers={
                "Shortcut-Token": self._api_token,
                "Content-Type": "application/json",
            },
            raise_for_status=False,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def get_objective(self, objective_id: int) -> Objective:
        data = await self._get(f"/objectives/{objective_id}")
        return Objective.model_validate(data)

    async def list_objective_epics(self, objective_id: int) -> List[EpicSummary]:
        data = await self._get(f"/objectives/{objective_id}/epics")
        return [EpicSummary.model_validate(item) for item in data]

    async def get_epic(self, epic_id: int) -> Epic:
        data = await self._get(f"/epics/{epic_id}")
        return Epic.model_validate(data)

    async def list_epic_stories(self, epic_id: int, includes_description: bool = True) -> List[Story]:
        params = {"includes_description": "true" if includes_description else "false"}
        data = await self._get(f"/epics/{epic_id}/stories", params=params)
        return [Story.model_validate(item) for item in data]

    async def _get(self, path: str, params: Optional[dict[str, str]] = None) -> Any:
        if not self.session:
            raise RuntimeError("Session not initialized")
        logger.debug("GET %s%s", self.base_url, path)
        async with self.session.get(f"{self.base_url}{path}", params=params) as resp:
            if resp.status != 200:
                raise ShortcutAPIError(resp.status, path, await resp.text())
            return await resp.json()


__all__ = ["RemoteDataClient", "ShortcutClient"]
