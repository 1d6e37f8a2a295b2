"""shortcut_site.remote: access to the Shortcut API."""

from shortcut_site.remote.client import RemoteDataClient, ShortcutClient
from shortcut_site.remote.models import Epic, EpicSummary, Objective, Story

__all__ = ["RemoteDataClient", "ShortcutClient", "Objective", "EpicSummary", "Epic", "Story"]
