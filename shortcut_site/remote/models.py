# shortcut_site/remote/models.py
"""
Records returned by the Shortcut API, reduced to the fields the site uses.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class _Record(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int
    name: str


class _Described(_Record):
    description: str = ""

    @field_validator("description", mode="before")
    def _none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class Objective(_Described):
    """Top-level container; becomes the home page."""


class EpicSummary(_Record):
    """Epic as listed under an objective."""

    updated_at: Optional[str] = None


class Epic(_Described):
    """Full epic detail."""

    updated_at: Optional[str] = None


class Story(_Described):
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def timestamp(self) -> str:
        return self.updated_at or self.created_at or ""


__all__ = ["Objective", "EpicSummary", "Epic", "Story"]
