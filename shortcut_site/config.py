# === FILE: shortcut_site/config.py ===
"""
Loading and validation of the site-builder configuration.
Pydantic describes the schema; YAML and JSON files are both accepted.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    field_validator,
    model_validator,
)

from shortcut_site.errors import SiteNotFoundError

DEFAULT_API_URL = "https://api.app.shortcut.com/api/v3"
DEFAULT_MEDIA_HOST = "https://media.app.shortcut.com"


class SiteConfig(BaseModel):
    """One website backed by one Shortcut objective."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., min_length=1, description="Display name, used in page titles.")
    slug: str = Field(..., pattern=r"^[A-Za-z0-9][A-Za-z0-9._-]*$", description="Output directory name.")
    api_key: str = Field(..., min_length=1, repr=False, description="Shortcut API token.")
    objective_id: int = Field(..., ge=1, description="Objective rendered as the home page.")


class BuilderConfig(BaseModel):
    """Settings shared by every site generation run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    output_dir: Path = Field(Path("sites"), description="Root directory for generated sites.")
    api_url: HttpUrl = Field(DEFAULT_API_URL, validate_default=True, description="Shortcut REST API base URL.")
    media_host: HttpUrl = Field(DEFAULT_MEDIA_HOST, validate_default=True, description="Host whose images are relocated.")
    timeout: Optional[float] = Field(None, gt=0, description="Total timeout per request (seconds); none by default.")
    sites: List[SiteConfig] = Field(default_factory=list, description="Configured sites.")

    @field_validator("api_url", "media_host", mode="before")
    def _strip_trailing_slash(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    @model_validator(mode="after")
    def _check_unique_slugs(self) -> BuilderConfig:
        seen: set[str] = set()
        for site in self.sites:
            if site.slug in seen:
                raise ValueError(f"Duplicate site slug: {site.slug}")
            seen.add(site.slug)
        return self

    @property
    def api_base(self) -> str:
        return str(self.api_url).rstrip("/")

    @property
    def media_prefix(self) -> str:
        return str(self.media_host).rstrip("/")

    def get_site(self, key: Optional[str] = None) -> SiteConfig:
        """
        Find a site by name or slug.
        Without a key the single configured site is returned.
        """
        if key is None:
            if len(self.sites) == 1:
                return self.sites[0]
            raise SiteNotFoundError(
                "No site selected" if self.sites else "No sites configured",
                available=[s.slug for s in self.sites],
            )
        for site in self.sites:
            if key in (site.slug, site.name):
                return site
        raise SiteNotFoundError(f"Unknown site: {key}", available=[s.slug for s in self.sites])

    def masked(self) -> dict[str, Any]:
        """JSON-ready dump with API keys hidden."""
        data = self.model_dump(mode="json")
        for site in data["sites"]:
            site["api_key"] = "***"
        return data


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> BuilderConfig:
    """
    Read YAML or JSON and return a validated BuilderConfig.
    Raises FileNotFoundError when the config file is missing.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(_DEFAULT_CFG))
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    return BuilderConfig(**data)


__all__ = ["SiteConfig", "BuilderConfig", "load_config", "DEFAULT_API_URL", "DEFAULT_MEDIA_HOST"]
