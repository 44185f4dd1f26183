from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field

from local_careers.geocoder import api_key_from_env
from local_careers.models import SourceConfig

REPO_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG_PATH = "config/config.yaml"


class GeocodingCfg(BaseModel):
    # falls back to GOOGLE_MAPS_API_KEY / MAPS_API_KEY
    api_key: Optional[str] = None
    timeout_s: float = 10.0

    def resolved_api_key(self) -> Optional[str]:
        return self.api_key or api_key_from_env()


class FeedsCfg(BaseModel):
    timeout_s: float = 30.0


class AppConfig(BaseModel):
    version: int = 1
    data_path: str = "data/jobs.json"
    geocoding: GeocodingCfg = Field(default_factory=GeocodingCfg)
    feeds: FeedsCfg = Field(default_factory=FeedsCfg)
    sources: List[SourceConfig] = Field(default_factory=list)

    # directory relative paths are resolved against
    base_dir: Optional[str] = None

    def resolved_data_path(self) -> Path:
        p = Path(self.data_path).expanduser()
        if p.is_absolute() or not self.base_dir:
            return p
        return Path(self.base_dir) / p


def resolve_config_path(config_path: str = DEFAULT_CONFIG_PATH) -> Path:
    """Relative config paths are taken from the repo root, not the working directory."""
    p = Path(config_path).expanduser()
    if not p.is_absolute():
        p = REPO_ROOT / p
    return p.resolve()


def load_config(path: str) -> AppConfig:
    p = Path(path).expanduser().resolve()
    if not p.exists():
        raise FileNotFoundError(f"Config not found: {p}")

    with p.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Config must be a YAML mapping (dict). Got: {type(raw)}")

    cfg = AppConfig(**raw)
    if cfg.base_dir is None:
        # config/config.yaml -> repo root
        cfg.base_dir = str(p.parent.parent)

    ids = [s.id or s.name or s.url for s in cfg.sources]
    dupes = sorted({i for i in ids if i and ids.count(i) > 1})
    if dupes:
        raise ValueError(f"Source ids must be unique (duplicated: {', '.join(dupes)})")

    return cfg
