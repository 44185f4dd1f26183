"""Data models for local-careers.

Python attributes are snake_case; the persisted snapshot and anything handed
to a client uses the camelCase aliases (``postalCode``, ``createdAt``...).
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Source(CamelModel):
    id: str
    name: str
    type: str = "custom"
    url: Optional[str] = None
    fetched_at: Optional[str] = None


class Job(CamelModel):
    """A canonical job posting as exposed to callers."""

    id: str
    title: str
    company: str
    address: str
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    latitude: float
    longitude: float
    url: str
    description: Optional[str] = None
    categories: List[str] = Field(default_factory=list)
    source: Source
    created_at: str
    updated_at: str


class StoredJob(Job):
    """A job as kept in the snapshot, carrying its dedup fingerprint."""

    lookup_key: str

    def to_public(self) -> Job:
        return Job.model_validate(self.model_dump(exclude={"lookup_key"}))


class Snapshot(CamelModel):
    jobs: List[StoredJob] = Field(default_factory=list)
    sources: List[Source] = Field(default_factory=list)


class SourceConfig(CamelModel):
    """Describes one feed and how its items map onto a Job."""

    url: Optional[str] = None
    id: Optional[str] = None
    name: Optional[str] = None
    type: Optional[str] = None
    field_map: Dict[str, str] = Field(default_factory=dict)
    defaults: Dict[str, Any] = Field(default_factory=dict)
    categories: Optional[List[str]] = None


class GeocodeResult(CamelModel):
    latitude: float
    longitude: float
    formatted_address: Optional[str] = None


class ImportResult(CamelModel):
    imported: List[Job]
    total: int


class JobLocation(CamelModel):
    """Jobs sharing the exact same coordinates and address text."""

    label: str
    latitude: float
    longitude: float
    jobs: List[Job] = Field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.jobs)

    def to_json_dict(self) -> Dict[str, Any]:
        data = super().to_json_dict()
        data["count"] = self.count
        return data
