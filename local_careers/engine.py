# local_careers/engine.py
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, List, Optional, Union

from local_careers.config import AppConfig
from local_careers.errors import JobValidationError
from local_careers.geo import filter_by_radius, group_by_location
from local_careers.geocoder import Geocoder, GoogleGeocoder
from local_careers.importer import import_from_source
from local_careers.mapping import missing_fields
from local_careers.merge import append_job, remove_job
from local_careers.models import ImportResult, Job, JobLocation, Source, SourceConfig
from local_careers.normalize import normalize_job, normalize_source
from local_careers.sources.base import JobSource
from local_careers.store import JsonSnapshotStore
from local_careers.utils import clean_text, new_id, parse_finite

logger = logging.getLogger(__name__)

ADD_JOB_REQUIRED = ("title", "company", "address", "latitude", "longitude", "url")

# payload key -> candidate key
_PAYLOAD_KEYS = {
    "postalCode": "postal_code",
    "createdAt": "created_at",
}


def _candidate_from_payload(payload: Mapping[str, Any]) -> dict:
    out = dict(payload)
    for camel, snake in _PAYLOAD_KEYS.items():
        if camel in out and snake not in out:
            out[snake] = out.pop(camel)
    return out


def validate_job_payload(payload: Mapping[str, Any]) -> None:
    text_missing = set(missing_fields(payload, ("title", "company", "address", "url")))
    coord_missing = {k for k in ("latitude", "longitude") if parse_finite(payload.get(k)) is None}
    missing = [k for k in ADD_JOB_REQUIRED if k in text_missing or k in coord_missing]
    if missing:
        raise JobValidationError(missing)


class JobEngine:
    """
    Everything a transport layer needs: list, add, remove, import, query.

    Reads go straight to the store; mutations run inside one store
    transaction each.
    """

    def __init__(self, store: JsonSnapshotStore, geocoder: Geocoder, feed_timeout_s: float = 30.0):
        self.store = store
        self.geocoder = geocoder
        self.feed_timeout_s = feed_timeout_s

    def list_jobs(self) -> List[Job]:
        return self.store.jobs()

    def list_sources(self) -> List[Source]:
        return self.store.sources()

    def add_job(self, payload: Optional[Mapping[str, Any]]) -> Job:
        payload = _candidate_from_payload(payload or {})
        validate_job_payload(payload)

        job_id = clean_text(payload.get("id")) or new_id()
        payload["id"] = job_id

        # private per-request source so manual entries never replace each other
        raw_source = payload.get("source")
        source = normalize_source({
            "id": job_id,
            "name": (raw_source.get("name") if isinstance(raw_source, Mapping) else clean_text(raw_source))
            or "Manual entry",
            "type": "manual",
        })

        job = normalize_job(payload, source)
        with self.store.transaction() as tx:
            tx.snapshot = append_job(tx.snapshot, job)

        logger.info("Added job %s (%s at %s)", job.id, job.title, job.company)
        return job.to_public()

    def remove_job(self, job_id: str) -> bool:
        with self.store.transaction() as tx:
            tx.snapshot, removed = remove_job(tx.snapshot, job_id)
        if removed:
            logger.info("Removed job %s", job_id)
        return removed

    def import_from_source(self, config: Union[SourceConfig, Mapping], feed: Optional[JobSource] = None) -> ImportResult:
        return import_from_source(config, self.store, self.geocoder, feed=feed, timeout_s=self.feed_timeout_s)

    def query_jobs(self, lat: Any = None, lng: Any = None, radius: Any = None) -> List[Job]:
        return filter_by_radius(self.list_jobs(), lat, lng, radius)

    def query_locations(self, lat: Any = None, lng: Any = None, radius: Any = None) -> List[JobLocation]:
        return group_by_location(self.query_jobs(lat, lng, radius))


def build_engine(config: AppConfig) -> JobEngine:
    store = JsonSnapshotStore(config.resolved_data_path())
    geocoder = GoogleGeocoder(
        api_key=config.geocoding.resolved_api_key(),
        timeout_s=config.geocoding.timeout_s,
    )
    return JobEngine(store, geocoder, feed_timeout_s=config.feeds.timeout_s)
