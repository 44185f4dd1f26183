# local_careers/importer.py
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, List, Optional, Union

from pydantic import ValidationError

from local_careers.errors import ConfigurationError, EmptyImportError
from local_careers.geocoder import Geocoder, ensure_coordinates
from local_careers.mapping import is_complete, map_item
from local_careers.merge import merge_source_batch
from local_careers.models import ImportResult, Source, SourceConfig, StoredJob
from local_careers.normalize import normalize_job
from local_careers.sources.base import JobSource
from local_careers.sources.json_feed import JsonFeedSource
from local_careers.store import JsonSnapshotStore
from local_careers.utils import utc_now_iso

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_TYPE = "remote-feed"


def coerce_source_config(config: Union[SourceConfig, Mapping, None]) -> SourceConfig:
    if isinstance(config, SourceConfig):
        return config
    if config is None:
        raise ConfigurationError("A source URL is required for importing jobs.")
    try:
        return SourceConfig.model_validate(dict(config))
    except ValidationError as e:
        fields = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
        raise ConfigurationError(f"Invalid source configuration: {', '.join(fields)}") from e


def resolve_import_source(config: SourceConfig, now: str) -> Source:
    return Source(
        id=config.id or config.name or config.url,
        name=config.name or config.url,
        type=config.type or DEFAULT_SOURCE_TYPE,
        url=config.url,
        fetched_at=now,
    )


def build_batch(
    items: List[Any],
    config: SourceConfig,
    source: Source,
    geocoder: Geocoder,
    now: str,
) -> List[StoredJob]:
    """
    Map, gate, geocode and normalize every item in feed order.
    Items that are incomplete or cannot be located are skipped.
    """
    batch: List[StoredJob] = []
    incomplete = unresolved = 0

    for item in items:
        if not isinstance(item, Mapping):
            incomplete += 1
            continue

        candidate = map_item(item, config)
        if not is_complete(candidate):
            incomplete += 1
            continue

        located = ensure_coordinates(candidate, geocoder)
        if located is None:
            unresolved += 1
            continue

        batch.append(normalize_job(located, source, now=now))

    if incomplete or unresolved:
        logger.info(
            "[IMPORT] %s: skipped %d incomplete and %d unresolvable items",
            source.id, incomplete, unresolved,
        )
    return batch


def import_from_source(
    config: Union[SourceConfig, Mapping],
    store: JsonSnapshotStore,
    geocoder: Geocoder,
    feed: Optional[JobSource] = None,
    timeout_s: float = 30.0,
    now: Optional[str] = None,
) -> ImportResult:
    """
    Fetch one feed and make the store's view of that source match it.
    Nothing is written unless at least one valid posting came out.
    """
    cfg = coerce_source_config(config)
    if not cfg.url:
        raise ConfigurationError("A source URL is required for importing jobs.")

    now = now or utc_now_iso()
    feed = feed or JsonFeedSource(cfg.url, timeout_s=timeout_s)

    items = feed.fetch_items()
    if not items:
        raise EmptyImportError(f"No job entries were found at {cfg.url}")

    source = resolve_import_source(cfg, now)
    batch = build_batch(items, cfg, source, geocoder, now)
    if not batch:
        raise EmptyImportError("No valid job postings were produced after mapping.")

    with store.transaction() as tx:
        tx.snapshot, written = merge_source_batch(tx.snapshot, batch, source)

    logger.info("[IMPORT] %s: wrote=%d (items=%d)", source.id, len(written), len(items))
    imported = [j.to_public() for j in written]
    return ImportResult(imported=imported, total=len(imported))
