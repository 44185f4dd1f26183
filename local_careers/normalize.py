"""Turn geocoded candidates into stored records.

This is the only place the dedup fingerprint (``lookupKey``) is computed.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from local_careers.errors import JobValidationError
from local_careers.models import Source, StoredJob
from local_careers.utils import clean_text, new_id, parse_finite, split_categories, utc_now_iso

LOOKUP_KEY_SEPARATOR = "::"


def _escape_key_part(part: str) -> str:
    # a part never contains a bare ":", so the separator cannot be forged
    return part.replace("\\", "\\\\").replace(":", "\\:")


def build_lookup_key(company: Optional[str], title: Optional[str], address: Optional[str]) -> str:
    parts = [clean_text(p) for p in (company, title, address)]
    return LOOKUP_KEY_SEPARATOR.join(_escape_key_part(p.lower()) for p in parts if p)


def normalize_source(raw: Union[str, Mapping[str, Any], Source, None], now: Optional[str] = None) -> Source:
    if isinstance(raw, Source):
        return raw

    if isinstance(raw, str):
        return Source(id=raw, name=raw, type="custom")

    raw = raw or {}
    name = clean_text(raw.get("name"))
    return Source(
        id=clean_text(raw.get("id")) or name or new_id(),
        name=name or "Imported",
        type=clean_text(raw.get("type")) or "custom",
        url=clean_text(raw.get("url")),
        fetched_at=raw.get("fetched_at") or raw.get("fetchedAt") or now or utc_now_iso(),
    )


def normalize_job(candidate: Mapping[str, Any], source: Source, now: Optional[str] = None) -> StoredJob:
    now = now or utc_now_iso()

    latitude = parse_finite(candidate.get("latitude"))
    longitude = parse_finite(candidate.get("longitude"))
    bad = [k for k, v in (("latitude", latitude), ("longitude", longitude)) if v is None]
    if bad:
        raise JobValidationError(bad, f"Coordinates must be finite numbers: {', '.join(bad)}")

    try:
        return _build_stored_job(candidate, source, now, latitude, longitude)
    except ValidationError as e:
        fields = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
        raise JobValidationError(fields, f"Invalid job fields: {', '.join(fields)}") from e


def _build_stored_job(candidate, source, now, latitude, longitude) -> StoredJob:
    title = clean_text(candidate.get("title"))
    company = clean_text(candidate.get("company"))
    address = clean_text(candidate.get("address"))

    return StoredJob(
        id=clean_text(candidate.get("id")) or new_id(),
        title=title or "",
        company=company or "",
        address=address or "",
        city=clean_text(candidate.get("city")),
        state=clean_text(candidate.get("state")),
        postal_code=clean_text(candidate.get("postal_code")),
        latitude=latitude,
        longitude=longitude,
        url=clean_text(candidate.get("url")) or "",
        description=clean_text(candidate.get("description")),
        categories=split_categories(candidate.get("categories")),
        source=source,
        created_at=candidate.get("created_at") or now,
        updated_at=now,
        lookup_key=build_lookup_key(company, title, address),
    )
