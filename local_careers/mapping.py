# local_careers/mapping.py
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from local_careers.models import SourceConfig
from local_careers.utils import clean_text, split_categories

# candidate key -> feed field name used when the source has no fieldMap entry
MAPPED_FIELDS: Dict[str, str] = {
    "title": "title",
    "company": "company",
    "address": "address",
    "city": "city",
    "state": "state",
    "postal_code": "postalCode",
    "latitude": "latitude",
    "longitude": "longitude",
    "url": "url",
    "description": "description",
}

REQUIRED_FIELDS = ("title", "company", "address", "url")


class FieldPath:
    """
    A dotted path such as ``employer.location.street`` split into segments.

    Mappings are walked by key, lists by integer segment. Anything that is
    missing along the way resolves to None.
    """

    __slots__ = ("segments",)

    def __init__(self, segments: Sequence[str]):
        self.segments: Tuple[str, ...] = tuple(segments)

    @classmethod
    def parse(cls, raw: str) -> "FieldPath":
        return cls([s for s in (raw or "").split(".") if s])

    def resolve(self, value: Any) -> Any:
        if not self.segments:
            return None
        for seg in self.segments:
            if isinstance(value, Mapping):
                value = value.get(seg)
            elif isinstance(value, list) and seg.lstrip("-").isdigit():
                idx = int(seg)
                if idx < 0 or idx >= len(value):
                    return None
                value = value[idx]
            else:
                return None
            if value is None:
                return None
        return value

    def __repr__(self) -> str:
        return f"FieldPath({'.'.join(self.segments)!r})"


def _configured(mapping: Mapping[str, Any], key: str, camel: str) -> Any:
    if camel in mapping:
        return mapping[camel]
    return mapping.get(key)


def read_field(item: Any, path: Optional[str]) -> Any:
    if not path:
        return None
    return FieldPath.parse(path).resolve(item)


def read_categories(item: Any, path: Optional[str]) -> List[str]:
    return split_categories(read_field(item, path))


def map_item(item: Mapping[str, Any], config: SourceConfig) -> Dict[str, Any]:
    """
    Translate one raw feed item into a candidate job dict.

    Each field is read from the configured path (or its own name), falling
    back to the source's literal default. Nothing is validated or geocoded
    here.
    """
    field_map = config.field_map or {}
    defaults = config.defaults or {}

    job: Dict[str, Any] = {}
    for key, camel in MAPPED_FIELDS.items():
        path = _configured(field_map, key, camel) or camel
        value = read_field(item, path)
        if value is None:
            value = _configured(defaults, key, camel)
        job[key] = value

    if config.categories is not None:
        job["categories"] = list(config.categories)
    else:
        job["categories"] = read_categories(item, field_map.get("categories") or "categories")

    job["source"] = {
        "name": config.name or config.url,
        "type": config.type or "remote-feed",
        "url": config.url,
    }
    return job


def missing_fields(candidate: Mapping[str, Any], required: Sequence[str] = REQUIRED_FIELDS) -> List[str]:
    return [k for k in required if clean_text(candidate.get(k)) is None]


def is_complete(candidate: Mapping[str, Any]) -> bool:
    return not missing_fields(candidate)
