# local_careers/sources/json_feed.py
from __future__ import annotations

import logging
from typing import Any, Dict, List

import requests

from local_careers.errors import UpstreamError
from local_careers.sources.base import JobSource

logger = logging.getLogger(__name__)

# keys checked, in order, when the feed wraps its list in an object
WRAPPER_KEYS = ("jobs", "data")


def extract_items(payload: Any) -> List[Any]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in WRAPPER_KEYS:
            value = payload.get(key)
            if isinstance(value, list):
                return value
    return []


class JsonFeedSource(JobSource):
    """
    Any HTTP endpoint returning a JSON list of postings, either bare or
    wrapped as {"jobs": [...]} / {"data": [...]}.
    """

    def __init__(self, url: str, timeout_s: float = 30.0):
        self.url = url
        self.timeout_s = timeout_s

    def fetch_items(self) -> List[Dict[str, Any]]:
        try:
            resp = requests.get(self.url, timeout=self.timeout_s)
        except requests.RequestException as e:
            raise UpstreamError(f"Failed to fetch {self.url}: {e}") from e

        if not resp.ok:
            raise UpstreamError(f"Failed to fetch {self.url}: {resp.status_code} {resp.reason}")

        try:
            payload = resp.json()
        except ValueError as e:
            raise UpstreamError(f"Feed at {self.url} did not return JSON") from e

        items = extract_items(payload)
        logger.debug("Fetched %d items from %s", len(items), self.url)
        return items
