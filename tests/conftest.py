from typing import Any, Dict, List, Optional

import pytest

from local_careers.engine import JobEngine
from local_careers.geocoder import Geocoder
from local_careers.models import GeocodeResult
from local_careers.sources.base import JobSource
from local_careers.store import JsonSnapshotStore


class FakeGeocoder(Geocoder):
    def __init__(self, answers: Optional[Dict[str, Optional[GeocodeResult]]] = None, error: Exception = None):
        self.answers = answers or {}
        self.error = error
        self.queries: List[str] = []

    def geocode(self, query: str) -> Optional[GeocodeResult]:
        self.queries.append(query)
        if self.error:
            raise self.error
        return self.answers.get(query)


class FakeFeed(JobSource):
    def __init__(self, items: List[Any]):
        self.items = items

    def fetch_items(self) -> List[Dict[str, Any]]:
        return self.items


def posting(title: str, company: str = "Acme", address: str = "1 Main St", **extra) -> Dict[str, Any]:
    item = {
        "title": title,
        "company": company,
        "address": address,
        "url": f"https://jobs.example.com/{title.lower().replace(' ', '-')}",
        "latitude": 35.0,
        "longitude": -79.0,
    }
    item.update(extra)
    return item


@pytest.fixture
def store(tmp_path):
    return JsonSnapshotStore(tmp_path / "jobs.json")


@pytest.fixture
def geocoder():
    return FakeGeocoder()


@pytest.fixture
def engine(store, geocoder):
    return JobEngine(store, geocoder)
