# local_careers/geocoder.py
from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Any, Dict, Mapping, Optional

import requests

from local_careers.errors import ConfigurationError, UpstreamError
from local_careers.models import GeocodeResult
from local_careers.utils import clean_text, parse_finite

logger = logging.getLogger(__name__)

GOOGLE_GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"


def api_key_from_env() -> Optional[str]:
    return os.getenv("GOOGLE_MAPS_API_KEY") or os.getenv("MAPS_API_KEY") or None


class Geocoder(ABC):
    @abstractmethod
    def geocode(self, query: str) -> Optional[GeocodeResult]:
        """
        Return the best match, or None when the service found nothing.
        Any other failure must raise.
        """
        raise NotImplementedError


class GoogleGeocoder(Geocoder):
    """
    Google Geocoding API client.

    ZERO_RESULTS is a normal answer (None). Bad credentials, HTTP failures and
    unexpected statuses raise UpstreamError so an import aborts untouched.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout_s: float = 10.0,
        base_url: str = GOOGLE_GEOCODE_URL,
        cache_size: int = 1000,
    ):
        self.api_key = api_key if api_key is not None else api_key_from_env()
        self.timeout_s = timeout_s
        self.base_url = base_url
        self._cache: "OrderedDict[str, Optional[GeocodeResult]]" = OrderedDict()
        self._cache_size = cache_size

    def _remember(self, key: str, result: Optional[GeocodeResult]) -> None:
        if self._cache_size <= 0:
            return
        if len(self._cache) >= self._cache_size:
            self._cache.popitem(last=False)
        self._cache[key] = result

    def geocode(self, query: str) -> Optional[GeocodeResult]:
        if not self.api_key:
            raise ConfigurationError("Google Maps API key is not configured on the server.")

        cache_key = query.strip().lower()
        if cache_key in self._cache:
            return self._cache[cache_key]

        try:
            resp = requests.get(
                self.base_url,
                params={"address": query, "key": self.api_key},
                timeout=self.timeout_s,
            )
        except requests.RequestException as e:
            raise UpstreamError(f"Google Maps geocoding service is unavailable right now: {e}") from e

        if not resp.ok:
            raise UpstreamError("Google Maps geocoding service is unavailable right now.")

        try:
            payload = resp.json()
        except ValueError as e:
            raise UpstreamError("Google geocoding returned a malformed response.") from e

        result = self._parse(payload)
        self._remember(cache_key, result)
        return result

    @staticmethod
    def _parse(payload: Any) -> Optional[GeocodeResult]:
        if not isinstance(payload, dict):
            raise UpstreamError("Google geocoding returned a malformed response.")

        status = payload.get("status")
        if status == "ZERO_RESULTS":
            return None

        results = payload.get("results") or []
        if status != "OK" or not results:
            message = payload.get("error_message") or status or "Unknown geocoding error"
            raise UpstreamError(f"Google geocoding failed: {message}")

        first = results[0] if isinstance(results[0], dict) else {}
        location = (first.get("geometry") or {}).get("location") or {}
        lat = parse_finite(location.get("lat"))
        lng = parse_finite(location.get("lng"))
        if lat is None or lng is None:
            raise UpstreamError("Google geocoding returned a result without coordinates.")

        return GeocodeResult(
            latitude=lat,
            longitude=lng,
            formatted_address=clean_text(first.get("formatted_address")),
        )


def build_geocode_query(job: Mapping[str, Any]) -> str:
    parts = [clean_text(job.get(k)) for k in ("address", "city", "state", "postal_code")]
    return ", ".join(p for p in parts if p)


def has_coordinates(job: Mapping[str, Any]) -> bool:
    return parse_finite(job.get("latitude")) is not None and parse_finite(job.get("longitude")) is not None


def ensure_coordinates(job: Mapping[str, Any], geocoder: Geocoder) -> Optional[Dict[str, Any]]:
    """
    Return a copy of ``job`` with finite float coordinates, or None when the
    address could not be resolved to anything.
    """
    if has_coordinates(job):
        out = dict(job)
        out["latitude"] = parse_finite(job.get("latitude"))
        out["longitude"] = parse_finite(job.get("longitude"))
        return out

    query = build_geocode_query(job)
    if not query:
        raise ConfigurationError("An address is required to geocode a job.")

    match = geocoder.geocode(query)
    if match is None:
        logger.warning("No geocoding match for %r", query)
        return None

    out = dict(job)
    out["latitude"] = match.latitude
    out["longitude"] = match.longitude
    if not clean_text(job.get("address")):
        out["address"] = match.formatted_address
    return out
